"""Patient meal order model."""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

ORDER_STATUSES: tuple[str, ...] = ("placed", "in_kitchen", "out_for_delivery", "delivered", "cancelled")
CONSUMPTION_STATUSES: tuple[str, ...] = ("unknown", "eaten", "partial", "refused")


class Order(Base):
    """Single menu item ordered for a patient, tracked through delivery and consumption."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True)
    patient_id: Mapped[int] = mapped_column(ForeignKey("patients.id"), nullable=False)
    item_id: Mapped[int] = mapped_column(ForeignKey("menu_items.id"), nullable=False)
    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    special_instructions: Mapped[str | None] = mapped_column(Text, nullable=True, default="")
    status: Mapped[str] = mapped_column(
        Enum(*ORDER_STATUSES, name="order_status", validate_strings=True),
        nullable=False,
        default="placed",
    )
    consumption_status: Mapped[str] = mapped_column(
        Enum(*CONSUMPTION_STATUSES, name="consumption_status", validate_strings=True),
        nullable=False,
        default="unknown",
    )
    waste_percent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    consumption_recorded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    patient: Mapped["Patient"] = relationship(back_populates="orders")
    item: Mapped["MenuItem"] = relationship(back_populates="orders")

    __table_args__ = (
        CheckConstraint("waste_percent >= 0 AND waste_percent <= 100", name="ck_orders_waste_percent_range"),
        Index("ix_orders_status_created_at", "status", "created_at"),
    )
