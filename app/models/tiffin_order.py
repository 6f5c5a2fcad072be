"""Ad-hoc tiffin order model."""

from datetime import date, datetime, timezone

from sqlalchemy import CheckConstraint, Date, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

TIFFIN_STATUSES: tuple[str, ...] = ("pending", "confirmed", "preparing", "ready", "delivered", "cancelled")


class TiffinOrder(Base):
    """Meal request taken at reception; carries the patient name as plain text."""

    __tablename__ = "tiffin_orders"

    id: Mapped[int] = mapped_column(primary_key=True)
    patient_name: Mapped[str] = mapped_column(String(255), nullable=False)
    ward: Mapped[str] = mapped_column(String(64), nullable=False)
    food_type: Mapped[str] = mapped_column(String(128), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    order_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        Enum(*TIFFIN_STATUSES, name="tiffin_status", validate_strings=True),
        nullable=False,
        default="pending",
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True, default="")
    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
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

    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_tiffin_orders_quantity_positive"),)
