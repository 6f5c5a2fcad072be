"""Patient reference data."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Patient(Base):
    """Admitted patient that ward orders are placed for."""

    __tablename__ = "patients"

    id: Mapped[int] = mapped_column(primary_key=True)
    mrn: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    ward: Mapped[str] = mapped_column(String(64), nullable=False)
    bed: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    room_number: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    dietary_restrictions: Mapped[str | None] = mapped_column(Text, nullable=True, default="")
    allergies: Mapped[str | None] = mapped_column(Text, nullable=True, default="")

    orders: Mapped[list["Order"]] = relationship(back_populates="patient")
