"""Menu ORM models."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class MenuItem(Base):
    """Dish that can be ordered for a patient."""

    __tablename__ = "menu_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    dietary: Mapped[str | None] = mapped_column(String(255), nullable=True, default="")

    orders: Mapped[list["Order"]] = relationship(back_populates="item")
