"""Menu queries and the atomic bulk menu replace."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.models import MenuItem, Order
from app.schemas.events import MenuReloadedEvent, to_wire
from app.schemas.menu import MenuItemCreate
from app.services.audit_service import AuditRecorder, safe_record
from app.services.errors import TransactionError
from app.services.notifications import NotificationBus

logger = logging.getLogger(__name__)

REGIONAL_MENU: list[dict[str, str]] = [
    {"name": "Idli with Sambar", "category": "Breakfast", "dietary": "Vegetarian"},
    {"name": "Masala Dosa", "category": "Breakfast", "dietary": "Vegetarian"},
    {"name": "Poha", "category": "Breakfast", "dietary": "Vegetarian"},
    {"name": "Upma", "category": "Breakfast", "dietary": "Vegetarian"},
    {"name": "Paratha (Aloo/Gobi)", "category": "Breakfast", "dietary": "Vegetarian"},
    {"name": "Dal Tadka", "category": "Lunch", "dietary": "Vegetarian"},
    {"name": "Rajma Masala", "category": "Lunch", "dietary": "Vegetarian"},
    {"name": "Chole (Chickpea Curry)", "category": "Lunch", "dietary": "Vegan"},
    {"name": "Paneer Butter Masala", "category": "Lunch", "dietary": "Vegetarian"},
    {"name": "Chicken Curry", "category": "Lunch", "dietary": ""},
    {"name": "Veg Biryani", "category": "Lunch", "dietary": "Vegetarian"},
    {"name": "Chicken Biryani", "category": "Lunch", "dietary": ""},
    {"name": "Jeera Rice", "category": "Lunch", "dietary": "Vegan, Gluten-Free"},
    {"name": "Roti/Chapati", "category": "Lunch", "dietary": "Vegan"},
    {"name": "Palak Paneer", "category": "Dinner", "dietary": "Vegetarian"},
    {"name": "Fish Curry", "category": "Dinner", "dietary": ""},
    {"name": "Mixed Veg Curry", "category": "Dinner", "dietary": "Vegan"},
    {"name": "Kadhi", "category": "Dinner", "dietary": "Vegetarian"},
    {"name": "Khichdi", "category": "Dinner", "dietary": "Vegetarian, Light"},
    {"name": "Samosa (Baked)", "category": "Snack", "dietary": "Vegetarian"},
    {"name": "Onion Pakora", "category": "Snack", "dietary": "Vegan"},
    {"name": "Masala Chai", "category": "Snack", "dietary": ""},
    {"name": "Sweet Lassi", "category": "Snack", "dietary": "Vegetarian"},
    {"name": "Raita (Curd)", "category": "Snack", "dietary": "Vegetarian"},
]


def list_menu(db: Session) -> list[MenuItem]:
    """Return the menu grouped by category, then name."""
    return list(db.scalars(select(MenuItem).order_by(MenuItem.category.asc(), MenuItem.name.asc())).all())


def get_menu_item(db: Session, item_id: int) -> MenuItem | None:
    return db.get(MenuItem, item_id)


def _as_fields(item: MenuItemCreate | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(item, MenuItemCreate):
        return item.model_dump()
    return dict(item)


def replace_menu(
    db: Session,
    items: Iterable[MenuItemCreate | Mapping[str, Any]] | None,
    *,
    audit: AuditRecorder,
    bus: NotificationBus,
    actor_id: int | None = None,
) -> int:
    """Swap the whole menu in one transaction.

    Orders reference menu items, so they are deleted first. Any failure rolls
    back all three steps and raises TransactionError with the previous menu
    and orders intact.
    """
    try:
        rows = [_as_fields(item) for item in (REGIONAL_MENU if items is None else items)]
        removed_orders = db.execute(delete(Order)).rowcount
        db.execute(delete(MenuItem))
        db.add_all(
            MenuItem(name=row.get("name"), category=row.get("category"), dietary=row.get("dietary") or "")
            for row in rows
        )
        db.flush()
        db.commit()
    except Exception as exc:
        db.rollback()
        logger.exception("[MENU] Menu replace failed; rolled back")
        raise TransactionError("Menu replace failed; previous menu kept") from exc

    logger.info("[MENU] Menu replaced with %s items (%s orders removed)", len(rows), removed_orders)
    safe_record(audit, "menu", 0, "replaced", {"count": len(rows), "ordersRemoved": removed_orders}, actor_id)
    try:
        bus.publish(to_wire(MenuReloadedEvent()))
    except Exception:
        logger.exception("[NOTIFY] Failed to publish menu_reloaded")
    return len(rows)
