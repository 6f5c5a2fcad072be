"""Application models package."""

from app.models.audit_log import AuditLog
from app.models.menu import MenuItem
from app.models.order import CONSUMPTION_STATUSES, ORDER_STATUSES, Order
from app.models.patient import Patient
from app.models.tiffin_order import TIFFIN_STATUSES, TiffinOrder
from app.models.user import USER_ROLES, User

__all__ = [
    "AuditLog", "MenuItem", "Order", "Patient", "TiffinOrder", "User",
    "CONSUMPTION_STATUSES", "ORDER_STATUSES", "TIFFIN_STATUSES", "USER_ROLES",
]
