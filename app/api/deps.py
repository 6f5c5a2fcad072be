"""FastAPI dependencies wiring engines to the request session and shared services."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.audit_service import AuditRecorder, DatabaseAuditRecorder
from app.services.notifications import NotificationBus
from app.services.order_lifecycle import OrderLifecycle
from app.services.tiffin_lifecycle import TiffinLifecycle

ORDER_CREATE_ROLES: tuple[str, ...] = ("nurse", "admin")
ORDER_STATUS_ROLES: tuple[str, ...] = ("kitchen", "delivery", "admin")
CONSUMPTION_ROLES: tuple[str, ...] = ("delivery", "admin")
TIFFIN_WRITE_ROLES: tuple[str, ...] = ("receptionist", "admin")
ADMIN_ROLES: tuple[str, ...] = ("admin",)


def get_notification_bus(request: Request) -> NotificationBus:
    return request.app.state.notification_bus


def get_audit_recorder() -> AuditRecorder:
    return DatabaseAuditRecorder()


def get_order_lifecycle(
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
    bus: NotificationBus = Depends(get_notification_bus),
) -> OrderLifecycle:
    return OrderLifecycle(db=db, audit=audit, bus=bus)


def get_tiffin_lifecycle(
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
) -> TiffinLifecycle:
    return TiffinLifecycle(db=db, audit=audit)
