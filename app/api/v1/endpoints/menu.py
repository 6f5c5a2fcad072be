"""Menu endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import ADMIN_ROLES, get_audit_recorder, get_notification_bus
from app.core.security import get_current_user, require_roles
from app.db.session import get_db
from app.models import MenuItem
from app.models.user import User
from app.schemas.menu import MenuItemRead, MenuReplaceRequest, MenuReplaceResponse
from app.services.audit_service import AuditRecorder
from app.services.errors import TransactionError
from app.services.menu_service import list_menu, replace_menu
from app.services.notifications import NotificationBus

router: APIRouter = APIRouter()


@router.get("", response_model=list[MenuItemRead])
def get_menu(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[MenuItem]:
    return list_menu(db)


@router.post("/replace", response_model=MenuReplaceResponse)
def replace_whole_menu(
    payload: MenuReplaceRequest | None = None,
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
    bus: NotificationBus = Depends(get_notification_bus),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
) -> MenuReplaceResponse:
    """Replace the menu; existing orders are removed with it."""
    items = payload.items if payload is not None else None
    try:
        count = replace_menu(db, items, audit=audit, bus=bus, actor_id=current_user.id)
    except TransactionError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return MenuReplaceResponse(item_count=count)
