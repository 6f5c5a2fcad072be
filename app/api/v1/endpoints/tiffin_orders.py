"""Tiffin order endpoints for reception."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import TIFFIN_WRITE_ROLES, get_tiffin_lifecycle
from app.core.security import get_current_user, require_roles
from app.models import TiffinOrder
from app.models.user import User
from app.schemas.tiffin_order import TiffinOrderCreate, TiffinOrderRead, TiffinOrderUpdate, TiffinStatusUpdate
from app.services.errors import NotFoundError, ValidationError
from app.services.tiffin_lifecycle import TiffinLifecycle

router: APIRouter = APIRouter()


@router.get("", response_model=list[TiffinOrderRead])
def list_tiffin_orders(
    status_filter: str | None = Query(default=None, alias="status"),
    ward: str | None = None,
    order_date: date | None = None,
    lifecycle: TiffinLifecycle = Depends(get_tiffin_lifecycle),
    current_user: User = Depends(get_current_user),
) -> list[TiffinOrder]:
    return lifecycle.list_orders(status=status_filter, ward=ward, order_date=order_date)


@router.get("/{tiffin_order_id}", response_model=TiffinOrderRead)
def get_tiffin_order(
    tiffin_order_id: int,
    lifecycle: TiffinLifecycle = Depends(get_tiffin_lifecycle),
    current_user: User = Depends(get_current_user),
) -> TiffinOrder:
    try:
        return lifecycle.get(tiffin_order_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("", response_model=TiffinOrderRead, status_code=status.HTTP_201_CREATED)
def create_tiffin_order(
    payload: TiffinOrderCreate,
    lifecycle: TiffinLifecycle = Depends(get_tiffin_lifecycle),
    current_user: User = Depends(require_roles(*TIFFIN_WRITE_ROLES)),
) -> TiffinOrder:
    try:
        return lifecycle.create(payload, actor_id=current_user.id)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.put("/{tiffin_order_id}", response_model=TiffinOrderRead)
def update_tiffin_order(
    tiffin_order_id: int,
    payload: TiffinOrderUpdate,
    lifecycle: TiffinLifecycle = Depends(get_tiffin_lifecycle),
    current_user: User = Depends(require_roles(*TIFFIN_WRITE_ROLES)),
) -> TiffinOrder:
    try:
        return lifecycle.update(tiffin_order_id, payload, actor_id=current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/{tiffin_order_id}/status", response_model=TiffinOrderRead)
def update_tiffin_order_status(
    tiffin_order_id: int,
    payload: TiffinStatusUpdate,
    lifecycle: TiffinLifecycle = Depends(get_tiffin_lifecycle),
    current_user: User = Depends(require_roles(*TIFFIN_WRITE_ROLES)),
) -> TiffinOrder:
    try:
        return lifecycle.update_status(tiffin_order_id, payload.status, actor_id=current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete("/{tiffin_order_id}")
def delete_tiffin_order(
    tiffin_order_id: int,
    lifecycle: TiffinLifecycle = Depends(get_tiffin_lifecycle),
    current_user: User = Depends(require_roles(*TIFFIN_WRITE_ROLES)),
) -> dict[str, bool]:
    try:
        lifecycle.delete(tiffin_order_id, actor_id=current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return {"success": True}
