"""Patient order endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import (
    CONSUMPTION_ROLES,
    ORDER_CREATE_ROLES,
    ORDER_STATUS_ROLES,
    get_order_lifecycle,
)
from app.core.security import get_current_user, require_roles
from app.models.user import User
from app.schemas.order import ConsumptionUpdate, OrderCreate, OrderRead, OrderStatusUpdate
from app.services.errors import MissingReferenceError, NotFoundError, ValidationError
from app.services.order_lifecycle import OrderLifecycle

router: APIRouter = APIRouter()

ROLE_QUEUE_STATUS: dict[str, str] = {
    "kitchen": "placed",
    "delivery": "out_for_delivery",
}


@router.get("", response_model=list[OrderRead])
def list_orders(
    status_filter: str | None = Query(default=None, alias="status"),
    ward: str | None = None,
    lifecycle: OrderLifecycle = Depends(get_order_lifecycle),
    current_user: User = Depends(get_current_user),
) -> list[OrderRead]:
    return lifecycle.list_orders(status=status_filter, ward=ward)


@router.get("/queue", response_model=list[OrderRead])
def my_work_queue(
    lifecycle: OrderLifecycle = Depends(get_order_lifecycle),
    current_user: User = Depends(get_current_user),
) -> list[OrderRead]:
    """Return the orders the current role acts on next."""
    return lifecycle.list_orders(status=ROLE_QUEUE_STATUS.get(current_user.role))


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: int,
    lifecycle: OrderLifecycle = Depends(get_order_lifecycle),
    current_user: User = Depends(get_current_user),
) -> OrderRead:
    try:
        return lifecycle.get_order(order_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    lifecycle: OrderLifecycle = Depends(get_order_lifecycle),
    current_user: User = Depends(require_roles(*ORDER_CREATE_ROLES)),
) -> OrderRead:
    try:
        return lifecycle.create_order(
            patient_id=payload.patient_id,
            item_id=payload.item_id,
            instructions=payload.special_instructions,
            actor_id=current_user.id,
        )
    except MissingReferenceError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("/{order_id}/status", response_model=OrderRead)
def set_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    lifecycle: OrderLifecycle = Depends(get_order_lifecycle),
    current_user: User = Depends(require_roles(*ORDER_STATUS_ROLES)),
) -> OrderRead:
    try:
        return lifecycle.set_status(order_id, payload.status, current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/{order_id}/consumption", response_model=OrderRead)
def record_consumption(
    order_id: int,
    payload: ConsumptionUpdate,
    lifecycle: OrderLifecycle = Depends(get_order_lifecycle),
    current_user: User = Depends(require_roles(*CONSUMPTION_ROLES)),
) -> OrderRead:
    """Record how much of a delivered meal was eaten.

    Unrecognised values succeed and are stored as 'unknown'.
    """
    try:
        value = payload.consumption_status if isinstance(payload.consumption_status, str) else None
        return lifecycle.record_consumption(order_id, value, current_user.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
