"""Order lifecycle engine: status changes, consumption and waste tracking.

Status is a free-form label gated only by role (at the API boundary) and by
membership in ``ORDER_STATUSES``; any status may follow any other so that
kitchen, delivery and admin staff can correct mistakes. Every mutation runs
validate -> persist -> audit -> publish before returning.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager

from app.models import ORDER_STATUSES, MenuItem, Order, Patient
from app.schemas.events import OrderConsumptionEvent, OrderCreatedEvent, OrderStatusEvent, to_wire
from app.schemas.order import OrderRead
from app.services.audit_service import AuditRecorder, safe_record
from app.services.errors import MissingReferenceError, NotFoundError, ValidationError
from app.services.notifications import NotificationBus
from app.utils.time import utc_now

logger = logging.getLogger(__name__)

RECORDABLE_CONSUMPTION: tuple[str, ...] = ("eaten", "partial", "refused")

WASTE_PERCENT_BY_CONSUMPTION: dict[str, int] = {
    "eaten": 0,
    "partial": 50,
    "refused": 100,
    "unknown": 0,
}


def normalize_consumption(value: str | None) -> str:
    """Map anything outside eaten/partial/refused to 'unknown'."""
    if value in RECORDABLE_CONSUMPTION:
        return value
    return "unknown"


def waste_percent_for(consumption_status: str) -> int:
    return WASTE_PERCENT_BY_CONSUMPTION.get(consumption_status, 0)


def serialize_order(order: Order) -> OrderRead:
    """Flatten an order with its patient and menu item into the joined record."""
    patient: Patient = order.patient
    item: MenuItem = order.item
    return OrderRead(
        id=order.id,
        patient_id=order.patient_id,
        item_id=order.item_id,
        created_by=order.created_by,
        status=order.status,
        consumption_status=order.consumption_status,
        waste_percent=order.waste_percent,
        special_instructions=order.special_instructions,
        created_at=order.created_at,
        updated_at=order.updated_at,
        consumption_recorded_at=order.consumption_recorded_at,
        patient_name=patient.full_name,
        ward=patient.ward,
        bed=patient.bed,
        room_number=patient.room_number,
        dietary_restrictions=patient.dietary_restrictions,
        allergies=patient.allergies,
        item_name=item.name,
    )


class OrderLifecycle:
    """Validates and applies order mutations, then audits and broadcasts them."""

    def __init__(
        self,
        db: Session,
        audit: AuditRecorder,
        bus: NotificationBus,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.db = db
        self.audit = audit
        self.bus = bus
        self.clock = clock

    def _publish(self, event: BaseModel) -> None:
        try:
            self.bus.publish(to_wire(event))
        except Exception:
            logger.exception("[NOTIFY] Failed to publish %s", type(event).__name__)

    def _load(self, order_id: int) -> Order:
        order: Order | None = self.db.get(Order, order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")
        return order

    def get_order(self, order_id: int) -> OrderRead:
        return serialize_order(self._load(order_id))

    def create_order(
        self,
        patient_id: int,
        item_id: int,
        instructions: str | None,
        actor_id: int,
    ) -> OrderRead:
        """Place a new order; status starts at 'placed' and consumption at 'unknown'."""
        if self.db.get(Patient, patient_id) is None:
            raise MissingReferenceError(f"Patient {patient_id} not found")
        if self.db.get(MenuItem, item_id) is None:
            raise MissingReferenceError(f"Menu item {item_id} not found")

        now = self.clock()
        order = Order(
            patient_id=patient_id,
            item_id=item_id,
            created_by=actor_id,
            special_instructions=instructions or "",
            status="placed",
            consumption_status="unknown",
            waste_percent=0,
            created_at=now,
            updated_at=now,
            consumption_recorded_at=None,
        )
        self.db.add(order)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise MissingReferenceError("Order references an unknown patient, menu item or user") from exc
        self.db.refresh(order)
        logger.info("[ORDERS] Order %s created for patient=%s item=%s by user=%s", order.id, patient_id, item_id, actor_id)

        safe_record(
            self.audit,
            "order",
            order.id,
            "created",
            {"patientId": patient_id, "itemId": item_id, "specialInstructions": instructions or ""},
            actor_id,
        )
        record = serialize_order(order)
        self._publish(OrderCreatedEvent(order_id=order.id, order=record))
        return record

    def set_status(self, order_id: int, new_status: str, actor_id: int | None) -> OrderRead:
        """Overwrite the delivery status with any member of the status set."""
        order = self._load(order_id)
        if new_status not in ORDER_STATUSES:
            raise ValidationError(f"Unknown order status: {new_status!r}")

        previous_status = order.status
        order.status = new_status
        order.updated_at = self.clock()
        self.db.commit()
        self.db.refresh(order)
        logger.info("[ORDERS] Order %s status %s -> %s by user=%s", order_id, previous_status, new_status, actor_id)

        safe_record(
            self.audit,
            "order",
            order_id,
            "status_changed",
            {"status": new_status, "previousStatus": previous_status},
            actor_id,
        )
        record = serialize_order(order)
        self._publish(OrderStatusEvent(order_id=order_id, status=new_status, order=record))
        return record

    def record_consumption(self, order_id: int, consumption_status: str | None, actor_id: int | None) -> OrderRead:
        """Store the consumption outcome and its waste percent.

        Unrecognised input is stored as 'unknown'; the recorded-at timestamp is
        set in every case.
        """
        order = self._load(order_id)
        status = normalize_consumption(consumption_status)
        if status != consumption_status:
            logger.info("[ORDERS] Order %s consumption %r normalized to 'unknown'", order_id, consumption_status)

        now = self.clock()
        order.consumption_status = status
        order.waste_percent = waste_percent_for(status)
        order.consumption_recorded_at = now
        order.updated_at = now
        self.db.commit()
        self.db.refresh(order)
        logger.info("[ORDERS] Order %s consumption=%s waste=%s by user=%s", order_id, status, order.waste_percent, actor_id)

        safe_record(
            self.audit,
            "order",
            order_id,
            "consumption_recorded",
            {"consumptionStatus": status, "wastePercent": order.waste_percent},
            actor_id,
        )
        record = serialize_order(order)
        self._publish(OrderConsumptionEvent(order_id=order_id, consumption_status=status, order=record))
        return record

    def list_orders(self, status: str | None = None, ward: str | None = None) -> list[OrderRead]:
        """Return joined orders, newest first, filtered by exact status/ward."""
        if status and status not in ORDER_STATUSES:
            return []
        query = (
            select(Order)
            .join(Order.patient)
            .join(Order.item)
            .options(contains_eager(Order.patient), contains_eager(Order.item))
        )
        if status:
            query = query.where(Order.status == status)
        if ward:
            query = query.where(Patient.ward == ward)
        query = query.order_by(Order.created_at.desc(), Order.id.desc())
        return [serialize_order(order) for order in self.db.scalars(query).all()]
