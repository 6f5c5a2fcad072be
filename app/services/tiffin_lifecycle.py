"""Tiffin order lifecycle engine.

Tiffin orders are reception-side requests that are not tied to a patient
record. Unlike patient orders they can be fully rewritten and hard deleted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import TIFFIN_STATUSES, TiffinOrder
from app.schemas.tiffin_order import TiffinOrderCreate, TiffinOrderUpdate
from app.services.audit_service import AuditRecorder, safe_record
from app.services.errors import NotFoundError, ValidationError
from app.utils.time import utc_now

logger = logging.getLogger(__name__)


def _ensure_status(status: str) -> None:
    if status not in TIFFIN_STATUSES:
        raise ValidationError(f"Unknown tiffin status: {status!r}")


def _ensure_quantity(quantity: int) -> None:
    if quantity < 1:
        raise ValidationError("Quantity must be >= 1")


class TiffinLifecycle:
    def __init__(
        self,
        db: Session,
        audit: AuditRecorder,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.db = db
        self.audit = audit
        self.clock = clock

    def get(self, tiffin_order_id: int) -> TiffinOrder:
        order: TiffinOrder | None = self.db.get(TiffinOrder, tiffin_order_id)
        if order is None:
            raise NotFoundError(f"Tiffin order {tiffin_order_id} not found")
        return order

    def create(self, payload: TiffinOrderCreate, actor_id: int) -> TiffinOrder:
        _ensure_quantity(payload.quantity)
        now = self.clock()
        order = TiffinOrder(
            patient_name=payload.patient_name,
            ward=payload.ward,
            food_type=payload.food_type,
            quantity=payload.quantity,
            order_date=payload.order_date,
            notes=payload.notes or "",
            status="pending",
            created_by=actor_id,
            created_at=now,
            updated_at=now,
        )
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        logger.info("[TIFFIN] Tiffin order %s created for ward=%s by user=%s", order.id, order.ward, actor_id)

        safe_record(
            self.audit,
            "tiffin_order",
            order.id,
            "created",
            {
                "patientName": payload.patient_name,
                "ward": payload.ward,
                "foodType": payload.food_type,
                "quantity": payload.quantity,
            },
            actor_id,
        )
        return order

    def update(self, tiffin_order_id: int, payload: TiffinOrderUpdate, actor_id: int | None) -> TiffinOrder:
        """Replace every editable field, status included, in one write."""
        order = self.get(tiffin_order_id)
        _ensure_quantity(payload.quantity)
        _ensure_status(payload.status)

        order.patient_name = payload.patient_name
        order.ward = payload.ward
        order.food_type = payload.food_type
        order.quantity = payload.quantity
        order.order_date = payload.order_date
        order.notes = payload.notes or ""
        order.status = payload.status
        order.updated_at = self.clock()
        self.db.commit()
        self.db.refresh(order)
        logger.info("[TIFFIN] Tiffin order %s updated by user=%s", tiffin_order_id, actor_id)

        safe_record(
            self.audit,
            "tiffin_order",
            tiffin_order_id,
            "updated",
            {
                "patientName": payload.patient_name,
                "ward": payload.ward,
                "foodType": payload.food_type,
                "quantity": payload.quantity,
                "status": payload.status,
            },
            actor_id,
        )
        return order

    def update_status(self, tiffin_order_id: int, status: str, actor_id: int | None) -> TiffinOrder:
        order = self.get(tiffin_order_id)
        _ensure_status(status)

        previous_status = order.status
        order.status = status
        order.updated_at = self.clock()
        self.db.commit()
        self.db.refresh(order)
        logger.info("[TIFFIN] Tiffin order %s status %s -> %s by user=%s", tiffin_order_id, previous_status, status, actor_id)

        safe_record(self.audit, "tiffin_order", tiffin_order_id, "status_changed", {"status": status}, actor_id)
        return order

    def delete(self, tiffin_order_id: int, actor_id: int | None = None) -> None:
        """Hard delete; the audit entry carries no details and may carry no actor."""
        order = self.get(tiffin_order_id)
        self.db.delete(order)
        self.db.commit()
        logger.info("[TIFFIN] Tiffin order %s deleted by user=%s", tiffin_order_id, actor_id)

        safe_record(self.audit, "tiffin_order", tiffin_order_id, "deleted", None, actor_id)

    def list_orders(
        self,
        status: str | None = None,
        ward: str | None = None,
        order_date: date | None = None,
    ) -> list[TiffinOrder]:
        """Return tiffin orders by requested date then creation time, newest first."""
        if status and status not in TIFFIN_STATUSES:
            return []
        query = select(TiffinOrder)
        if status:
            query = query.where(TiffinOrder.status == status)
        if ward:
            query = query.where(TiffinOrder.ward == ward)
        if order_date:
            query = query.where(TiffinOrder.order_date == order_date)
        query = query.order_by(
            TiffinOrder.order_date.desc(),
            TiffinOrder.created_at.desc(),
            TiffinOrder.id.desc(),
        )
        return list(self.db.scalars(query).all())
