"""Order lifecycle engine tests: status writes, consumption and waste."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.db.base import Base
from app.models import MenuItem, Order, Patient, User
from app.services.errors import MissingReferenceError, NotFoundError, ValidationError
from app.services.notifications import NotificationBus
from app.services.order_lifecycle import OrderLifecycle


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


class RecordingAudit:
    def __init__(self) -> None:
        self.entries: list[tuple] = []

    def record(self, entity_type, entity_id, action, details, actor_id) -> None:
        self.entries.append((entity_type, entity_id, action, details, actor_id))


class FailingAudit:
    def record(self, entity_type, entity_id, action, details, actor_id) -> None:
        raise RuntimeError("audit store unavailable")


class TickingClock:
    """Deterministic clock that advances one minute per call."""

    def __init__(self) -> None:
        self.current = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


@pytest.fixture()
def db(tmp_path: Path):
    engine = _build_test_engine(tmp_path / "test_order_lifecycle.db")
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with testing_session_local() as session:
        session.add_all(
            [
                User(username="nurse1", password_hash="x", role="nurse", full_name="Nurse Joy"),
                Patient(mrn="MRN-001", full_name="John Doe", ward="Ward A", bed="A-12", room_number="A-12", dietary_restrictions="Low Sodium"),
                Patient(mrn="MRN-002", full_name="Jane Smith", ward="Ward B", bed="B-03", room_number="B-03", dietary_restrictions="Diabetic"),
                MenuItem(name="Oatmeal", category="Breakfast", dietary="Vegetarian"),
                MenuItem(name="Vegetable Soup", category="Dinner", dietary="Vegan"),
            ]
        )
        session.commit()
        yield session


def _lifecycle(db: Session, audit=None, bus=None) -> OrderLifecycle:
    return OrderLifecycle(db=db, audit=audit or RecordingAudit(), bus=bus or NotificationBus(), clock=TickingClock())


def test_create_order_starts_placed_with_unknown_consumption(db: Session) -> None:
    audit = RecordingAudit()
    lifecycle = _lifecycle(db, audit=audit)

    record = lifecycle.create_order(patient_id=1, item_id=1, instructions="No sugar", actor_id=1)

    assert record.status == "placed"
    assert record.consumption_status == "unknown"
    assert record.waste_percent == 0
    assert record.consumption_recorded_at is None
    assert record.created_at == record.updated_at
    assert record.patient_name == "John Doe"
    assert record.item_name == "Oatmeal"
    assert audit.entries == [
        ("order", record.id, "created", {"patientId": 1, "itemId": 1, "specialInstructions": "No sugar"}, 1)
    ]


@pytest.mark.parametrize(("patient_id", "item_id"), [(999, 1), (1, 999)])
def test_create_order_rejects_unknown_references(db: Session, patient_id: int, item_id: int) -> None:
    bus = NotificationBus()
    subscription = bus.subscribe()
    lifecycle = _lifecycle(db, bus=bus)

    with pytest.raises(MissingReferenceError):
        lifecycle.create_order(patient_id=patient_id, item_id=item_id, instructions=None, actor_id=1)

    assert db.query(Order).count() == 0
    assert subscription.drain() == []
    assert isinstance(MissingReferenceError("x"), NotFoundError)


@pytest.mark.parametrize(
    ("consumption", "expected_status", "expected_waste"),
    [
        ("eaten", "eaten", 0),
        ("partial", "partial", 50),
        ("refused", "refused", 100),
        ("half", "unknown", 0),
        ("", "unknown", 0),
        (None, "unknown", 0),
    ],
)
def test_record_consumption_maps_waste_and_always_stamps(
    db: Session, consumption, expected_status: str, expected_waste: int
) -> None:
    lifecycle = _lifecycle(db)
    created = lifecycle.create_order(patient_id=1, item_id=1, instructions=None, actor_id=1)

    record = lifecycle.record_consumption(created.id, consumption, actor_id=1)

    assert record.consumption_status == expected_status
    assert record.waste_percent == expected_waste
    assert record.consumption_recorded_at is not None
    assert record.updated_at >= created.updated_at


def test_unknown_fallback_breaks_unknown_iff_unstamped_pairing(db: Session) -> None:
    """After a fallback recording the order is 'unknown' yet carries a timestamp."""
    lifecycle = _lifecycle(db)
    created = lifecycle.create_order(patient_id=1, item_id=1, instructions=None, actor_id=1)
    assert (created.consumption_status == "unknown") == (created.consumption_recorded_at is None)

    record = lifecycle.record_consumption(created.id, "bogus", actor_id=1)

    assert record.consumption_status == "unknown"
    assert record.consumption_recorded_at is not None


@pytest.mark.parametrize(
    ("start", "target"),
    [
        ("placed", "delivered"),
        ("delivered", "placed"),
        ("cancelled", "in_kitchen"),
        ("out_for_delivery", "out_for_delivery"),
    ],
)
def test_set_status_accepts_any_transition(db: Session, start: str, target: str) -> None:
    audit = RecordingAudit()
    lifecycle = _lifecycle(db, audit=audit)
    created = lifecycle.create_order(patient_id=1, item_id=1, instructions=None, actor_id=1)
    lifecycle.set_status(created.id, start, actor_id=1)

    record = lifecycle.set_status(created.id, target, actor_id=1)

    assert record.status == target
    assert record.updated_at > created.updated_at
    assert audit.entries[-1][2] == "status_changed"
    assert audit.entries[-1][3]["status"] == target


def test_set_status_rejects_value_outside_status_set(db: Session) -> None:
    bus = NotificationBus()
    lifecycle = _lifecycle(db, bus=bus)
    created = lifecycle.create_order(patient_id=1, item_id=1, instructions=None, actor_id=1)
    subscription = bus.subscribe()

    with pytest.raises(ValidationError):
        lifecycle.set_status(created.id, "teleported", actor_id=1)

    assert lifecycle.get_order(created.id).status == "placed"
    assert subscription.drain() == []


def test_mutations_on_missing_order_raise_not_found(db: Session) -> None:
    lifecycle = _lifecycle(db)

    with pytest.raises(NotFoundError):
        lifecycle.set_status(42, "delivered", actor_id=1)
    with pytest.raises(NotFoundError):
        lifecycle.record_consumption(42, "eaten", actor_id=1)
    with pytest.raises(NotFoundError):
        lifecycle.get_order(42)


def test_audit_failure_does_not_block_mutation_or_event(db: Session) -> None:
    bus = NotificationBus()
    subscription = bus.subscribe()
    lifecycle = _lifecycle(db, audit=FailingAudit(), bus=bus)

    created = lifecycle.create_order(patient_id=1, item_id=1, instructions=None, actor_id=1)
    updated = lifecycle.set_status(created.id, "in_kitchen", actor_id=1)
    consumed = lifecycle.record_consumption(created.id, "partial", actor_id=1)

    assert updated.status == "in_kitchen"
    assert consumed.waste_percent == 50
    assert [event["type"] for event in subscription.drain()] == ["created", "status", "consumption"]


def test_events_carry_joined_order_in_wire_shape(db: Session) -> None:
    bus = NotificationBus()
    subscription = bus.subscribe()
    lifecycle = _lifecycle(db, bus=bus)

    created = lifecycle.create_order(patient_id=2, item_id=2, instructions="Extra hot", actor_id=1)
    lifecycle.set_status(created.id, "out_for_delivery", actor_id=1)
    lifecycle.record_consumption(created.id, "refused", actor_id=1)
    created_event, status_event, consumption_event = subscription.drain()

    assert created_event["type"] == "created"
    assert created_event["orderId"] == created.id
    assert created_event["order"]["patient_name"] == "Jane Smith"
    assert status_event == {
        "type": "status",
        "orderId": created.id,
        "status": "out_for_delivery",
        "order": status_event["order"],
    }
    assert status_event["order"]["status"] == "out_for_delivery"
    assert consumption_event["consumption_status"] == "refused"
    assert consumption_event["order"]["waste_percent"] == 100


def test_list_orders_filters_exactly_and_sorts_newest_first(db: Session) -> None:
    lifecycle = _lifecycle(db)
    first = lifecycle.create_order(patient_id=1, item_id=1, instructions=None, actor_id=1)
    second = lifecycle.create_order(patient_id=2, item_id=2, instructions=None, actor_id=1)
    third = lifecycle.create_order(patient_id=1, item_id=2, instructions=None, actor_id=1)
    lifecycle.set_status(second.id, "in_kitchen", actor_id=1)

    everything = lifecycle.list_orders()
    placed = lifecycle.list_orders(status="placed")
    ward_b = lifecycle.list_orders(ward="Ward B")
    placed_ward_a = lifecycle.list_orders(status="placed", ward="Ward A")

    assert [order.id for order in everything] == [third.id, second.id, first.id]
    assert [order.id for order in placed] == [third.id, first.id]
    assert all(order.status == "placed" for order in placed)
    assert [order.id for order in ward_b] == [second.id]
    assert [order.id for order in placed_ward_a] == [third.id, first.id]
    assert lifecycle.list_orders(status="delivered") == []
