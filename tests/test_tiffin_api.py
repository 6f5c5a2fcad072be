"""Reception tiffin order endpoints."""

from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.security import create_access_token, get_password_hash
from app.db import session as db_session
from app.db.base import Base
from app.main import app
from app.models import AuditLog, TiffinOrder, User


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _setup(tmp_path: Path, monkeypatch, name: str) -> tuple[sessionmaker, dict[str, dict[str, str]]]:
    engine = _build_test_engine(tmp_path / name)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)

    headers: dict[str, dict[str, str]] = {}
    with testing_session_local() as db:
        for role in ("receptionist", "nurse"):
            user = User(username=f"{role}1", password_hash=get_password_hash("secret123"), role=role)
            db.add(user)
            db.flush()
            headers[role] = {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}
        db.commit()
    return testing_session_local, headers


TIFFIN_PAYLOAD: dict[str, object] = {
    "patient_name": "Meera Iyer",
    "ward": "Ward C",
    "food_type": "Veg Thali",
    "quantity": 2,
    "order_date": "2026-03-02",
    "notes": "Deliver by 1pm",
}


def test_reception_can_create_edit_and_delete_tiffin(tmp_path: Path, monkeypatch) -> None:
    testing_session_local, headers = _setup(tmp_path, monkeypatch, "test_tiffin_flow.db")

    with TestClient(app) as client:
        created = client.post("/api/v1/tiffin-orders", json=TIFFIN_PAYLOAD, headers=headers["receptionist"])
        assert created.status_code == 201
        tiffin_id = created.json()["id"]
        assert created.json()["status"] == "pending"

        edited = client.put(
            f"/api/v1/tiffin-orders/{tiffin_id}",
            json={**TIFFIN_PAYLOAD, "quantity": 3, "status": "confirmed"},
            headers=headers["receptionist"],
        )
        assert edited.status_code == 200
        assert edited.json()["quantity"] == 3
        assert edited.json()["status"] == "confirmed"

        ready = client.post(
            f"/api/v1/tiffin-orders/{tiffin_id}/status", json={"status": "ready"}, headers=headers["receptionist"]
        )
        assert ready.json()["status"] == "ready"

        listed = client.get(
            "/api/v1/tiffin-orders", params={"status": "ready", "order_date": "2026-03-02"}, headers=headers["nurse"]
        )
        assert [row["id"] for row in listed.json()] == [tiffin_id]

        deleted = client.delete(f"/api/v1/tiffin-orders/{tiffin_id}", headers=headers["receptionist"])
        assert deleted.json() == {"success": True}
        assert client.get(f"/api/v1/tiffin-orders/{tiffin_id}", headers=headers["nurse"]).status_code == 404

    with testing_session_local() as db:
        assert db.scalar(select(TiffinOrder).limit(1)) is None
        entries = db.scalars(select(AuditLog).where(AuditLog.entity == "tiffin_order").order_by(AuditLog.id)).all()
        assert [entry.action for entry in entries] == ["created", "updated", "status_changed", "deleted"]
        assert entries[0].details == {
            "patientName": "Meera Iyer",
            "ward": "Ward C",
            "foodType": "Veg Thali",
            "quantity": 2,
        }
        assert entries[2].details == {"status": "ready"}
        assert entries[3].details is None
        assert entries[3].user_id == entries[0].user_id


def test_tiffin_validation_errors(tmp_path: Path, monkeypatch) -> None:
    _, headers = _setup(tmp_path, monkeypatch, "test_tiffin_validation.db")

    with TestClient(app) as client:
        zero = client.post(
            "/api/v1/tiffin-orders", json={**TIFFIN_PAYLOAD, "quantity": 0}, headers=headers["receptionist"]
        )
        tiffin_id = client.post("/api/v1/tiffin-orders", json=TIFFIN_PAYLOAD, headers=headers["receptionist"]).json()["id"]
        bad_status = client.post(
            f"/api/v1/tiffin-orders/{tiffin_id}/status", json={"status": "eaten"}, headers=headers["receptionist"]
        )
        missing = client.delete("/api/v1/tiffin-orders/999", headers=headers["receptionist"])

    assert zero.status_code == 400
    assert bad_status.status_code == 400
    assert missing.status_code == 404


def test_tiffin_writes_require_reception_role(tmp_path: Path, monkeypatch) -> None:
    _, headers = _setup(tmp_path, monkeypatch, "test_tiffin_roles.db")

    with TestClient(app) as client:
        response = client.post("/api/v1/tiffin-orders", json=TIFFIN_PAYLOAD, headers=headers["nurse"])

    assert response.status_code == 403


def test_unknown_status_filter_returns_empty_list(tmp_path: Path, monkeypatch) -> None:
    _, headers = _setup(tmp_path, monkeypatch, "test_tiffin_unknown_filter.db")

    with TestClient(app) as client:
        client.post("/api/v1/tiffin-orders", json=TIFFIN_PAYLOAD, headers=headers["receptionist"])
        response = client.get("/api/v1/tiffin-orders", params={"status": "bogus"}, headers=headers["nurse"])

    assert response.status_code == 200
    assert response.json() == []
