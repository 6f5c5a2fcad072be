"""Read access to patient reference data."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import Patient


def list_patients(db: Session, ward: str | None = None) -> list[Patient]:
    query = select(Patient)
    if ward:
        query = query.where(Patient.ward == ward)
    return list(db.scalars(query.order_by(Patient.full_name.asc())).all())


def get_patient(db: Session, patient_id: int) -> Patient | None:
    return db.get(Patient, patient_id)
