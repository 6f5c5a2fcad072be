"""Patient reference endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.security import get_current_user
from app.db.session import get_db
from app.models import Patient
from app.models.user import User
from app.schemas.menu import PatientRead
from app.services.patient_service import get_patient, list_patients

router: APIRouter = APIRouter()


@router.get("", response_model=list[PatientRead])
def get_patients(
    ward: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Patient]:
    return list_patients(db, ward=ward)


@router.get("/{patient_id}", response_model=PatientRead)
def get_patient_detail(
    patient_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Patient:
    patient = get_patient(db, patient_id)
    if patient is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")
    return patient
