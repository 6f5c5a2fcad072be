"""Tiffin order API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class TiffinOrderCreate(BaseModel):
    """Payload for a new tiffin order."""

    patient_name: str = Field(min_length=1, max_length=255)
    ward: str = Field(min_length=1, max_length=64)
    food_type: str = Field(min_length=1, max_length=128)
    quantity: int = 1
    order_date: date
    notes: str | None = None


class TiffinOrderUpdate(TiffinOrderCreate):
    """Full replacement of a tiffin order, status included."""

    status: str = "pending"


class TiffinStatusUpdate(BaseModel):
    status: str


class TiffinOrderRead(BaseModel):
    id: int
    patient_name: str
    ward: str
    food_type: str
    quantity: int
    order_date: date
    status: str
    notes: str | None = None
    created_by: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
