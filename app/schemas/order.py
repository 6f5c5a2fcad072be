"""Order API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class OrderCreate(BaseModel):
    """Place a meal order for a patient."""

    patient_id: int
    item_id: int
    special_instructions: str | None = Field(default=None, max_length=2000)


class OrderStatusUpdate(BaseModel):
    """New delivery status; any value of the status set is accepted."""

    status: str


class ConsumptionUpdate(BaseModel):
    """Consumption outcome; unrecognised values are stored as 'unknown'."""

    consumption_status: str | int | float | bool | None = None


class OrderRead(BaseModel):
    """Order joined with patient and menu item display data."""

    id: int
    patient_id: int
    item_id: int
    created_by: int
    status: str
    consumption_status: str
    waste_percent: int
    special_instructions: str | None = None
    created_at: datetime
    updated_at: datetime
    consumption_recorded_at: datetime | None = None
    patient_name: str
    ward: str
    bed: str
    room_number: str
    dietary_restrictions: str | None = None
    allergies: str | None = None
    item_name: str

    model_config = ConfigDict(from_attributes=True)
