"""Menu and patient reference schemas."""

from pydantic import BaseModel, ConfigDict, Field


class MenuItemCreate(BaseModel):
    """Menu item used by the bulk replace operation."""

    name: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=64)
    dietary: str | None = ""


class MenuItemRead(BaseModel):
    id: int
    name: str
    category: str
    dietary: str | None = None

    model_config = ConfigDict(from_attributes=True)


class MenuReplaceRequest(BaseModel):
    """Optional explicit item list; the built-in menu is used when omitted."""

    items: list[MenuItemCreate] | None = None


class MenuReplaceResponse(BaseModel):
    item_count: int


class PatientRead(BaseModel):
    id: int
    mrn: str
    full_name: str
    ward: str
    bed: str
    room_number: str
    dietary_restrictions: str | None = None
    allergies: str | None = None

    model_config = ConfigDict(from_attributes=True)
