"""Real-time event envelopes published on the orders channel."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.order import OrderRead

ORDERS_CHANNEL: str = "orders:updated"


class _OrderEvent(BaseModel):
    order_id: int = Field(serialization_alias="orderId")
    order: OrderRead | None = None

    model_config = ConfigDict(populate_by_name=True)


class OrderCreatedEvent(_OrderEvent):
    type: Literal["created"] = "created"


class OrderStatusEvent(_OrderEvent):
    type: Literal["status"] = "status"
    status: str


class OrderConsumptionEvent(_OrderEvent):
    type: Literal["consumption"] = "consumption"
    consumption_status: str


class MenuReloadedEvent(BaseModel):
    type: Literal["menu_reloaded"] = "menu_reloaded"


def to_wire(event: BaseModel) -> dict:
    """Serialize an event to the JSON shape sent to subscribers."""
    return event.model_dump(mode="json", by_alias=True)
