"""Schema exports."""

from app.schemas.auth import AuthUserResponse, LoginRequest, TokenResponse
from app.schemas.events import (
    ORDERS_CHANNEL,
    MenuReloadedEvent,
    OrderConsumptionEvent,
    OrderCreatedEvent,
    OrderStatusEvent,
)
from app.schemas.menu import MenuItemCreate, MenuItemRead, MenuReplaceRequest, MenuReplaceResponse, PatientRead
from app.schemas.order import ConsumptionUpdate, OrderCreate, OrderRead, OrderStatusUpdate
from app.schemas.report import DailyCount, DietaryCount, DishCount, ReportBundle, WardWaste, WeeklyCount
from app.schemas.tiffin_order import TiffinOrderCreate, TiffinOrderRead, TiffinOrderUpdate, TiffinStatusUpdate

__all__ = [
    "AuthUserResponse",
    "LoginRequest",
    "TokenResponse",
    "ORDERS_CHANNEL",
    "MenuReloadedEvent",
    "OrderConsumptionEvent",
    "OrderCreatedEvent",
    "OrderStatusEvent",
    "MenuItemCreate",
    "MenuItemRead",
    "MenuReplaceRequest",
    "MenuReplaceResponse",
    "PatientRead",
    "ConsumptionUpdate",
    "OrderCreate",
    "OrderRead",
    "OrderStatusUpdate",
    "DailyCount",
    "DietaryCount",
    "DishCount",
    "ReportBundle",
    "WardWaste",
    "WeeklyCount",
    "TiffinOrderCreate",
    "TiffinOrderRead",
    "TiffinOrderUpdate",
    "TiffinStatusUpdate",
]
