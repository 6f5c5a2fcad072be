"""API v1 router composition."""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, menu, orders, patients, reports, tiffin_orders

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(tiffin_orders.router, prefix="/tiffin-orders", tags=["tiffin-orders"])
api_router.include_router(menu.router, prefix="/menu", tags=["menu"])
api_router.include_router(patients.router, prefix="/patients", tags=["patients"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
