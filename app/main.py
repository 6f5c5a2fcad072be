"""FastAPI entrypoint for the ward meal ordering service."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from app.api.realtime import router as realtime_router
from app.api.v1.api import api_router
from app.core.config import settings
from app.db import session as db_session
from app.db.base import Base
from app.services.account_service import ensure_default_admin
from app.services.notifications import NotificationBus

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
app.state.notification_bus = NotificationBus()
app.include_router(api_router, prefix="/api/v1")
app.include_router(realtime_router)


@app.on_event("startup")
def startup() -> None:
    Base.metadata.create_all(bind=db_session.engine)
    if settings.bootstrap_admin:
        with db_session.SessionLocal() as session:
            try:
                admin_present = ensure_default_admin(session)
                logger.info("[BOOTSTRAP] default admin present: %s", "yes" if admin_present else "no")
            except Exception:
                logger.exception("[BOOTSTRAP] Admin bootstrap failed; continuing startup.")
    logger.info("[BOOTSTRAP] %s started (env=%s)", settings.app_name, settings.app_env)


@app.get("/health")
def health() -> dict[str, str | int]:
    return {"status": "ok", "subscribers": app.state.notification_bus.subscriber_count}
