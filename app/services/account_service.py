"""Staff account bootstrap."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import get_password_hash
from app.services.user_service import create_user, get_user_by_username

logger = logging.getLogger(__name__)


def ensure_default_admin(db: Session) -> bool:
    """Ensure the configured admin account exists, is active and holds the admin role.

    Returns:
        bool: True when the account existed before this call.
    """
    existing_admin = get_user_by_username(db=db, username=settings.admin_username)
    if existing_admin is not None:
        updates_applied = False
        if not existing_admin.is_active:
            existing_admin.is_active = True
            updates_applied = True
            logger.info("[BOOTSTRAP] Admin exists but was inactive; account re-activated.")
        if existing_admin.role != "admin":
            logger.warning(
                "[BOOTSTRAP] Admin role restored for username=%s (old=%s).",
                existing_admin.username,
                existing_admin.role,
            )
            existing_admin.role = "admin"
            updates_applied = True

        if updates_applied:
            db.commit()
        return True

    create_user(
        db=db,
        username=settings.admin_username,
        hashed_password=get_password_hash(settings.admin_password),
        role="admin",
        full_name="Administrator",
    )
    logger.warning(
        "[SECURITY] Default admin account created: %s. Change the default password immediately.",
        settings.admin_username,
    )
    return False
