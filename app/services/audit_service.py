"""Audit log helpers.

Audit writes happen after the primary mutation has committed and run in their
own session, so a failing audit store can never roll back or block the change
it describes. Details are stored as-is in a JSON column. Engines depend on
:class:`AuditRecorder` only, which lets tests swap in recording or failing
stubs.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from sqlalchemy.orm import Session

from app.db import session as db_session
from app.models import AuditLog

logger = logging.getLogger(__name__)


class AuditRecorder(ABC):
    """Write side of the audit trail."""

    @abstractmethod
    def record(
        self,
        entity_type: str,
        entity_id: int,
        action: str,
        details: dict[str, Any] | str | None,
        actor_id: int | None,
    ) -> None:
        """Persist one audit entry."""


class DatabaseAuditRecorder(AuditRecorder):
    """Append audit rows through a dedicated session."""

    def __init__(self, session_factory: Callable[[], Session] | None = None) -> None:
        self._session_factory = session_factory

    def _open_session(self) -> Session:
        if self._session_factory is not None:
            return self._session_factory()
        return db_session.SessionLocal()

    def record(
        self,
        entity_type: str,
        entity_id: int,
        action: str,
        details: dict[str, Any] | str | None,
        actor_id: int | None,
    ) -> None:
        with self._open_session() as db:
            db.add(
                AuditLog(
                    entity=entity_type,
                    entity_id=entity_id,
                    action=action,
                    details=details or None,
                    user_id=actor_id,
                )
            )
            db.commit()


def safe_record(
    recorder: AuditRecorder,
    entity_type: str,
    entity_id: int,
    action: str,
    details: dict[str, Any] | str | None = None,
    actor_id: int | None = None,
) -> bool:
    """Record an audit entry, logging and swallowing any failure.

    Returns whether the entry was written.
    """
    try:
        recorder.record(entity_type, entity_id, action, details, actor_id)
    except Exception:
        logger.exception("[AUDIT] Failed to record %s/%s action=%s", entity_type, entity_id, action)
        return False
    return True
