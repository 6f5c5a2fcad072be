"""Authentication endpoints (API JWT)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_audit_recorder
from app.core.security import create_access_token, get_current_user, verify_password
from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import AuthUserResponse, LoginRequest, TokenResponse
from app.services.audit_service import AuditRecorder, safe_record
from app.services.user_service import get_user_by_username

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
) -> TokenResponse:
    user: User | None = get_user_by_username(db=db, username=payload.username.strip())
    if user is None or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect username or password")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account is inactive")

    logger.info("[AUTH] user_id=%s logged in with role=%s", user.id, user.role)
    safe_record(audit, "auth", user.id, "login", user.role, user.id)
    return TokenResponse(access_token=create_access_token(data={"sub": str(user.id), "role": user.role}))


@router.get("/me", response_model=AuthUserResponse)
def me(current_user: User = Depends(get_current_user)) -> AuthUserResponse:
    return AuthUserResponse.model_validate(current_user)
