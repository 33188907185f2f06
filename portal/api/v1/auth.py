"""Authentication endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.security import (
    SessionContext,
    create_session_token,
    get_session_context,
    verify_password,
)
from portal.db.session import get_db
from portal.models.user import User
from portal.schemas.auth import LoginRequest, LoginResponse, SessionResponse, UserResponse

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login with email and password."""
    result = await db.execute(select(User).where(User.email == str(request.email).lower()))
    user = result.scalar_one_or_none()

    if not user or not verify_password(request.password, user.password_hash):
        logger.warning("login_failed", email=request.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    # The role claim is fixed here, at session establishment
    access_token = create_session_token(str(user.id), user.email, user.role)
    logger.info("login_succeeded", user_id=str(user.id), role=user.role)

    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=SessionResponse)
async def get_current_session(session: SessionContext = Depends(get_session_context)):
    """Get the claims of the current session."""
    return SessionResponse(
        user_id=session.user_id,
        email=session.email,
        role=session.role.value,
        is_admin=session.is_admin,
    )


@router.post("/logout")
async def logout(session: SessionContext = Depends(get_session_context)):
    """Logout (client should discard tokens)."""
    return {"message": "Successfully logged out"}
