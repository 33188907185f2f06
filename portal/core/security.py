"""Security utilities: JWT, password hashing, admin session context."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from portal.config import settings

# HTTPBearer for simple token authentication in Swagger (just paste the access token)
security = HTTPBearer()


class UserRole(str, Enum):
    """Account roles carried as a claim in the access token."""

    ADMIN = "admin"
    VIEWER = "viewer"


@dataclass(frozen=True)
class SessionContext:
    """Identity resolved from the bearer token once per request."""

    user_id: str
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class AdminContext:
    """Capability passed explicitly into every admin-only service call."""

    user_id: str
    email: str

    @classmethod
    def from_session(cls, session: SessionContext) -> "AdminContext":
        if not session.is_admin:
            raise PermissionError(f"{session.email} is not an administrator")
        return cls(user_id=session.user_id, email=session.email)


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    """Check a password against a stored bcrypt hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
    to_encode.update({"exp": expire, "type": "access"})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def create_session_token(user_id: str, email: str, role: str) -> str:
    """Access token whose claims fully describe the session."""
    return create_access_token({"sub": str(user_id), "email": email, "role": role})


def decode_token(token: str) -> dict:
    """Decode and verify JWT token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_session_context(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> SessionContext:
    """Resolve the bearer token into a SessionContext."""
    payload = decode_token(credentials.credentials)

    user_id = payload.get("sub")
    email = payload.get("email")
    if user_id is None or email is None or payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    try:
        role = UserRole(payload.get("role"))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown role claim",
        )

    return SessionContext(user_id=user_id, email=email, role=role)


async def require_admin(
    session: SessionContext = Depends(get_session_context),
) -> AdminContext:
    """Dependency granting an AdminContext to admin sessions only."""
    try:
        return AdminContext.from_session(session)
    except PermissionError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Admin privileges required.",
        )
