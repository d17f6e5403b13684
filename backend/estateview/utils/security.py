"""Security utilities for admin credentials and JWT handling."""

import hmac
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from estateview.config import settings
from estateview.exceptions import UnauthorizedError
from estateview.schemas.auth import TokenPayload

ADMIN_ROLE = "admin"

# Password hashing context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
# HTTP Bearer security; missing headers are reported by require_admin
security = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognised or malformed hash in configuration
        return False


def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)


def authenticate_admin(username: str, password: str) -> bool:
    """Check a login attempt against the configured admin credentials."""
    username_ok = hmac.compare_digest(
        username.encode("utf-8"), settings.admin_username.encode("utf-8")
    )
    password_ok = verify_password(password, settings.admin_password_hash)
    return username_ok and password_ok


def create_access_token(
    subject: str,
    role: str = ADMIN_ROLE,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create JWT access token."""
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)

    to_encode = {
        "sub": subject,
        "role": role,
        "exp": expire,
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> Optional[TokenPayload]:
    """Decode and validate JWT access token."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )

        return TokenPayload(
            sub=payload["sub"],
            role=payload["role"],
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (JWTError, KeyError):
        return None


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenPayload:
    """Resolve the admin principal from the bearer token."""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    token_data = decode_access_token(credentials.credentials)

    if token_data is None:
        raise UnauthorizedError("Could not validate credentials")

    # Check if token is expired
    if token_data.exp < datetime.now(timezone.utc):
        raise UnauthorizedError("Token has expired")

    if token_data.role != ADMIN_ROLE or token_data.sub != settings.admin_username:
        raise UnauthorizedError("Could not validate credentials")

    return token_data
