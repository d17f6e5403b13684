"""Authentication schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel

from estateview.schemas.common import CamelModel


class TokenPayload(BaseModel):
    """JWT token payload."""
    sub: str  # Admin username
    role: str
    exp: datetime


class LoginRequest(BaseModel):
    """Admin login request schema."""
    username: str
    password: str


class LoginResponse(CamelModel):
    """Admin login response."""
    success: bool = True
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    expires_in: int
