"""Admin authentication endpoint."""

from datetime import timedelta

from fastapi import APIRouter

from estateview.config import settings
from estateview.exceptions import UnauthorizedError
from estateview.schemas.auth import LoginRequest, LoginResponse
from estateview.utils.logging import get_logger
from estateview.utils.security import authenticate_admin, create_access_token

router = APIRouter()
logger = get_logger("api.auth")


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest) -> LoginResponse:
    """Authenticate the admin and return a signed access token."""
    if not authenticate_admin(request.username, request.password):
        logger.warning("admin_login_failed", username=request.username)
        raise UnauthorizedError("Invalid credentials")

    access_token = create_access_token(
        subject=settings.admin_username,
        expires_delta=timedelta(minutes=settings.jwt_expire_minutes),
    )
    logger.info("admin_login_succeeded", username=request.username)

    return LoginResponse(
        token=access_token,
        expires_in=settings.jwt_expire_minutes * 60,
    )
