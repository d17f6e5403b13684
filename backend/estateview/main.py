"""FastAPI application entry point."""

import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from estateview.config import settings
from estateview.database import lifespan_db
from estateview.exceptions import EstateViewError
from estateview.schemas.common import ErrorResponse
from estateview.utils.logging import (
    REQUEST_ID_HEADER,
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)

# Setup logging
setup_logging(debug=settings.debug)
logger = get_logger("main")

# Import routers
from estateview.api.admin import router as admin_router
from estateview.api.auth import router as auth_router
from estateview.api.faqs import router as faqs_router
from estateview.api.properties import router as properties_router
from estateview.api.testimonials import router as testimonials_router

# StaticFiles checks the directory when mounted
os.makedirs(settings.uploads_dir, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    async with lifespan_db():
        yield


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Real estate listings, testimonials and FAQs with an admin console",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag log lines with a request id and echo it back to the client."""
    request_id = bind_request_context(
        request.method,
        request.url.path,
        request.headers.get(REQUEST_ID_HEADER),
    )
    started = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
    finally:
        clear_request_context()


def error_response(status_code: int, message: str, error=None) -> JSONResponse:
    body = ErrorResponse(message=message, error=error).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def _validation_errors(errors) -> list:
    # ctx and input may hold exceptions or uploaded files
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in errors
    ]


@app.exception_handler(EstateViewError)
async def estateview_error_handler(request: Request, exc: EstateViewError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc) -> JSONResponse:
    logger.info("request_validation_failed", path=request.url.path)
    return error_response(
        422,
        "Invalid request",
        _validation_errors(exc.errors()),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", path=request.url.path, error=str(exc), exc_info=True)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Something went wrong!",
        str(exc),
    )


# Mount static files for uploaded images
app.mount("/uploads", StaticFiles(directory=settings.uploads_dir), name="uploads")

# Include routers
app.include_router(properties_router, prefix=f"{settings.api_prefix}/properties", tags=["Properties"])
app.include_router(testimonials_router, prefix=f"{settings.api_prefix}/testimonials", tags=["Testimonials"])
app.include_router(faqs_router, prefix=f"{settings.api_prefix}/faqs", tags=["FAQs"])
app.include_router(auth_router, prefix=f"{settings.api_prefix}/admin", tags=["Admin"])
app.include_router(admin_router, prefix=f"{settings.api_prefix}/admin", tags=["Admin"])


@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected",
    }
