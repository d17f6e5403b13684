"""API package initialization."""

from estateview.api.admin import router as admin_router
from estateview.api.auth import router as auth_router
from estateview.api.faqs import router as faqs_router
from estateview.api.properties import router as properties_router
from estateview.api.testimonials import router as testimonials_router

__all__ = [
    "admin_router",
    "auth_router",
    "faqs_router",
    "properties_router",
    "testimonials_router",
]
