"""Schemas package initialization."""

from estateview.schemas.auth import LoginRequest, LoginResponse, TokenPayload
from estateview.schemas.common import ErrorResponse, PaginationMeta
from estateview.schemas.faq import FAQCreate, FAQEnvelope, FAQListResponse, FAQPatch, FAQResponse
from estateview.schemas.property import (
    PropertyCollectionResponse,
    PropertyCreate,
    PropertyEnvelope,
    PropertyListResponse,
    PropertyPatch,
    PropertyResponse,
)
from estateview.schemas.stats import SiteStatistics, StatisticsResponse
from estateview.schemas.testimonial import (
    TestimonialCreate,
    TestimonialEnvelope,
    TestimonialListResponse,
    TestimonialPatch,
    TestimonialResponse,
)

__all__ = [
    # Auth
    "LoginRequest",
    "LoginResponse",
    "TokenPayload",
    # Common
    "ErrorResponse",
    "PaginationMeta",
    # Property
    "PropertyCreate",
    "PropertyPatch",
    "PropertyResponse",
    "PropertyListResponse",
    "PropertyCollectionResponse",
    "PropertyEnvelope",
    # Testimonial
    "TestimonialCreate",
    "TestimonialPatch",
    "TestimonialResponse",
    "TestimonialListResponse",
    "TestimonialEnvelope",
    # FAQ
    "FAQCreate",
    "FAQPatch",
    "FAQResponse",
    "FAQListResponse",
    "FAQEnvelope",
    # Statistics
    "SiteStatistics",
    "StatisticsResponse",
]
