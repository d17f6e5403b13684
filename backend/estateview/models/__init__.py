"""Models package initialization."""

from estateview.models.faq import FAQ
from estateview.models.property import Property, PropertyStatus, PropertyType
from estateview.models.testimonial import Testimonial

__all__ = [
    # Property
    "Property",
    "PropertyType",
    "PropertyStatus",
    # Testimonial
    "Testimonial",
    # FAQ
    "FAQ",
]
