"""Admin statistics schemas."""

from typing import Dict

from pydantic import Field

from estateview.schemas.common import CamelModel


class SiteStatistics(CamelModel):
    """Aggregate counts over all listings and content."""
    total_properties: int
    featured_properties: int
    total_testimonials: int
    total_faqs: int = Field(alias="totalFAQs")
    properties_by_type: Dict[str, int]
    properties_by_city: Dict[str, int]
    total_value: int
    average_price: int


class StatisticsResponse(CamelModel):
    success: bool = True
    data: SiteStatistics
