"""Statistics aggregation for the admin dashboard."""

from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Sequence

from estateview.schemas.stats import SiteStatistics


def average_price(total_value: int, count: int) -> int:
    """Mean price rounded half up, 0 when there is nothing to average."""
    if count <= 0:
        return 0
    mean = Decimal(total_value) / Decimal(count)
    return int(mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_statistics(
    properties: Sequence[Any],
    testimonials: Sequence[Any],
    faqs: Sequence[Any],
) -> SiteStatistics:
    """Single pass over the property snapshot plus content counts."""
    by_type: Counter = Counter()
    by_city: Counter = Counter()
    featured = 0
    total_value = 0

    for prop in properties:
        by_type[prop.type] += 1
        by_city[prop.city] += 1
        total_value += prop.price or 0
        if prop.featured:
            featured += 1

    return SiteStatistics(
        total_properties=len(properties),
        featured_properties=featured,
        total_testimonials=len(testimonials),
        total_faqs=len(faqs),
        properties_by_type=dict(by_type),
        properties_by_city=dict(by_city),
        total_value=total_value,
        average_price=average_price(total_value, len(properties)),
    )
