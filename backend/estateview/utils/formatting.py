"""Display formatting for prices and locations."""

from typing import Final, Optional

RUPEE_SIGN: Final[str] = "₹"


def group_indian(number: int) -> str:
    """Group digits the Indian way: 1234567 -> 12,34,567."""
    sign = "-" if number < 0 else ""
    digits = str(abs(int(number)))
    if len(digits) <= 3:
        return f"{sign}{digits}"
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return f"{sign}{','.join(groups)},{tail}"


def format_price(price: Optional[int]) -> str:
    return f"{RUPEE_SIGN}{group_indian(price or 0)}"


def format_location(city: Optional[str], state: Optional[str]) -> str:
    return f"{city or ''}, {state or ''}"
