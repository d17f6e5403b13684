"""Lenient coercion of raw query-string and form values.

Malformed input never raises here: callers receive ``None`` and fall back
to their own default.
"""

import json
import math
from typing import Any, List, Optional

# Largest value an SQLite INTEGER column can hold
MAX_STORED_INT = 2**63 - 1


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_int(value: Any) -> Optional[int]:
    """Parse an integer; ``None`` for anything that is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = _as_text(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def parse_positive_int(value: Any) -> Optional[int]:
    number = parse_int(value)
    if number is None or number < 1:
        return None
    return number


def parse_stored_int(value: Any) -> Optional[int]:
    """Parse a non-negative integer small enough for an INTEGER column."""
    number = parse_int(value)
    if number is None or not 0 <= number <= MAX_STORED_INT:
        return None
    return number


def parse_record_id(value: Any) -> Optional[int]:
    """Path ids: ``None`` for anything that cannot name a stored row."""
    number = parse_stored_int(value)
    return number if number else None


def parse_number(value: Any) -> Optional[float]:
    """Parse a finite int or float; ``None`` otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = _as_text(value)
        if text is None:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_flag(value: Any) -> Optional[bool]:
    """Tri-state flag: ``"true"``/``"false"`` or ``None`` for no preference."""
    if isinstance(value, bool):
        return value
    text = _as_text(value)
    if text == "true":
        return True
    if text == "false":
        return False
    return None


def parse_string_list(value: Any) -> Optional[List[str]]:
    """Accept a list or a JSON-encoded array of strings."""
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            value = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError("must be a JSON array of strings") from exc
    if not isinstance(value, (list, tuple)):
        raise ValueError("must be a JSON array of strings")
    return [str(item).strip() for item in value if str(item).strip()]
