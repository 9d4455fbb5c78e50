"""Normalization helpers.

Centralizes defensive parsing of timestamps and payload leaves.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

from pytagstate._constants import MS_THRESHOLD


def ensure_utc(value: datetime) -> datetime:
    """Return *value* as an aware UTC datetime, assuming UTC when naive."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _from_epoch(value: float) -> datetime | None:
    if math.isnan(value) or math.isinf(value) or value <= 0:
        return None
    if value >= MS_THRESHOLD:
        value /= 1000.0
    try:
        return datetime.fromtimestamp(value, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def parse_timestamp(value: Any) -> datetime | None:
    """Normalize an event timestamp to an aware UTC datetime.

    - ``datetime`` -> UTC (naive values are assumed to be UTC)
    - Epoch seconds or milliseconds (numbers or numeric strings)
    - ISO-8601 strings, with or without offset; a missing offset means UTC
    - Anything else -> None
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, (int, float)):
        return _from_epoch(float(value))
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return _from_epoch(float(text))
    except ValueError:
        pass
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return ensure_utc(parsed)


def is_scalar(value: Any) -> bool:
    """Return True for leaf values a state can be derived from."""
    if isinstance(value, float):
        return not math.isnan(value)
    return isinstance(value, (bool, int, str))
