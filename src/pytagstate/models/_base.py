"""Base model for pytagstate value objects.

Every model inherits from :class:`TagBaseModel` which provides:

* ``frozen=True`` so events, descriptors and results are immutable
  value objects.
* ``alias_generator=to_camel`` so dumps use the camelCase keys the
  dashboard consumes (``totalDuration``, ``firstSeen``) while Python
  code uses snake_case.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from pytagstate.ingestion.normalize import parse_timestamp


def coerce_timestamp(value: Any) -> datetime:
    """Coerce an event timestamp to an aware UTC datetime.

    Raises :class:`ValueError` (surfaced as a pydantic validation error)
    when the value cannot be interpreted as an instant.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        raise ValueError(f"not a valid timestamp: {value!r}")
    return parsed


Timestamp = Annotated[datetime, BeforeValidator(coerce_timestamp)]
"""Annotated type accepting ISO strings, epoch seconds/ms or datetimes, always UTC-aware."""


class TagBaseModel(BaseModel):
    """Base for pytagstate models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
