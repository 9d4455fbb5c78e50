"""State duration result model."""

from __future__ import annotations

from datetime import timedelta

from pydantic import computed_field

from pytagstate.models._base import TagBaseModel, Timestamp


class StateDuration(TagBaseModel):
    """Time spent in one distinct parameter value over an analysis window."""

    value: str
    total_duration: timedelta
    percentage: float
    occurrences: int
    first_seen: Timestamp
    last_seen: Timestamp
    color: str = ""
    label: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_seconds(self) -> float:
        return self.total_duration.total_seconds()
