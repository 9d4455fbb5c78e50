"""Analysis window model."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta

from pydantic import model_validator

from pytagstate.exceptions import InvalidWindowError
from pytagstate.ingestion.normalize import ensure_utc
from pytagstate.models._base import TagBaseModel, Timestamp
from pytagstate.models.event import TagEvent


class AnalysisWindow(TagBaseModel):
    """Half-open ``[start, end)`` interval durations are computed over."""

    start: Timestamp
    end: Timestamp

    @model_validator(mode="after")
    def _check_order(self) -> AnalysisWindow:
        # InvalidWindowError is not a ValueError, so pydantic lets it through unwrapped.
        if self.start > self.end:
            raise InvalidWindowError(
                f"window start {self.start.isoformat()} is after end {self.end.isoformat()}",
                start=self.start,
                end=self.end,
            )
        return self

    @property
    def length(self) -> timedelta:
        return self.end - self.start

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end

    @classmethod
    def resolve(
        cls,
        events: Sequence[TagEvent],
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> AnalysisWindow:
        """Build a window, filling missing bounds from the event batch.

        A missing ``start`` becomes the earliest event timestamp and a
        missing ``end`` the latest one.
        """
        if start is None or end is None:
            if not events:
                raise InvalidWindowError("cannot derive window bounds from an empty event batch")
            timestamps = [event.timestamp for event in events]
            if start is None:
                start = min(timestamps)
            if end is None:
                end = max(timestamps)
        return cls(start=ensure_utc(start), end=ensure_utc(end))
