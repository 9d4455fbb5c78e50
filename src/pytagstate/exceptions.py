"""Custom exception hierarchy for pytagstate."""

from __future__ import annotations

from datetime import datetime
from typing import Any


class TagStateError(Exception):
    """Base exception for all pytagstate errors."""


class TagStateConfigError(TagStateError):
    """Invalid or inconsistent configuration."""


class InvalidWindowError(TagStateError):
    """Analysis window whose start lies after its end.

    Also raised when a window bound has to be derived from the event
    batch but the batch is empty.
    """

    def __init__(
        self,
        message: str,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> None:
        self.start = start
        self.end = end
        super().__init__(message)


class EventParseError(TagStateError):
    """A raw event payload could not be turned into a :class:`TagEvent`."""

    def __init__(self, message: str, *, payload: Any = None) -> None:
        self.payload = payload
        super().__init__(message)


class UnknownParameterError(TagStateError):
    """A parameter id was requested that the analyzer does not offer."""

    def __init__(self, message: str, *, parameter_id: str = "") -> None:
        self.parameter_id = parameter_id
        super().__init__(message)
