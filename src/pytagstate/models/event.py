"""Device event model."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pytagstate.models._base import TagBaseModel, Timestamp


class TagEvent(TagBaseModel):
    """One observation from a device at a point in time.

    ``fields`` holds the event payload as received (maps within maps).
    Nothing in pytagstate mutates it.
    """

    timestamp: Timestamp
    fields: dict[str, Any] = Field(default_factory=dict)
    uuid: str | None = None
