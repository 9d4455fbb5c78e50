"""Event-history payload ingestion.

Turns the dicts returned by the backend's event-history endpoint into
:class:`TagEvent` objects. The timestamp is taken from ``time_key`` and
normalized to UTC (a missing offset means UTC); the rest of the payload
becomes ``fields`` untouched, so dotted parameter paths such as
``metadata.props.motionState`` resolve against the payload as received.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from pytagstate._redact import redact_for_log
from pytagstate.exceptions import EventParseError
from pytagstate.ingestion.normalize import parse_timestamp
from pytagstate.models.event import TagEvent

_logger = logging.getLogger(__name__)


def parse_event(payload: Mapping[str, Any], *, time_key: str = "time") -> TagEvent:
    """Build a :class:`TagEvent` from one raw payload.

    Raises :class:`EventParseError` when the payload is not a mapping or
    carries no usable timestamp.
    """
    if not isinstance(payload, Mapping):
        raise EventParseError(f"event payload must be a mapping, got {type(payload).__name__}", payload=payload)

    timestamp = parse_timestamp(payload.get(time_key))
    if timestamp is None:
        raise EventParseError(
            f"event payload has no valid {time_key!r} timestamp: {payload.get(time_key)!r}",
            payload=payload,
        )

    fields = {str(key): value for key, value in payload.items() if key not in (time_key, "uuid")}
    uuid = payload.get("uuid")
    try:
        return TagEvent(
            timestamp=timestamp,
            fields=fields,
            uuid=str(uuid) if uuid is not None else None,
        )
    except ValidationError as exc:
        raise EventParseError(f"invalid event payload: {exc}", payload=payload) from exc


def parse_events(
    payloads: Iterable[Mapping[str, Any]],
    *,
    time_key: str = "time",
    strict: bool = False,
) -> list[TagEvent]:
    """Parse a batch of payloads, preserving input order.

    Malformed payloads are skipped with a warning unless *strict* is set,
    in which case the first :class:`EventParseError` propagates.
    """
    events: list[TagEvent] = []
    skipped = 0
    for index, payload in enumerate(payloads):
        try:
            events.append(parse_event(payload, time_key=time_key))
        except EventParseError as exc:
            if strict:
                raise
            skipped += 1
            _logger.warning("Skipping event %d: %s", index, exc)
            _logger.debug("Skipped payload: %s", redact_for_log(exc.payload))
    if skipped:
        _logger.info("Parsed %d events, skipped %d malformed payloads", len(events), skipped)
    return events


def merge_pages(existing: Sequence[TagEvent], page: Iterable[TagEvent]) -> list[TagEvent]:
    """Append a freshly fetched page, dropping events already present.

    Events are matched on ``uuid``; events without one are always kept.
    """
    seen = {event.uuid for event in existing if event.uuid is not None}
    merged = list(existing)
    for event in page:
        if event.uuid is not None:
            if event.uuid in seen:
                continue
            seen.add(event.uuid)
        merged.append(event)
    return merged
