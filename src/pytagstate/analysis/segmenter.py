"""State-duration segmentation.

Given a batch of events, one parameter and an analysis window, attribute
every instant of the window to exactly one state of the parameter and
aggregate per state:

* total time spent in the state
* number of runs entered (a contiguous run counts once)
* first and last instants the state was credited

Events are stably sorted by timestamp, so events sharing an instant keep
their input order and the last of them defines the state from that
instant on. Events at or before ``window.start`` only establish the state
active at the start. Events after ``window.end`` are ignored. The state
first observed is back-filled to ``window.start`` when no event precedes
the window, so durations always sum to the window length.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from pytagstate.analysis.paths import resolve_state
from pytagstate.analysis.presentation import color_for, state_label
from pytagstate.config import AnalysisConfig
from pytagstate.models.duration import StateDuration
from pytagstate.models.event import TagEvent
from pytagstate.models.parameter import ParameterDescriptor
from pytagstate.models.window import AnalysisWindow

_logger = logging.getLogger(__name__)


@dataclass
class _StateStats:
    first_seen: datetime
    last_seen: datetime
    total: timedelta = timedelta(0)
    occurrences: int = 0


def sort_events(events: Sequence[TagEvent]) -> list[TagEvent]:
    """Order events by timestamp; ties keep input order."""
    return sorted(events, key=lambda event: event.timestamp)


def _percentage(total: timedelta, length: timedelta) -> float:
    return min(100.0, max(0.0, total / length * 100.0))


def segment(
    events: Sequence[TagEvent],
    descriptor: ParameterDescriptor,
    window: AnalysisWindow | None = None,
    *,
    config: AnalysisConfig | None = None,
) -> list[StateDuration]:
    """Compute per-state durations of *descriptor* over *window*.

    When *window* is omitted it spans the first to the last event. The
    result is sorted by total duration (longest first), then by value.
    An empty batch yields an empty list.
    """
    config = config or AnalysisConfig()
    if not events:
        return []

    ordered = sort_events(events)
    if window is None:
        window = AnalysisWindow.resolve(ordered)
    start, end = window.start, window.end
    path = descriptor.path
    unknown = config.unknown_value

    # State active at the window start: the last event at or before it,
    # else the first event overall.
    index = 0
    current = resolve_state(ordered[0], path, unknown)
    while index < len(ordered) and ordered[index].timestamp <= start:
        current = resolve_state(ordered[index], path, unknown)
        index += 1

    # A state back-filled over a leading gap is first seen at its first event.
    first_seen = start if index else max(start, ordered[0].timestamp)
    stats: dict[str, _StateStats] = {current: _StateStats(first_seen=first_seen, last_seen=first_seen, occurrences=1)}
    run_start = start

    for event in ordered[index:]:
        if event.timestamp > end:
            break
        state = resolve_state(event, path, unknown)
        if state == current:
            continue
        closing = stats[current]
        closing.total += event.timestamp - run_start
        closing.last_seen = event.timestamp

        entered = stats.get(state)
        if entered is None:
            entered = _StateStats(first_seen=event.timestamp, last_seen=event.timestamp)
            stats[state] = entered
        entered.occurrences += 1
        current, run_start = state, event.timestamp

    final = stats[current]
    final.total += end - run_start
    final.last_seen = end

    length = window.length
    ranked = sorted(stats.items(), key=lambda item: (-item[1].total, item[0]))
    results: list[StateDuration] = []
    for rank, (value, item) in enumerate(ranked):
        if length:
            percentage = _percentage(item.total, length)
        else:
            percentage = 100.0 if value == current else 0.0
        results.append(
            StateDuration(
                value=value,
                total_duration=item.total,
                percentage=percentage,
                occurrences=item.occurrences,
                first_seen=item.first_seen,
                last_seen=item.last_seen,
                color=color_for(value, rank),
                label=state_label(descriptor, value, unknown),
            )
        )

    _logger.debug(
        "Segmented %d events on %s into %d states over %s",
        len(ordered),
        path,
        len(results),
        length,
    )
    return results
