"""State duration analysis service.

Bundles an immutable event batch with a configuration and exposes
discovery and segmentation over it. Both are pure functions of the batch,
so one analyzer can serve any number of parameters, including from
several threads at once.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from functools import cached_property

from pytagstate.analysis.discovery import default_parameter, discover
from pytagstate.analysis.segmenter import segment, sort_events
from pytagstate.config import AnalysisConfig
from pytagstate.exceptions import UnknownParameterError
from pytagstate.models.duration import StateDuration
from pytagstate.models.event import TagEvent
from pytagstate.models.parameter import ParameterDescriptor
from pytagstate.models.window import AnalysisWindow

_logger = logging.getLogger(__name__)


class StateDurationAnalyzer:
    """Discovery and segmentation over one event batch."""

    def __init__(self, events: Iterable[TagEvent], *, config: AnalysisConfig | None = None) -> None:
        self._config = config or AnalysisConfig()
        self._events: tuple[TagEvent, ...] = tuple(sort_events(list(events)))

    @property
    def config(self) -> AnalysisConfig:
        return self._config

    @property
    def events(self) -> tuple[TagEvent, ...]:
        return self._events

    @cached_property
    def _parameters(self) -> tuple[ParameterDescriptor, ...]:
        return tuple(discover(self._events, self._config))

    def parameters(self) -> list[ParameterDescriptor]:
        """Known and discovered parameters for the batch."""
        return list(self._parameters)

    def default_parameter(self) -> ParameterDescriptor | None:
        return default_parameter(self._parameters)

    def parameter(self, parameter_id: str) -> ParameterDescriptor:
        """Look up an offered parameter by id (its dotted path)."""
        for parameter in self._parameters:
            if parameter.id == parameter_id:
                return parameter
        raise UnknownParameterError(f"unknown parameter: {parameter_id!r}", parameter_id=parameter_id)

    def window(self, start: datetime | None = None, end: datetime | None = None) -> AnalysisWindow:
        """Analysis window with missing bounds taken from the batch."""
        return AnalysisWindow.resolve(self._events, start, end)

    def segment(
        self,
        parameter: ParameterDescriptor | str,
        window: AnalysisWindow | None = None,
    ) -> list[StateDuration]:
        """Segment the batch on one parameter (descriptor or id)."""
        descriptor = self.parameter(parameter) if isinstance(parameter, str) else parameter
        return segment(self._events, descriptor, window, config=self._config)

    def segment_all(
        self,
        parameters: Sequence[ParameterDescriptor | str] | None = None,
        window: AnalysisWindow | None = None,
    ) -> dict[str, list[StateDuration]]:
        """Segment every requested parameter (default: all offered), keyed by parameter id."""
        selected = list(self._parameters) if parameters is None else parameters
        results: dict[str, list[StateDuration]] = {}
        for parameter in selected:
            descriptor = self.parameter(parameter) if isinstance(parameter, str) else parameter
            results[descriptor.id] = self.segment(descriptor, window)
        _logger.debug("Segmented %d parameters over %d events", len(results), len(self._events))
        return results

    def unknown_ratio(self, durations: Sequence[StateDuration]) -> float:
        """Percentage of the window spent in the unknown state.

        A high value means the parameter is missing from much of the
        telemetry.
        """
        total = sum((d.total_duration for d in durations), timedelta(0))
        if not total:
            return 0.0
        unknown = sum(
            (d.total_duration for d in durations if d.value == self._config.unknown_value),
            timedelta(0),
        )
        return unknown / total * 100.0
