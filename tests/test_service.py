from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta

import pytest

from pytagstate.analysis.service import StateDurationAnalyzer
from pytagstate.exceptions import UnknownParameterError
from pytagstate.models import AnalysisWindow, TagEvent

T0 = datetime(2026, 1, 1, tzinfo=UTC)


def _event(minutes: int, **props: object) -> TagEvent:
    return TagEvent(timestamp=T0 + timedelta(minutes=minutes), fields={"metadata": {"props": dict(props)}})


@pytest.fixture
def analyzer() -> StateDurationAnalyzer:
    events = [
        _event(30, motionState=False, lowVoltageFlag=False, mode="eco"),
        _event(0, motionState=True, lowVoltageFlag=False, mode="boost"),
        _event(10, motionState=False, mode="eco"),
        _event(40, motionState=True, lowVoltageFlag=True, mode="boost"),
    ]
    return StateDurationAnalyzer(events)


def test_events_sorted_on_construction(analyzer: StateDurationAnalyzer) -> None:
    assert [e.timestamp for e in analyzer.events] == sorted(e.timestamp for e in analyzer.events)


def test_parameters_and_default(analyzer: StateDurationAnalyzer) -> None:
    ids = [p.id for p in analyzer.parameters()]

    assert ids[-1] == "metadata.props.mode"
    assert analyzer.default_parameter().key == "batteryStatus"  # type: ignore[union-attr]
    assert analyzer.parameter("metadata.props.mode").display_name == "Mode"


def test_unknown_parameter(analyzer: StateDurationAnalyzer) -> None:
    with pytest.raises(UnknownParameterError) as exc_info:
        analyzer.segment("metadata.props.nope")

    assert exc_info.value.parameter_id == "metadata.props.nope"


def test_segment_by_id(analyzer: StateDurationAnalyzer) -> None:
    durations = analyzer.segment("metadata.props.motionState", analyzer.window(end=T0 + timedelta(minutes=60)))

    by_value = {d.value: d for d in durations}
    assert by_value["true"].total_duration == timedelta(minutes=30)
    assert by_value["false"].total_duration == timedelta(minutes=30)


def test_segment_all_and_unknown_ratio(analyzer: StateDurationAnalyzer) -> None:
    window = AnalysisWindow(start=T0, end=T0 + timedelta(minutes=50))

    results = analyzer.segment_all(window=window)

    assert list(results) == [p.id for p in analyzer.parameters()]
    battery = results["metadata.props.lowVoltageFlag"]
    assert analyzer.unknown_ratio(battery) == pytest.approx(40.0)
    assert analyzer.unknown_ratio(results["metadata.props.chargeState"]) == pytest.approx(100.0)
    assert analyzer.unknown_ratio([]) == 0.0


def test_concurrent_segmentation_matches_sequential(analyzer: StateDurationAnalyzer) -> None:
    ids = [p.id for p in analyzer.parameters()]
    sequential = [analyzer.segment(pid) for pid in ids]

    with ThreadPoolExecutor(max_workers=4) as pool:
        concurrent = list(pool.map(analyzer.segment, ids))

    assert concurrent == sequential
