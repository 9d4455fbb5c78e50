from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pytagstate.analysis.discovery import KNOWN_PARAMETERS, default_parameter, discover
from pytagstate.config import AnalysisConfig
from pytagstate.ingestion.events import parse_events
from pytagstate.models import ParameterDescriptor, TagEvent, ValueKind

T0 = datetime(2026, 1, 1, tzinfo=UTC)


def _event(i: int, fields: dict[str, Any]) -> TagEvent:
    return TagEvent(timestamp=T0 + timedelta(minutes=i), fields=fields)


def _discovered(parameters: list[ParameterDescriptor]) -> list[ParameterDescriptor]:
    return [p for p in parameters if not p.known]


def test_empty_batch_returns_known_set_in_priority_order() -> None:
    parameters = discover([])

    assert [p.key for p in parameters] == ["batteryStatus", "motionState", "chargeState", "msgType", "hydrophobic"]
    assert all(p.known for p in parameters)


def test_known_parameters_present_even_when_absent_from_data() -> None:
    events = [_event(i, {"value": {"speed": i % 3}}) for i in range(5)]

    parameters = discover(events)

    assert parameters[: len(KNOWN_PARAMETERS)] == list(KNOWN_PARAMETERS)
    assert [p.id for p in _discovered(parameters)] == ["value.speed"]


def test_cardinality_filter() -> None:
    events = [
        _event(
            i,
            {"value": {"constant": "x", "pair": i % 2, "ten": i % 10, "eleven": i}},
        )
        for i in range(11)
    ]

    ids = [p.id for p in _discovered(discover(events))]

    assert ids == ["value.pair", "value.ten"]


def test_known_paths_not_rediscovered() -> None:
    events = [
        _event(0, {"metadata": {"props": {"motionState": True, "mode": "a"}}}),
        _event(1, {"metadata": {"props": {"motionState": False, "mode": "b"}}}),
    ]

    parameters = discover(events)

    assert [p.id for p in parameters].count("metadata.props.motionState") == 1
    assert [p.id for p in _discovered(parameters)] == ["metadata.props.mode"]


def test_value_kind_from_first_non_null_value() -> None:
    events = [
        _event(0, {"value": {"flag": None, "level": 1.5, "name": "a"}}),
        _event(1, {"value": {"flag": True, "level": 2, "name": "b"}}),
        _event(2, {"value": {"flag": False, "level": "3", "name": 4}}),
    ]

    kinds = {p.id: p.value_kind for p in _discovered(discover(events))}

    assert kinds == {
        "value.level": ValueKind.NUMBER,
        "value.name": ValueKind.STRING,
        "value.flag": ValueKind.BOOLEAN,
    }


def test_nested_fields_discovered_with_display_names() -> None:
    events = [
        _event(0, {"metadata": {"props": {"sensor": {"operatingMode": "eco"}}}}),
        _event(1, {"metadata": {"props": {"sensor": {"operatingMode": "boost"}}}}),
    ]

    (parameter,) = _discovered(discover(events))

    assert parameter.id == "metadata.props.sensor.operatingMode"
    assert parameter.path == parameter.id
    assert parameter.display_name == "Operating Mode"
    assert parameter.description == "Values from metadata.props.sensor.operatingMode"


def test_complex_and_ignored_fields_skipped() -> None:
    events = [
        _event(i, {"value": {"readings": [i, i + 1]}, "links": {"self": f"/e/{i % 2}"}, "tags": {"t": i % 2}})
        for i in range(4)
    ]

    assert _discovered(discover(events)) == []


def test_event_uuids_not_discovered() -> None:
    payloads = [{"uuid": f"e-{i}", "time": (T0 + timedelta(minutes=i)).isoformat(), "type": f"t{i % 2}"} for i in range(5)]

    ids = [p.id for p in _discovered(discover(parse_events(payloads)))]

    assert ids == ["type"]


def test_discovery_roots_limit_walk() -> None:
    events = [_event(i, {"type": f"t{i % 2}", "value": {"state": f"s{i % 3}"}}) for i in range(6)]

    everywhere = [p.id for p in _discovered(discover(events))]
    rooted = [p.id for p in _discovered(discover(events, AnalysisConfig(discovery_roots=("value",))))]

    assert everywhere == ["type", "value.state"]
    assert rooted == ["value.state"]


def test_custom_cardinality_bounds() -> None:
    events = [_event(i, {"value": {"pair": i % 2, "five": i % 5}}) for i in range(10)]
    config = AnalysisConfig(min_distinct_values=2, max_distinct_values=5)

    assert [p.id for p in _discovered(discover(events, config))] == ["value.five"]


def test_default_parameter_prefers_battery_status() -> None:
    assert default_parameter(discover([])).key == "batteryStatus"


def test_default_parameter_falls_back_to_first() -> None:
    other = ParameterDescriptor.discovered("value.mode", ValueKind.STRING)

    assert default_parameter([other]) == other
    assert default_parameter([]) is None
