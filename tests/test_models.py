"""Tests for the pydantic value objects."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from pytagstate.exceptions import InvalidWindowError
from pytagstate.models import AnalysisWindow, ParameterDescriptor, TagEvent, ValueKind, display_name_for

T0 = datetime(2026, 1, 1, tzinfo=UTC)


class TestTagEvent:
    def test_naive_timestamp_assumed_utc(self) -> None:
        event = TagEvent(timestamp="2026-01-01T00:00:00")

        assert event.timestamp == T0
        assert event.fields == {}

    def test_epoch_milliseconds(self) -> None:
        event = TagEvent(timestamp=int(T0.timestamp() * 1000))

        assert event.timestamp == T0

    def test_invalid_timestamp(self) -> None:
        with pytest.raises(ValidationError):
            TagEvent(timestamp="soon")

    def test_frozen(self) -> None:
        event = TagEvent(timestamp=T0)

        with pytest.raises(ValidationError):
            event.timestamp = T0 + timedelta(seconds=1)  # type: ignore[misc]


class TestAnalysisWindow:
    def test_length_and_contains(self) -> None:
        window = AnalysisWindow(start=T0, end=T0 + timedelta(hours=2))

        assert window.length == timedelta(hours=2)
        assert window.contains(T0)
        assert not window.contains(T0 + timedelta(hours=2))

    def test_start_after_end(self) -> None:
        with pytest.raises(InvalidWindowError):
            AnalysisWindow(start=T0 + timedelta(seconds=1), end=T0)

    def test_empty_window_allowed(self) -> None:
        assert AnalysisWindow(start=T0, end=T0).length == timedelta(0)

    def test_resolve_from_events(self) -> None:
        events = [TagEvent(timestamp=T0 + timedelta(minutes=m)) for m in (30, 5, 60)]

        window = AnalysisWindow.resolve(events)

        assert window.start == T0 + timedelta(minutes=5)
        assert window.end == T0 + timedelta(minutes=60)

    def test_resolve_partial_bounds(self) -> None:
        events = [TagEvent(timestamp=T0 + timedelta(minutes=m)) for m in (10, 20)]

        window = AnalysisWindow.resolve(events, start=datetime(2026, 1, 1))

        assert window.start == T0
        assert window.end == T0 + timedelta(minutes=20)

    def test_resolve_empty_batch(self) -> None:
        with pytest.raises(InvalidWindowError):
            AnalysisWindow.resolve([])
        assert AnalysisWindow.resolve([], start=T0, end=T0).length == timedelta(0)


class TestParameterDescriptor:
    def test_display_name(self) -> None:
        assert display_name_for("metadata.props.lowVoltageFlag") == "Low Voltage Flag"
        assert display_name_for("value.battery_level") == "Battery level"
        assert display_name_for("type") == "Type"

    def test_value_kind_of(self) -> None:
        assert ValueKind.of(True) is ValueKind.BOOLEAN
        assert ValueKind.of(3) is ValueKind.NUMBER
        assert ValueKind.of(2.5) is ValueKind.NUMBER
        assert ValueKind.of("x") is ValueKind.STRING

    def test_dump_by_alias(self) -> None:
        descriptor = ParameterDescriptor.discovered("value.mode", ValueKind.STRING)

        dumped = descriptor.model_dump(mode="json", by_alias=True)

        assert dumped["id"] == "value.mode"
        assert dumped["displayName"] == "Mode"
        assert dumped["valueKind"] == "string"
        assert dumped["known"] is False
