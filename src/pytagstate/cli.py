"""Command line entry point.

Usage
-----
    pytagstate discover events.json
    pytagstate segment events.json --parameter metadata.props.motionState
    pytagstate segment events.json --parameter metadata.props.msgType \
        --start 2025-01-01T00:00:00 --end 2025-01-02T00:00:00 --json

The input file holds either a JSON list of event payloads or an
event-history response object with a ``results`` list.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pytagstate.analysis.presentation import format_duration
from pytagstate.analysis.service import StateDurationAnalyzer
from pytagstate.config import AnalysisConfig
from pytagstate.exceptions import TagStateError, UnknownParameterError
from pytagstate.ingestion.events import parse_events
from pytagstate.ingestion.normalize import parse_timestamp
from pytagstate.models.duration import StateDuration
from pytagstate.models.parameter import ParameterDescriptor, ValueKind

_logger = logging.getLogger(__name__)

MAX_VAL_WIDTH = 40


def _truncate(val: Any, width: int = MAX_VAL_WIDTH) -> str:
    s = str(val)
    if len(s) <= width:
        return s
    return s[: width - 3] + "..."


def _load_payloads(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("results", [])
    if not isinstance(data, list):
        raise TagStateError(f"{path}: expected a list of events or an object with 'results'")
    return data


def _print_table(rows: list[tuple[str, ...]], headers: tuple[str, ...]) -> None:
    widths = [max(len(h), *(len(r[i]) for r in rows)) if rows else len(h) for i, h in enumerate(headers)]
    header = "  ".join(f"{h:<{w}}" for h, w in zip(headers, widths, strict=True))
    print(header)
    print("─" * len(header))
    for row in rows:
        print("  ".join(f"{c:<{w}}" for c, w in zip(row, widths, strict=True)))


def _cmd_discover(analyzer: StateDurationAnalyzer, args: argparse.Namespace) -> int:
    parameters = analyzer.parameters()
    if args.json_mode:
        print(json.dumps([p.model_dump(mode="json", by_alias=True) for p in parameters], indent=2))
        return 0
    rows = [
        (p.id, p.display_name, p.value_kind.value, "known" if p.known else "discovered")
        for p in parameters
    ]
    _print_table(rows, ("Parameter", "Name", "Kind", "Origin"))
    return 0


def _format_durations(durations: list[StateDuration]) -> list[tuple[str, ...]]:
    return [
        (
            _truncate(d.label or d.value),
            f"{d.percentage:.1f}%",
            format_duration(d.total_duration),
            str(d.occurrences),
            d.first_seen.isoformat(),
            d.last_seen.isoformat(),
        )
        for d in durations
    ]


def _resolve_parameter(analyzer: StateDurationAnalyzer, path: str) -> ParameterDescriptor:
    """Look *path* up among discovered parameters, else segment it as given."""
    try:
        return analyzer.parameter(path)
    except UnknownParameterError:
        _logger.info("%s was not discovered; segmenting it as a plain path", path)
        return ParameterDescriptor.discovered(path, ValueKind.STRING)


def _cmd_segment(analyzer: StateDurationAnalyzer, args: argparse.Namespace) -> int:
    start = parse_timestamp(args.start) if args.start else None
    end = parse_timestamp(args.end) if args.end else None
    if (args.start and start is None) or (args.end and end is None):
        print("error: --start/--end must be ISO-8601 timestamps or epoch numbers", file=sys.stderr)
        return 2

    parameter = _resolve_parameter(analyzer, args.parameter) if args.parameter else analyzer.default_parameter()
    if parameter is None:
        print("error: no parameter available", file=sys.stderr)
        return 2
    window = analyzer.window(start, end) if analyzer.events else None
    durations = analyzer.segment(parameter, window)

    if args.json_mode:
        print(json.dumps([d.model_dump(mode="json", by_alias=True) for d in durations], indent=2))
        return 0

    print(f"Parameter: {parameter.display_name} ({parameter.id})")
    if window is not None:
        print(f"Window:    {window.start.isoformat()} .. {window.end.isoformat()}")
    print()
    if not durations:
        print("No events available for duration analysis.")
        return 0
    _print_table(
        _format_durations(durations),
        ("State", "Percent", "Duration", "Changes", "First seen", "Last seen"),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pytagstate", description="State-duration analysis of device events.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    discover_p = sub.add_parser("discover", help="List analyzable parameters")
    discover_p.add_argument("events", help="JSON file with event payloads")
    discover_p.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")

    segment_p = sub.add_parser("segment", help="Compute time spent per state")
    segment_p.add_argument("events", help="JSON file with event payloads")
    segment_p.add_argument("--parameter", "-p", help="Parameter id (default: best known parameter)")
    segment_p.add_argument("--start", help="Window start (default: first event)")
    segment_p.add_argument("--end", help="Window end (default: last event)")
    segment_p.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = AnalysisConfig.from_env()
    try:
        payloads = _load_payloads(Path(args.events))
        events = parse_events(payloads, strict=config.strict_ingestion)
        analyzer = StateDurationAnalyzer(events, config=config)
        if args.command == "discover":
            return _cmd_discover(analyzer, args)
        return _cmd_segment(analyzer, args)
    except (OSError, json.JSONDecodeError, TagStateError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
