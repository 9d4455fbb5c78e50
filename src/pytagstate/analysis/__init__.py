"""Parameter discovery and state-duration segmentation."""

from pytagstate.analysis.discovery import KNOWN_PARAMETERS, default_parameter, discover
from pytagstate.analysis.paths import PathLookup, resolve_path, resolve_state, stringify
from pytagstate.analysis.presentation import color_for, format_duration, state_label, state_severity
from pytagstate.analysis.segmenter import segment
from pytagstate.analysis.service import StateDurationAnalyzer

__all__ = [
    "KNOWN_PARAMETERS",
    "PathLookup",
    "StateDurationAnalyzer",
    "color_for",
    "default_parameter",
    "discover",
    "format_duration",
    "resolve_path",
    "resolve_state",
    "segment",
    "state_label",
    "state_severity",
    "stringify",
]
