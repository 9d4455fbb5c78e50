"""pytagstate - state-duration analysis for device event histories."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytagstate")
except PackageNotFoundError:
    __version__ = "0+local"
from pytagstate.analysis import (
    KNOWN_PARAMETERS,
    StateDurationAnalyzer,
    default_parameter,
    discover,
    format_duration,
    segment,
)
from pytagstate.config import AnalysisConfig
from pytagstate.exceptions import (
    EventParseError,
    InvalidWindowError,
    TagStateConfigError,
    TagStateError,
    UnknownParameterError,
)
from pytagstate.ingestion.events import merge_pages, parse_event, parse_events
from pytagstate.models import (
    AnalysisWindow,
    ParameterDescriptor,
    StateDuration,
    TagEvent,
    ValueKind,
)

__all__ = [
    "__version__",
    "AnalysisConfig",
    "AnalysisWindow",
    "EventParseError",
    "InvalidWindowError",
    "KNOWN_PARAMETERS",
    "ParameterDescriptor",
    "StateDuration",
    "StateDurationAnalyzer",
    "TagEvent",
    "TagStateConfigError",
    "TagStateError",
    "UnknownParameterError",
    "ValueKind",
    "default_parameter",
    "discover",
    "format_duration",
    "merge_pages",
    "parse_event",
    "parse_events",
    "segment",
]
