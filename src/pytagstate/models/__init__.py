"""Data models for pytagstate."""

from pytagstate.models._base import TagBaseModel, Timestamp, coerce_timestamp
from pytagstate.models.duration import StateDuration
from pytagstate.models.event import TagEvent
from pytagstate.models.parameter import ParameterDescriptor, ValueKind, display_name_for
from pytagstate.models.window import AnalysisWindow

__all__ = [
    "AnalysisWindow",
    "ParameterDescriptor",
    "StateDuration",
    "TagBaseModel",
    "TagEvent",
    "Timestamp",
    "ValueKind",
    "coerce_timestamp",
    "display_name_for",
]
