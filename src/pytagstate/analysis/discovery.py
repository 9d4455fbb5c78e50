"""Parameter discovery.

Proposes the parameters an operator may analyze for an event batch: a
fixed set of known tag parameters, followed by enum-like fields found in
the event payloads.

Discovery runs in two phases. The first walks every event and collects
the distinct stringified values seen per leaf path; the second keeps the
paths whose cardinality is low enough to be a state but high enough to
change.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pytagstate._constants import (
    BATTERY_STATUS_PATH,
    CHARGE_STATE_PATH,
    DEFAULT_PARAMETER_PRIORITY,
    HYDROPHOBIC_PATH,
    MESSAGE_TYPE_PATH,
    MOTION_STATE_PATH,
)
from pytagstate.analysis.paths import iter_leaves, resolve_mapping, stringify
from pytagstate.config import AnalysisConfig
from pytagstate.ingestion.normalize import is_scalar
from pytagstate.models.event import TagEvent
from pytagstate.models.parameter import ParameterDescriptor, ValueKind

_logger = logging.getLogger(__name__)

BATTERY_STATUS = ParameterDescriptor(
    id=BATTERY_STATUS_PATH,
    display_name="Battery Status",
    description="Battery level status",
    value_kind=ValueKind.BOOLEAN,
    key="batteryStatus",
    known=True,
)
MOTION_STATE = ParameterDescriptor(
    id=MOTION_STATE_PATH,
    display_name="Motion State",
    description="Whether the tag is in motion",
    value_kind=ValueKind.BOOLEAN,
    key="motionState",
    known=True,
)
CHARGE_STATE = ParameterDescriptor(
    id=CHARGE_STATE_PATH,
    display_name="Charge State",
    description="Battery charging status",
    value_kind=ValueKind.STRING,
    key="chargeState",
    known=True,
)
MESSAGE_TYPE = ParameterDescriptor(
    id=MESSAGE_TYPE_PATH,
    display_name="Message Type",
    description="Type of message event",
    value_kind=ValueKind.STRING,
    key="msgType",
    known=True,
)
HYDROPHOBIC = ParameterDescriptor(
    id=HYDROPHOBIC_PATH,
    display_name="Hydrophobic Status",
    description="Whether the tag is hydrophobic",
    value_kind=ValueKind.BOOLEAN,
    key="hydrophobic",
    known=True,
)

KNOWN_PARAMETERS: tuple[ParameterDescriptor, ...] = (
    BATTERY_STATUS,
    MOTION_STATE,
    CHARGE_STATE,
    MESSAGE_TYPE,
    HYDROPHOBIC,
)

_KNOWN_PATHS: frozenset[str] = frozenset(p.id for p in KNOWN_PARAMETERS)


def collect_distinct_values(
    events: Sequence[TagEvent],
    config: AnalysisConfig,
) -> tuple[dict[str, set[str]], dict[str, ValueKind]]:
    """Collect distinct stringified values per unclaimed scalar leaf path.

    Both returned dicts iterate in first-seen path order. The value kind
    is taken from the first non-null value seen for each path.
    """
    values: dict[str, set[str]] = {}
    kinds: dict[str, ValueKind] = {}
    roots = config.discovery_roots or ("",)

    for event in events:
        for root in roots:
            node = resolve_mapping(event.fields, root)
            if node is None:
                continue
            for path, value in iter_leaves(
                node,
                prefix=root,
                skip_keys=config.ignored_keys,
                max_depth=config.max_depth,
            ):
                if path in _KNOWN_PATHS or value is None or not is_scalar(value):
                    continue
                values.setdefault(path, set()).add(stringify(value))
                kinds.setdefault(path, ValueKind.of(value))
    return values, kinds


def is_enum_like(distinct: int, config: AnalysisConfig) -> bool:
    return config.min_distinct_values < distinct <= config.max_distinct_values


def discover(events: Sequence[TagEvent], config: AnalysisConfig | None = None) -> list[ParameterDescriptor]:
    """Return the parameters available for *events*.

    Known parameters always come first, in priority order, whether or not
    they occur in the batch. Discovered parameters follow in first-seen
    order.
    """
    config = config or AnalysisConfig()
    parameters = list(KNOWN_PARAMETERS)
    if not events:
        return parameters

    values, kinds = collect_distinct_values(events, config)
    rejected = 0
    for path, distinct in values.items():
        if is_enum_like(len(distinct), config):
            parameters.append(ParameterDescriptor.discovered(path, kinds[path]))
        else:
            rejected += 1

    _logger.debug(
        "Discovered %d parameters from %d events (%d candidate paths rejected by cardinality)",
        len(parameters) - len(KNOWN_PARAMETERS),
        len(events),
        rejected,
    )
    return parameters


def default_parameter(parameters: Sequence[ParameterDescriptor]) -> ParameterDescriptor | None:
    """Pick the initial parameter to show: the best-ranked priority key, else the first."""
    for key in DEFAULT_PARAMETER_PRIORITY:
        for parameter in parameters:
            if parameter.key == key:
                return parameter
    return parameters[0] if parameters else None
