"""Internal constants shared across the library."""

# Sentinel reported for any value that cannot be resolved to a scalar.
UNKNOWN_STATE = "unknown"

# Threshold to distinguish epoch seconds from milliseconds.
MS_THRESHOLD = 1_000_000_000_000

# ------------------------------------------------------------------
# Known tag parameters (dotted paths into the event payload)
# ------------------------------------------------------------------

BATTERY_STATUS_PATH = "metadata.props.lowVoltageFlag"
MOTION_STATE_PATH = "metadata.props.motionState"
CHARGE_STATE_PATH = "metadata.props.chargeState"
MESSAGE_TYPE_PATH = "metadata.props.msgType"
HYDROPHOBIC_PATH = "metadata.props.hydrophobic"

# Keys of the parameters preferred as the initial selection, best first.
DEFAULT_PARAMETER_PRIORITY: tuple[str, ...] = (
    "batteryStatus",
    "motionState",
    "chargeState",
    "msgType",
)

# Event payload keys that never carry analyzable state.
DEFAULT_IGNORED_KEYS: frozenset[str] = frozenset({"links", "tags"})

# ------------------------------------------------------------------
# Tag message types
# ------------------------------------------------------------------

MESSAGE_TYPE_NAMES: dict[str, str] = {
    "1": "Heartbeat",
    "4": "LB-Only Location",
    "5": "GPS Location",
    "6": "Wifi Location",
    "7": "Cell Id Location",
    "8": "Event Count",
    "20": "SSF Sensor Data",
    "23": "Accel and Shock Data",
}
