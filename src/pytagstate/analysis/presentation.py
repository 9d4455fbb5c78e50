"""Presentation hints attached to state durations.

Colours and labels are plain data so any front end can render them; the
fallback palette is indexed by result rank, which keeps the assignment
deterministic for a given result list.
"""

from __future__ import annotations

from datetime import timedelta

from pytagstate._constants import (
    BATTERY_STATUS_PATH,
    CHARGE_STATE_PATH,
    MESSAGE_TYPE_NAMES,
    MESSAGE_TYPE_PATH,
    MOTION_STATE_PATH,
    UNKNOWN_STATE,
)
from pytagstate.models.parameter import ParameterDescriptor

COLOR_PALETTE: tuple[str, ...] = (
    "#3b82f6",  # blue-500
    "#10b981",  # green-500
    "#f59e0b",  # amber-500
    "#ef4444",  # red-500
    "#8b5cf6",  # violet-500
    "#ec4899",  # pink-500
    "#06b6d4",  # cyan-500
    "#f97316",  # orange-500
    "#14b8a6",  # teal-500
    "#a855f7",  # purple-500
)

STATE_COLORS: dict[str, str] = {
    "true": "#10b981",
    "false": "#6b7280",
    "0": "#ef4444",
    "1": "#10b981",
    "charging": "#10b981",
    "discharging": "#f59e0b",
    "low": "#ef4444",
    UNKNOWN_STATE: "#6b7280",
}

_MESSAGE_TYPE_SEVERITY: dict[str, str] = {
    "4": "warning",
    "5": "success",
    "6": "info",
    "7": "warning",
    "8": "success",
    "20": "info",
}

_CHARGE_STATE_SEVERITY: dict[str, str] = {
    "charging": "success",
    "discharging": "warning",
    "low": "danger",
}


def color_for(value: str, rank: int) -> str:
    """Fixed colour for well-known values, else the palette entry for *rank*."""
    fixed = STATE_COLORS.get(value)
    if fixed is not None:
        return fixed
    return COLOR_PALETTE[rank % len(COLOR_PALETTE)]


def message_type_label(value: str) -> str:
    return MESSAGE_TYPE_NAMES.get(value, f"Type {value}")


def state_label(parameter: ParameterDescriptor, value: str, unknown: str = UNKNOWN_STATE) -> str:
    """Human label for *value* of *parameter*."""
    if value == unknown:
        return "Unknown"
    path = parameter.path
    if path == BATTERY_STATUS_PATH:
        return {"true": "Low Battery", "false": "Normal Battery"}.get(value, value)
    if path == MOTION_STATE_PATH:
        return {"true": "Moving", "false": "Stationary"}.get(value, value)
    if path == CHARGE_STATE_PATH:
        return value[:1].upper() + value[1:]
    if path == MESSAGE_TYPE_PATH:
        return message_type_label(value)
    return value


def state_severity(parameter: ParameterDescriptor, value: str, unknown: str = UNKNOWN_STATE) -> str | None:
    """Severity tag (success/info/warning/danger) for known parameters, else None."""
    if value == unknown:
        return None
    path = parameter.path
    if path == BATTERY_STATUS_PATH:
        return "danger" if value == "true" else "success"
    if path == MOTION_STATE_PATH:
        return "success" if value == "true" else "info"
    if path == CHARGE_STATE_PATH:
        return _CHARGE_STATE_SEVERITY.get(value, "info")
    if path == MESSAGE_TYPE_PATH:
        return _MESSAGE_TYPE_SEVERITY.get(value, "info")
    return None


def format_duration(duration: timedelta) -> str:
    """Compact duration, e.g. ``1d 2h 3m 4s``. Sub-second remainders are dropped."""
    total = int(duration.total_seconds())
    if total <= 0:
        return "0s"
    days, rem = divmod(total, 86_400)
    hours, rem = divmod(rem, 3_600)
    minutes, seconds = divmod(rem, 60)
    parts = [
        f"{amount}{unit}"
        for amount, unit in ((days, "d"), (hours, "h"), (minutes, "m"), (seconds, "s"))
        if amount
    ]
    return " ".join(parts)
