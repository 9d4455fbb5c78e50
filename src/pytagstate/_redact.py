"""Scrubbing of event payloads before they reach DEBUG logs.

Tag events embed device positions (raw coordinates, GeoJSON points,
reverse-geocoded addresses) and sometimes auth material echoed back by
the backend. Skipped payloads are logged for diagnosis, so those fields
are masked and oversized strings and arrays are shortened first.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

REDACTED = "<redacted>"

# Compared after lower-casing and dropping "_" and "-", so "auth_token",
# "Auth-Token" and "authToken" all match "authtoken".
_MASKED_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "token",
        "tokens",
        "authtoken",
        "accesstoken",
        "refreshtoken",
        "apikey",
        "authorization",
        "cookie",
        "lat",
        "lng",
        "lon",
        "latitude",
        "longitude",
        "coordinates",
        "formattedaddress",
    }
)

_MAX_DEPTH = 20


def _masked(key: object) -> bool:
    folded = str(key).lower().replace("_", "").replace("-", "")
    return folded in _MASKED_KEYS


def redact_for_log(value: Any, *, max_string: int = 512, max_items: int = 50) -> Any:
    """Return a log-safe copy of the JSON-like *value*.

    Masked keys keep their position with the value replaced. Strings
    longer than *max_string* and arrays longer than *max_items* are cut,
    with a marker telling how much was dropped.
    """

    def scrub(node: Any, depth: int) -> Any:
        if depth > _MAX_DEPTH:
            return "<max-depth>"
        if node is None or isinstance(node, (bool, int, float)):
            return node
        if isinstance(node, str):
            if len(node) <= max_string:
                return node
            return f"{node[:max_string]}…<+{len(node) - max_string} chars>"
        if isinstance(node, (bytes, bytearray)):
            return f"<bytes:{len(node)}b>"
        if isinstance(node, Mapping):
            return {str(k): REDACTED if _masked(k) else scrub(v, depth + 1) for k, v in node.items()}
        if isinstance(node, (list, tuple)):
            kept = [scrub(item, depth + 1) for item in node[:max_items]]
            if len(node) > max_items:
                kept.append(f"<+{len(node) - max_items} items>")
            return kept
        return repr(node)

    return scrub(value, 0)
