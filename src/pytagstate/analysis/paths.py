"""Dotted-path access into heterogeneous event payloads.

Event payloads are arbitrarily shaped. Everything that navigates them goes
through this module so the discovery and segmentation code only ever sees
either a scalar or an explicit miss.
"""

from __future__ import annotations

import math
from collections.abc import Collection, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from pytagstate._constants import UNKNOWN_STATE
from pytagstate.ingestion.normalize import is_scalar
from pytagstate.models.event import TagEvent


@dataclass(frozen=True, slots=True)
class PathLookup:
    """Result of resolving a dotted path: a scalar leaf or nothing."""

    found: bool
    value: bool | int | float | str | None = None


_MISSING = PathLookup(found=False)


def resolve_path(fields: Mapping[str, Any], path: str) -> PathLookup:
    """Resolve *path* (``a.b.c``) against nested mappings.

    Never raises. Missing keys, non-mapping intermediates, ``None`` and
    non-scalar leaves all resolve to a miss.
    """
    if not path:
        return _MISSING
    current: Any = fields
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    if current is None or not is_scalar(current):
        return _MISSING
    return PathLookup(found=True, value=current)


def resolve_mapping(fields: Mapping[str, Any], path: str) -> Mapping[str, Any] | None:
    """Return the nested mapping at *path*, or None. An empty path is the root."""
    current: Any = fields
    if path:
        for part in path.split("."):
            if not isinstance(current, Mapping) or part not in current:
                return None
            current = current[part]
    return current if isinstance(current, Mapping) else None


def stringify(value: bool | int | float | str) -> str:
    """Canonical string form of a scalar state value.

    Booleans render lowercase and integral floats drop the ``.0`` so that
    ``1``, ``1.0`` and ``"1"`` all land in the same state.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def resolve_state(event: TagEvent, path: str, unknown: str = UNKNOWN_STATE) -> str:
    """Return the stringified value at *path* or the *unknown* sentinel."""
    lookup = resolve_path(event.fields, path)
    if not lookup.found or lookup.value is None:
        return unknown
    return stringify(lookup.value)


def iter_leaves(
    fields: Mapping[str, Any],
    *,
    prefix: str = "",
    skip_keys: Collection[str] = (),
    max_depth: int = 12,
) -> Iterator[tuple[str, Any]]:
    """Yield ``(path, value)`` for every leaf below *fields*.

    Nested mappings are descended into; anything else (including lists) is
    a leaf. Keys in *skip_keys* are pruned with their whole sub-tree, and
    keys containing ``.`` are skipped since a dotted path cannot address
    them.
    """

    def rec(node: Mapping[str, Any], path: str, depth: int) -> Iterator[tuple[str, Any]]:
        if depth > max_depth:
            return
        for k, v in node.items():
            key = str(k)
            if key in skip_keys or "." in key or not key:
                continue
            child = f"{path}.{key}" if path else key
            if isinstance(v, Mapping):
                yield from rec(v, child, depth + 1)
            else:
                yield child, v

    yield from rec(fields, prefix, 0)
