"""Analyzable parameter descriptors."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Any

from pytagstate.models._base import TagBaseModel

_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


class ValueKind(StrEnum):
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"

    @classmethod
    def of(cls, value: Any) -> ValueKind:
        """Infer the kind from a scalar leaf value."""
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMBER
        return cls.STRING


def display_name_for(path: str) -> str:
    """Derive a human label from the last segment of a dotted path.

    ``metadata.props.lowVoltageFlag`` -> ``Low Voltage Flag``.
    """
    leaf = path.rsplit(".", 1)[-1]
    spaced = _CAMEL_BOUNDARY.sub(r" \1", leaf).replace("_", " ").strip()
    spaced = " ".join(spaced.split())
    if not spaced:
        return path
    return spaced[0].upper() + spaced[1:]


class ParameterDescriptor(TagBaseModel):
    """One analyzable dimension of the event stream.

    ``id`` is the dotted path used to look the value up in each event.
    """

    id: str
    display_name: str
    description: str = ""
    value_kind: ValueKind = ValueKind.STRING
    key: str | None = None
    known: bool = False

    @property
    def path(self) -> str:
        return self.id

    @classmethod
    def discovered(cls, path: str, value_kind: ValueKind) -> ParameterDescriptor:
        """Build a descriptor for a field found in the event data."""
        return cls(
            id=path,
            display_name=display_name_for(path),
            description=f"Values from {path}",
            value_kind=value_kind,
        )
