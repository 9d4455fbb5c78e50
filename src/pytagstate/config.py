"""Analysis configuration for pytagstate."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pytagstate._constants import DEFAULT_IGNORED_KEYS, UNKNOWN_STATE
from pytagstate.exceptions import TagStateConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_list(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclasses.dataclass(frozen=True)
class AnalysisConfig:
    """Tuning knobs for parameter discovery and segmentation.

    Parameters
    ----------
    min_distinct_values : int
        A discovered field must have *strictly more* distinct values than
        this to be offered as a parameter. Constant fields carry no
        segmentation information.
    max_distinct_values : int
        Upper bound (inclusive) on distinct values for a discovered field.
        Guards against free-text and identifier fields.
    unknown_value : str
        Sentinel state for values that cannot be resolved.
    ignored_keys : frozenset of str
        Payload keys skipped while walking events for discovery.
    discovery_roots : tuple of str
        Dotted sub-trees to walk during discovery. Empty walks the whole
        event payload.
    max_depth : int
        Nesting depth beyond which discovery stops descending.
    strict_ingestion : bool
        Raise on malformed payloads instead of skipping them.
    """

    min_distinct_values: int = 1
    max_distinct_values: int = 10
    unknown_value: str = UNKNOWN_STATE
    ignored_keys: frozenset[str] = DEFAULT_IGNORED_KEYS
    discovery_roots: tuple[str, ...] = ()
    max_depth: int = 12
    strict_ingestion: bool = False

    def __post_init__(self) -> None:
        if self.min_distinct_values < 0:
            raise TagStateConfigError(f"min_distinct_values must be >= 0, got {self.min_distinct_values}")
        if self.max_distinct_values <= self.min_distinct_values:
            raise TagStateConfigError(
                "max_distinct_values must be greater than min_distinct_values "
                f"({self.max_distinct_values} <= {self.min_distinct_values})"
            )
        if self.max_depth < 1:
            raise TagStateConfigError(f"max_depth must be >= 1, got {self.max_depth}")
        if not self.unknown_value:
            raise TagStateConfigError("unknown_value must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> AnalysisConfig:
        """Create configuration from ``TAGSTATE_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        AnalysisConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_INT_MAP = {
            "TAGSTATE_MIN_DISTINCT_VALUES": "min_distinct_values",
            "TAGSTATE_MAX_DISTINCT_VALUES": "max_distinct_values",
            "TAGSTATE_MAX_DEPTH": "max_depth",
        }
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = int(val)
            except ValueError as exc:
                raise TagStateConfigError(f"{env_key} must be an integer, got {val!r}") from exc

        unknown_env = env.get("TAGSTATE_UNKNOWN_VALUE")
        if unknown_env is not None:
            config_kwargs["unknown_value"] = unknown_env

        ignored_env = env.get("TAGSTATE_IGNORED_KEYS")
        if ignored_env is not None:
            config_kwargs["ignored_keys"] = frozenset(_env_list(ignored_env))

        roots_env = env.get("TAGSTATE_DISCOVERY_ROOTS")
        if roots_env is not None:
            config_kwargs["discovery_roots"] = _env_list(roots_env)

        if "strict_ingestion" not in overrides:
            config_kwargs["strict_ingestion"] = _env_bool(env.get("TAGSTATE_STRICT_INGESTION"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
