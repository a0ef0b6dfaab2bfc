"""
loader.options - Per-load configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

_TRUTHY = {"1", "true", "yes", "on", "y"}


def _flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in _TRUTHY


def _names(value) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return [str(v).strip() for v in value if str(v).strip()]


@dataclass
class LoadOptions:
    """
    dummy           : process and save every row, then roll everything back
    mandatory       : headers that must be present in the file
    force_inclusion : headers to keep even when no operator matches them
    include_all     : keep every header (takes precedence over force_inclusion)
    strict          : fail on any non-mandatory header with no operator
    match_by        : header whose value finds an existing product to update
    verbose         : log every processed cell at INFO
    defaults        : header → raw value used when a row lacks that column
    reload          : rebuild the operator catalog before mapping
    """
    dummy: bool = False
    mandatory: list[str] = field(default_factory=list)
    force_inclusion: list[str] = field(default_factory=list)
    include_all: bool = False
    strict: bool = False
    match_by: Optional[str] = None
    verbose: bool = False
    defaults: dict[str, str] = field(default_factory=dict)
    reload: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping) -> "LoadOptions":
        """Build from loosely typed input (query args, form data, JSON)."""
        defaults = data.get("defaults") or {}
        if not isinstance(defaults, Mapping):
            defaults = {}
        return cls(
            dummy=_flag(data.get("dummy")),
            mandatory=_names(data.get("mandatory")),
            force_inclusion=_names(data.get("force_inclusion")),
            include_all=_flag(data.get("include_all")),
            strict=_flag(data.get("strict")),
            match_by=(str(data.get("match_by")).strip() or None) if data.get("match_by") else None,
            verbose=_flag(data.get("verbose")),
            defaults={str(k): str(v) for k, v in defaults.items()},
            reload=_flag(data.get("reload")),
        )
