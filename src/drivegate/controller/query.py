"""Builders for Drive search queries (`q` parameter)."""

from __future__ import annotations

from drivegate.errors import InvalidArgumentError


def escape_value(value: str) -> str:
    """Escape a value for use inside a single-quoted Drive query literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def name_equals(name: str) -> str:
    """Query matching items whose name is exactly `name`."""
    _require(name, "name")
    return f"name = '{escape_value(name)}'"


def in_parents(folder_id: str) -> str:
    """Query matching the direct children of `folder_id`."""
    _require(folder_id, "folder_id")
    return f"'{escape_value(folder_id)}' in parents"


def all_of(*clauses: str) -> str:
    """Join query clauses with `and`."""
    parts = [c for c in clauses if c]
    if not parts:
        raise InvalidArgumentError("at least one query clause is required")
    if len(parts) == 1:
        return parts[0]
    return " and ".join(f"({p})" for p in parts)


def _require(value: str, label: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f"{label} must be a non-empty string")
