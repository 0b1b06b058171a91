"""Generic helper utilities used across the project."""
from __future__ import annotations

import os
from typing import Optional, TypeVar

_Number = TypeVar("_Number", int, float)

_TRUE_VALUES = ("1", "true", "yes", "on")


def resolve_path(value: str, base_dir: str) -> str:
    """Resolve a path relative to base_dir when value is not absolute."""
    if not os.path.isabs(value):
        return os.path.join(base_dir, value)
    return value


def _clamp(
    value: _Number,
    min_value: Optional[_Number],
    max_value: Optional[_Number],
) -> _Number:
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def env_flag(name: str, default: str = "0") -> bool:
    """Read a boolean switch such as ``1``/``yes``/``on`` from the environment."""
    return os.getenv(name, default).strip().lower() in _TRUE_VALUES


def parse_int_env(
    name: str,
    default: int,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Parse an integer environment variable with optional bounds."""
    try:
        value = int(os.getenv(name, str(default)))
    except ValueError:
        value = default
    return _clamp(value, min_value, max_value)


def parse_optional_int_env(
    name: str,
    *,
    max_value: Optional[int] = None,
) -> Optional[int]:
    """Parse a non-negative integer where ``0`` means "not set"."""
    value = parse_int_env(name, 0, min_value=0, max_value=max_value)
    return value or None


def parse_float_env(
    name: str,
    default: float,
    *,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> float:
    """Parse a float environment variable with optional bounds."""
    try:
        value = float(os.getenv(name, str(default)))
    except ValueError:
        value = default
    return _clamp(value, min_value, max_value)
