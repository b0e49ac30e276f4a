"""
Argument checks shared by the builder and the settings value objects.

Every helper returns the value it was given so it can be used inline:

    self._connect_timeout = require_non_negative("connect_timeout", value)
"""

from __future__ import annotations

from typing import Any, TypeVar

from ..exceptions import InvalidConfigurationError

T = TypeVar("T")


def require_int(name: str, value: Any) -> int:
    # bool is an int subclass, but True is never a meaningful timeout
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    return value


def require_positive(name: str, value: Any) -> int:
    require_int(name, value)
    if value <= 0:
        raise InvalidConfigurationError(f"{name} must be positive, got {value}")
    return value


def require_at_least_one(name: str, value: Any) -> int:
    require_int(name, value)
    if value < 1:
        raise InvalidConfigurationError(f"{name} must be at least 1, got {value}")
    return value


def require_non_negative(name: str, value: Any) -> int:
    require_int(name, value)
    if value < 0:
        raise InvalidConfigurationError(
            f"{name} must be non-negative, got {value}"
        )
    return value


def require_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise InvalidConfigurationError(
            f"{name} must be a bool, got {type(value).__name__}"
        )
    return value


def require_not_none(name: str, value: T | None) -> T:
    if value is None:
        raise InvalidConfigurationError(f"{name} can not be None")
    return value


def require_optional_str(name: str, value: Any) -> str | None:
    if value is not None and not isinstance(value, str):
        raise InvalidConfigurationError(
            f"{name} must be a string or None, got {type(value).__name__}"
        )
    return value


def require_instance(name: str, value: Any, expected: type | tuple[type, ...]) -> Any:
    require_not_none(name, value)
    if not isinstance(value, expected):
        raise InvalidConfigurationError(
            f"{name} has unsupported type {type(value).__name__}"
        )
    return value
