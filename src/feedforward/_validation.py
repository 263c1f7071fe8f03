"""Argument checks shared by the configuration objects and components."""
from __future__ import annotations

import math
import numbers


def require_positive(value: float, name: str) -> None:
    if isinstance(value, bool) or not value > 0:
        raise ValueError(f"{name} must be positive, got: {value!r}")


def require_positive_int(value: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got: {value!r}")
    require_positive(value, name)


def require_non_negative(value: float, name: str) -> None:
    if isinstance(value, bool) or not value >= 0:
        raise ValueError(f"{name} must be non-negative, got: {value!r}")


def require_unit_interval(value: float, name: str) -> None:
    """Require ``value`` to lie in ``[0, 1)``."""

    if isinstance(value, bool) or not 0.0 <= value < 1.0:
        raise ValueError(f"{name} must be in [0, 1), got: {value!r}")


def require_finite(value: float, name: str) -> None:
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got: {value!r}")
