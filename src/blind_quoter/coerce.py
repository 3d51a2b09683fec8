"""Utility helpers for tolerant numeric coercion."""
from __future__ import annotations

import math
from typing import Any


def to_float(value: Any) -> float | None:
    """Best-effort conversion of ``value`` to a finite float."""

    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(numeric):
        return None
    return numeric


def to_int(value: Any) -> int | None:
    """Best-effort conversion of ``value`` to an integer via rounding."""

    numeric = to_float(value)
    if numeric is None:
        return None
    return int(round(numeric))


def float_or_zero(value: Any) -> float:
    """Return ``value`` as a float, treating anything unusable as ``0.0``."""

    numeric = to_float(value)
    return 0.0 if numeric is None else numeric


def is_positive_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def parse_strict_number(text: str) -> float | int | None:
    """Parse ``text`` as a number only when the whole string is numeric.

    Integers stay integers so that counts such as ``"3"`` round-trip as ``3``
    rather than ``3.0``.
    """

    cleaned = text.strip()
    if not cleaned or "_" in cleaned:
        return None
    try:
        return int(cleaned)
    except ValueError:
        pass
    try:
        numeric = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(numeric):
        return None
    return numeric


__all__ = ["to_float", "to_int", "float_or_zero", "is_positive_number", "parse_strict_number"]
