"""Rounding helpers for money values."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def round2(value: float) -> float:
    """Round half-up to two decimals (``1.005`` -> ``1.01``, ``-1.005`` -> ``-1.01``).

    The value is routed through ``repr`` so the decimal digits a user sees are
    the ones that get rounded, not the binary expansion.
    """

    if not math.isfinite(value):
        return value
    quantized = Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return float(quantized)


def ceil_to_cent(value: float) -> float:
    """Round ``value`` up to the next cent.

    ``300.131`` becomes ``300.14``; values already on a cent boundary stay put
    even when float noise leaves them a hair above it.
    """

    cents = round(value * 100, 6)
    return math.ceil(cents) / 100


def auto_deposit(grand_total: float) -> float:
    """Half the grand total, rounded up to a whole dollar and then to the next ten."""

    return float(math.ceil(math.ceil(grand_total / 2) / 10) * 10)


__all__ = ["round2", "ceil_to_cent", "auto_deposit"]
