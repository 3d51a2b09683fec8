"""Common types for price lookups and product strategies."""
from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Protocol, Sequence

from blind_quoter.domain_models import Item


@dataclass(frozen=True)
class PriceResult:
    """Outcome of pricing one item: a price or a validation message."""

    price: float | None = None
    error: str | None = None

    @classmethod
    def ok(cls, price: float) -> "PriceResult":
        return cls(price=price)

    @classmethod
    def failed(cls, message: str) -> "PriceResult":
        return cls(error=message)


@dataclass(frozen=True)
class PricingError:
    """Structured pricing failure surfaced to the caller, never raised."""

    message: str
    row_index: int | None = None
    column: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {"message": self.message, "rowIndex": self.row_index, "column": self.column}


def _tier_index(tiers: Sequence[int], value: float) -> int | None:
    """Index of the smallest tier that is ``>= value`` or ``None`` past the last."""

    index = bisect_left(tiers, value)
    if index >= len(tiers):
        return None
    return index


@dataclass(frozen=True)
class PriceMatrix:
    """Price grid for one fabric type.

    ``prices[drop_index][width_index]`` is the price of a blind up to
    ``widths[width_index]`` wide and ``drops[drop_index]`` high.  Both tier
    lists are ascending.
    """

    fabric_type: str
    widths: tuple[int, ...]
    drops: tuple[int, ...]
    prices: tuple[tuple[float | None, ...], ...]

    def unit_price(self, width: float, height: float) -> PriceResult:
        if width <= 0:
            return PriceResult.failed("Width must be greater than zero.")
        if height <= 0:
            return PriceResult.failed("Height must be greater than zero.")

        col = _tier_index(self.widths, width)
        if col is None:
            limit = self.widths[-1] if self.widths else 0
            return PriceResult.failed(f"Width {width:g} exceeds the maximum of {limit} mm.")
        row = _tier_index(self.drops, height)
        if row is None:
            limit = self.drops[-1] if self.drops else 0
            return PriceResult.failed(f"Height {height:g} exceeds the maximum drop of {limit} mm.")

        try:
            price = self.prices[row][col]
        except IndexError:
            price = None
        if price is None:
            return PriceResult.failed(f"No price listed for {width:g} x {height:g} mm.")
        return PriceResult.ok(float(price))


class ProductStrategy(Protocol):
    """Product-specific pricing and accessory counting rules."""

    product_type: str

    def calculate_price(self, item: Item, matrix: PriceMatrix | None) -> PriceResult:
        ...


__all__ = ["PriceResult", "PricingError", "PriceMatrix", "ProductStrategy"]
