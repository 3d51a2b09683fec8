"""Product strategies and the registry used to dispatch pricing by product type."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Mapping

from blind_quoter.constants import DUAL_BRACKET, PRODUCT_ROLLER_BLIND, WINDER_HD
from blind_quoter.domain_models import Item
from blind_quoter.pricing.base import PriceMatrix, PriceResult, ProductStrategy

logger = logging.getLogger(__name__)


def count_winders(items: Iterable[Item]) -> int:
    return sum(1 for item in items if item.winder == WINDER_HD)


def count_motors(items: Iterable[Item]) -> int:
    return sum(1 for item in items if item.motor)


def count_dual_pairs(items: Iterable[Item]) -> int:
    """Dual brackets are sold per pair of adjacent blinds."""

    return sum(1 for item in items if item.dual == DUAL_BRACKET) // 2


class RollerBlindStrategy:
    """Pricing rules for roller blinds."""

    product_type = PRODUCT_ROLLER_BLIND

    def calculate_price(self, item: Item, matrix: PriceMatrix | None) -> PriceResult:
        if matrix is None:
            return PriceResult.failed(f"No price matrix found for fabric type '{item.fabric_type}'.")
        if item.width is None or item.height is None:
            return PriceResult.failed("Width and height are required.")
        return matrix.unit_price(item.width, item.height)

    # Accessory counting rules.  Item-based accessories count matching
    # blinds; drive accessories are priced from an entered count.
    def calculate_winder_price(self, items: Iterable[Item], unit_price: float) -> float:
        return count_winders(items) * unit_price

    def calculate_motor_price(self, items: Iterable[Item], unit_price: float) -> float:
        return count_motors(items) * unit_price

    def calculate_dual_price(self, items: Iterable[Item], unit_price: float) -> float:
        return count_dual_pairs(items) * unit_price

    def calculate_remote_price(self, count: int, unit_price: float) -> float:
        return (count or 0) * unit_price

    def calculate_charger_price(self, count: int, unit_price: float) -> float:
        return (count or 0) * unit_price

    def calculate_cord_price(self, count: int, unit_price: float) -> float:
        return (count or 0) * unit_price


_STRATEGIES: Mapping[str, Callable[[], ProductStrategy]] = {
    PRODUCT_ROLLER_BLIND: RollerBlindStrategy,
}


def get_product_strategy(product_type: str | None) -> ProductStrategy | None:
    """Return a strategy instance for ``product_type`` or ``None`` when unknown."""

    factory = _STRATEGIES.get(product_type or "")
    if factory is None:
        logger.warning("No strategy found for product type: %s", product_type)
        return None
    return factory()


__all__ = [
    "RollerBlindStrategy",
    "count_winders",
    "count_motors",
    "count_dual_pairs",
    "get_product_strategy",
]
