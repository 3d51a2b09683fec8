"""Accessory sale prices, costs and the per-product accessory summary."""
from __future__ import annotations

import logging
from typing import Any, Sequence

from blind_quoter.domain_models import AccessoryLine, AccessorySummary, DriveCounters, Item, QuoteData
from blind_quoter.pricing.catalog import PriceCatalog
from blind_quoter.pricing.strategy import count_motors, count_winders, get_product_strategy

logger = logging.getLogger(__name__)


def _dispatch(
    product_type: str,
    accessory: str,
    unit_price: float,
    catalog: PriceCatalog,
    *,
    items: Sequence[Item] | None,
    count: int | None,
) -> float:
    strategy = get_product_strategy(product_type)
    if strategy is None:
        return 0.0
    method_name = catalog.accessory_methods.get(accessory)
    method: Any = getattr(strategy, method_name, None) if method_name else None
    if not callable(method):
        return 0.0
    if items is not None:
        return float(method(items, unit_price))
    return float(method(count or 0, unit_price))


def calculate_accessory_sale_price(
    product_type: str,
    accessory: str,
    catalog: PriceCatalog,
    *,
    items: Sequence[Item] | None = None,
    count: int | None = None,
) -> float:
    """Customer-facing price for ``accessory``.

    Item-based accessories pass ``items``; counted ones pass ``count``.
    Anything that cannot be resolved prices at zero.
    """

    price_key = catalog.sale_price_keys.get(accessory)
    if not price_key:
        logger.warning("No sale price key found for accessory: %s", accessory)
        return 0.0
    unit_price = catalog.get_accessory_price(price_key)
    if unit_price is None:
        return 0.0
    return _dispatch(product_type, accessory, unit_price, catalog, items=items, count=count)


def calculate_accessory_cost(
    product_type: str,
    accessory: str,
    catalog: PriceCatalog,
    *,
    cost_key: str | None,
    items: Sequence[Item] | None = None,
    count: int | None = None,
) -> float:
    """Internal cost of ``accessory`` using the explicit ``cost_key`` unit price."""

    if not cost_key:
        logger.warning("Cost calculation for %r requires a cost key", accessory)
        return 0.0
    unit_price = catalog.get_accessory_price(cost_key)
    if unit_price is None:
        return 0.0
    return _dispatch(product_type, accessory, unit_price, catalog, items=items, count=count)


def summarize_accessories(quote: QuoteData, drive: DriveCounters, catalog: PriceCatalog) -> AccessorySummary:
    """Rebuild the accessory summary of the current product from items and drive counters."""

    product_type = quote.current_product
    items = list(quote.items)

    winder = calculate_accessory_sale_price(product_type, "winder", catalog, items=items)
    motor = calculate_accessory_sale_price(product_type, "motor", catalog, items=items)
    dual = calculate_accessory_sale_price(product_type, "dual", catalog, items=items)
    remote = calculate_accessory_sale_price(product_type, "remote", catalog, count=drive.remote_count)
    charger = calculate_accessory_sale_price(product_type, "charger", catalog, count=drive.charger_count)
    cord = calculate_accessory_sale_price(product_type, "cord", catalog, count=drive.cord_count)

    return AccessorySummary(
        winder=AccessoryLine(count=count_winders(items), price=winder),
        motor=AccessoryLine(count=count_motors(items), price=motor),
        remote=AccessoryLine(count=drive.remote_count, price=remote),
        charger=AccessoryLine(count=drive.charger_count, price=charger),
        cord3m=AccessoryLine(count=drive.cord_count, price=cord),
        winder_cost_sum=winder,
        motor_cost_sum=motor,
        remote_cost_sum=remote,
        charger_cost_sum=charger,
        cord_cost_sum=cord,
        dual_cost_sum=dual,
    )


__all__ = ["calculate_accessory_sale_price", "calculate_accessory_cost", "summarize_accessories"]
