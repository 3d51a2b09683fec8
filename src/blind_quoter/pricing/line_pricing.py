"""Line pricing: price every complete item and roll up the product total."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from blind_quoter.domain_models import Item, QuoteData
from blind_quoter.pricing.base import PricingError, ProductStrategy
from blind_quoter.pricing.catalog import PriceCatalog

logger = logging.getLogger(__name__)

STRATEGY_MISSING_MESSAGE = "Product strategy not provided."


@dataclass(frozen=True)
class CalculationResult:
    quote: QuoteData
    first_error: PricingError | None = None


def _error_column(message: str) -> str:
    return "width" if "width" in message.lower() else "height"


def calculate_and_sum(
    quote: QuoteData,
    strategy: ProductStrategy | None,
    catalog: PriceCatalog,
) -> CalculationResult:
    """Recompute ``line_price`` for every item and the product ``total_sum``.

    Items lacking width, height or fabric type are cleared to ``None``
    without an error.  Only the first pricing failure of the pass is
    reported; the rest are dropped.  The input quote is left untouched.
    """

    if strategy is None:
        logger.warning("calculate_and_sum called without a product strategy")
        return CalculationResult(quote=quote, first_error=PricingError(STRATEGY_MISSING_MESSAGE))

    first_error: PricingError | None = None
    priced: list[Item] = []
    for index, item in enumerate(quote.items):
        line_price: float | None = None
        if item.is_priceable:
            result = strategy.calculate_price(item, catalog.get_price_matrix(item.fabric_type))
            if result.price is not None:
                line_price = result.price
            elif result.error and first_error is None:
                first_error = PricingError(
                    message=f"Row {index + 1}: {result.error}",
                    row_index=index,
                    column=_error_column(result.error),
                )
        priced.append(replace(item, line_price=line_price))

    items_total = sum(item.line_price or 0.0 for item in priced)
    summary = quote.summary
    total_sum = items_total + summary.accessories.sale_total()

    product = replace(quote.product, items=tuple(priced), summary=replace(summary, total_sum=total_sum))
    return CalculationResult(quote=quote.with_product(product), first_error=first_error)


__all__ = ["CalculationResult", "calculate_and_sum", "STRATEGY_MISSING_MESSAGE"]
