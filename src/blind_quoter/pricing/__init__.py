"""Pricing engine: line prices, accessories, F1 costs and the F2 summary."""

from blind_quoter.pricing.accessories import (
    calculate_accessory_cost,
    calculate_accessory_sale_price,
    summarize_accessories,
)
from blind_quoter.pricing.base import PriceMatrix, PriceResult, PricingError, ProductStrategy
from blind_quoter.pricing.cascade import RecalculationResult, recalculate
from blind_quoter.pricing.catalog import CatalogError, PriceCatalog, catalog_from_mapping, load_catalog
from blind_quoter.pricing.f1_costs import (
    F1CostBreakdown,
    F1Totals,
    calculate_f1_component_price,
    calculate_f1_costs,
    calculate_f1_totals,
    reconcile_remote_split,
)
from blind_quoter.pricing.f2_summary import (
    DepositResult,
    F2Summary,
    calculate_f2_summary,
    compute_deposit,
)
from blind_quoter.pricing.line_pricing import CalculationResult, calculate_and_sum
from blind_quoter.pricing.strategy import RollerBlindStrategy, get_product_strategy

__all__ = [
    "CalculationResult",
    "CatalogError",
    "DepositResult",
    "F1CostBreakdown",
    "F1Totals",
    "F2Summary",
    "PriceCatalog",
    "PriceMatrix",
    "PriceResult",
    "PricingError",
    "ProductStrategy",
    "RecalculationResult",
    "RollerBlindStrategy",
    "calculate_accessory_cost",
    "calculate_accessory_sale_price",
    "calculate_and_sum",
    "calculate_f1_component_price",
    "calculate_f1_costs",
    "calculate_f1_totals",
    "calculate_f2_summary",
    "catalog_from_mapping",
    "compute_deposit",
    "get_product_strategy",
    "load_catalog",
    "reconcile_remote_split",
    "recalculate",
    "summarize_accessories",
]
