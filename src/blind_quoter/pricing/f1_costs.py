"""Cost-side (F1) aggregation: component costs, reconciliation and F1 totals."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Mapping

from blind_quoter.constants import F1_COMPONENT_PRICE_KEYS, GST_RATE
from blind_quoter.domain_models import F1State, QuoteData, UiState
from blind_quoter.pricing.catalog import PriceCatalog
from blind_quoter.pricing.strategy import count_dual_pairs, count_motors, count_winders

logger = logging.getLogger(__name__)

COMPONENTS = tuple(F1_COMPONENT_PRICE_KEYS)


@dataclass(frozen=True)
class F1CostBreakdown:
    """Per-component costs plus the quantities they were computed from."""

    costs: Mapping[str, float]
    quantities: Mapping[str, float]
    component_total: float

    def cost(self, component: str) -> float:
        return self.costs.get(component, 0.0)

    def quantity(self, component: str) -> float:
        return self.quantities.get(component, 0)

    @property
    def motor_cost(self) -> float:
        """B-motor and W-motor cost combined."""

        return self.cost("motor") + self.cost("w-motor")


@dataclass(frozen=True)
class F1Totals:
    rb_price: float
    sub_total: float
    gst: float
    final_total: float


def reconcile_remote_split(f1: F1State, total_remote_count: int | None) -> tuple[float, float]:
    """Return the 1ch/16ch remote split, resetting it when it no longer adds up.

    A stale split is replaced by ``(0, total)`` so unallocated remotes land in
    the 16-channel bucket.
    """

    total = total_remote_count or 0
    single = f1.remote_1ch_qty or 0
    multi = f1.remote_16ch_qty or 0
    if single + multi != total:
        logger.debug("Remote split %s/%s does not match total %s; resetting", single, multi, total)
        return 0, total
    return single, multi


def resolve_dual_split(f1: F1State, total_dual_pairs: int) -> tuple[float, float]:
    """Default an unset combo quantity to every pair and an unset slim quantity to zero."""

    combo = total_dual_pairs if f1.dual_combo_qty is None else f1.dual_combo_qty
    slim = 0 if f1.dual_slim_qty is None else f1.dual_slim_qty
    return combo, slim


def split_motor_quantity(f1: F1State, total_motors: int) -> tuple[int, int]:
    """Return the B-motor/W-motor split with the W-motor count clamped to the total."""

    w_motors = int(f1.w_motor_qty or 0)
    w_motors = max(0, min(w_motors, total_motors))
    return total_motors - w_motors, w_motors


def calculate_f1_component_price(component: str, quantity: Any, catalog: PriceCatalog) -> float:
    """Cost of ``quantity`` units of an F1 component; zero when it cannot be priced."""

    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        return 0.0
    if not math.isfinite(quantity) or quantity < 0:
        return 0.0
    price_key = F1_COMPONENT_PRICE_KEYS.get(component)
    if price_key is None:
        return 0.0
    unit_price = catalog.get_accessory_price(price_key)
    if unit_price is None:
        return 0.0
    return unit_price * quantity


def calculate_f1_costs(quote: QuoteData, ui_state: UiState, catalog: PriceCatalog) -> F1CostBreakdown:
    """Reconcile the F1 distribution inputs and cost every component."""

    items = quote.items
    f1 = ui_state.f1
    drive = ui_state.drive

    remote_1ch, remote_16ch = reconcile_remote_split(f1, drive.remote_count)
    dual_combo, dual_slim = resolve_dual_split(f1, count_dual_pairs(items))
    total_motors = count_motors(items)
    b_motors, w_motors = split_motor_quantity(f1, total_motors)

    # "motor" is costed on the B-motor remainder; the total is reported separately
    quantities: dict[str, float] = {
        "winder": count_winders(items),
        "motor": b_motors,
        "w-motor": w_motors,
        "remote-1ch": remote_1ch,
        "remote-16ch": remote_16ch,
        "charger": drive.charger_count or 0,
        "3m-cord": drive.cord_count or 0,
        "dual-combo": dual_combo,
        "slim": dual_slim,
        "wifihub": f1.wifi_qty or 0,
    }
    costs = {
        component: calculate_f1_component_price(component, quantities[component], catalog)
        for component in COMPONENTS
    }
    quantities["motor-total"] = total_motors
    return F1CostBreakdown(costs=costs, quantities=quantities, component_total=sum(costs.values()))


def calculate_f1_totals(total_sum: float | None, breakdown: F1CostBreakdown, f1: F1State) -> F1Totals:
    """Discounted retail baseline plus component costs, with and without GST."""

    discount = f1.discount_percentage or 0
    rb_price = (total_sum or 0) * (1 - discount / 100)
    sub_total = breakdown.component_total + rb_price
    gst = sub_total * GST_RATE
    return F1Totals(rb_price=rb_price, sub_total=sub_total, gst=gst, final_total=sub_total + gst)


def apply_f1_results(f1: F1State, breakdown: F1CostBreakdown, totals: F1Totals) -> F1State:
    """Write the reconciled remote split and cached totals back into F1 state."""

    return replace(
        f1,
        remote_1ch_qty=breakdown.quantity("remote-1ch"),
        remote_16ch_qty=breakdown.quantity("remote-16ch"),
        f1_sub_total=totals.sub_total,
        f1_final_total=totals.final_total,
    )


__all__ = [
    "COMPONENTS",
    "F1CostBreakdown",
    "F1Totals",
    "reconcile_remote_split",
    "resolve_dual_split",
    "split_motor_quantity",
    "calculate_f1_component_price",
    "calculate_f1_costs",
    "calculate_f1_totals",
    "apply_f1_results",
]
