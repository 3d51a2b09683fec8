"""Full recomputation pass over a quote and its panel state."""
from __future__ import annotations

from dataclasses import dataclass, replace

from blind_quoter.domain_models import QuoteData, UiState
from blind_quoter.pricing.accessories import summarize_accessories
from blind_quoter.pricing.base import PricingError
from blind_quoter.pricing.catalog import PriceCatalog
from blind_quoter.pricing.f1_costs import (
    F1CostBreakdown,
    F1Totals,
    apply_f1_results,
    calculate_f1_costs,
    calculate_f1_totals,
)
from blind_quoter.pricing.f2_summary import (
    DepositResult,
    F2Summary,
    apply_f2_summary,
    calculate_f2_summary,
    compute_deposit,
    default_install_qty,
)
from blind_quoter.pricing.line_pricing import calculate_and_sum
from blind_quoter.pricing.strategy import get_product_strategy

_UNSET = object()


@dataclass(frozen=True)
class RecalculationResult:
    quote: QuoteData
    ui_state: UiState
    f1_costs: F1CostBreakdown
    f1_totals: F1Totals
    f2_summary: F2Summary
    deposit: DepositResult
    first_error: PricingError | None


def recalculate(
    quote: QuoteData,
    ui_state: UiState,
    catalog: PriceCatalog,
    *,
    previous_grand_total: float | None | object = _UNSET,
    fill_install_default: bool = False,
) -> RecalculationResult:
    """Run every derivation step in dependency order.

    Accessory summary, line pricing, F1 costs and totals, F2 summary, then
    deposit/balance.  ``previous_grand_total`` defaults to the grand total
    cached in ``ui_state.f2`` from the last pass.
    """

    previous = ui_state.f2.grand_total if previous_grand_total is _UNSET else previous_grand_total

    accessories = summarize_accessories(quote, ui_state.drive, catalog)
    staged = quote.with_product(
        replace(quote.product, summary=replace(quote.summary, accessories=accessories))
    )
    priced = calculate_and_sum(staged, get_product_strategy(staged.current_product), catalog)
    quote = priced.quote

    f1_costs = calculate_f1_costs(quote, ui_state, catalog)
    f1_totals = calculate_f1_totals(quote.summary.total_sum, f1_costs, ui_state.f1)
    f1_state = apply_f1_results(ui_state.f1, f1_costs, f1_totals)

    f2_state = ui_state.f2
    if fill_install_default and f2_state.install_qty is None:
        f2_state = replace(f2_state, install_qty=default_install_qty(quote))
    ui_state = replace(ui_state, f1=f1_state, f2=f2_state)

    f2_summary = calculate_f2_summary(quote, ui_state, catalog)
    deposit = compute_deposit(f2_summary.grand_total, previous, f2_state.deposit)  # type: ignore[arg-type]
    ui_state = replace(ui_state, f2=apply_f2_summary(f2_state, f2_summary, deposit))

    return RecalculationResult(
        quote=quote,
        ui_state=ui_state,
        f1_costs=f1_costs,
        f1_totals=f1_totals,
        f2_summary=f2_summary,
        deposit=deposit,
        first_error=priced.first_error,
    )


__all__ = ["RecalculationResult", "recalculate"]
