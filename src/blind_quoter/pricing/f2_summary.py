"""Sale-side (F2) summary: fees, discounts, GST, profit and deposit/balance.

``calculate_f2_summary`` never raises.  Missing inputs count as zero, an
unset multiplier counts as one and unset flags count as false.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace

from blind_quoter.coerce import is_positive_number
from blind_quoter.constants import GST_RATE, WIFI_SALE_UNIT_PRICE
from blind_quoter.domain_models import F2State, QuoteData, UiState
from blind_quoter.pricing.catalog import PriceCatalog
from blind_quoter.pricing.math_helpers import auto_deposit, ceil_to_cent, round2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class F2Summary:
    total_sum_for_rb_time: float
    mul_times: float
    wifi_sum: float
    delivery_fee: float
    install_fee: float
    removal_fee: float
    acce_sum: float
    e_acce_sum: float
    surcharge_fee: float
    first_rb_price: float
    dis_rb_price: float
    f2_17_pre_sum: float
    sum_price: float
    f1_rb_price: float
    rb_profit: float
    single_profit: float
    sum_profit: float
    legacy_gst: float
    new_offer: float
    gst: float
    actual_gst: float
    grand_total: float
    tax_exclusive_total: float
    net_profit: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class DepositResult:
    deposit: float
    balance: float
    reset: bool


def calculate_f2_summary(quote: QuoteData, ui_state: UiState, catalog: PriceCatalog) -> F2Summary:
    """Cascade item totals, accessory sales, fees and overrides into the F2 record."""

    items = quote.items
    summary = quote.summary
    accessories = summary.accessories
    f1 = ui_state.f1
    f2 = ui_state.f2

    total_sum = summary.total_sum or 0.0

    wifi_sum = (f1.wifi_qty or 0) * WIFI_SALE_UNIT_PRICE
    delivery_fee = (f2.delivery_qty or 0) * catalog.f2_unit_price("delivery")
    install_fee = (f2.install_qty or 0) * catalog.f2_unit_price("install")
    removal_fee = (f2.removal_qty or 0) * catalog.f2_unit_price("removal")

    acce_sum = (accessories.winder_cost_sum or 0) + (accessories.dual_cost_sum or 0)
    e_acce_sum = (
        (accessories.motor_cost_sum or 0)
        + (accessories.remote_cost_sum or 0)
        + (accessories.charger_cost_sum or 0)
        + (accessories.cord_cost_sum or 0)
        + wifi_sum
    )
    surcharge_fee = (
        (0 if f2.delivery_fee_excluded else delivery_fee)
        + (0 if f2.install_fee_excluded else install_fee)
        + (0 if f2.removal_fee_excluded else removal_fee)
    )

    mul_times = 1 if f2.mul_times is None else f2.mul_times
    first_rb_price = total_sum * mul_times
    dis_rb_price = round2(first_rb_price * (1 - (f2.discount or 0) / 100))

    f2_17_pre_sum = acce_sum + e_acce_sum + surcharge_fee
    sum_price = dis_rb_price + f2_17_pre_sum

    f1_sub_total = f1.f1_sub_total or 0
    f1_final_total = f1.f1_final_total or 0
    f1_rb_price = total_sum * (1 - (f1.discount_percentage or 0) / 100)
    rb_profit = dis_rb_price - f1_rb_price
    valid_items = sum(1 for item in items if is_positive_number(item.line_price))
    single_profit = rb_profit / valid_items if valid_items else 0.0

    new_offer = sum_price if f2.new_offer is None else f2.new_offer
    gst = new_offer * GST_RATE
    actual_gst = 0.0 if f2.gst_excluded else gst
    grand_total = new_offer + actual_gst

    # Excluding GST also swaps the cost baseline to the pre-GST F1 total.
    net_profit = grand_total - (f1_sub_total if f2.gst_excluded else f1_final_total)

    return F2Summary(
        total_sum_for_rb_time=total_sum,
        mul_times=mul_times,
        wifi_sum=wifi_sum,
        delivery_fee=delivery_fee,
        install_fee=install_fee,
        removal_fee=removal_fee,
        acce_sum=acce_sum,
        e_acce_sum=e_acce_sum,
        surcharge_fee=surcharge_fee,
        first_rb_price=first_rb_price,
        dis_rb_price=dis_rb_price,
        f2_17_pre_sum=f2_17_pre_sum,
        sum_price=sum_price,
        f1_rb_price=f1_rb_price,
        rb_profit=rb_profit,
        single_profit=single_profit,
        sum_profit=sum_price - f1_sub_total,
        legacy_gst=sum_price * (1 + GST_RATE),
        new_offer=new_offer,
        gst=gst,
        actual_gst=actual_gst,
        grand_total=grand_total,
        tax_exclusive_total=new_offer,
        net_profit=net_profit,
    )


def compute_deposit(
    grand_total: float | None,
    previous_grand_total: float | None,
    stored_deposit: float | None,
) -> DepositResult:
    """Apply the sticky-deposit rule and derive the balance.

    A changed grand total forces the automatic deposit; otherwise a stored
    deposit wins.  The balance is always rounded up to the cent.
    """

    current = grand_total or 0.0
    automatic = auto_deposit(current)
    changed = current != previous_grand_total
    if changed or stored_deposit is None:
        if changed and stored_deposit is not None and stored_deposit != automatic:
            logger.debug("Grand total changed (%s -> %s); deposit reset to %s", previous_grand_total, current, automatic)
        deposit = automatic
    else:
        deposit = stored_deposit
    return DepositResult(deposit=deposit, balance=ceil_to_cent(current - deposit), reset=changed)


def default_install_qty(quote: QuoteData) -> int:
    """Install quantity offered before the operator types one: one per measured blind."""

    return sum(1 for item in quote.items if item.width and item.height)


def apply_f2_summary(f2: F2State, summary: F2Summary, deposit: DepositResult) -> F2State:
    """Copy the summary outputs into F2 state; ``new_offer`` stays the operator's override."""

    return replace(
        f2,
        mul_times=summary.mul_times,
        wifi_sum=summary.wifi_sum,
        delivery_fee=summary.delivery_fee,
        install_fee=summary.install_fee,
        removal_fee=summary.removal_fee,
        acce_sum=summary.acce_sum,
        e_acce_sum=summary.e_acce_sum,
        surcharge_fee=summary.surcharge_fee,
        total_sum_for_rb_time=summary.total_sum_for_rb_time,
        first_rb_price=summary.first_rb_price,
        dis_rb_price=summary.dis_rb_price,
        single_profit=summary.single_profit,
        rb_profit=summary.rb_profit,
        gst=summary.gst,
        net_profit=summary.net_profit,
        f2_17_pre_sum=summary.f2_17_pre_sum,
        sum_price=summary.sum_price,
        grand_total=summary.grand_total,
        tax_exclusive_total=summary.tax_exclusive_total,
        deposit=deposit.deposit,
        balance=deposit.balance,
    )


__all__ = [
    "F2Summary",
    "DepositResult",
    "calculate_f2_summary",
    "compute_deposit",
    "default_install_qty",
    "apply_f2_summary",
]
