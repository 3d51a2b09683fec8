"""Operator-entered panel state consumed by the cost and sale calculators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from blind_quoter.coerce import to_float

_F1_KEYS = {
    "discount_percentage": "discountPercentage",
    "remote_1ch_qty": "remote_1ch_qty",
    "remote_16ch_qty": "remote_16ch_qty",
    "dual_combo_qty": "dual_combo_qty",
    "dual_slim_qty": "dual_slim_qty",
    "wifi_qty": "wifi_qty",
    "w_motor_qty": "w_motor_qty",
    "f1_sub_total": "f1_subTotal",
    "f1_final_total": "f1_finalTotal",
}


@dataclass(frozen=True)
class F1State:
    """Cost-side distribution inputs plus the cached F1 totals."""

    discount_percentage: float | None = 0
    remote_1ch_qty: float | None = 0
    remote_16ch_qty: float | None = None
    dual_combo_qty: float | None = None
    dual_slim_qty: float | None = None
    wifi_qty: float | None = None
    w_motor_qty: float | None = None
    f1_sub_total: float | None = None
    f1_final_total: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, attr) for attr, key in _F1_KEYS.items()}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "F1State":
        if not isinstance(raw, Mapping):
            return cls()
        kwargs = {attr: to_float(raw[key]) for attr, key in _F1_KEYS.items() if key in raw}
        return cls(**kwargs)


# Attribute name -> document key for every F2 field, in snapshot order.
F2_FIELD_KEYS: Mapping[str, str] = {
    "wifi_qty": "wifiQty",
    "delivery_qty": "deliveryQty",
    "install_qty": "installQty",
    "removal_qty": "removalQty",
    "mul_times": "mulTimes",
    "discount": "discount",
    "wifi_sum": "wifiSum",
    "delivery_fee": "deliveryFee",
    "install_fee": "installFee",
    "removal_fee": "removalFee",
    "delivery_fee_excluded": "deliveryFeeExcluded",
    "install_fee_excluded": "installFeeExcluded",
    "removal_fee_excluded": "removalFeeExcluded",
    "acce_sum": "acceSum",
    "e_acce_sum": "eAcceSum",
    "surcharge_fee": "surchargeFee",
    "total_sum_for_rb_time": "totalSumForRbTime",
    "first_rb_price": "firstRbPrice",
    "dis_rb_price": "disRbPrice",
    "single_profit": "singleprofit",
    "rb_profit": "rbProfit",
    "gst": "gst",
    "net_profit": "netProfit",
    "deposit": "deposit",
    "balance": "balance",
    "new_offer": "newOffer",
    "f2_17_pre_sum": "f2_17_pre_sum",
    "sum_price": "sumPrice",
    "grand_total": "grandTotal",
    "gst_excluded": "gstExcluded",
    "tax_exclusive_total": "taxExclusiveTotal",
}
_F2_FLAGS = frozenset(
    {"delivery_fee_excluded", "install_fee_excluded", "removal_fee_excluded", "gst_excluded"}
)


@dataclass(frozen=True)
class F2State:
    """Sale-side inputs and the cached outputs of the last summary pass."""

    # Inputs
    wifi_qty: float | None = None
    delivery_qty: float | None = None
    install_qty: float | None = None
    removal_qty: float | None = None
    mul_times: float | None = None
    discount: float | None = None
    delivery_fee_excluded: bool = False
    install_fee_excluded: bool = False
    removal_fee_excluded: bool = False
    gst_excluded: bool = False
    new_offer: float | None = None
    deposit: float | None = None

    # Cached outputs
    wifi_sum: float | None = None
    delivery_fee: float | None = None
    install_fee: float | None = None
    removal_fee: float | None = None
    acce_sum: float | None = None
    e_acce_sum: float | None = None
    surcharge_fee: float | None = None
    total_sum_for_rb_time: float | None = None
    first_rb_price: float | None = None
    dis_rb_price: float | None = None
    single_profit: float | None = None
    rb_profit: float | None = None
    gst: float | None = None
    net_profit: float | None = None
    balance: float | None = None
    f2_17_pre_sum: float | None = None
    sum_price: float | None = None
    grand_total: float | None = None
    tax_exclusive_total: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, attr) for attr, key in F2_FIELD_KEYS.items()}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "F2State":
        if not isinstance(raw, Mapping):
            return cls()
        kwargs: dict[str, Any] = {}
        for attr, key in F2_FIELD_KEYS.items():
            if key not in raw:
                continue
            value = raw[key]
            kwargs[attr] = bool(value) if attr in _F2_FLAGS else to_float(value)
        return cls(**kwargs)


@dataclass(frozen=True)
class DriveCounters:
    """Remote/charger/cord totals entered on the drive accessories tab."""

    remote_count: int = 0
    charger_count: int = 0
    cord_count: int = 0


@dataclass(frozen=True)
class UiState:
    f1: F1State = field(default_factory=F1State)
    f2: F2State = field(default_factory=F2State)
    drive: DriveCounters = field(default_factory=DriveCounters)


__all__ = ["F1State", "F2State", "F2_FIELD_KEYS", "DriveCounters", "UiState"]
