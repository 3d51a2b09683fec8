"""Business constants shared by pricing, export and persistence."""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Final, Mapping

PRODUCT_ROLLER_BLIND: Final = "rollerBlind"

WINDER_HD: Final = "HD"
DUAL_BRACKET: Final = "D"

MOUNT_IN_RECESS: Final = "IN"
MOUNT_FACE_FIX: Final = "OUT"

FABRIC_CODES: Final = ("B1", "B2", "B3", "B4", "B5", "SN")

LOGIC_LIGHT_FILTER: Final = "LF"
LOGIC_BLOCKOUT: Final = "BO"
LOGIC_SCREEN: Final = "SN"

GST_RATE: Final = 0.10
WIFI_SALE_UNIT_PRICE: Final = 300.0

# Subtracted from a drop tier when an item is cut below it.
DROP_CUT_ALLOWANCE: Final = 5

WIDTH_DEDUCTIONS: Mapping[str, int] = MappingProxyType(
    {
        MOUNT_IN_RECESS: 4,
        MOUNT_FACE_FIX: 2,
    }
)

#: Export category ranks; anything unlisted sorts last.
CATEGORY_RANK: Mapping[str, int] = MappingProxyType(
    {
        LOGIC_BLOCKOUT: 1,
        LOGIC_SCREEN: 2,
        LOGIC_LIGHT_FILTER: 3,
    }
)
OTHER_CATEGORY_RANK: Final = 4

F1_COMPONENT_PRICE_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "winder": "cost-winder",
        "motor": "cost-motor",
        "w-motor": "cost-w-motor",
        "remote-1ch": "remoteSingleChannel",
        "remote-16ch": "remoteMultiChannel16",
        "charger": "charger",
        "3m-cord": "cord3m",
        "dual-combo": "comboBracket",
        "slim": "slimComboBracket",
        "wifihub": "wifiHub",
    }
)

INVISIBLE_CHARS_RE: Final = re.compile(r"[\u200B-\u200F\u202A-\u202E\u2060-\u206F\uFEFF]")
LIGHT_FILTER_PREFIX_RE: Final = re.compile(r"^Light-filter\s+", re.IGNORECASE)

F3_SNAPSHOT_KEYS: Final = (
    "quoteId",
    "issueDate",
    "dueDate",
    "customer.name",
    "customer.address",
    "customer.phone",
    "customer.email",
    "customer.postcode",
)

F1_SNAPSHOT_KEYS: Final = (
    "winder_qty",
    "motor_qty",
    "charger_qty",
    "cord_qty",
    "remote_1ch_qty",
    "remote_16ch_qty",
    "dual_combo_qty",
    "dual_slim_qty",
    "discountPercentage",
    "wifi_qty",
    "w_motor_qty",
)

F2_SNAPSHOT_KEYS: Final = (
    "wifiQty",
    "deliveryQty",
    "installQty",
    "removalQty",
    "mulTimes",
    "discount",
    "wifiSum",
    "deliveryFee",
    "installFee",
    "removalFee",
    "deliveryFeeExcluded",
    "installFeeExcluded",
    "removalFeeExcluded",
    "acceSum",
    "eAcceSum",
    "surchargeFee",
    "totalSumForRbTime",
    "firstRbPrice",
    "disRbPrice",
    "singleprofit",
    "rbProfit",
    "gst",
    "netProfit",
    "deposit",
    "balance",
    "newOffer",
    "f2_17_pre_sum",
    "sumPrice",
    "grandTotal",
    "gstExcluded",
    "taxExclusiveTotal",
)

ITEM_CSV_HEADERS: Final = (
    "#",
    "Width",
    "Height",
    "Type",
    "Price",
    "Location",
    "F-Name",
    "F-Color",
    "Over",
    "O/I",
    "L/R",
    "Dual",
    "Chain",
    "Winder",
    "Motor",
    "IsLF",
)

QUOTE_STATUSES: Final = (
    "A. Archived",
    "B. Valid order (awaiting payment)",
    "C. Sent to factory",
    "D. In production",
    "E. Ready for pickup",
    "F. Picked up",
    "G. Installed",
    "H. Invoice sent",
    "I. Invoice overdue",
    "J. Closed",
)
DEFAULT_QUOTE_STATUS: Final = QUOTE_STATUSES[0]

__all__ = [
    "PRODUCT_ROLLER_BLIND",
    "WINDER_HD",
    "DUAL_BRACKET",
    "MOUNT_IN_RECESS",
    "MOUNT_FACE_FIX",
    "FABRIC_CODES",
    "LOGIC_LIGHT_FILTER",
    "LOGIC_BLOCKOUT",
    "LOGIC_SCREEN",
    "GST_RATE",
    "WIFI_SALE_UNIT_PRICE",
    "DROP_CUT_ALLOWANCE",
    "WIDTH_DEDUCTIONS",
    "CATEGORY_RANK",
    "OTHER_CATEGORY_RANK",
    "F1_COMPONENT_PRICE_KEYS",
    "INVISIBLE_CHARS_RE",
    "LIGHT_FILTER_PREFIX_RE",
    "F3_SNAPSHOT_KEYS",
    "F1_SNAPSHOT_KEYS",
    "F2_SNAPSHOT_KEYS",
    "ITEM_CSV_HEADERS",
    "QUOTE_STATUSES",
    "DEFAULT_QUOTE_STATUS",
]
