"""Domain models describing a roller-blind quote and its panel state."""

from blind_quoter.domain_models.state import (
    AccessoryLine,
    AccessorySummary,
    Customer,
    Item,
    ProductData,
    ProductSummary,
    QuoteData,
    UiMetadata,
    default_f1_snapshot,
)
from blind_quoter.domain_models.ui_state import (
    F2_FIELD_KEYS,
    DriveCounters,
    F1State,
    F2State,
    UiState,
)

__all__ = [
    "AccessoryLine",
    "AccessorySummary",
    "Customer",
    "DriveCounters",
    "F1State",
    "F2State",
    "F2_FIELD_KEYS",
    "Item",
    "ProductData",
    "ProductSummary",
    "QuoteData",
    "UiMetadata",
    "UiState",
    "default_f1_snapshot",
]
