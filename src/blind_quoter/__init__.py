"""Quoting engine for made-to-measure roller blinds."""

from blind_quoter.domain_models import Item, QuoteData, UiState
from blind_quoter.pricing import PriceCatalog, load_catalog, recalculate

__version__ = "0.1.0"

__all__ = [
    "Item",
    "PriceCatalog",
    "QuoteData",
    "UiState",
    "__version__",
    "load_catalog",
    "recalculate",
]
