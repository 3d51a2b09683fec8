from __future__ import annotations

import copy
from typing import Any, Callable

import pytest

from blind_quoter.domain_models import Item, QuoteData
from blind_quoter.pricing.catalog import PriceCatalog, catalog_from_mapping


def _matrix(prices: list[list[float]]) -> dict[str, Any]:
    return {"widths": [1000, 2000], "drops": [1500, 2000], "prices": prices}


CATALOG_DOCUMENT: dict[str, Any] = {
    "matrices": {
        "B1": _matrix([[100, 150], [120, 180]]),
        "B2": _matrix([[110, 160], [130, 190]]),
        "SN": _matrix([[90, 140], [110, 170]]),
    },
    "accessoryPrices": {
        "winderHD": 30,
        "motorStandard": 250,
        "remoteStandard": 100,
        "chargerStandard": 50,
        "cordStandard": 35,
        "dualBracketPair": 20,
        "cost-winder": 8,
        "cost-motor": 160,
        "cost-w-motor": 130,
        "remoteSingleChannel": 38,
        "remoteMultiChannel16": 45,
        "charger": 25,
        "cord3m": 12,
        "comboBracket": 10,
        "slimComboBracket": 12,
        "wifiHub": 120,
    },
    "accessoryMappings": {
        "salePriceKeys": {
            "winder": "winderHD",
            "motor": "motorStandard",
            "remote": "remoteStandard",
            "charger": "chargerStandard",
            "cord": "cordStandard",
            "dual": "dualBracketPair",
        },
        "methodNames": {
            "winder": "calculate_winder_price",
            "motor": "calculate_motor_price",
            "remote": "calculate_remote_price",
            "charger": "calculate_charger_price",
            "cord": "calculate_cord_price",
            "dual": "calculate_dual_price",
        },
    },
    "f2UnitPrices": {"delivery": 100, "install": 20, "removal": 20},
}


@pytest.fixture
def catalog_document() -> dict[str, Any]:
    return copy.deepcopy(CATALOG_DOCUMENT)


@pytest.fixture
def catalog(catalog_document: dict[str, Any]) -> PriceCatalog:
    return catalog_from_mapping(catalog_document)


@pytest.fixture
def make_item() -> Callable[..., Item]:
    counter = iter(range(1, 10_000))

    def _make(**overrides: Any) -> Item:
        fields: dict[str, Any] = {
            "item_id": f"item-{next(counter)}",
            "width": 900,
            "height": 1400,
            "fabric_type": "B1",
        }
        fields.update(overrides)
        return Item(**fields)

    return _make


@pytest.fixture
def make_quote() -> Callable[..., QuoteData]:
    def _make(items: list[Item], **overrides: Any) -> QuoteData:
        return QuoteData(**overrides).with_items(items)

    return _make
