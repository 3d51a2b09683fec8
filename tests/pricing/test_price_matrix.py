from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from blind_quoter.constants import FABRIC_CODES
from blind_quoter.pricing import catalog as catalog_module
from blind_quoter.pricing.catalog import CatalogError, PriceCatalog, catalog_from_mapping, load_catalog


@pytest.mark.parametrize(
    "width, height, expected",
    [
        (900, 1400, 100.0),
        (1000, 1500, 100.0),
        (1001, 1500, 150.0),
        (900, 1501, 120.0),
        (2000, 2000, 180.0),
    ],
)
def test_unit_price_uses_smallest_tier_at_or_above(
    catalog: PriceCatalog, width: int, height: int, expected: float
) -> None:
    matrix = catalog.get_price_matrix("B1")
    assert matrix is not None

    result = matrix.unit_price(width, height)

    assert result.error is None
    assert result.price == pytest.approx(expected)


@pytest.mark.parametrize(
    "width, height, fragment",
    [
        (2100, 1400, "Width 2100 exceeds"),
        (900, 2100, "Height 2100 exceeds"),
        (0, 1400, "Width must be greater than zero"),
        (900, -5, "Height must be greater than zero"),
    ],
)
def test_unit_price_reports_out_of_range(catalog: PriceCatalog, width: int, height: int, fragment: str) -> None:
    matrix = catalog.get_price_matrix("B1")
    assert matrix is not None

    result = matrix.unit_price(width, height)

    assert result.price is None
    assert result.error is not None and fragment in result.error


def test_missing_cell_is_reported(catalog_document: dict[str, Any]) -> None:
    document = catalog_document
    document["matrices"]["B1"]["prices"][0][1] = None
    matrix = catalog_from_mapping(document).get_price_matrix("B1")
    assert matrix is not None

    result = matrix.unit_price(1500, 1000)

    assert result.error == "No price listed for 1500 x 1000 mm."


def test_get_drops(catalog: PriceCatalog) -> None:
    assert catalog.get_drops("B1") == (1500, 2000)
    assert catalog.get_drops("ZZ") == ()
    assert catalog.get_drops(None) == ()


@pytest.mark.parametrize(
    "mutate, message",
    [
        (lambda doc: doc["matrices"]["B1"].pop("drops"), "missing 'drops'"),
        (lambda doc: doc["matrices"]["B1"].update(drops=[2000, 1500]), "ascending"),
        (lambda doc: doc["matrices"]["B1"]["prices"].pop(), "one price row per drop"),
        (lambda doc: doc["matrices"]["B1"]["prices"][0].pop(), "one price per width"),
        (lambda doc: doc.update(accessoryPrices=[1, 2]), "'accessoryPrices' must be an object"),
    ],
)
def test_catalog_from_mapping_rejects_bad_documents(
    catalog_document: dict[str, Any], mutate: Callable[[dict[str, Any]], Any], message: str
) -> None:
    document = catalog_document
    mutate(document)

    with pytest.raises(CatalogError, match=message):
        catalog_from_mapping(document)


def test_catalog_skips_non_numeric_accessory_prices(
    catalog_document: dict[str, Any], caplog: pytest.LogCaptureFixture
) -> None:
    document = catalog_document
    document["accessoryPrices"]["winderHD"] = "n/a"

    with caplog.at_level("WARNING"):
        catalog = catalog_from_mapping(document)

    assert catalog.get_accessory_price("winderHD") is None
    assert "Ignoring non-numeric price" in caplog.text


def test_bundled_catalog_covers_every_fabric_code() -> None:
    catalog = load_catalog()

    for code in FABRIC_CODES:
        matrix = catalog.get_price_matrix(code)
        assert matrix is not None
        assert matrix.drops == tuple(sorted(matrix.drops))
    assert catalog.f2_unit_price("delivery") > 0
    assert set(catalog.sale_price_keys) == set(catalog.accessory_methods)


def test_load_catalog_caches_until_file_changes(
    catalog_document: dict[str, Any], tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(catalog_module, "_CATALOG_CACHE", {})
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_document), encoding="utf-8")

    first = load_catalog(path)
    assert load_catalog(path) is first

    assert catalog_module.reload_catalog(path) is not first


def test_load_catalog_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_catalog(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError, match="Malformed JSON"):
        load_catalog(broken)
