from __future__ import annotations

import pytest

from blind_quoter.domain_models import DriveCounters
from blind_quoter.pricing.accessories import (
    calculate_accessory_cost,
    calculate_accessory_sale_price,
    summarize_accessories,
)
from blind_quoter.pricing.catalog import PriceCatalog


@pytest.fixture
def accessory_items(make_item):
    return [
        make_item(winder="HD", dual="D"),
        make_item(winder="HD", motor="Y", dual="D"),
        make_item(dual="D"),
        make_item(),
    ]


def test_sale_price_uses_item_counting_rules(catalog: PriceCatalog, accessory_items) -> None:
    assert calculate_accessory_sale_price("rollerBlind", "winder", catalog, items=accessory_items) == 60.0
    assert calculate_accessory_sale_price("rollerBlind", "motor", catalog, items=accessory_items) == 250.0
    # three dual brackets make one pair
    assert calculate_accessory_sale_price("rollerBlind", "dual", catalog, items=accessory_items) == 20.0


def test_sale_price_uses_counts_for_drive_accessories(catalog: PriceCatalog) -> None:
    assert calculate_accessory_sale_price("rollerBlind", "remote", catalog, count=3) == 300.0
    assert calculate_accessory_sale_price("rollerBlind", "charger", catalog, count=0) == 0.0
    assert calculate_accessory_sale_price("rollerBlind", "cord", catalog, count=2) == 70.0


def test_unknown_accessory_or_product_prices_at_zero(catalog: PriceCatalog, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING"):
        assert calculate_accessory_sale_price("rollerBlind", "tassel", catalog, count=4) == 0.0
        assert calculate_accessory_sale_price("curtain", "remote", catalog, count=4) == 0.0
    assert "tassel" in caplog.text


def test_cost_requires_explicit_key(catalog: PriceCatalog, accessory_items) -> None:
    assert calculate_accessory_cost("rollerBlind", "winder", catalog, cost_key=None, items=accessory_items) == 0.0
    assert (
        calculate_accessory_cost("rollerBlind", "winder", catalog, cost_key="cost-winder", items=accessory_items)
        == 16.0
    )
    assert calculate_accessory_cost("rollerBlind", "remote", catalog, cost_key="remoteSingleChannel", count=2) == 76.0


def test_summarize_accessories(catalog: PriceCatalog, make_quote, accessory_items) -> None:
    quote = make_quote(accessory_items)
    drive = DriveCounters(remote_count=3, charger_count=1, cord_count=2)

    summary = summarize_accessories(quote, drive, catalog)

    assert (summary.winder.count, summary.winder.price) == (2, 60.0)
    assert (summary.motor.count, summary.motor.price) == (1, 250.0)
    assert (summary.remote.count, summary.remote.price) == (3, 300.0)
    assert (summary.charger.count, summary.charger.price) == (1, 50.0)
    assert (summary.cord3m.count, summary.cord3m.price) == (2, 70.0)
    assert summary.dual_cost_sum == 20.0
    assert summary.motor_cost_sum == 250.0
    assert summary.sale_total() == pytest.approx(730.0)
