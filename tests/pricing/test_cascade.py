from __future__ import annotations

from dataclasses import replace

import pytest

from blind_quoter.domain_models import DriveCounters, F1State, F2State, UiState
from blind_quoter.pricing.cascade import recalculate
from blind_quoter.pricing.catalog import PriceCatalog


@pytest.fixture
def order(make_item, make_quote):
    quote = make_quote(
        [
            make_item(width=900, height=1400, winder="HD"),
            make_item(width=1500, height=1800, motor="Y"),
            make_item(width=None, height=None),
        ]
    )
    ui_state = UiState(
        f1=F1State(discount_percentage=10, remote_1ch_qty=2, remote_16ch_qty=2),
        f2=F2State(delivery_qty=1),
        drive=DriveCounters(remote_count=1),
    )
    return quote, ui_state


def test_recalculate_runs_every_stage(catalog: PriceCatalog, order) -> None:
    quote, ui_state = order

    result = recalculate(quote, ui_state, catalog)

    # items 100 + 180, winder 30, motor 250, remote 100
    assert result.quote.summary.total_sum == pytest.approx(660.0)
    assert [item.line_price for item in result.quote.items] == [100.0, 180.0, None]
    assert result.quote.summary.accessories.remote.count == 1

    # stale 2/2 split against one remote resets to 0/1
    assert (result.ui_state.f1.remote_1ch_qty, result.ui_state.f1.remote_16ch_qty) == (0, 1)
    assert result.f1_totals.rb_price == pytest.approx(594.0)
    assert result.ui_state.f1.f1_sub_total == pytest.approx(result.f1_totals.sub_total)

    f2 = result.ui_state.f2
    assert f2.delivery_fee == 100.0
    assert f2.grand_total == pytest.approx(result.f2_summary.grand_total)
    assert f2.deposit == result.deposit.deposit
    assert result.first_error is None


def test_recalculate_is_idempotent_for_deposit(catalog: PriceCatalog, order) -> None:
    quote, ui_state = order
    first = recalculate(quote, ui_state, catalog)

    edited = replace(first.ui_state, f2=replace(first.ui_state.f2, deposit=100.0))
    second = recalculate(first.quote, edited, catalog)

    assert second.deposit.reset is False
    assert second.ui_state.f2.deposit == 100.0


def test_recalculate_resets_deposit_when_total_moves(catalog: PriceCatalog, order) -> None:
    quote, ui_state = order
    first = recalculate(quote, ui_state, catalog)
    edited = replace(first.ui_state, f2=replace(first.ui_state.f2, deposit=100.0, delivery_qty=2))

    second = recalculate(first.quote, edited, catalog)

    assert second.deposit.reset is True
    assert second.ui_state.f2.deposit != 100.0


def test_fill_install_default(catalog: PriceCatalog, order) -> None:
    quote, ui_state = order

    filled = recalculate(quote, ui_state, catalog, fill_install_default=True)
    untouched = recalculate(quote, ui_state, catalog)

    assert filled.ui_state.f2.install_qty == 2
    assert filled.ui_state.f2.install_fee == 40.0
    assert untouched.ui_state.f2.install_qty is None


def test_recalculate_surfaces_first_error(catalog: PriceCatalog, make_item, make_quote) -> None:
    quote = make_quote([make_item(width=5000), make_item(height=9000)])

    result = recalculate(quote, UiState(), catalog)

    assert result.first_error is not None
    assert result.first_error.row_index == 0
    assert result.quote.summary.total_sum == 0.0
