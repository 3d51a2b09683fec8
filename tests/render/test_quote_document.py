from __future__ import annotations

from dataclasses import replace

import pytest

from blind_quoter.domain_models import Customer, DriveCounters, F1State, F2State, UiState
from blind_quoter.pricing.cascade import recalculate
from blind_quoter.pricing.catalog import PriceCatalog
from blind_quoter.render.quote import DEFAULT_TERMS, build_quote_document, format_price, render_quote_text


@pytest.fixture
def recalculated(catalog: PriceCatalog, make_item, make_quote):
    quote = make_quote(
        [
            make_item(width=900, height=1400, winder="HD", motor="Y"),
            make_item(width=1500, height=1800, dual="D"),
            make_item(width=1500, height=1800, dual="D"),
        ],
        quote_id="RB20240102030405",
        customer=Customer(name="Jane Citizen", phone="0400111222", address="1 Main St"),
        general_notes="Measure again\nbefore install",
    )
    ui_state = UiState(
        f1=F1State(discount_percentage=10, wifi_qty=1),
        f2=F2State(mul_times=2, discount=10),
        drive=DriveCounters(remote_count=2, charger_count=1, cord_count=1),
    )
    return recalculate(quote, ui_state, catalog)


def test_format_price() -> None:
    assert format_price(12.5) == "$12.50"
    assert format_price(0) == ""
    assert format_price(None) == ""


def test_quote_document_uses_sale_prices(catalog: PriceCatalog, recalculated) -> None:
    document = build_quote_document(recalculated.quote, recalculated.ui_state, catalog)
    summary = recalculated.f2_summary

    assert document.document_title == "RB20240102030405 Jane Citizen 0400111222"
    assert document.subtotal == pytest.approx(summary.sum_price)
    assert document.gst == pytest.approx(summary.gst)
    assert document.grand_total == pytest.approx(summary.grand_total)
    assert document.our_offer == pytest.approx(summary.sum_price)
    assert document.deposit == recalculated.ui_state.f2.deposit
    assert document.savings == pytest.approx(summary.first_rb_price - summary.dis_rb_price)
    assert document.mul_times == 2
    assert document.terms_and_conditions == DEFAULT_TERMS

    amounts = {row.label: row.amount for row in document.accessories}
    assert amounts["Motor"] == 250.0
    assert amounts["Remote (16 channel)"] == 200.0
    assert amounts["Charger"] == 50.0
    assert amounts["3m cord"] == 35.0
    assert amounts["Wifi hub"] == 300.0
    assert document.e_acce_sum == pytest.approx(835.0)


def test_work_order_document_uses_costs(catalog: PriceCatalog, recalculated) -> None:
    document = build_quote_document(recalculated.quote, recalculated.ui_state, catalog, work_order=True)

    amounts = {row.label: row.amount for row in document.accessories}
    assert amounts["Motor"] == 160.0
    assert amounts["Remote (16 channel)"] == 90.0
    assert amounts["Wifi hub"] == 120.0
    assert document.wo_rb_price == pytest.approx(recalculated.f1_totals.rb_price)
    # winder 8 + one dual combo 10
    assert document.wo_acce_price == pytest.approx(18.0)
    assert document.wo_total_price == pytest.approx(recalculated.f1_totals.sub_total)


def test_offer_override_is_printed(catalog: PriceCatalog, recalculated) -> None:
    ui_state = replace(recalculated.ui_state, f2=replace(recalculated.ui_state.f2, new_offer=999.0))

    document = build_quote_document(recalculated.quote, ui_state, catalog)

    assert document.our_offer == 999.0


def test_render_quote_text(catalog: PriceCatalog, recalculated) -> None:
    document = build_quote_document(recalculated.quote, recalculated.ui_state, catalog, work_order=True)

    text = render_quote_text(document)

    assert text.splitlines()[0] == "RB20240102030405 Jane Citizen 0400111222"
    assert "Remote (16 channel) x 2" in text
    assert "Grand total" in text
    assert "Total cost" in text
    assert "Measure again" in text
    assert DEFAULT_TERMS in text
