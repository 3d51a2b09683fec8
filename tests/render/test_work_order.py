from __future__ import annotations

import pytest

from blind_quoter.domain_models import F1State, UiState
from blind_quoter.pricing.cascade import recalculate
from blind_quoter.pricing.catalog import PriceCatalog
from blind_quoter.render.work_order import build_work_order, render_work_order_text


@pytest.fixture
def work_order(catalog: PriceCatalog, make_item, make_quote):
    quote = make_quote(
        [
            make_item(fabric_type="SN", fabric="Mesh", color="White", oi="OUT"),
            make_item(width=1000, height=1200, oi="IN", dual="D", winder="HD"),
            make_item(width=1500, height=1800, dual="D", chain=1000),
            make_item(width=None),
        ],
        quote_id="RB1",
    )
    result = recalculate(quote, UiState(f1=F1State(discount_percentage=20)), catalog)
    return build_work_order(result.quote, result.ui_state, catalog)


def test_build_work_order(work_order) -> None:
    assert [item.original_index for item in work_order.items] == [2, 3, 1]
    assert [(item.m_width, item.m_height) for item in work_order.items] == [(996, 1495), (1500, 1995), (898, 1495)]

    summary = work_order.summary
    assert summary.blind_count == 3
    assert summary.dual_pairs == 1
    assert summary.hd_count == 1
    assert summary.total_list_price == pytest.approx(100.0 + 180.0 + 90.0)
    assert summary.discounted_total == pytest.approx(370.0 * 0.8)


def test_render_work_order_text(work_order) -> None:
    text = render_work_order_text(work_order)
    lines = text.splitlines()

    assert lines[0] == "Work order RB1"
    assert lines[2].startswith("#  Type")
    assert "$180.00" in text
    assert "1000" in lines[5]
    assert "Dual bracket pairs" in text
    assert "$296.00" in text
