"""Factory work order: rows in cutting order plus a short production summary."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from blind_quoter.domain_models import QuoteData, UiState
from blind_quoter.export.preparation import ExportItem, get_work_order_data
from blind_quoter.pricing.catalog import PriceCatalog
from blind_quoter.render.writer import QuoteWriter

logger = logging.getLogger(__name__)

WORK_ORDER_HEADERS = (
    "#",
    "Type",
    "Fabric",
    "Color",
    "Location",
    "M-Width",
    "M-Height",
    "Over",
    "O/I",
    "L/R",
    "Dual",
    "Chain",
    "Winder",
    "Motor",
    "Price",
)


@dataclass(frozen=True)
class WorkOrderSummary:
    blind_count: int
    dual_pairs: int
    hd_count: int
    total_list_price: float
    discounted_total: float


@dataclass(frozen=True)
class WorkOrder:
    quote_id: str | None
    customer_name: str
    items: tuple[ExportItem, ...]
    summary: WorkOrderSummary


def summarize_work_order(items: tuple[ExportItem, ...], discount_percentage: float | None) -> WorkOrderSummary:
    total = sum(item.price or 0.0 for item in items)
    return WorkOrderSummary(
        blind_count=len(items),
        dual_pairs=sum(1 for item in items if item.dual == "Y") // 2,
        hd_count=sum(1 for item in items if item.winder == "Y"),
        total_list_price=total,
        discounted_total=total * (1 - (discount_percentage or 0) / 100),
    )


def build_work_order(quote: QuoteData, ui_state: UiState, catalog: PriceCatalog) -> WorkOrder:
    data = get_work_order_data(quote, None, catalog)
    logger.debug("Work order for %s has %d blinds", quote.quote_id, len(data.items))
    return WorkOrder(
        quote_id=quote.quote_id,
        customer_name=quote.customer.name,
        items=data.items,
        summary=summarize_work_order(data.items, ui_state.f1.discount_percentage),
    )


def work_order_row(item: ExportItem) -> tuple[object, ...]:
    return (
        item.display_index,
        item.type_code,
        item.fabric_name,
        item.fabric_color,
        item.location,
        item.m_width if item.m_width is not None else "",
        item.m_height if item.m_height is not None else "",
        item.over,
        item.oi,
        item.lr,
        item.dual,
        item.chain if item.chain is not None else "",
        item.winder,
        item.motor,
        item.formatted_price,
    )


def render_work_order_text(work_order: WorkOrder, *, page_width: int = 74) -> str:
    writer = QuoteWriter(page_width=page_width)
    title = " ".join(part for part in ("Work order", work_order.quote_id, work_order.customer_name) if part)
    writer.line(title)
    writer.rule()
    writer.table(WORK_ORDER_HEADERS, [work_order_row(item) for item in work_order.items])
    writer.blank()

    summary = work_order.summary
    writer.field("Blinds", summary.blind_count)
    writer.field("Dual bracket pairs", summary.dual_pairs)
    writer.field("HD winders", summary.hd_count)
    writer.row("List price", summary.total_list_price)
    writer.row("Total after discount", summary.discounted_total)
    return writer.text()


__all__ = [
    "WORK_ORDER_HEADERS",
    "WorkOrderSummary",
    "WorkOrder",
    "summarize_work_order",
    "build_work_order",
    "work_order_row",
    "render_work_order_text",
]
