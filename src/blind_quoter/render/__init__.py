"""Plain-text rendering of quotes and work orders."""

from blind_quoter.render.quote import (
    AccessoryRow,
    QuoteDocument,
    build_quote_document,
    render_quote_text,
)
from blind_quoter.render.work_order import (
    WorkOrder,
    WorkOrderSummary,
    build_work_order,
    render_work_order_text,
)
from blind_quoter.render.writer import QuoteWriter, format_currency

__all__ = [
    "AccessoryRow",
    "QuoteDocument",
    "QuoteWriter",
    "WorkOrder",
    "WorkOrderSummary",
    "build_quote_document",
    "build_work_order",
    "format_currency",
    "render_quote_text",
    "render_work_order_text",
]
