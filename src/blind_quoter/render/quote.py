"""Printable quote data and its plain-text rendering.

``build_quote_document`` gathers the figures a customer quote (or a factory
work order) prints: totals from the F2 summary, deposit/balance from F2
state and an electrical-accessory table priced either at sale prices or at
F1 cost.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from blind_quoter.constants import WIFI_SALE_UNIT_PRICE
from blind_quoter.domain_models import QuoteData, UiState
from blind_quoter.pricing.accessories import calculate_accessory_sale_price
from blind_quoter.pricing.catalog import PriceCatalog
from blind_quoter.pricing.f1_costs import calculate_f1_costs
from blind_quoter.pricing.f2_summary import calculate_f2_summary
from blind_quoter.render.writer import QuoteWriter

DEFAULT_TERMS = "Standard terms and conditions apply."


@dataclass(frozen=True)
class AccessoryRow:
    label: str
    quantity: float
    amount: float


@dataclass(frozen=True)
class QuoteDocument:
    document_title: str
    quote_id: str | None
    issue_date: str | None
    due_date: str | None
    customer_name: str
    customer_address: str
    customer_phone: str
    customer_email: str
    subtotal: float
    gst: float
    grand_total: float
    our_offer: float
    deposit: float
    balance: float
    savings: float
    mul_times: float
    general_notes: str
    terms_and_conditions: str
    accessories: tuple[AccessoryRow, ...]
    e_acce_sum: float
    wo_rb_price: float
    wo_acce_price: float
    wo_total_price: float
    is_work_order: bool = False


def format_price(value: Any) -> str:
    """Currency text for positive amounts, blank otherwise."""

    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return ""
    return f"${value:.2f}"


def _document_title(quote: QuoteData) -> str:
    parts = [quote.quote_id, quote.customer.name, quote.customer.phone]
    return " ".join(part for part in parts if part)


def build_quote_document(
    quote: QuoteData,
    ui_state: UiState,
    catalog: PriceCatalog,
    *,
    work_order: bool = False,
) -> QuoteDocument:
    """Collect quote figures; ``work_order`` prices accessories at F1 cost."""

    summary = calculate_f2_summary(quote, ui_state, catalog)
    f1_costs = calculate_f1_costs(quote, ui_state, catalog)
    product_type = quote.current_product
    f2 = ui_state.f2

    quantities = {
        "motor": f1_costs.quantity("motor-total"),
        "remote-1ch": f1_costs.quantity("remote-1ch"),
        "remote-16ch": f1_costs.quantity("remote-16ch"),
        "charger": f1_costs.quantity("charger"),
        "3m-cord": f1_costs.quantity("3m-cord"),
        "wifihub": f1_costs.quantity("wifihub"),
    }

    if work_order:
        amounts = {component: f1_costs.cost(component) for component in quantities}
        amounts["motor"] = f1_costs.motor_cost
    else:
        amounts = {
            "motor": calculate_accessory_sale_price(product_type, "motor", catalog, items=quote.items),
            "remote-1ch": calculate_accessory_sale_price(
                product_type, "remote", catalog, count=int(quantities["remote-1ch"])
            ),
            "remote-16ch": calculate_accessory_sale_price(
                product_type, "remote", catalog, count=int(quantities["remote-16ch"])
            ),
            "charger": calculate_accessory_sale_price(
                product_type, "charger", catalog, count=int(quantities["charger"])
            ),
            "3m-cord": calculate_accessory_sale_price(
                product_type, "cord", catalog, count=int(quantities["3m-cord"])
            ),
            "wifihub": quantities["wifihub"] * WIFI_SALE_UNIT_PRICE,
        }

    labels = {
        "motor": "Motor",
        "remote-1ch": "Remote (1 channel)",
        "remote-16ch": "Remote (16 channel)",
        "charger": "Charger",
        "3m-cord": "3m cord",
        "wifihub": "Wifi hub",
    }
    accessories = tuple(
        AccessoryRow(label=labels[key], quantity=quantities[key], amount=amounts[key]) for key in labels
    )

    customer = quote.customer
    return QuoteDocument(
        document_title=_document_title(quote),
        quote_id=quote.quote_id,
        issue_date=quote.issue_date,
        due_date=quote.due_date,
        customer_name=customer.name,
        customer_address=customer.address,
        customer_phone=customer.phone,
        customer_email=customer.email,
        subtotal=summary.sum_price,
        gst=summary.gst,
        grand_total=summary.grand_total,
        our_offer=summary.new_offer,
        deposit=f2.deposit or 0.0,
        balance=f2.balance or 0.0,
        savings=summary.first_rb_price - summary.dis_rb_price,
        mul_times=summary.mul_times or 1,
        general_notes=quote.general_notes or "",
        terms_and_conditions=quote.terms_conditions or DEFAULT_TERMS,
        accessories=accessories,
        e_acce_sum=sum(amounts.values()),
        wo_rb_price=summary.f1_rb_price,
        wo_acce_price=f1_costs.cost("winder") + f1_costs.cost("dual-combo") + f1_costs.cost("slim"),
        wo_total_price=f1_costs.component_total + summary.f1_rb_price,
        is_work_order=work_order,
    )


def render_quote_text(document: QuoteDocument, *, page_width: int = 74) -> str:
    writer = QuoteWriter(page_width=page_width)
    writer.line(document.document_title or "Quotation")
    writer.rule()
    writer.field("Quote", document.quote_id or "")
    writer.field("Issued", document.issue_date or "")
    writer.field("Due", document.due_date or "")
    writer.blank()
    writer.line("Customer")
    for value in (
        document.customer_name,
        document.customer_address,
        document.customer_phone,
        document.customer_email,
    ):
        if value:
            writer.line(value, indent="  ")
    writer.blank()

    priced = [row for row in document.accessories if row.quantity]
    if priced:
        writer.line("Accessories")
        for row in priced:
            writer.field(f"{row.label} x {row.quantity:g}", format_price(row.amount), indent="  ")
        writer.row("Accessories total", document.e_acce_sum, indent="  ")
        writer.blank()

    writer.row("Subtotal", document.subtotal)
    if document.savings > 0:
        writer.row("You save", document.savings)
    writer.row("Our offer", document.our_offer)
    writer.row("GST", document.gst)
    writer.row("Grand total", document.grand_total)
    writer.row("Deposit", document.deposit)
    writer.row("Balance", document.balance)

    if document.is_work_order:
        writer.blank()
        writer.row("Blind cost", document.wo_rb_price)
        writer.row("Accessory cost", document.wo_acce_price)
        writer.row("Total cost", document.wo_total_price)

    if document.general_notes:
        writer.blank()
        writer.line("Notes")
        for paragraph in document.general_notes.splitlines():
            writer.wrap(paragraph, indent="  ")
    writer.blank()
    for paragraph in document.terms_and_conditions.splitlines():
        writer.wrap(paragraph)
    return writer.text()


__all__ = [
    "DEFAULT_TERMS",
    "AccessoryRow",
    "QuoteDocument",
    "format_price",
    "build_quote_document",
    "render_quote_text",
]
