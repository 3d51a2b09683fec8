"""Export preparation: sanitise, label and order items for output documents.

Two orderings are maintained on purpose.  ``sort_for_export`` drives
spreadsheets and printable quotes; ``sort_for_work_order`` groups the
factory sheet by fabric so identical rolls are cut together.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, replace
from typing import Any, Iterable, Sequence

from blind_quoter.constants import (
    CATEGORY_RANK,
    DUAL_BRACKET,
    INVISIBLE_CHARS_RE,
    LIGHT_FILTER_PREFIX_RE,
    LOGIC_BLOCKOUT,
    LOGIC_LIGHT_FILTER,
    LOGIC_SCREEN,
    OTHER_CATEGORY_RANK,
    WINDER_HD,
)
from blind_quoter.domain_models import Item, QuoteData, UiMetadata
from blind_quoter.export.dimensions import manufacturing_dimensions
from blind_quoter.pricing.catalog import PriceCatalog


@dataclass(frozen=True)
class ExportItem:
    """Read-only projection of an :class:`Item` for output documents."""

    original_index: int
    type_code: str
    fabric_type: str
    fabric_name: str
    fabric_color: str
    raw_width: int
    raw_height: int
    m_width: int | None
    m_height: int | None
    location: str
    over: str
    oi: str
    lr: str
    dual: str
    winder: str
    motor: str
    chain: int | None
    price: float | None
    formatted_price: str
    is_lf: bool
    display_index: int = 0


@dataclass(frozen=True)
class ExportData:
    items: tuple[ExportItem, ...]


def sanitize(value: Any) -> str:
    """Strip zero-width, bidi-control and BOM characters."""

    if value is None:
        return ""
    return INVISIBLE_CHARS_RE.sub("", str(value))


def clean_fabric_name(fabric: str | None) -> str:
    if not fabric:
        return ""
    return LIGHT_FILTER_PREFIX_RE.sub("", fabric)


def determine_type_code(item: Item, is_lf: bool) -> str:
    if is_lf:
        return LOGIC_LIGHT_FILTER
    fabric_type = item.fabric_type or ""
    if fabric_type.startswith("B"):
        return LOGIC_BLOCKOUT
    if fabric_type == LOGIC_SCREEN:
        return LOGIC_SCREEN
    return ""


def format_price(price: float | None) -> str:
    return f"${price:.2f}" if price else ""


def prepare_item(item: Item, index: int, lf_indexes: Iterable[int], drops: Sequence[int]) -> ExportItem:
    is_lf = index in set(lf_indexes)
    m_width, m_height = manufacturing_dimensions(item, drops)
    return ExportItem(
        original_index=index + 1,
        type_code=determine_type_code(item, is_lf),
        fabric_type=sanitize(item.fabric_type),
        fabric_name=sanitize(clean_fabric_name(item.fabric)),
        fabric_color=sanitize(item.color),
        raw_width=item.width or 0,
        raw_height=item.height or 0,
        m_width=m_width,
        m_height=m_height,
        location=sanitize(item.location),
        over=sanitize(item.over),
        oi=sanitize(item.oi),
        lr=sanitize(item.lr),
        dual="Y" if item.dual == DUAL_BRACKET else "",
        winder="Y" if item.winder == WINDER_HD else "",
        motor="Y" if item.motor else "",
        chain=item.chain or None,
        price=item.line_price,
        formatted_price=format_price(item.line_price),
        is_lf=is_lf,
    )


def _category_rank(item: ExportItem) -> int:
    return CATEGORY_RANK.get(item.type_code, OTHER_CATEGORY_RANK)


def sort_for_export(items: Sequence[ExportItem]) -> list[ExportItem]:
    """Blockout, screen, light-filter, other; busiest type first; then input order."""

    type_counts = Counter(item.type_code for item in items)
    return sorted(
        items,
        key=lambda item: (
            _category_rank(item),
            -type_counts[item.type_code],
            item.type_code,
            item.original_index,
        ),
    )


def sort_for_work_order(items: Sequence[ExportItem]) -> list[ExportItem]:
    """Factory order: busiest fabric+colour pair, busiest blockout subtype, input order.

    Category rank plays no part here; identical rolls stay together whatever
    their type.
    """

    pair_counts = Counter((item.fabric_name, item.fabric_color) for item in items)
    subtype_counts = Counter(item.fabric_type for item in items if item.type_code == LOGIC_BLOCKOUT)

    def _key(item: ExportItem) -> tuple[Any, ...]:
        if item.type_code == LOGIC_BLOCKOUT:
            subtype_key: tuple[int, str] = (-subtype_counts[item.fabric_type], item.fabric_type)
        else:
            subtype_key = (0, "")
        return (
            -pair_counts[(item.fabric_name, item.fabric_color)],
            subtype_key,
            item.original_index,
        )

    return sorted(items, key=_key)


def number_items(items: Iterable[ExportItem]) -> tuple[ExportItem, ...]:
    return tuple(replace(item, display_index=position) for position, item in enumerate(items, start=1))


def _prepared_items(quote: QuoteData, ui_metadata: UiMetadata | None, catalog: PriceCatalog) -> list[ExportItem]:
    metadata = ui_metadata if ui_metadata is not None else quote.ui_metadata
    lf_indexes = frozenset(metadata.lf_modified_row_indexes)
    prepared = [
        prepare_item(item, index, lf_indexes, catalog.get_drops(item.fabric_type))
        for index, item in enumerate(quote.items)
    ]
    return [item for item in prepared if item.raw_width and item.raw_height]


def get_export_data(
    quote: QuoteData,
    ui_metadata: UiMetadata | None,
    catalog: PriceCatalog,
) -> ExportData:
    """Items with both dimensions, sanitised and in canonical export order."""

    return ExportData(items=number_items(sort_for_export(_prepared_items(quote, ui_metadata, catalog))))


def get_work_order_data(
    quote: QuoteData,
    ui_metadata: UiMetadata | None,
    catalog: PriceCatalog,
) -> ExportData:
    return ExportData(items=number_items(sort_for_work_order(_prepared_items(quote, ui_metadata, catalog))))


__all__ = [
    "ExportItem",
    "ExportData",
    "sanitize",
    "clean_fabric_name",
    "determine_type_code",
    "format_price",
    "prepare_item",
    "sort_for_export",
    "sort_for_work_order",
    "number_items",
    "get_export_data",
    "get_work_order_data",
]
