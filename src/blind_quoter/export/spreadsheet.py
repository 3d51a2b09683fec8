"""Excel workbook export built with pandas and the openpyxl engine."""
from __future__ import annotations

import io
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from blind_quoter.constants import F1_SNAPSHOT_KEYS, F2_SNAPSHOT_KEYS, F3_SNAPSHOT_KEYS, ITEM_CSV_HEADERS
from blind_quoter.domain_models import QuoteData
from blind_quoter.export.preparation import ExportData, get_work_order_data, sanitize
from blind_quoter.pricing.catalog import PriceCatalog

logger = logging.getLogger(__name__)

DATA_SHEET = "data-sheet"
WORK_SHEET = "work-sheet"
EXCEL_ENGINE = "openpyxl"

_UNSAFE_FILENAME_RE = re.compile(r'[\s/\\?%*:|"<>]')

WORK_SHEET_COLUMNS = (
    "#",
    "Orig #",
    "Type",
    "Fabric",
    "Color",
    "Width",
    "Height",
    "M-Width",
    "M-Height",
    "Location",
    "Over",
    "O/I",
    "L/R",
    "Dual",
    "Chain",
    "Winder",
    "Motor",
    "Price",
)


def _clean(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, str):
        return sanitize(value)
    return value


def data_sheet_rows(quote: QuoteData) -> list[list[Any]]:
    """The CSV backup layout, with numbers kept numeric."""

    customer = quote.customer
    project_values: list[Any] = [
        quote.quote_id or "",
        quote.issue_date or "",
        quote.due_date or "",
        customer.name,
        customer.address,
        customer.phone,
        customer.email,
        customer.postcode,
    ]
    project_values.extend(quote.f1_snapshot.get(key) for key in F1_SNAPSHOT_KEYS)
    project_values.extend(quote.f2_snapshot.get(key) for key in F2_SNAPSHOT_KEYS)

    rows: list[list[Any]] = [
        [*F3_SNAPSHOT_KEYS, *F1_SNAPSHOT_KEYS, *F2_SNAPSHOT_KEYS],
        [_clean(value) for value in project_values],
        [],
        list(ITEM_CSV_HEADERS),
    ]
    lf_indexes = quote.lf_indexes
    for index, item in enumerate(quote.items):
        if not (item.width or item.height):
            continue
        row = [
            index + 1,
            item.width or "",
            item.height or "",
            item.fabric_type or "",
            item.line_price if item.line_price is not None else "",
            item.location,
            item.fabric,
            item.color,
            item.over,
            item.oi,
            item.lr,
            item.dual,
            item.chain or "",
            item.winder,
            item.motor,
            1 if index in lf_indexes else 0,
        ]
        rows.append([_clean(value) for value in row])
    return rows


def build_data_sheet(quote: QuoteData) -> pd.DataFrame:
    return pd.DataFrame(data_sheet_rows(quote))


def build_work_sheet(export: ExportData) -> pd.DataFrame:
    records = [
        (
            item.display_index,
            item.original_index,
            item.type_code,
            item.fabric_name,
            item.fabric_color,
            item.raw_width,
            item.raw_height,
            item.m_width,
            item.m_height,
            item.location,
            item.over,
            item.oi,
            item.lr,
            item.dual,
            item.chain if item.chain is not None else "",
            item.winder,
            item.motor,
            item.price if item.price is not None else "",
        )
        for item in export.items
    ]
    return pd.DataFrame.from_records(records, columns=list(WORK_SHEET_COLUMNS))


def _safe_part(value: str) -> str:
    return _UNSAFE_FILENAME_RE.sub("_", value)


def worksheet_file_name(quote: QuoteData, now: datetime | None = None) -> str:
    """``worksheet-<name>[-<phone>]-<timestamp>.xlsx``.

    The timestamp comes from an ``RB``-prefixed quote id when there is one.
    """

    quote_id = quote.quote_id or ""
    if quote_id.startswith("RB"):
        timestamp = quote_id[2:]
    else:
        timestamp = (now or datetime.now()).strftime("%Y%m%d%H%M")

    safe_name = _safe_part(quote.customer.name or "customer") or "customer"
    safe_phone = _safe_part(quote.customer.phone or "")
    parts = ["worksheet", safe_name]
    if safe_phone:
        parts.append(safe_phone)
    parts.append(timestamp)
    return f"{'-'.join(parts)}.xlsx"


def _write_sheets(target: Any, quote: QuoteData, catalog: PriceCatalog) -> None:
    data_sheet = build_data_sheet(quote)
    work_sheet = build_work_sheet(get_work_order_data(quote, None, catalog))
    with pd.ExcelWriter(target, engine=EXCEL_ENGINE) as writer:
        data_sheet.to_excel(writer, sheet_name=DATA_SHEET, index=False, header=False)
        work_sheet.to_excel(writer, sheet_name=WORK_SHEET, index=False)


def workbook_bytes(quote: QuoteData, catalog: PriceCatalog) -> bytes:
    out = io.BytesIO()
    _write_sheets(out, quote, catalog)
    return out.getvalue()


def export_workbook(
    quote: QuoteData,
    catalog: PriceCatalog,
    destination: str | Path,
    *,
    now: datetime | None = None,
) -> Path:
    """Write the workbook; a directory destination gets the generated file name."""

    path = Path(destination)
    if path.is_dir():
        path = path / worksheet_file_name(quote, now)
    _write_sheets(path, quote, catalog)
    logger.info("Wrote workbook %s", path)
    return path


__all__ = [
    "DATA_SHEET",
    "WORK_SHEET",
    "WORK_SHEET_COLUMNS",
    "data_sheet_rows",
    "build_data_sheet",
    "build_work_sheet",
    "worksheet_file_name",
    "workbook_bytes",
    "export_workbook",
]
