from __future__ import annotations

import io
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from blind_quoter.constants import ITEM_CSV_HEADERS
from blind_quoter.domain_models import Customer
from blind_quoter.export.spreadsheet import (
    DATA_SHEET,
    WORK_SHEET,
    WORK_SHEET_COLUMNS,
    build_data_sheet,
    export_workbook,
    workbook_bytes,
    worksheet_file_name,
)
from blind_quoter.pricing.catalog import PriceCatalog


@pytest.fixture
def quote(make_item, make_quote):
    return make_quote(
        [
            make_item(fabric_type="SN", fabric="Mesh", color="White", line_price=90.0),
            make_item(width=1000, height=1200, oi="IN", fabric="Vibe", color="Black", line_price=100.0),
            make_item(width=None, height=None),
        ],
        quote_id="RB20240102030405",
        customer=Customer(name="Jane Citizen", phone="0400 111 222"),
    )


@pytest.mark.parametrize(
    "quote_id, expected",
    [
        ("RB20240102030405", "worksheet-Jane_Citizen-0400_111_222-20240102030405.xlsx"),
        (None, "worksheet-Jane_Citizen-0400_111_222-202405061415.xlsx"),
    ],
)
def test_worksheet_file_name(quote, quote_id, expected: str) -> None:
    named = replace(quote, quote_id=quote_id)

    assert worksheet_file_name(named, datetime(2024, 5, 6, 14, 15)) == expected


def test_worksheet_file_name_without_customer(make_quote) -> None:
    quote = make_quote([], quote_id="Q1")

    name = worksheet_file_name(quote, datetime(2024, 5, 6, 14, 15))

    assert name == "worksheet-customer-202405061415.xlsx"


def test_data_sheet_mirrors_csv_blocks(quote) -> None:
    frame = build_data_sheet(quote)

    assert frame.iloc[0, 0] == "quoteId"
    assert frame.iloc[1, 0] == "RB20240102030405"
    assert list(frame.iloc[3, : len(ITEM_CSV_HEADERS)]) == list(ITEM_CSV_HEADERS)
    # the unmeasured third item is left out
    assert len(frame) == 6


def test_workbook_round_trips_through_pandas(quote, catalog: PriceCatalog, tmp_path: Path) -> None:
    path = export_workbook(quote, catalog, tmp_path, now=datetime(2024, 5, 6, 14, 15))

    assert path.parent == tmp_path
    assert path.name.endswith("20240102030405.xlsx")
    sheets = pd.read_excel(path, sheet_name=None, header=None)
    assert set(sheets) == {DATA_SHEET, WORK_SHEET}

    work = pd.read_excel(path, sheet_name=WORK_SHEET)
    assert list(work.columns) == list(WORK_SHEET_COLUMNS)
    assert list(work["Orig #"]) == [2, 1]
    assert list(work["M-Width"]) == [996, 900]
    assert list(work["M-Height"]) == [1495, 1495]
    assert list(work["Fabric"]) == ["Vibe", "Mesh"]


def test_workbook_bytes_is_a_valid_workbook(quote, catalog: PriceCatalog) -> None:
    payload = workbook_bytes(quote, catalog)

    work = pd.read_excel(io.BytesIO(payload), sheet_name=WORK_SHEET)
    assert len(work) == 2


def test_export_workbook_to_explicit_file(quote, catalog: PriceCatalog, tmp_path: Path) -> None:
    target = tmp_path / "out.xlsx"

    assert export_workbook(quote, catalog, target) == target
    assert target.exists()
