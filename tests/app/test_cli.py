from __future__ import annotations

import json
from pathlib import Path

import pytest

from blind_quoter.app.cli import EXIT_CATALOG_ERROR, EXIT_INPUT_ERROR, EXIT_OK, main
from blind_quoter.domain_models import Customer, Item, QuoteData
from blind_quoter.persistence.json_codec import save_quote


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("BLIND_QUOTER_WORKDIR", str(tmp_path))
    monkeypatch.delenv("BLIND_QUOTER_CATALOG", raising=False)
    return tmp_path


@pytest.fixture
def quote_file(workdir: Path) -> Path:
    quote = QuoteData(
        quote_id="RB20240102030405",
        customer=Customer(name="Jane Citizen", phone="0400111222"),
    ).with_items(
        [
            Item(item_id="a", width=900, height=1400, fabric_type="B1", winder="HD"),
            Item(item_id="b", width=1200, height=1400, fabric_type="SN", oi="IN"),
        ]
    )
    return save_quote(quote, workdir / "quote.json")


def test_recalc_writes_priced_document(quote_file: Path, workdir: Path) -> None:
    assert main(["recalc", "quote.json", "--out", "priced.json"]) == EXIT_OK

    document = json.loads((workdir / "priced.json").read_text(encoding="utf-8"))
    items = document["products"]["rollerBlind"]["items"]
    assert items[0]["linePrice"] == 138.0
    assert document["f1Snapshot"]["winder_qty"] == 1
    assert document["f2Snapshot"]["grandTotal"] > 0
    assert document["creationDate"]


def test_recalc_summary_to_stdout(quote_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["recalc", str(quote_file), "--summary", "--fill-install"]) == EXIT_OK

    summary = json.loads(capsys.readouterr().out)
    assert summary["install_fee"] == 40.0
    assert summary["grand_total"] == pytest.approx(summary["new_offer"] * 1.1)


def test_csv_export_then_import(quote_file: Path, workdir: Path) -> None:
    assert main(["export-csv", "quote.json", "--out", "backup.csv"]) == EXIT_OK
    assert (workdir / "backup.csv").read_text(encoding="utf-8").splitlines()[3].startswith("#,Width")

    assert main(["import-csv", "backup.csv", "--out", "restored.json"]) == EXIT_OK
    restored = json.loads((workdir / "restored.json").read_text(encoding="utf-8"))
    assert restored["quoteId"] == "RB20240102030405"
    assert [item["width"] for item in restored["products"]["rollerBlind"]["items"]] == [900, 1200]


def test_export_xlsx_defaults_to_workdir(quote_file: Path, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["export-xlsx", "quote.json"]) == EXIT_OK

    written = Path(capsys.readouterr().out.strip())
    assert written.parent == workdir
    assert written.name == "worksheet-Jane_Citizen-0400111222-20240102030405.xlsx"
    assert written.exists()


def test_text_documents(quote_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["work-order", "quote.json"]) == EXIT_OK
    assert capsys.readouterr().out.startswith("Work order RB20240102030405 Jane Citizen")

    assert main(["quote", "quote.json"]) == EXIT_OK
    assert "Grand total" in capsys.readouterr().out


def test_pricing_errors_go_to_stderr(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    quote = QuoteData().with_items([Item(item_id="a", width=9000, height=1400, fabric_type="B1")])
    save_quote(quote, workdir / "wide.json")

    assert main(["recalc", "wide.json", "--summary"]) == EXIT_OK

    assert "Row 1: Width 9000 exceeds" in capsys.readouterr().err


def test_input_errors(workdir: Path) -> None:
    (workdir / "junk.json").write_text(json.dumps({"hello": "world"}), encoding="utf-8")
    (workdir / "junk.csv").write_text("nothing useful", encoding="utf-8")

    assert main(["recalc", "missing.json"]) == EXIT_INPUT_ERROR
    assert main(["quote", "junk.json"]) == EXIT_INPUT_ERROR
    assert main(["import-csv", "junk.csv"]) == EXIT_INPUT_ERROR


def test_catalog_errors(quote_file: Path, workdir: Path) -> None:
    assert main(["--catalog", str(workdir / "nope.json"), "recalc", "quote.json"]) == EXIT_CATALOG_ERROR

    broken = workdir / "broken.json"
    broken.write_text(json.dumps({"matrices": {"B1": {"widths": [1]}}}), encoding="utf-8")
    assert main(["--catalog", str(broken), "recalc", "quote.json"]) == EXIT_CATALOG_ERROR
