"""Command-line entry point: ``blind-quoter <command> ...``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from blind_quoter.app.io import emit_output, parse_args, resolve_path
from blind_quoter.config import RuntimeConfig, build_config
from blind_quoter.domain_models import QuoteData
from blind_quoter.export.spreadsheet import export_workbook
from blind_quoter.persistence import (
    apply_csv_import,
    capture_snapshots,
    dumps,
    from_csv,
    load_quote,
    restore_ui_state,
    to_csv,
)
from blind_quoter.pricing.cascade import RecalculationResult, recalculate
from blind_quoter.pricing.catalog import CatalogError, PriceCatalog, load_catalog
from blind_quoter.render.quote import build_quote_document, render_quote_text
from blind_quoter.render.work_order import build_work_order, render_work_order_text

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_CATALOG_ERROR = 2


class InputError(Exception):
    """Raised when an input document cannot be read or recognised."""


def _load_quote(path: Path) -> QuoteData:
    if not path.exists():
        raise InputError(f"No such file: {path}")
    quote = load_quote(path)
    if quote is None:
        raise InputError(f"Not a quote document: {path}")
    return quote


def _recalculate(quote: QuoteData, catalog: PriceCatalog, *, fill_install: bool = False) -> RecalculationResult:
    result = recalculate(quote, restore_ui_state(quote), catalog, fill_install_default=fill_install)
    if result.first_error is not None:
        print(result.first_error.message, file=sys.stderr)
    return result


def _out_path(value: str | None, cfg: RuntimeConfig) -> Path | None:
    return resolve_path(value, cfg.workdir) if value else None


def _run(args: argparse.Namespace, cfg: RuntimeConfig, catalog: PriceCatalog) -> int:
    source = resolve_path(args.input, cfg.workdir)
    out = _out_path(getattr(args, "out", None), cfg)

    if args.command == "import-csv":
        if not source.exists():
            raise InputError(f"No such file: {source}")
        imported = from_csv(source.read_text(encoding="utf-8"))
        if imported is None:
            raise InputError(f"Unrecognised CSV backup: {source}")
        quote = apply_csv_import(imported)
        result = _recalculate(quote, catalog)
        emit_output(out, dumps(capture_snapshots(result.quote, result.ui_state)))
        return EXIT_OK

    quote = _load_quote(source)

    if args.command == "recalc":
        result = _recalculate(quote, catalog, fill_install=args.fill_install)
        if args.summary:
            emit_output(out, json.dumps(result.f2_summary.to_dict(), indent=2))
        else:
            emit_output(out, dumps(capture_snapshots(result.quote, result.ui_state)))
        return EXIT_OK

    if args.command == "export-csv":
        emit_output(out, to_csv(quote))
        return EXIT_OK

    if args.command == "export-xlsx":
        destination = out or cfg.workdir
        written = export_workbook(quote, catalog, destination)
        print(written)
        return EXIT_OK

    result = _recalculate(quote, catalog)
    if args.command == "quote":
        document = build_quote_document(result.quote, result.ui_state, catalog)
        emit_output(out, render_quote_text(document))
    else:
        work_order = build_work_order(result.quote, result.ui_state, catalog)
        emit_output(out, render_work_order_text(work_order))
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    cfg = build_config()
    try:
        catalog = load_catalog(args.catalog or cfg.catalog_path)
    except (FileNotFoundError, CatalogError) as exc:
        logger.error("%s", exc)
        return EXIT_CATALOG_ERROR

    try:
        return _run(args, cfg, catalog)
    except InputError as exc:
        logger.error("%s", exc)
        return EXIT_INPUT_ERROR


__all__ = ["InputError", "main"]
