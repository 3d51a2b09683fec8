from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

COMMANDS = ("recalc", "quote", "work-order", "export-csv", "import-csv", "export-xlsx")


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the ``blind-quoter`` command."""

    p = argparse.ArgumentParser(prog="blind-quoter", description="Roller-blind quoting tools.")
    p.add_argument("--catalog", type=str, help="Price catalog JSON (defaults to the bundled one).")
    sub = p.add_subparsers(dest="command", required=True)

    recalc = sub.add_parser("recalc", help="Recompute a saved quote document.")
    recalc.add_argument("input", help="Quote JSON document.")
    recalc.add_argument("--out", type=str, help="Write the recomputed document here.")
    recalc.add_argument("--summary", action="store_true", help="Print the F2 summary instead of the document.")
    recalc.add_argument(
        "--fill-install",
        action="store_true",
        help="Default the install quantity to one per measured blind.",
    )

    for name, help_text in (
        ("quote", "Render a printable quote as text."),
        ("work-order", "Render the factory work order as text."),
        ("export-csv", "Write the CSV backup of a quote document."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("input", help="Quote JSON document.")
        cmd.add_argument("--out", type=str, help="Output path (stdout when omitted).")

    imp = sub.add_parser("import-csv", help="Build a quote document from a CSV backup.")
    imp.add_argument("input", help="CSV backup file.")
    imp.add_argument("--out", type=str, help="Output path (stdout when omitted).")

    xlsx = sub.add_parser("export-xlsx", help="Write the data/work spreadsheet.")
    xlsx.add_argument("input", help="Quote JSON document.")
    xlsx.add_argument("--out", type=str, help="Workbook path or directory (defaults to the workdir).")
    return p


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(list(argv) if argv is not None else sys.argv[1:])


def resolve_path(value: str, workdir: Path) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else workdir / path


def emit_output(out: Path | None, content: str) -> None:
    """Write ``content`` to ``out``, or print it when no path is given."""

    if out is None:
        print(content)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")


__all__ = ["COMMANDS", "build_parser", "parse_args", "resolve_path", "emit_output"]
