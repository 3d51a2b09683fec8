"""Quote persistence: JSON documents, the CSV backup dialect and snapshots."""

from blind_quoter.persistence.csv_codec import (
    CsvImport,
    ParsedCurrent,
    ParsedLegacy,
    ParseFailed,
    from_csv,
    parse_csv,
    to_csv,
)
from blind_quoter.persistence.json_codec import dumps, load_quote, loads, migrate_document, save_quote
from blind_quoter.persistence.snapshot import (
    apply_csv_import,
    capture_snapshots,
    new_quote_id,
    next_version_id,
    restore_ui_state,
    save_as_correction,
)

__all__ = [
    "CsvImport",
    "ParsedCurrent",
    "ParsedLegacy",
    "ParseFailed",
    "apply_csv_import",
    "capture_snapshots",
    "dumps",
    "from_csv",
    "load_quote",
    "loads",
    "migrate_document",
    "new_quote_id",
    "next_version_id",
    "parse_csv",
    "restore_ui_state",
    "save_as_correction",
    "save_quote",
    "to_csv",
]
