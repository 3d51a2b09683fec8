"""JSON persistence for quote documents, including migration of older layouts."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from blind_quoter.constants import PRODUCT_ROLLER_BLIND
from blind_quoter.domain_models import Customer, QuoteData, UiMetadata, default_f1_snapshot

logger = logging.getLogger(__name__)

DOCUMENT_VERSION = 1


def migrate_document(raw: Any) -> dict[str, Any] | None:
    """Bring a stored document up to the current layout.

    Current documents (``products`` + ``currentProduct``) get any missing
    ``uiMetadata``/``f1Snapshot``/``f2Snapshot``/``customer`` sections patched
    in.  Pre-product documents holding ``rollerBlindItems`` are rebuilt.
    Anything else yields ``None``.
    """

    if not isinstance(raw, Mapping):
        return None

    if raw.get("products") and raw.get("currentProduct"):
        document = copy.deepcopy(dict(raw))
        defaults: dict[str, Any] = {
            "uiMetadata": UiMetadata().to_dict(),
            "f1Snapshot": default_f1_snapshot(),
            "f2Snapshot": {},
            "customer": Customer().to_dict(),
        }
        for key, value in defaults.items():
            if not document.get(key):
                logger.debug("Patching quote document with missing %s", key)
                document[key] = value
        return document

    if raw.get("rollerBlindItems"):
        logger.warning("Migrating legacy quote document to the product layout")
        return {
            "currentProduct": PRODUCT_ROLLER_BLIND,
            "products": {
                PRODUCT_ROLLER_BLIND: {
                    "items": copy.deepcopy(raw["rollerBlindItems"]),
                    "summary": copy.deepcopy(raw.get("summary") or {}),
                }
            },
            "uiMetadata": UiMetadata().to_dict(),
            "quoteId": raw.get("quoteId") or None,
            "issueDate": raw.get("issueDate") or None,
            "dueDate": raw.get("dueDate") or None,
            "status": raw.get("status") or None,
            "costDiscountPercentage": raw.get("costDiscountPercentage") or 0,
            "customer": copy.deepcopy(raw.get("customer") or Customer().to_dict()),
            "f1Snapshot": default_f1_snapshot(),
            "f2Snapshot": {},
        }

    return None


def quote_from_document(raw: Any) -> QuoteData | None:
    document = migrate_document(raw)
    if document is None:
        logger.warning("Unrecognised quote document; expected products or rollerBlindItems")
        return None
    return QuoteData.from_dict(document)


def dumps(quote: QuoteData, *, indent: int | None = 2) -> str:
    payload = quote.to_dict()
    payload.setdefault("documentVersion", DOCUMENT_VERSION)
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def loads(text: str) -> QuoteData | None:
    """Parse a quote document; malformed JSON or an unknown layout yields ``None``."""

    try:
        raw = json.loads(text)
    except (TypeError, ValueError) as exc:
        logger.warning("Quote document is not valid JSON: %s", exc)
        return None
    return quote_from_document(raw)


def save_quote(quote: QuoteData, path: str | Path) -> Path:
    destination = Path(path)
    destination.write_text(dumps(quote), encoding="utf-8")
    return destination


def load_quote(path: str | Path) -> QuoteData | None:
    return loads(Path(path).read_text(encoding="utf-8"))


__all__ = [
    "DOCUMENT_VERSION",
    "migrate_document",
    "quote_from_document",
    "dumps",
    "loads",
    "save_quote",
    "load_quote",
]
