"""CSV dialect for quote backups.

Layout of the current format::

    <project header row>
    <project value row>
    <blank>
    #,Width,Height,...,IsLF
    <item rows>

The project block carries quote/customer fields followed by the F1 and F2
snapshot keys.  Older backups consist of the item block only, optionally
with ``F1_SNAPSHOT,<key>,<value>`` rows; those are handled by a separate
parser and come back as :class:`ParsedLegacy`.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence, Union

from blind_quoter.coerce import parse_strict_number
from blind_quoter.constants import (
    F1_SNAPSHOT_KEYS,
    F2_SNAPSHOT_KEYS,
    F3_SNAPSHOT_KEYS,
    INVISIBLE_CHARS_RE,
    ITEM_CSV_HEADERS,
)
from blind_quoter.domain_models import Item, QuoteData

logger = logging.getLogger(__name__)

ITEM_HEADER_PREFIX = "#,Width"
LEGACY_SNAPSHOT_MARKER = "F1_SNAPSHOT"

_FIELD_RE = re.compile(r'(?:^|,)((?:"(?:[^"]|"")*"|[^,]*))')
_INT_PREFIX_RE = re.compile(r"^\s*[+-]?\d+")
_FLOAT_PREFIX_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_F1_KEYS = frozenset(F1_SNAPSHOT_KEYS)
_F2_KEYS = frozenset(F2_SNAPSHOT_KEYS)
_F3_KEYS = frozenset(F3_SNAPSHOT_KEYS)


@dataclass(frozen=True)
class CsvImport:
    """Everything recoverable from a CSV backup."""

    items: tuple[Item, ...] = ()
    lf_indexes: tuple[int, ...] = ()
    f1_snapshot: Mapping[str, Any] = field(default_factory=dict)
    f2_snapshot: Mapping[str, Any] = field(default_factory=dict)
    f3_data: Mapping[str, Any] = field(default_factory=lambda: {"customer": {}})


@dataclass(frozen=True)
class ParsedCurrent:
    data: CsvImport


@dataclass(frozen=True)
class ParsedLegacy:
    data: CsvImport


@dataclass(frozen=True)
class ParseFailed:
    reason: str


ParseResult = Union[ParsedCurrent, ParsedLegacy, ParseFailed]


# ----------------------------------------------------------------------
# writing
def _format_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def encode_value(value: Any) -> str:
    """Render one CSV cell, quoting when it holds a comma, space or quote."""

    text = _format_scalar(value)
    text = INVISIBLE_CHARS_RE.sub("", text)
    text = text.replace('"', '""').replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
    if "," in text or " " in text or '"' in text:
        return f'"{text}"'
    return text


def _project_values(quote: QuoteData) -> list[Any]:
    customer = quote.customer
    values: list[Any] = [
        quote.quote_id or "",
        quote.issue_date or "",
        quote.due_date or "",
        customer.name,
        customer.address,
        customer.phone,
        customer.email,
        customer.postcode,
    ]
    values.extend(quote.f1_snapshot.get(key) for key in F1_SNAPSHOT_KEYS)
    values.extend(quote.f2_snapshot.get(key) for key in F2_SNAPSHOT_KEYS)
    return values


def _item_row(index: int, item: Item, lf_indexes: frozenset[int]) -> list[Any]:
    return [
        index + 1,
        item.width or "",
        item.height or "",
        item.fabric_type or "",
        f"{item.line_price:.2f}" if item.line_price is not None else "",
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


def to_csv(quote: QuoteData) -> str:
    """Serialise ``quote`` to the current CSV layout."""

    headers = [*F3_SNAPSHOT_KEYS, *F1_SNAPSHOT_KEYS, *F2_SNAPSHOT_KEYS]
    lf_indexes = quote.lf_indexes
    rows = [
        ",".join(encode_value(value) for value in _item_row(index, item, lf_indexes))
        for index, item in enumerate(quote.items)
        if item.width or item.height
    ]
    lines = [
        ",".join(headers),
        ",".join(encode_value(value) for value in _project_values(quote)),
        "",
        ",".join(ITEM_CSV_HEADERS),
        *rows,
    ]
    return "\n".join(lines)


# ----------------------------------------------------------------------
# reading
def split_fields(line: str) -> list[str]:
    """Split one CSV line, honouring quoted fields and doubled quotes.

    Unquoted cells are trimmed; quoted content is kept verbatim.
    """

    values: list[str] = []
    for match in _FIELD_RE.finditer(line):
        value = match.group(1).strip()
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1].replace('""', '"')
        values.append(value)
    return values


def _parse_int(text: str | None) -> int | None:
    match = _INT_PREFIX_RE.match(text or "")
    if match is None:
        return None
    return int(match.group()) or None


def _parse_float(text: str | None) -> float | None:
    match = _FLOAT_PREFIX_RE.match(text or "")
    if match is None:
        return None
    return float(match.group()) or None


def coerce_snapshot_value(text: str) -> Any:
    """Number, then ``true``/``false``, then ``null`` -> ``None``, else the text."""

    number = parse_strict_number(text)
    if number is not None:
        return number
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None
    return text


def _cell(values: Sequence[str], index: int) -> str:
    return values[index] if index < len(values) else ""


def _item_from_values(values: Sequence[str], position: int) -> Item:
    return Item(
        item_id=f"item-csv-{position + 1}",
        width=_parse_int(_cell(values, 1)),
        height=_parse_int(_cell(values, 2)),
        fabric_type=_cell(values, 3) or None,
        line_price=_parse_float(_cell(values, 4)),
        location=_cell(values, 5),
        fabric=_cell(values, 6),
        color=_cell(values, 7),
        over=_cell(values, 8),
        oi=_cell(values, 9),
        lr=_cell(values, 10),
        dual=_cell(values, 11),
        chain=_parse_int(_cell(values, 12)),
        winder=_cell(values, 13),
        motor=_cell(values, 14),
    )


def _is_skippable(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.lower().startswith("total")


def _read_items(
    lines: Sequence[str],
    is_lf_column: int,
    split: Callable[[str], list[str]],
    on_row: Callable[[list[str], int], bool] | None = None,
) -> tuple[list[Item], list[int]]:
    items: list[Item] = []
    lf_indexes: list[int] = []
    for row_number, line in enumerate(lines):
        if _is_skippable(line):
            continue
        values = split(line.strip())
        if on_row is not None and on_row(values, row_number):
            continue
        items.append(_item_from_values(values, len(items)))
        if is_lf_column > -1 and _parse_int(_cell(values, is_lf_column)) == 1:
            lf_indexes.append(len(items) - 1)
    return items, lf_indexes


def _column(headers: Sequence[str], name: str) -> int:
    try:
        return list(headers).index(name)
    except ValueError:
        return -1


def _parse_project_block(headers: Sequence[str], values: Sequence[str]) -> tuple[dict, dict, dict]:
    f1_snapshot: dict[str, Any] = {}
    f2_snapshot: dict[str, Any] = {}
    f3_data: dict[str, Any] = {"customer": {}}

    for index, header in enumerate(headers):
        raw = _cell(values, index)
        if raw == "":
            continue
        if header in _F1_KEYS or header in _F2_KEYS:
            value = coerce_snapshot_value(raw)
        else:
            value = raw

        if value is None:
            if header in _F2_KEYS:
                f2_snapshot[header] = None
            continue

        if header in _F1_KEYS:
            f1_snapshot[header] = value
        elif header in _F2_KEYS:
            f2_snapshot[header] = value
        elif header.startswith("customer."):
            f3_data["customer"][header.split(".", 1)[1]] = value
        elif header in _F3_KEYS:
            f3_data[header] = value
    return f1_snapshot, f2_snapshot, f3_data


def _parse_current(lines: Sequence[str]) -> CsvImport:
    headers = split_fields(lines[0])
    values = split_fields(lines[1])
    f1_snapshot, f2_snapshot, f3_data = _parse_project_block(headers, values)

    item_headers = split_fields(lines[3])
    items, lf_indexes = _read_items(lines[4:], _column(item_headers, "IsLF"), split_fields)
    return CsvImport(
        items=tuple(items),
        lf_indexes=tuple(lf_indexes),
        f1_snapshot=f1_snapshot,
        f2_snapshot=f2_snapshot,
        f3_data=f3_data,
    )


def _legacy_number(text: str) -> Any:
    number = parse_strict_number(text)
    return text if number is None else number


def _parse_legacy(lines: Sequence[str]) -> ParseResult:
    header_index = next(
        (index for index, line in enumerate(lines) if line.strip() and line.startswith(ITEM_HEADER_PREFIX)),
        None,
    )
    if header_index is None:
        return ParseFailed("no item header row found")

    # Legacy backups were written without quoting, so a plain split is exact.
    def naive_split(line: str) -> list[str]:
        return line.split(",")

    headers = naive_split(lines[header_index])
    snapshot_columns = {key: _column(headers, key) for key in F1_SNAPSHOT_KEYS}
    f1_snapshot: dict[str, Any] = {}

    def consume_snapshot(values: list[str], row_number: int) -> bool:
        if values[0] == LEGACY_SNAPSHOT_MARKER and len(values) >= 3:
            if values[1] in _F1_KEYS:
                f1_snapshot[values[1]] = _legacy_number(values[2])
            return True
        if row_number == 0:
            for key, column in snapshot_columns.items():
                if column > -1 and _cell(values, column) != "":
                    f1_snapshot[key] = _legacy_number(values[column])
        return False

    items, lf_indexes = _read_items(
        lines[header_index + 1 :],
        _column(headers, "IsLF"),
        naive_split,
        consume_snapshot,
    )
    return ParsedLegacy(
        CsvImport(
            items=tuple(items),
            lf_indexes=tuple(lf_indexes),
            f1_snapshot=f1_snapshot,
            f2_snapshot={},
            f3_data={"customer": {}},
        )
    )


def parse_csv(text: str) -> ParseResult:
    """Parse ``text`` into a tagged result without raising."""

    if not isinstance(text, str):
        return ParseFailed("input is not text")
    lines = text.strip().splitlines()
    if len(lines) < 4 or not lines[3].startswith(ITEM_HEADER_PREFIX):
        return _parse_legacy(lines)
    return ParsedCurrent(_parse_current(lines))


def from_csv(text: str) -> CsvImport | None:
    """Return the imported data, or ``None`` when neither layout matches."""

    result = parse_csv(text)
    if isinstance(result, ParseFailed):
        logger.warning("Could not parse CSV backup: %s", result.reason)
        return None
    return result.data


__all__ = [
    "CsvImport",
    "ParsedCurrent",
    "ParsedLegacy",
    "ParseFailed",
    "ParseResult",
    "encode_value",
    "split_fields",
    "coerce_snapshot_value",
    "to_csv",
    "parse_csv",
    "from_csv",
]
