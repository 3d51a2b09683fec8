"""Utilities for emitting plain-text quote and work-order output."""

from __future__ import annotations

import textwrap
from typing import Any, Iterable

from blind_quoter.constants import INVISIBLE_CHARS_RE

DEFAULT_PAGE_WIDTH = 74
DEFAULT_CURRENCY = "$"


def format_currency(value: Any, currency: str = DEFAULT_CURRENCY) -> str:
    """Return *value* formatted as a currency string."""

    try:
        amount = float(value or 0.0)
    except (TypeError, ValueError):
        amount = 0.0
    if amount < 0:
        return f"-{currency}{abs(amount):,.2f}"
    return f"{currency}{amount:,.2f}"


def _sanitize_render_text(text: Any) -> str:
    if text is None:
        return ""
    return INVISIBLE_CHARS_RE.sub("", str(text)).replace("\t", " ")


class QuoteWriter:
    """Helper that wraps line emission for text documents."""

    def __init__(
        self,
        *,
        divider: str | None = None,
        page_width: int = DEFAULT_PAGE_WIDTH,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self.page_width = max(10, int(page_width or 0))
        self.divider = divider if divider is not None else "-" * self.page_width
        self.currency = currency
        self._lines: list[str] = []

    @property
    def lines(self) -> list[str]:
        return self._lines

    def __len__(self) -> int:  # pragma: no cover - simple proxy
        return len(self._lines)

    def text(self) -> str:
        return "\n".join(self._lines)

    # ------------------------------------------------------------------
    # low-level operations
    def line(self, text: Any = "", *, indent: str = "") -> int:
        """Append ``text`` as a single line and return its index."""

        self._lines.append(f"{indent}{_sanitize_render_text(text)}")
        return len(self._lines) - 1

    def blank(self) -> int:
        return self.line("")

    def rule(self) -> int:
        return self.line(self.divider)

    def extend(self, values: Iterable[Any]) -> None:
        for value in values:
            self.line(value)

    # ------------------------------------------------------------------
    # higher-level helpers
    def wrap(self, text: Any, *, indent: str = "") -> None:
        """Emit ``text`` wrapped to the configured page width."""

        if text in (None, ""):
            return
        clean = _sanitize_render_text(text).strip()
        if not clean:
            return
        width = max(10, self.page_width - len(indent))
        for chunk in textwrap.wrap(clean, width=width):
            self.line(chunk, indent=indent)

    def _is_total_label(self, label: str) -> bool:
        clean = str(label or "").strip().rstrip(":").lstrip("= ")
        return clean.lower().startswith(("total", "grand total"))

    def _kv_line(self, label: str, value: str, indent: str) -> str:
        left = f"{indent}{label}"
        pad = max(1, self.page_width - len(left) - len(value))
        return f"{left}{' ' * pad}{value}"

    def field(self, label: str, value: Any, *, indent: str = "") -> int:
        """Emit a label with a right-aligned plain value."""

        return self.line(self._kv_line(label, _sanitize_render_text(value), indent))

    def row(self, label: str, value: Any, *, indent: str = "") -> int:
        """Emit a currency row; total rows get a short separator above them."""

        formatted = format_currency(value, self.currency)
        if self._is_total_label(label) and self._lines:
            separator = " " * max(0, self.page_width - len(formatted)) + "-" * len(formatted)
            if self._lines[-1] not in (separator, self.divider):
                self.line(separator)
        return self.line(self._kv_line(label, formatted, indent))

    def table(self, headers: Iterable[Any], rows: Iterable[Iterable[Any]]) -> None:
        """Emit a left-aligned column table sized to its widest cells."""

        header_cells = [_sanitize_render_text(cell) for cell in headers]
        body = [[_sanitize_render_text(cell) for cell in row] for row in rows]
        widths = [len(cell) for cell in header_cells]
        for row in body:
            for index, cell in enumerate(row):
                if index < len(widths):
                    widths[index] = max(widths[index], len(cell))
                else:
                    widths.append(len(cell))

        def _render(cells: list[str]) -> str:
            return "  ".join(cell.ljust(widths[index]) for index, cell in enumerate(cells)).rstrip()

        self.line(_render(header_cells))
        self.line("  ".join("-" * width for width in widths))
        for row in body:
            self.line(_render(row))


__all__ = ["DEFAULT_PAGE_WIDTH", "QuoteWriter", "format_currency"]
