from __future__ import annotations

import pytest

from blind_quoter.render.writer import QuoteWriter, format_currency


@pytest.mark.parametrize(
    "value, expected",
    [
        (1234.5, "$1,234.50"),
        (None, "$0.00"),
        ("12", "$12.00"),
        ("abc", "$0.00"),
        (-5, "-$5.00"),
    ],
)
def test_format_currency(value, expected: str) -> None:
    assert format_currency(value) == expected


def test_row_right_aligns_values() -> None:
    writer = QuoteWriter(page_width=30)

    writer.row("Subtotal", 1200)

    assert writer.lines == ["Subtotal" + " " * 13 + "$1,200.00"]
    assert len(writer.lines[0]) == 30


def test_total_rows_get_a_separator() -> None:
    writer = QuoteWriter(page_width=30)
    writer.row("GST", 10)

    writer.row("Grand total", 110)

    assert writer.lines[1] == " " * 23 + "-" * 7
    assert writer.lines[2].endswith("$110.00")


def test_line_strips_invisible_characters() -> None:
    writer = QuoteWriter(page_width=20)

    writer.line("Living\u200bRoom", indent="  ")

    assert writer.lines == ["  LivingRoom"]


def test_wrap_and_table() -> None:
    writer = QuoteWriter(page_width=20)
    writer.wrap("the quick brown fox jumps over the lazy dog")
    assert all(len(line) <= 20 for line in writer.lines)

    table = QuoteWriter(page_width=40)
    table.table(["#", "Fabric"], [[1, "Vibe"], [2, "Kleenscreen"]])
    assert table.lines == [
        "#  Fabric",
        "-  -----------",
        "1  Vibe",
        "2  Kleenscreen",
    ]
    assert table.text().count("\n") == 3
