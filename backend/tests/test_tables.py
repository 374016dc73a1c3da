"""Tests for the shared table and cell builders."""

import pytest

from app.report_engine.nodes import Border, Cell, Paragraph, Table
from app.report_engine.tables import (
    colored_symbol_cell,
    data_row,
    empty_cell,
    grid_rows,
    grid_shape,
    grid_table,
    header_row,
    key_value_rows,
    leading_number,
    spanning_row,
    split_symbol_label,
    text_cell,
)
from app.report_engine.theme import DEFAULT_THEME


# ──────────────────────────────────────────────────────────────
# COLORED SYMBOL CELLS
# ──────────────────────────────────────────────────────────────

class TestSplitSymbolLabel:
    def test_single_space(self):
        assert split_symbol_label("P1 Primary") == ("P1", "Primary")

    def test_whitespace_run(self):
        assert split_symbol_label("~    Primary") == ("~", "Primary")

    def test_multi_word_label_kept_whole(self):
        assert split_symbol_label("•    Pins and Needles") == ("•", "Pins and Needles")

    def test_no_whitespace_is_all_symbol(self):
        assert split_symbol_label("SW") == ("SW", "")

    def test_empty_string(self):
        assert split_symbol_label("") == ("", "")

    def test_label_trimmed(self):
        assert split_symbol_label("  C    Crepitus   ") == ("C", "Crepitus")


class TestColoredSymbolCell:
    def test_symbol_run_bold_in_symbol_color(self):
        cell = colored_symbol_cell("P2    Secondary", DEFAULT_THEME)
        (para,) = cell.content
        symbol, label = para.runs
        assert symbol.text.strip() == "P2"
        assert symbol.bold
        assert symbol.color == DEFAULT_THEME.symbol
        assert label.text == "Secondary"
        assert not label.bold
        assert label.color is None

    def test_unshaded(self):
        assert colored_symbol_cell("x    Burning", DEFAULT_THEME).shading is None


# ──────────────────────────────────────────────────────────────
# ROW BUILDERS
# ──────────────────────────────────────────────────────────────

class TestRowBuilders:
    def test_header_row_uses_highlight_fill(self):
        row = header_row(["A", "B", "C"], DEFAULT_THEME)
        assert len(row) == 3
        assert all(c.shading == DEFAULT_THEME.highlight_fill for c in row)
        assert all(c.content[0].runs[0].bold for c in row)

    def test_data_row_unshaded(self):
        row = data_row(["1", None, "x"])
        assert [c.text for c in row] == ["1", "", "x"]
        assert all(c.shading is None for c in row)

    def test_spanning_row_covers_all_columns(self):
        (cell,) = spanning_row("Extremity Strength", 7, DEFAULT_THEME.category_fill)
        assert cell.span == 7
        assert cell.shading == DEFAULT_THEME.category_fill

    def test_key_value_rows_bold_labels(self):
        (row,) = key_value_rows([("Name", "Jane", "ID", "1")])
        assert len(row) == 4
        assert row[0].content[0].runs[0].bold
        assert not row[1].content[0].runs[0].bold

    def test_grid_table_single_border_policy(self):
        table = grid_table([header_row(["A", "B"], DEFAULT_THEME), data_row(["1", "2"])])
        assert table.border is Border.GRID
        assert table.header_rows == 1


# ──────────────────────────────────────────────────────────────
# IMAGE GRID
# ──────────────────────────────────────────────────────────────

class TestGridShape:
    def test_exact_fill(self):
        assert grid_shape(24, 6) == (4, 0)

    def test_partial_last_row(self):
        assert grid_shape(20, 6) == (4, 4)

    def test_single_item(self):
        assert grid_shape(1, 6) == (1, 5)

    def test_zero_items(self):
        assert grid_shape(0, 6) == (0, 0)

    def test_invalid_columns(self):
        with pytest.raises(ValueError):
            grid_shape(5, 0)


class TestGridRows:
    def test_padding_cells_are_empty(self):
        cells = [text_cell(str(i)) for i in range(20)]
        rows = grid_rows(cells, 6)
        assert len(rows) == 4
        assert all(len(r) == 6 for r in rows)
        last = rows[-1]
        assert [c.text for c in last[:2]] == ["18", "19"]
        assert all(c.content == () for c in last[2:])

    def test_rows_form_rectangular_table(self):
        cells = [text_cell(str(i)) for i in range(7)]
        table = Table(rows=tuple(grid_rows(cells, 3)))
        assert table.column_count == 3


# ──────────────────────────────────────────────────────────────
# NUMBER PARSING
# ──────────────────────────────────────────────────────────────

class TestLeadingNumber:
    @pytest.mark.parametrize("text,expected", [
        ("45 min", 45.0),
        ("5", 5.0),
        ("2.5 min", 2.5),
        ("  10min", 10.0),
        ("", 0.0),
        ("N/A", 0.0),
        ("min 5", 0.0),
    ])
    def test_values(self, text, expected):
        assert leading_number(text) == expected

    def test_none(self):
        assert leading_number(None) == 0.0


def test_empty_cell_has_no_content():
    cell = empty_cell()
    assert isinstance(cell, Cell)
    assert cell.text == ""
    assert not any(isinstance(n, Paragraph) for n in cell.content)
