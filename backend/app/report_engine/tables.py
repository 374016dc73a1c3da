"""
Table and cell builders shared by every report section.

All helpers are pure: they take text plus emphasis/background flags and
return ``Cell`` rows.  Tables built here keep one border policy throughout,
shade header/category rows with the theme's highlight fill and leave data
rows unshaded.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional, Sequence

from app.report_engine.nodes import (
    Align, Border, Cell, ContentNode, Paragraph, Table, TextRun,
)
from app.report_engine.theme import ReportTheme

_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))")


def para(
    text: str,
    bold: bool = False,
    italic: bool = False,
    color: Optional[str] = None,
    size: Optional[float] = None,
    role: str = "body",
    align: Align = Align.LEFT,
    **kwargs,
) -> Paragraph:
    """Single-run paragraph — the common case."""
    run = TextRun(text or "", bold=bold, italic=italic, color=color, size=size)
    return Paragraph(runs=(run,), role=role, align=align, **kwargs)


def text_cell(
    text: str,
    bold: bool = False,
    background: Optional[str] = None,
    span: int = 1,
    size: Optional[float] = None,
    align: Align = Align.LEFT,
) -> Cell:
    return Cell(
        content=(para(text, bold=bold, size=size, align=align),),
        shading=background or None,
        span=span,
    )


def node_cell(*nodes: ContentNode, background: Optional[str] = None, span: int = 1) -> Cell:
    return Cell(content=tuple(nodes), shading=background or None, span=span)


def empty_cell(span: int = 1) -> Cell:
    return Cell(content=(), span=span)


def header_row(labels: Iterable[str], theme: ReportTheme, size: Optional[float] = None) -> tuple[Cell, ...]:
    """Bold labels on the highlight fill."""
    return tuple(text_cell(lbl, bold=True, background=theme.highlight_fill, size=size)
                 for lbl in labels)


def data_row(values: Iterable[str], size: Optional[float] = None) -> tuple[Cell, ...]:
    """Plain, unshaded row."""
    return tuple(text_cell(str(v) if v is not None else "", size=size) for v in values)


def spanning_row(text: str, columns: int, fill: str, size: Optional[float] = None) -> tuple[Cell, ...]:
    """One bold cell spanning the full table width (category headers)."""
    return (text_cell(text, bold=True, background=fill, span=columns, size=size),)


def split_symbol_label(text: str) -> tuple[str, str]:
    """Split ``"P1    Primary"`` into ``("P1", "Primary")``.

    The split happens at the first whitespace run; the label is trimmed.
    """
    parts = (text or "").strip().split(None, 1)
    if not parts:
        return "", ""
    symbol = parts[0]
    label = parts[1].strip() if len(parts) > 1 else ""
    return symbol, label


def colored_symbol_cell(text: str, theme: ReportTheme, size: Optional[float] = None) -> Cell:
    """Legend cell: bold accent-colored symbol followed by a plain label."""
    symbol, label = split_symbol_label(text)
    runs = (
        TextRun(symbol + " ", bold=True, color=theme.symbol, size=size),
        TextRun(label, size=size),
    )
    return Cell(content=(Paragraph(runs=runs),))


def key_value_rows(
    pairs: Sequence[tuple[str, str, str, str]],
    size: Optional[float] = None,
) -> list[tuple[Cell, ...]]:
    """Four-column label/value/label/value rows with bold labels."""
    rows = []
    for k1, v1, k2, v2 in pairs:
        rows.append((
            text_cell(k1, bold=True, size=size),
            text_cell(v1, size=size),
            text_cell(k2, bold=True, size=size),
            text_cell(v2, size=size),
        ))
    return rows


def grid_shape(count: int, columns: int) -> tuple[int, int]:
    """Return ``(rows, padding)`` for laying ``count`` items in ``columns``."""
    if columns < 1:
        raise ValueError("columns must be >= 1")
    rows = math.ceil(count / columns)
    padding = (columns - count % columns) % columns
    return rows, padding


def grid_rows(cells: Sequence[Cell], columns: int) -> list[tuple[Cell, ...]]:
    """Chunk cells into rows of ``columns``, padding the last row with empties."""
    rows, padding = grid_shape(len(cells), columns)
    padded = list(cells) + [empty_cell() for _ in range(padding)]
    return [tuple(padded[i * columns:(i + 1) * columns]) for i in range(rows)]


def leading_number(text: str) -> float:
    """Parse the leading numeric token of a cell (``"45 min"`` → 45.0), else 0."""
    m = _LEADING_NUMBER.match(text or "")
    if not m:
        return 0.0
    try:
        return float(m.group(1))
    except ValueError:
        return 0.0


def grid_table(rows: Sequence[tuple[Cell, ...]], col_widths=None, header_rows: int = 1,
               width: float = 1.0) -> Table:
    return Table(rows=tuple(rows), border=Border.GRID, col_widths=col_widths,
                 header_rows=header_rows, width=width)


def borderless_table(rows: Sequence[tuple[Cell, ...]], col_widths=None,
                     width: float = 1.0, align: Align = Align.CENTER) -> Table:
    return Table(rows=tuple(rows), border=Border.NONE, col_widths=col_widths,
                 width=width, align=align)


def section_banner(text: str, theme: ReportTheme) -> Paragraph:
    """Shaded full-width banner used above narrative sections."""
    return para(text, bold=True, role="subheading", shading=theme.highlight_fill,
                space_after=6)


def section_heading(text: str, theme: ReportTheme) -> Paragraph:
    return para(text, bold=True, color=theme.accent, size=theme.heading_size,
                role="heading")
