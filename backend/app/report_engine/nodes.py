"""
Content nodes — the intermediate document model.

Section builders never touch ReportLab directly.  They emit a flat stream of
these nodes, which the renderer in ``app.services.report`` turns into
Platypus flowables at the very end of a build.

Node types:
  - Paragraph  (ordered list of styled TextRun spans)
  - Table      (rows of cells; every row covers the same column count)
  - Image      (an already-resolved byte buffer plus display size)
  - PageBreak

Cells hold their own nested node list, so a table cell can contain
paragraphs, images or another table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Border(str, Enum):
    """Border policy for a whole table. Never mixed within one table."""
    NONE = "none"
    GRID = "grid"
    LEFT_RULE = "left_rule"


@dataclass(frozen=True)
class TextRun:
    """A span of text with one set of inline styles."""
    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: Optional[str] = None   # hex, e.g. "#337FE5"
    size: Optional[float] = None  # points; None → paragraph style size


@dataclass(frozen=True)
class Paragraph:
    runs: tuple[TextRun, ...]
    role: str = "body"            # body | title | heading | subheading
    align: Align = Align.LEFT
    indent: int = 0               # indentation level (0 = flush)
    shading: Optional[str] = None  # background fill
    space_after: Optional[float] = None
    space_before: Optional[float] = None

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)


@dataclass(frozen=True)
class Image:
    data: bytes
    width: float   # points
    height: float  # points
    align: Align = Align.CENTER

    def __post_init__(self):
        if not self.data:
            raise ValueError("Image nodes require a resolved, non-empty buffer")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid image size {self.width}x{self.height}")


@dataclass(frozen=True)
class PageBreak:
    pass


@dataclass(frozen=True)
class Cell:
    content: tuple["ContentNode", ...] = ()
    shading: Optional[str] = None
    span: int = 1
    valign: str = "TOP"

    def __post_init__(self):
        if self.span < 1:
            raise ValueError(f"Cell span must be >= 1 (got {self.span})")

    @property
    def text(self) -> str:
        return "".join(n.text for n in self.content if isinstance(n, Paragraph))


@dataclass(frozen=True)
class Table:
    rows: tuple[tuple[Cell, ...], ...]
    border: Border = Border.NONE
    col_widths: Optional[tuple[float, ...]] = None  # fractions of available width
    width: float = 1.0                              # fraction of available width
    align: Align = Align.CENTER
    header_rows: int = 0                            # rows repeated on page split

    def __post_init__(self):
        if not self.rows:
            raise ValueError("Table requires at least one row")
        widths = {sum(c.span for c in row) for row in self.rows}
        if len(widths) != 1:
            raise ValueError(f"Ragged table: rows cover {sorted(widths)} columns")
        if self.col_widths is not None and len(self.col_widths) != self.column_count:
            raise ValueError(
                f"col_widths has {len(self.col_widths)} entries for "
                f"{self.column_count} columns"
            )

    @property
    def column_count(self) -> int:
        return sum(c.span for c in self.rows[0])


ContentNode = Union[Paragraph, Table, Image, PageBreak]

# One builder's output.
SectionResult = list[ContentNode]


@dataclass
class ReportDocument:
    """Concatenated node stream plus the metadata the renderer needs."""
    title: str
    nodes: list[ContentNode] = field(default_factory=list)
    generated_at: Optional[datetime] = None  # the one dynamic field
    author: str = ""

    @property
    def page_break_count(self) -> int:
        return sum(1 for n in self.nodes if isinstance(n, PageBreak))
