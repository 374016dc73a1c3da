"""Shared style constants for every section of the evaluation report."""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch


@dataclass(frozen=True)
class ReportTheme:
    font_family: str = "Helvetica"
    font_bold: str = "Helvetica-Bold"
    font_italic: str = "Helvetica-Oblique"
    font_bold_italic: str = "Helvetica-BoldOblique"

    accent: str = "#337FE5"          # brand blue — titles, section headings
    text: str = "#000000"
    muted: str = "#888888"           # boilerplate / captions
    symbol: str = "#FF0000"          # pain-legend symbols

    highlight_fill: str = "#FFFF99"  # header rows, section banners
    category_fill: str = "#D0E7FF"   # test-result category rows
    total_fill: str = "#DDDDDD"      # running-total row

    body_size: float = 10
    small_size: float = 8
    caption_size: float = 7
    title_size: float = 24
    heading_size: float = 14
    subheading_size: float = 12

    # Page geometry — US Letter, 1" margins all round.
    page_width: float = letter[0]
    page_height: float = letter[1]
    margin: float = 1.0 * inch

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin


DEFAULT_THEME = ReportTheme()
