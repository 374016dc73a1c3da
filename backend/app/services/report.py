"""
PDF renderer for evaluation reports.

Turns the content-node stream produced by the section builders into a
ReportLab Platypus story and serializes it:

  - Paragraph → ``Paragraph`` with inline markup per text run
  - Table     → ``Table`` + ``TableStyle`` (spans, fills, one border policy)
  - Image     → ``Image`` flowable read from the in-memory buffer
  - PageBreak → ``PageBreak``

Cell contents are rendered recursively with the cell's own width as the
available width.  The cover page carries no decoration; later pages get a
header rule with the report title and page number, and a footer with the
generation date.

Documents are built with ReportLab's ``invariant`` flag, so the same node
stream and timestamp always serialize to the same bytes.
"""

from __future__ import annotations

import logging
from datetime import datetime
from io import BytesIO
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Table, TableStyle, PageBreak,
    Image as RLImage,
)

from app.report_engine import nodes as n
from app.report_engine.theme import ReportTheme

logger = logging.getLogger(__name__)

CELL_PADDING = 4
INDENT_STEP = 18   # points per indent level
RULE_PADDING = 18  # gap between the contents rule and its text

_ALIGN = {n.Align.LEFT: TA_LEFT, n.Align.CENTER: TA_CENTER, n.Align.RIGHT: TA_RIGHT}
_H_ALIGN = {n.Align.LEFT: "LEFT", n.Align.CENTER: "CENTER", n.Align.RIGHT: "RIGHT"}


# ──────────────────────────────────────────────────────────────────
# HEADER / FOOTER (drawn on canvas)
# ──────────────────────────────────────────────────────────────────

def _header_footer_first(canvas, doc):
    """Cover page — no decoration."""


def _make_header_footer_later(theme: ReportTheme, title: str, generated_at: Optional[datetime]):
    """Header rule with title and page number; footer with generation date."""
    page_w, page_h = theme.page_width, theme.page_height

    def _draw(canvas, doc):
        canvas.saveState()

        # ── Header ──
        canvas.setFillColor(colors.HexColor(theme.accent))
        canvas.setFont(theme.font_bold, theme.caption_size + 1)
        canvas.drawString(doc.leftMargin, page_h - 0.6 * theme.margin, title)
        canvas.setFillColor(colors.HexColor(theme.muted))
        canvas.setFont(theme.font_family, theme.caption_size + 1)
        canvas.drawRightString(page_w - doc.rightMargin, page_h - 0.6 * theme.margin,
                               f"Page {doc.page}")
        canvas.setStrokeColor(colors.HexColor(theme.accent))
        canvas.setLineWidth(0.5)
        canvas.line(doc.leftMargin, page_h - 0.65 * theme.margin,
                    page_w - doc.rightMargin, page_h - 0.65 * theme.margin)

        # ── Footer ──
        canvas.setStrokeColor(colors.HexColor(theme.muted))
        canvas.setLineWidth(0.25)
        canvas.line(doc.leftMargin, 0.6 * theme.margin, page_w - doc.rightMargin, 0.6 * theme.margin)
        if generated_at is not None:
            canvas.setFillColor(colors.HexColor(theme.muted))
            canvas.setFont(theme.font_family, theme.caption_size)
            canvas.drawString(doc.leftMargin, 0.45 * theme.margin,
                              f"Generated {generated_at.strftime('%B %d, %Y')}")
        canvas.restoreState()

    return _draw


# ──────────────────────────────────────────────────────────────────
# STYLES
# ──────────────────────────────────────────────────────────────────

def _get_styles(theme: ReportTheme) -> dict[str, ParagraphStyle]:
    """Paragraph styles keyed by node role."""
    base = getSampleStyleSheet()["Normal"]
    text = colors.HexColor(theme.text)

    def style(name, size, font=theme.font_family, **kw):
        return ParagraphStyle(
            name=name, parent=base, fontName=font, fontSize=size,
            leading=size * 1.25, textColor=text, **kw,
        )

    return {
        "title": style("ReportTitle", theme.title_size, theme.font_bold, spaceAfter=12),
        "heading": style("SectionTitle", theme.heading_size, theme.font_bold,
                         spaceBefore=4, spaceAfter=8),
        "subheading": style("SubSection", theme.subheading_size, theme.font_bold,
                            spaceBefore=6, spaceAfter=4),
        "body": style("Body", theme.body_size, spaceAfter=2),
    }


# ──────────────────────────────────────────────────────────────────
# NODE → FLOWABLE
# ──────────────────────────────────────────────────────────────────

def _run_markup(run: n.TextRun) -> str:
    text = escape(run.text).replace("\n", "<br/>")
    if not text:
        return ""
    if run.bold:
        text = f"<b>{text}</b>"
    if run.italic:
        text = f"<i>{text}</i>"
    if run.underline:
        text = f"<u>{text}</u>"
    attrs = []
    if run.color:
        attrs.append(f'color="{run.color}"')
    if run.size:
        attrs.append(f'size="{run.size}"')
    if attrs:
        text = f"<font {' '.join(attrs)}>{text}</font>"
    return text


class _Renderer:
    def __init__(self, theme: ReportTheme):
        self.theme = theme
        self.styles = _get_styles(theme)

    def flowables(self, node: n.ContentNode, avail_width: float) -> list:
        if isinstance(node, n.Paragraph):
            return [self.paragraph(node)]
        if isinstance(node, n.Table):
            return [self.table(node, avail_width)]
        if isinstance(node, n.Image):
            return [self.image(node, avail_width)]
        if isinstance(node, n.PageBreak):
            return [PageBreak()]
        raise TypeError(f"Unknown content node: {type(node).__name__}")

    def paragraph(self, node: n.Paragraph) -> Paragraph:
        base = self.styles.get(node.role, self.styles["body"])
        overrides = {"alignment": _ALIGN[node.align]}
        if node.indent:
            overrides["leftIndent"] = node.indent * INDENT_STEP
        if node.shading:
            overrides["backColor"] = colors.HexColor(node.shading)
            overrides["borderPadding"] = (3, 4, 3, 4)
        if node.space_after is not None:
            overrides["spaceAfter"] = node.space_after
        if node.space_before is not None:
            overrides["spaceBefore"] = node.space_before
        style = ParagraphStyle(name=f"{base.name}+", parent=base, **overrides)
        return Paragraph("".join(_run_markup(r) for r in node.runs), style)

    def image(self, node: n.Image, avail_width: float) -> RLImage:
        scale = min(1.0, avail_width / node.width) if avail_width > 0 else 1.0
        img = RLImage(BytesIO(node.data), width=node.width * scale,
                      height=node.height * scale, kind="proportional")
        img.hAlign = _H_ALIGN[node.align]
        return img

    def table(self, node: n.Table, avail_width: float) -> Table:
        total = avail_width * node.width
        count = node.column_count
        fractions = node.col_widths or tuple(1 / count for _ in range(count))
        widths = [total * f for f in fractions]

        left_pad = RULE_PADDING if node.border is n.Border.LEFT_RULE else CELL_PADDING
        data, cmds = [], [
            ("LEFTPADDING", (0, 0), (-1, -1), left_pad),
            ("RIGHTPADDING", (0, 0), (-1, -1), CELL_PADDING),
            ("TOPPADDING", (0, 0), (-1, -1), 2),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
        ]
        for r, row in enumerate(node.rows):
            out_row = []
            col = 0
            for cell in row:
                last = col + cell.span - 1
                inner = sum(widths[col:last + 1]) - left_pad - CELL_PADDING
                content = []
                for child in cell.content:
                    content.extend(self.flowables(child, inner))
                out_row.append(content if content else "")
                out_row.extend("" for _ in range(cell.span - 1))
                if cell.span > 1:
                    cmds.append(("SPAN", (col, r), (last, r)))
                if cell.shading:
                    cmds.append(("BACKGROUND", (col, r), (last, r), colors.HexColor(cell.shading)))
                cmds.append(("VALIGN", (col, r), (last, r), cell.valign))
                col = last + 1
            data.append(out_row)

        if node.border is n.Border.GRID:
            cmds.append(("GRID", (0, 0), (-1, -1), 0.5, colors.black))
        elif node.border is n.Border.LEFT_RULE:
            cmds.append(("LINEBEFORE", (0, 0), (0, -1), 1, colors.black))

        # splitInRow lets a cell taller than a page continue on the next one
        table = Table(data, colWidths=widths, repeatRows=node.header_rows,
                      hAlign=_H_ALIGN[node.align], splitInRow=1)
        table.setStyle(TableStyle(cmds))
        return table


# ──────────────────────────────────────────────────────────────────
# PUBLIC API
# ──────────────────────────────────────────────────────────────────

def render_pdf(document: n.ReportDocument, theme: ReportTheme) -> bytes:
    """Serialize a ``ReportDocument`` to PDF bytes."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=(theme.page_width, theme.page_height),
        topMargin=theme.margin, bottomMargin=theme.margin,
        leftMargin=theme.margin, rightMargin=theme.margin,
        title=document.title, author=document.author,
        invariant=1,
    )

    renderer = _Renderer(theme)
    story = []
    for node in document.nodes:
        story.extend(renderer.flowables(node, theme.content_width))

    doc.build(story,
              onFirstPage=_header_footer_first,
              onLaterPages=_make_header_footer_later(theme, document.title, document.generated_at))
    pdf = buffer.getvalue()
    logger.info("Rendered %d nodes to %d-byte PDF", len(document.nodes), len(pdf))
    return pdf
