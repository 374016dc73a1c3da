"""Section 7: Appendix One, static reference charts."""

from __future__ import annotations

from app.report_engine import narrative
from app.report_engine.context import BuildContext
from app.report_engine.nodes import PageBreak, Paragraph, SectionResult, TextRun
from app.report_engine.tables import data_row, grid_table, header_row, para, section_heading


def _chart(ctx: BuildContext, headers, rows, col_widths=None):
    size = ctx.theme.small_size
    table_rows = [header_row(headers, ctx.theme, size=size)]
    table_rows += [data_row(r, size=size) for r in rows]
    return grid_table(table_rows, col_widths=col_widths)


def _subheading(ctx: BuildContext, text: str) -> Paragraph:
    return para(text, bold=True, color=ctx.theme.accent, size=ctx.theme.subheading_size,
                space_before=12, space_after=6)


def _footnote(ctx: BuildContext, text: str) -> Paragraph:
    return para(text, italic=True, size=ctx.theme.caption_size, space_before=3)


def build_reference_charts(ctx: BuildContext) -> SectionResult:
    theme = ctx.theme
    nodes: SectionResult = [section_heading(narrative.APPENDIX_ONE_HEADING, theme)]

    nodes.append(_subheading(ctx, narrative.RPE_HEADING))
    nodes.append(_chart(ctx, narrative.RPE_HEADERS, narrative.RPE_ROWS))
    nodes.append(_footnote(ctx, narrative.RPE_CITATION))

    nodes.append(_subheading(ctx, narrative.PDC_HEADING))
    nodes.append(_chart(ctx, narrative.PDC_HEADERS, narrative.PDC_ROWS))

    nodes.append(_subheading(ctx, narrative.ENERGY_HEADING))
    nodes.append(_chart(ctx, narrative.ENERGY_HEADERS, narrative.ENERGY_ROWS, col_widths=(0.4, 0.6)))

    nodes.append(_subheading(ctx, narrative.DESCRIPTORS_HEADING))
    for title, description in narrative.ACTIVITY_DESCRIPTORS:
        nodes.append(Paragraph(
            runs=(
                TextRun(title + " ", bold=True, size=theme.small_size),
                TextRun(description, size=theme.small_size),
            ),
            space_after=4,
        ))
    nodes.append(_footnote(ctx, narrative.FREQUENCY_NOTE))

    nodes.append(_subheading(ctx, narrative.END_POINTS_HEADING))
    nodes.append(_chart(ctx, narrative.END_POINTS_HEADERS, narrative.END_POINT_ROWS,
                        col_widths=(0.22, 0.78)))

    nodes.append(PageBreak())
    return nodes
