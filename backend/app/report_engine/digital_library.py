"""Section 8: Appendix Two, digital library image grid.

Last section of the report, so it does not end in a page break.
"""

from __future__ import annotations

from app.report_engine import narrative
from app.report_engine.context import BuildContext
from app.report_engine.nodes import Align, Image, SectionResult
from app.report_engine.tables import (
    borderless_table, grid_rows, node_cell, para, section_heading,
)

THUMBNAIL_SIZE = 64


async def build_digital_library(ctx: BuildContext) -> SectionResult:
    theme = ctx.theme
    nodes: SectionResult = [section_heading(narrative.APPENDIX_TWO_HEADING, theme)]

    items = ctx.record.digital_library
    if not items:
        nodes.append(para(narrative.NO_IMAGES))
        return nodes

    images = await ctx.fetcher.fetch_all(item.url for item in items)

    cells = []
    for number, (item, data) in enumerate(zip(items, images), start=1):
        picture = (
            Image(data, THUMBNAIL_SIZE, THUMBNAIL_SIZE) if data is not None
            else para(narrative.IMAGE_MISSING, size=theme.caption_size, align=Align.CENTER)
        )
        caption = para(item.name or f"Image {number}", size=theme.caption_size,
                       align=Align.CENTER, space_after=4)
        cells.append(node_cell(picture, caption))

    columns = ctx.library_columns
    nodes.append(borderless_table(
        grid_rows(cells, columns),
        col_widths=tuple(1 / columns for _ in range(columns)),
    ))
    return nodes
