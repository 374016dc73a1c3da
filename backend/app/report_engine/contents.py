"""Section 2: table of contents.

The outline is fixed; it does not depend on which sections have content.
"""

from __future__ import annotations

from app.report_engine import narrative
from app.report_engine.context import BuildContext
from app.report_engine.nodes import Border, PageBreak, SectionResult, Table
from app.report_engine.tables import node_cell, para


def build_contents(ctx: BuildContext) -> SectionResult:
    theme = ctx.theme
    entries = [
        para(narrative.CONTENTS_HEADING, bold=True, color=theme.accent,
             size=theme.subheading_size, space_after=10),
    ]
    for text, level in narrative.CONTENTS_OUTLINE:
        entries.append(para(text, indent=level + 1, space_after=4 if level else 6))

    # Single cell with a rule down its left edge.
    outline = Table(rows=((node_cell(*entries),),), border=Border.LEFT_RULE, width=0.9)
    return [outline, PageBreak()]
