"""Section 1: cover page."""

from __future__ import annotations

import logging

from app.report_engine import narrative
from app.report_engine.context import BuildContext
from app.report_engine.nodes import (
    Align, Cell, Image, PageBreak, Paragraph, SectionResult, TextRun,
)
from app.report_engine.tables import borderless_table, para

logger = logging.getLogger(__name__)

LOGO_SIZE = 120  # points, bounding box


def _identity_row(label: str, value: str) -> tuple[Cell, Cell]:
    return (
        Cell(content=(Paragraph(runs=(TextRun(label, underline=True),)),)),
        Cell(content=(Paragraph(runs=(TextRun(value, bold=True),)),)),
    )


def clinic_contact_lines(profile) -> list[str]:
    """Clinic name, address and phone/fax, skipping blanks."""
    contact = " ".join(p for p in (
        f"Phone: {profile.phone}" if profile.phone else "",
        f"Fax: {profile.fax}" if profile.fax else "",
    ) if p)
    return [line for line in (profile.clinic_name, profile.address, contact) if line]


async def build_cover(ctx: BuildContext) -> SectionResult:
    theme = ctx.theme
    claimant = ctx.record.claimant_data
    profile = ctx.record.client_profile_data

    nodes: SectionResult = [
        para(ctx.title, bold=True, color=theme.accent, size=theme.title_size,
             role="title", align=Align.CENTER, space_after=24),
    ]

    logo = await ctx.fetcher.fetch(profile.logo_ref)
    if logo is not None:
        nodes.append(Image(logo, LOGO_SIZE, LOGO_SIZE))
    elif profile.logo_ref:
        logger.info("Cover logo unavailable, omitting")

    nodes.append(borderless_table(
        [
            _identity_row("Claimant Name:", claimant.display_name),
            _identity_row("Claimant #:", claimant.claimant_id),
            _identity_row("Date of Evaluation(s):", ctx.evaluation_date_text),
        ],
        col_widths=(0.5, 0.5),
        width=0.6,
    ))

    nodes.append(para(narrative.CONFIDENTIAL_NOTICE, color=theme.muted,
                      align=Align.CENTER, space_before=220, space_after=10))
    for line in clinic_contact_lines(profile):
        nodes.append(para(line, size=theme.small_size, align=Align.CENTER))

    nodes.append(PageBreak())
    return nodes
