"""
Section 3: client information.

Clinic header, the demographic grid, mechanism/history of injury, and the
pain & symptom illustration (body diagram with markers beside the legend).
"""

from __future__ import annotations

import logging

from app.report_engine import narrative
from app.report_engine.context import BuildContext
from app.report_engine.cover import clinic_contact_lines
from app.report_engine.nodes import Align, Image, PageBreak, SectionResult
from app.report_engine.tables import (
    borderless_table, colored_symbol_cell, data_row, grid_table, header_row,
    key_value_rows, node_cell, para, section_banner, text_cell,
)
from app.services.assets import draw_pain_markers

logger = logging.getLogger(__name__)

HEADER_LOGO_SIZE = 60
PHOTO_SIZE = 90
DIAGRAM_WIDTH = 200
DIAGRAM_HEIGHT = 300


def _or_na(value: str) -> str:
    value = (value or "").strip()
    return value or narrative.NOT_AVAILABLE


def _with_unit(value: str, unit: str) -> str:
    return " ".join(p for p in (value.strip(), unit.strip()) if p)


def demographic_pairs(ctx: BuildContext) -> list[tuple[str, str, str, str]]:
    c = ctx.record.claimant_data
    dob = c.date_of_birth.strip()
    age = c.age(ctx.evaluation_date)
    if dob and age is not None:
        dob = f"{dob} ({age})"

    return [
        ("Name", _or_na(c.display_name), "ID", _or_na(c.claimant_id)),
        ("Address", _or_na(c.address), "DOB (Age)", _or_na(dob)),
        ("Home Phone", _or_na(c.phone), "Gender", _or_na(c.gender)),
        ("Work Phone", _or_na(c.work_phone), "Height", _or_na(_with_unit(c.height, c.height_unit))),
        ("Occupation", _or_na(c.occupation), "Weight", _or_na(_with_unit(c.weight, c.weight_unit))),
        ("Employer", _or_na(c.employer), "Dominant Hand", _or_na(c.dominant_hand)),
        ("Insurance", _or_na(c.insurance), "Referred By", _or_na(c.referred_by)),
        ("Physician", _or_na(c.physician), "Resting Pulse", _or_na(c.resting_pulse)),
        ("", "", "BP Sitting", _or_na(c.bp_sitting)),
        ("", "", "Tested By", _or_na(ctx.record.client_profile_data.signature_name)),
    ]


def _mechanism(ctx: BuildContext) -> SectionResult:
    theme = ctx.theme
    events = [e for e in ctx.record.claimant_data.injury_history if e.date or e.description]
    if not events:
        return [para(narrative.NO_INJURY_HISTORY, italic=True)]
    rows = [header_row(["Date", "Description"], theme, size=theme.small_size)]
    rows += [data_row([e.date, e.description], size=theme.small_size) for e in events]
    return [grid_table(rows, col_widths=(0.2, 0.8))]


def _legend_table(ctx: BuildContext):
    theme = ctx.theme
    rows = []
    for text, is_header in narrative.PAIN_LEGEND:
        if is_header:
            rows.append((text_cell(text, bold=True, background=theme.highlight_fill,
                                   size=theme.small_size),))
        else:
            rows.append((colored_symbol_cell(text, theme, size=theme.small_size),))
    return grid_table(rows, header_rows=0)


async def _diagram(ctx: BuildContext):
    illustration = ctx.record.pain_illustration
    data = await ctx.fetcher.fetch(illustration.diagram)
    if data is None:
        return para(narrative.DIAGRAM_PLACEHOLDER, align=Align.CENTER)

    markers = [
        (m.x, m.y, narrative.PAIN_SYMBOLS.get(m.type, ""))
        for m in illustration.markers
    ]
    try:
        data = draw_pain_markers(data, markers)
    except (OSError, ValueError) as exc:
        logger.warning("Could not draw pain markers, using bare diagram: %s", exc)
    return Image(data, DIAGRAM_WIDTH, DIAGRAM_HEIGHT)


async def build_client_info(ctx: BuildContext) -> SectionResult:
    theme = ctx.theme
    profile = ctx.record.client_profile_data
    nodes: SectionResult = []

    # ── Clinic header ──
    logo = await ctx.fetcher.fetch(profile.logo_ref)
    if logo is not None:
        nodes.append(Image(logo, HEADER_LOGO_SIZE, HEADER_LOGO_SIZE))
    nodes.append(para(ctx.title, bold=True, color=theme.accent,
                      size=theme.subheading_size, align=Align.CENTER))
    for line in clinic_contact_lines(profile):
        nodes.append(para(line, size=theme.small_size, align=Align.CENTER))

    # ── Demographics ──
    nodes.append(section_banner(narrative.CLIENT_INFO_HEADING, theme))
    claimant_photo = ctx.record.claimant_data.photo
    if claimant_photo:
        photo = await ctx.fetcher.fetch(claimant_photo)
        nodes.append(
            Image(photo, PHOTO_SIZE, PHOTO_SIZE, align=Align.LEFT) if photo is not None
            else para(narrative.PHOTO_PLACEHOLDER)
        )
    nodes.append(borderless_table(
        key_value_rows(demographic_pairs(ctx), size=theme.small_size),
        col_widths=(0.17, 0.33, 0.17, 0.33),
    ))

    # ── Mechanism and history of injury ──
    nodes.append(section_banner(narrative.MECHANISM_HEADING, theme))
    nodes.extend(_mechanism(ctx))

    # ── Pain & symptom illustration ──
    nodes.append(section_banner(narrative.PAIN_HEADING, theme))
    diagram = await _diagram(ctx)
    nodes.append(borderless_table(
        [(node_cell(diagram), node_cell(_legend_table(ctx)))],
        col_widths=(0.6, 0.4),
    ))

    nodes.append(PageBreak())
    return nodes
