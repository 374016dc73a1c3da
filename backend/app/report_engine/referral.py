"""
Section 4: referral questions.

Each question renders as a bold prompt, an optional measured-vs-norm table,
the evaluator's answer and a strip of illustrative images.  Images for all
questions are fetched concurrently; a failed image gets its own placeholder
and never shifts the others.

Questions that mention "conclusion" are answered in the Conclusions
section instead.
"""

from __future__ import annotations

import asyncio
import re
from typing import Optional

from app.models.schemas import Measurement, ReferralQuestion
from app.models.trials import fmt
from app.report_engine import narrative
from app.report_engine.context import BuildContext
from app.report_engine.nodes import Align, Image, PageBreak, SectionResult
from app.report_engine.tables import (
    borderless_table, data_row, grid_rows, grid_table, header_row,
    leading_number, node_cell, para, section_banner,
)

_NUMBERING = re.compile(r"^\d+[a-zA-Z]?\)?\s*")

STRIP_IMAGE_SIZE = 100
STRIP_COLUMNS = 4


def clean_question(text: str) -> str:
    """Strip leading numbering such as ``6a)`` or ``3``."""
    return _NUMBERING.sub("", (text or "").strip()).strip()


def is_conclusion_question(question: ReferralQuestion) -> bool:
    return "conclusion" in clean_question(question.question).lower()


def percent_of_norm(value: str, norm: str) -> str:
    """``"49 deg"`` of ``"60 deg"`` → ``"82%"``; blank when the norm is 0."""
    measured, expected = leading_number(value), leading_number(norm)
    if not expected:
        return ""
    return f"{fmt(round(measured / expected * 100))}%"


def _valid_text(passed: Optional[bool]) -> str:
    if passed is None:
        return ""
    return "Yes" if passed else "No"


def _measurement_table(ctx: BuildContext, measurements: list[Measurement]):
    size = ctx.theme.small_size
    rows = [header_row(narrative.MEASUREMENT_HEADERS, ctx.theme, size=size)]
    for m in measurements:
        rows.append(data_row(
            [m.area, m.value, _valid_text(m.passed), m.norm, percent_of_norm(m.value, m.norm)],
            size=size,
        ))
    return grid_table(rows, col_widths=(0.32, 0.17, 0.13, 0.17, 0.21))


def parse_pdc_answer(answer: str) -> Optional[tuple[str, str]]:
    """``"PDC:Medium|comments"`` → ``("Medium", "comments")``; None otherwise."""
    if not answer.startswith("PDC:"):
        return None
    level, _, comment = answer[len("PDC:"):].partition("|")
    return level.strip(), comment.strip()


def _answer_nodes(ctx: BuildContext, answer: str) -> SectionResult:
    theme = ctx.theme
    pdc = parse_pdc_answer(answer)
    if pdc is None or pdc[0] not in narrative.PDC_LEVELS:
        return [para(answer or narrative.NO_ANSWER, space_after=6)]

    level, comment = pdc
    title, description = narrative.PDC_LEVELS[level]
    nodes: SectionResult = [
        para(title, bold=True, color=theme.accent, space_before=6, space_after=3),
        para(description, space_after=6),
    ]
    if comment:
        nodes.append(para(comment, space_after=6))
    nodes.append(para(narrative.PDC_CHART_REFERENCE, italic=True, size=theme.small_size))
    return nodes


def _image_strip(ctx: BuildContext, images: list[Optional[bytes]]):
    cells = []
    for data in images:
        if data is None:
            cells.append(node_cell(para(narrative.IMAGE_PLACEHOLDER, size=ctx.theme.small_size,
                                        align=Align.CENTER)))
        else:
            cells.append(node_cell(Image(data, STRIP_IMAGE_SIZE, STRIP_IMAGE_SIZE)))
    columns = min(len(cells), STRIP_COLUMNS)
    return borderless_table(grid_rows(cells, columns),
                            col_widths=tuple(1 / columns for _ in range(columns)))


async def build_referral(ctx: BuildContext) -> SectionResult:
    theme = ctx.theme
    questions = [q for q in ctx.record.referral_questions if not is_conclusion_question(q)]
    nodes: SectionResult = [section_banner(narrative.REFERRAL_HEADING, theme)]

    if not questions:
        nodes.append(para(narrative.NO_REFERRAL_QUESTIONS, italic=True))
        nodes.append(PageBreak())
        return nodes

    strips = await asyncio.gather(*(ctx.fetcher.fetch_all(q.images) for q in questions))

    for index, (question, images) in enumerate(zip(questions, strips), start=1):
        prompt = clean_question(question.question) or f"Question {index}"
        nodes.append(para(prompt, bold=True, color=theme.accent,
                          space_before=12, space_after=6))
        if question.measurements:
            nodes.append(_measurement_table(ctx, question.measurements))
        nodes.extend(_answer_nodes(ctx, question.answer.strip()))
        if question.note:
            nodes.append(para(question.note, italic=True, size=theme.small_size))
        if images:
            nodes.append(_image_strip(ctx, images))

    nodes.append(PageBreak())
    return nodes
