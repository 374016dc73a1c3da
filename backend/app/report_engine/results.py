"""
Section 6: functional abilities determination and job match results.

One long table grouped by test category.  Each category is introduced by a
shaded row spanning all seven columns; a bold total row sums the Sit Time
and Stand Time columns by parsing the leading number of every data cell.
A consistency table (averages, CV, bilateral deficiency) follows when
bilateral trial data exists.
"""

from __future__ import annotations

from typing import Optional

from app.models.catalog import CATEGORY_ORDER, CatalogEntry, lookup_test
from app.models.trials import BilateralTrial, fmt
from app.report_engine import narrative
from app.report_engine.context import BuildContext
from app.report_engine.nodes import Cell, PageBreak, Paragraph, SectionResult, Table, TextRun
from app.report_engine.tables import (
    data_row, grid_table, header_row, leading_number, para, section_heading,
    spanning_row, text_cell,
)

COLUMNS = len(narrative.RESULTS_HEADERS)
COLUMN_WIDTHS = (0.24, 0.11, 0.21, 0.09, 0.09, 0.13, 0.13)
SIT_COL, STAND_COL = 3, 4


def _minutes(value: Optional[float]) -> str:
    return f"{fmt(value)} min" if value is not None else ""


def result_values(ctx: BuildContext, entry: CatalogEntry, trial) -> list[str]:
    """The seven column values for one selected test."""
    duration = entry.duration_min
    posture = entry.posture
    date = ctx.evaluation_date_text
    summary = demand = match = ""
    if trial is not None:
        if trial.duration_min is not None:
            duration = trial.duration_min
        posture = trial.posture or posture
        date = trial.date or date
        summary = trial.summary()
        demand, match = trial.job_demand, trial.job_match

    sit = _minutes(duration) if posture == "sit" else ""
    stand = _minutes(duration) if posture != "sit" else ""
    return [entry.name, date, summary, sit, stand, demand, match]


def group_by_category(ctx: BuildContext) -> list[tuple[str, list[CatalogEntry]]]:
    """Selected tests grouped in catalog category order; selection order within."""
    grouped: dict[str, list[CatalogEntry]] = {}
    seen = set()
    for test_id in ctx.record.tests:
        if test_id in seen:
            continue
        seen.add(test_id)
        entry = lookup_test(test_id)
        grouped.setdefault(entry.category, []).append(entry)
    return [(cat, grouped[cat]) for cat in CATEGORY_ORDER if cat in grouped]


def total_row(data_rows: list[tuple[Cell, ...]], fill: str, size: float) -> tuple[Cell, ...]:
    sit = sum(leading_number(row[SIT_COL].text) for row in data_rows)
    stand = sum(leading_number(row[STAND_COL].text) for row in data_rows)
    return (
        text_cell("Total", bold=True, background=fill, span=3, size=size),
        text_cell(f"{fmt(sit)} min", bold=True, background=fill, size=size),
        text_cell(f"{fmt(stand)} min", bold=True, background=fill, size=size),
        text_cell("", background=fill, size=size),
        text_cell("", background=fill, size=size),
    )


def results_table(ctx: BuildContext) -> Table:
    theme = ctx.theme
    size = theme.small_size
    rows = [header_row(narrative.RESULTS_HEADERS, theme, size=size)]
    data_rows = []
    for category, entries in group_by_category(ctx):
        rows.append(spanning_row(category, COLUMNS, theme.category_fill, size=size))
        for entry in entries:
            row = data_row(result_values(ctx, entry, ctx.record.trial_for(entry.test_id)), size=size)
            rows.append(row)
            data_rows.append(row)
    rows.append(total_row(data_rows, theme.total_fill, size))
    return grid_table(rows, col_widths=COLUMN_WIDTHS)


def consistency_table(ctx: BuildContext) -> Optional[Table]:
    theme = ctx.theme
    size = theme.small_size
    rows = []
    for _, entries in group_by_category(ctx):
        for entry in entries:
            trial = ctx.record.trial_for(entry.test_id)
            if not isinstance(trial, BilateralTrial) or not (trial.left or trial.right):
                continue
            rows.append(data_row([
                entry.name,
                fmt(trial.left_average), fmt(trial.left_cv),
                fmt(trial.right_average), fmt(trial.right_cv),
                fmt(trial.deficiency),
            ], size=size))
    if not rows:
        return None
    rows.insert(0, header_row(narrative.CONSISTENCY_HEADERS, theme, size=size))
    return grid_table(rows, col_widths=(0.3, 0.12, 0.12, 0.12, 0.12, 0.22))


def build_test_results(ctx: BuildContext) -> SectionResult:
    theme = ctx.theme
    nodes: SectionResult = [
        section_heading(narrative.RESULTS_HEADING, theme),
        para(narrative.RESULTS_SUBHEADING, bold=True, role="subheading", space_after=6),
    ]
    if not ctx.record.tests:
        nodes.append(para(narrative.NO_TESTS, italic=True))

    nodes.append(results_table(ctx))
    nodes.append(Paragraph(
        runs=(
            TextRun("Legend: ", bold=True, size=theme.small_size),
            TextRun(narrative.RESULTS_LEGEND, size=theme.small_size),
        ),
        space_before=8,
    ))

    consistency = consistency_table(ctx)
    if consistency is not None:
        nodes.append(para(narrative.CONSISTENCY_HEADING, bold=True, color=theme.accent,
                          space_before=12, space_after=6))
        nodes.append(consistency)

    nodes.append(PageBreak())
    return nodes
