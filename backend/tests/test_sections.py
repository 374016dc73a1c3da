"""Tests for the report section builders."""

import pytest

from app.report_engine import narrative
from app.report_engine.client_info import build_client_info, demographic_pairs
from app.report_engine.conclusions import build_conclusions
from app.report_engine.contents import build_contents
from app.report_engine.cover import build_cover
from app.report_engine.digital_library import build_digital_library
from app.report_engine.nodes import Border, Image, PageBreak, Paragraph, Table
from app.report_engine.reference_charts import build_reference_charts
from app.report_engine.referral import (
    build_referral,
    clean_question,
    parse_pdc_answer,
    percent_of_norm,
)


# ──────────────────────────────────────────────────────────────
# HELPERS
# ──────────────────────────────────────────────────────────────

def walk(nodes):
    """Yield every node, descending into table cells."""
    for node in nodes:
        yield node
        if isinstance(node, Table):
            for row in node.rows:
                for cell in row:
                    yield from walk(cell.content)


def all_text(nodes) -> list[str]:
    return [n.text for n in walk(nodes) if isinstance(n, Paragraph)]


def images(nodes) -> list[Image]:
    return [n for n in walk(nodes) if isinstance(n, Image)]


def tables(nodes) -> list[Table]:
    return [n for n in nodes if isinstance(n, Table)]


# ──────────────────────────────────────────────────────────────
# COVER
# ──────────────────────────────────────────────────────────────

class TestCover:
    @pytest.mark.asyncio
    async def test_no_logo_no_image(self, make_context, minimal_payload, image_host):
        nodes = await build_cover(make_context(minimal_payload))
        assert images(nodes) == []
        assert image_host.requests == []
        assert isinstance(nodes[-1], PageBreak)

    @pytest.mark.asyncio
    async def test_failed_logo_silently_omitted(self, make_context, minimal_payload):
        minimal_payload["clientProfileData"] = {"logo": "https://img.test/missing/logo.png"}
        nodes = await build_cover(make_context(minimal_payload))
        assert images(nodes) == []
        assert narrative.IMAGE_PLACEHOLDER not in all_text(nodes)

    @pytest.mark.asyncio
    async def test_logo_and_identity(self, make_context, full_payload):
        nodes = await build_cover(make_context(full_payload))
        assert len(images(nodes)) == 1
        text = all_text(nodes)
        assert "Adam, Keith" in text
        assert "65712" in text
        assert "11/03/2011" in text
        assert narrative.CONFIDENTIAL_NOTICE in text
        assert "MedSource" in text

    @pytest.mark.asyncio
    async def test_identity_grid_borderless(self, make_context, minimal_payload):
        nodes = await build_cover(make_context(minimal_payload))
        (grid,) = tables(nodes)
        assert grid.border is Border.NONE
        assert len(grid.rows) == 3


# ──────────────────────────────────────────────────────────────
# TABLE OF CONTENTS
# ──────────────────────────────────────────────────────────────

class TestContents:
    def test_fixed_outline_with_left_rule(self, make_context, minimal_payload):
        nodes = build_contents(make_context(minimal_payload))
        (outline,) = tables(nodes)
        assert outline.border is Border.LEFT_RULE
        text = all_text(nodes)
        for entry, _ in narrative.CONTENTS_OUTLINE:
            assert entry in text
        assert isinstance(nodes[-1], PageBreak)

    def test_test_data_entries_indented_further(self, make_context, minimal_payload):
        nodes = build_contents(make_context(minimal_payload))
        paras = {p.text: p for p in walk(nodes) if isinstance(p, Paragraph)}
        assert paras["◦ Extremity Strength"].indent > paras["Test Data:"].indent

    def test_independent_of_record(self, make_context, minimal_payload, full_payload):
        assert (all_text(build_contents(make_context(minimal_payload)))
                == all_text(build_contents(make_context(full_payload))))


# ──────────────────────────────────────────────────────────────
# CLIENT INFORMATION
# ──────────────────────────────────────────────────────────────

class TestClientInfo:
    @pytest.mark.asyncio
    async def test_logo_fetched_once_across_sections(self, make_context, full_payload, image_host):
        ctx = make_context(full_payload)
        await build_cover(ctx)
        await build_client_info(ctx)
        assert image_host.requests.count("https://img.test/ok/logo.png") == 1

    @pytest.mark.asyncio
    async def test_demographics_default_na(self, make_context, minimal_payload):
        ctx = make_context(minimal_payload)
        pairs = demographic_pairs(ctx)
        assert pairs[0][:2] == ("Name", "Jane Doe")
        assert ("Employer", narrative.NOT_AVAILABLE) == pairs[5][:2]

    def test_dob_with_age(self, make_context, full_payload):
        pairs = demographic_pairs(make_context(full_payload))
        assert pairs[1][3] == "1983-12-01 (27)"
        assert pairs[3][3] == "71 in"
        assert pairs[4][1] == "Selector"

    @pytest.mark.asyncio
    async def test_diagram_placeholder(self, make_context, minimal_payload):
        nodes = await build_client_info(make_context(minimal_payload))
        assert narrative.DIAGRAM_PLACEHOLDER in all_text(nodes)
        assert narrative.NO_INJURY_HISTORY in all_text(nodes)

    @pytest.mark.asyncio
    async def test_diagram_with_markers(self, make_context, full_payload):
        nodes = await build_client_info(make_context(full_payload))
        # logo + diagram
        assert len(images(nodes)) == 2
        assert narrative.DIAGRAM_PLACEHOLDER not in all_text(nodes)

    @pytest.mark.asyncio
    async def test_legend_rows(self, make_context, minimal_payload):
        nodes = await build_client_info(make_context(minimal_payload))
        legend = next(t for t in walk(nodes)
                      if isinstance(t, Table) and t.rows[0][0].text == "Area of Primary Concern")
        assert len(legend.rows) == len(narrative.PAIN_LEGEND)
        assert legend.border is Border.GRID
        assert legend.column_count == 1

    @pytest.mark.asyncio
    async def test_injury_history_table(self, make_context, full_payload):
        nodes = await build_client_info(make_context(full_payload))
        assert "Lifting strain, lower back." in all_text(nodes)
        assert isinstance(nodes[-1], PageBreak)


# ──────────────────────────────────────────────────────────────
# REFERRAL QUESTIONS
# ──────────────────────────────────────────────────────────────

class TestReferralHelpers:
    @pytest.mark.parametrize("raw,expected", [
        ("6a) What are the limitations?", "What are the limitations?"),
        ("6b What next?", "What next?"),
        ("12) Done", "Done"),
        ("No numbering", "No numbering"),
    ])
    def test_clean_question(self, raw, expected):
        assert clean_question(raw) == expected

    def test_percent_of_norm(self):
        assert percent_of_norm("49 deg", "60 deg") == "82%"
        assert percent_of_norm("28", "25") == "112%"
        assert percent_of_norm("10", "") == ""

    def test_parse_pdc_answer(self):
        assert parse_pdc_answer("PDC:Medium|Full duties") == ("Medium", "Full duties")
        assert parse_pdc_answer("PDC: Light") == ("Light", "")
        assert parse_pdc_answer("Medium") is None


class TestReferral:
    @pytest.mark.asyncio
    async def test_conclusion_questions_skipped(self, make_context, full_payload):
        nodes = await build_referral(make_context(full_payload))
        text = all_text(nodes)
        assert "What are the present limitations?" in text
        assert "Conclusion" not in text
        assert "Client may return to full duties." not in text

    @pytest.mark.asyncio
    async def test_measurement_table(self, make_context, full_payload):
        nodes = await build_referral(make_context(full_payload))
        table = next(t for t in tables(nodes) if t.border is Border.GRID)
        assert [c.text for c in table.rows[0]] == narrative.MEASUREMENT_HEADERS
        assert [c.text for c in table.rows[1]] == ["Lumbar Flexion", "49 deg", "Yes", "60 deg", "82%"]
        assert table.rows[2][4].text == "112%"

    @pytest.mark.asyncio
    async def test_pdc_answer_rendered(self, make_context, full_payload):
        nodes = await build_referral(make_context(full_payload))
        text = all_text(nodes)
        title, description = narrative.PDC_LEVELS["Medium"]
        assert title in text
        assert description in text
        assert "In line with full return to duties." in text

    @pytest.mark.asyncio
    async def test_failed_image_keeps_its_slot(self, make_context, full_payload):
        nodes = await build_referral(make_context(full_payload))
        strip = next(t for t in tables(nodes) if t.border is Border.NONE)
        (row,) = strip.rows
        assert len(row) == 3
        assert isinstance(row[0].content[0], Image)
        assert row[1].text == narrative.IMAGE_PLACEHOLDER
        assert isinstance(row[2].content[0], Image)

    @pytest.mark.asyncio
    async def test_no_questions_placeholder(self, make_context, minimal_payload):
        nodes = await build_referral(make_context(minimal_payload))
        assert narrative.NO_REFERRAL_QUESTIONS in all_text(nodes)
        assert isinstance(nodes[-1], PageBreak)


# ──────────────────────────────────────────────────────────────
# CONCLUSIONS
# ──────────────────────────────────────────────────────────────

class TestConclusions:
    def test_record_and_routed_answers(self, make_context, full_payload):
        text = all_text(build_conclusions(make_context(full_payload)))
        assert "Client was consistent in performance." in text
        assert "Client may return to full duties." in text
        assert "Ray Gagne, EET, CFE" in text
        assert "Date: 11/03/2011" in text

    def test_placeholder_when_empty(self, make_context, minimal_payload):
        nodes = build_conclusions(make_context(minimal_payload))
        assert narrative.NO_CONCLUSIONS in all_text(nodes)
        assert narrative.SIGNATURE_RULE in all_text(nodes)
        assert isinstance(nodes[-1], PageBreak)


# ──────────────────────────────────────────────────────────────
# REFERENCE CHARTS
# ──────────────────────────────────────────────────────────────

class TestReferenceCharts:
    def test_static_tables(self, make_context, minimal_payload):
        nodes = build_reference_charts(make_context(minimal_payload))
        rpe, pdc, energy, end_points = tables(nodes)
        assert len(rpe.rows) == 16
        assert [c.text for c in rpe.rows[-1]] == ["maximal exertion", "20", "164", "193", "235"]
        assert len(pdc.rows) == 6
        assert energy.rows[1][1].text == "< 1.7 Kcal/min"
        assert [r[0].text for r in end_points.rows[1:]] == ["Psychophysical", "Physiological", "Safety"]

    def test_header_rows_shaded(self, make_context, minimal_payload):
        ctx = make_context(minimal_payload)
        for table in tables(build_reference_charts(ctx)):
            assert all(c.shading == ctx.theme.highlight_fill for c in table.rows[0])
            assert all(c.shading is None for row in table.rows[1:] for c in row)

    def test_independent_of_record(self, make_context, minimal_payload, full_payload):
        assert (all_text(build_reference_charts(make_context(minimal_payload)))
                == all_text(build_reference_charts(make_context(full_payload))))


# ──────────────────────────────────────────────────────────────
# DIGITAL LIBRARY
# ──────────────────────────────────────────────────────────────

class TestDigitalLibrary:
    @pytest.mark.asyncio
    async def test_grid_padding(self, make_context, full_payload):
        nodes = await build_digital_library(make_context(full_payload))
        (grid,) = tables(nodes)
        assert len(grid.rows) == 4
        assert all(len(r) == 6 for r in grid.rows)
        last = grid.rows[-1]
        assert [c.content == () for c in last] == [False, False, True, True, True, True]
        assert not isinstance(nodes[-1], PageBreak)

    @pytest.mark.asyncio
    async def test_exact_fill(self, make_context, full_payload):
        full_payload["digitalLibrary"] = [
            {"name": f"IMG{n}", "url": f"https://img.test/ok/{n}.png"} for n in range(24)
        ]
        (grid,) = tables(await build_digital_library(make_context(full_payload)))
        assert len(grid.rows) == 4
        assert all(c.content for row in grid.rows for c in row)

    @pytest.mark.asyncio
    async def test_missing_image_placeholder(self, make_context, minimal_payload):
        minimal_payload["digitalLibrary"] = [
            {"name": "a.jpg", "url": "https://img.test/ok/a.png"},
            {"name": "b.jpg", "url": "https://img.test/missing/b.png"},
        ]
        nodes = await build_digital_library(make_context(minimal_payload))
        text = all_text(nodes)
        assert narrative.IMAGE_MISSING in text
        assert "b.jpg" in text
        assert len(images(nodes)) == 1

    @pytest.mark.asyncio
    async def test_empty_library(self, make_context, minimal_payload):
        nodes = await build_digital_library(make_context(minimal_payload))
        assert narrative.NO_IMAGES in all_text(nodes)
        assert tables(nodes) == []
