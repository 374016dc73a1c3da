"""Section 5: conclusions and evaluator signature block."""

from __future__ import annotations

from app.report_engine import narrative
from app.report_engine.context import BuildContext
from app.report_engine.nodes import PageBreak, Paragraph, SectionResult, TextRun
from app.report_engine.referral import is_conclusion_question
from app.report_engine.tables import para, section_banner


def conclusion_paragraphs(ctx: BuildContext) -> list[str]:
    """Record conclusions followed by answers to conclusion-type referral questions."""
    texts = [t.strip() for t in ctx.record.conclusions if t and t.strip()]
    texts += [
        q.answer.strip() for q in ctx.record.referral_questions
        if is_conclusion_question(q) and q.answer.strip()
    ]
    return texts


def build_conclusions(ctx: BuildContext) -> SectionResult:
    theme = ctx.theme
    nodes: SectionResult = [section_banner(narrative.CONCLUSIONS_HEADING, theme)]

    texts = conclusion_paragraphs(ctx)
    if texts:
        nodes.extend(para(t, space_after=6) for t in texts)
    else:
        nodes.append(para(narrative.NO_CONCLUSIONS, italic=True))

    nodes.append(section_banner(narrative.SIGNATURE_HEADING, theme))
    nodes.append(Paragraph(runs=(TextRun(narrative.SIGNATURE_RULE, underline=True),),
                           space_before=24))
    nodes.append(para(f"Date: {ctx.evaluation_date_text}", size=theme.small_size))
    signer = ctx.record.client_profile_data.signature_name
    if signer:
        nodes.append(para(signer, size=theme.small_size))

    nodes.append(PageBreak())
    return nodes
