"""
Document assembler: validate → build eight sections in order → serialize.

The only data-driven hard failure is a malformed payload (``tests`` missing
or not a list, or a structurally invalid record).  It raises
``ReportValidationError`` before any image is fetched.  Every other problem
degrades to a placeholder inside the affected section.
"""

from __future__ import annotations

import inspect
import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional, Union

import httpx
from pydantic import ValidationError

from app.config import settings
from app.models.schemas import EvaluationRecord
from app.report_engine.client_info import build_client_info
from app.report_engine.conclusions import build_conclusions
from app.report_engine.contents import build_contents
from app.report_engine.context import BuildContext
from app.report_engine.cover import build_cover
from app.report_engine.digital_library import build_digital_library
from app.report_engine.nodes import ReportDocument
from app.report_engine.reference_charts import build_reference_charts
from app.report_engine.referral import build_referral
from app.report_engine.results import build_test_results
from app.report_engine.theme import DEFAULT_THEME, ReportTheme
from app.services.assets import AssetFetcher
from app.services.report import render_pdf

logger = logging.getLogger(__name__)

# Pipeline order. Every builder but the last ends with a PageBreak.
SECTION_BUILDERS = [
    build_cover,
    build_contents,
    build_client_info,
    build_referral,
    build_conclusions,
    build_test_results,
    build_reference_charts,
    build_digital_library,
]


class ReportValidationError(ValueError):
    """Top-level report input is malformed; no document is produced."""


def validate_record(payload: Union[EvaluationRecord, dict[str, Any]]) -> EvaluationRecord:
    """Check ``tests`` is a list, then validate the rest into a record."""
    if isinstance(payload, EvaluationRecord):
        return payload
    if not isinstance(payload, dict):
        raise ReportValidationError("Report payload must be a JSON object.")
    if not isinstance(payload.get("tests"), list):
        raise ReportValidationError("Invalid or missing 'tests' array.")
    try:
        return EvaluationRecord.model_validate(payload)
    except ValidationError as exc:
        raise ReportValidationError(str(exc)) from exc


async def build_document(
    payload: Union[EvaluationRecord, dict[str, Any]],
    *,
    theme: ReportTheme = DEFAULT_THEME,
    generated_at: Optional[datetime] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ReportDocument:
    """Run every section builder and return the concatenated node stream.

    ``client`` is handed to the per-build ``AssetFetcher``; pass one backed
    by ``httpx.MockTransport`` for deterministic builds.
    """
    record = validate_record(payload)
    generated_at = generated_at or datetime.now(timezone.utc)

    document = ReportDocument(
        title=settings.report_title,
        generated_at=generated_at,
        author=record.client_profile_data.signature_name,
    )
    async with AssetFetcher(client=client) as fetcher:
        ctx = BuildContext(
            record=record,
            theme=theme,
            fetcher=fetcher,
            generated_at=generated_at,
            title=settings.report_title,
            library_columns=settings.digital_library_columns,
        )
        for builder in SECTION_BUILDERS:
            section = builder(ctx)
            if inspect.isawaitable(section):
                section = await section
            logger.debug("%s produced %d nodes", builder.__name__, len(section))
            document.nodes.extend(section)

    logger.info("Assembled report for %r: %d nodes, %d page breaks",
                record.claimant_data.display_name, len(document.nodes),
                document.page_break_count)
    return document


async def generate_report_bytes(
    payload: Union[EvaluationRecord, dict[str, Any]],
    *,
    theme: ReportTheme = DEFAULT_THEME,
    generated_at: Optional[datetime] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> bytes:
    """Build the report and return it as PDF bytes."""
    document = await build_document(payload, theme=theme, generated_at=generated_at, client=client)
    return render_pdf(document, theme)


def report_filename(record: EvaluationRecord, generated_at: datetime) -> str:
    """``FCE_Report_<Name>_<YYYY-MM-DD>.pdf`` with non-alphanumerics as ``_``."""
    name = re.sub(r"[^A-Za-z0-9]", "_", record.claimant_data.display_name) or "Claimant"
    return f"FCE_Report_{name}_{generated_at.strftime('%Y-%m-%d')}.pdf"
