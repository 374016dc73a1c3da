from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Query
from fastapi.responses import Response

from app.report_engine.assembler import (
    ReportValidationError,
    generate_report_bytes,
    report_filename,
    validate_record,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post("/report")
async def create_report(
    payload: dict[str, Any] = Body(...),
    dry_run: bool = Query(False, description="Validate and echo the normalized record without rendering."),
):
    """Generate the evaluation report PDF for one completed record."""
    try:
        record = validate_record(payload)
    except ReportValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if dry_run:
        return {"dry_run": True, "record": record.model_dump(mode="json", by_alias=True)}

    generated_at = datetime.now(timezone.utc)
    pdf = await generate_report_bytes(record, generated_at=generated_at)
    filename = report_filename(record, generated_at)
    logger.info("Generated %s (%d bytes)", filename, len(pdf))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
