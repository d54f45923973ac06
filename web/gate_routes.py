"""
Quality Gate Routes - JSON API over the contract validator and gate

Thin HTTP surface for the collection stage and operator tooling. Every
route is a pure computation over the request body; nothing is persisted.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from core.contract import MalformedInputError, validate_record
from core.quality import RunSummary, evaluate_sampling_results
from reporting.pdf_generator import GateReportGenerator
from utils.config import Config


logger = logging.getLogger(__name__)


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter(prefix="/api", tags=["quality"])


class SamplingResultsRequest(BaseModel):
    """Sampling results document as produced by the collection stage."""

    runMeta: Optional[Any] = None
    # Left untyped; the gate falls back to defaults for a malformed block
    thresholds: Optional[Any] = None
    platforms: List[Any] = Field(default_factory=list)


def _evaluate(request_data: SamplingResultsRequest) -> RunSummary:
    thresholds = Config.load().quality_thresholds()
    try:
        return evaluate_sampling_results(request_data.model_dump(), thresholds)
    except MalformedInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


# =============================================================================
# Contract
# =============================================================================


@router.post("/contract/validate")
async def validate_contract(record: Any = Body(...)):
    """
    Validate one raw collection record.

    Returns the report JSON ({valid, counts, errors}). A body that is not
    a JSON object is rejected with 400.
    """
    try:
        report = validate_record(record)
    except MalformedInputError as e:
        logger.warning("Rejected malformed record: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return JSONResponse(report.to_dict())


# =============================================================================
# Quality Gate
# =============================================================================


@router.post("/quality/evaluate")
async def evaluate_quality(request_data: SamplingResultsRequest):
    """Apply the quality gate to a sampling run and return the run summary."""
    summary = _evaluate(request_data)
    return JSONResponse(summary.to_dict())


@router.post("/quality/report.pdf")
async def quality_report_pdf(request_data: SamplingResultsRequest):
    """Apply the quality gate and return the gate report as a PDF."""
    summary = _evaluate(request_data)
    pdf_bytes = GateReportGenerator().generate_to_buffer(summary)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'inline; filename="quality-gate.pdf"'},
    )
