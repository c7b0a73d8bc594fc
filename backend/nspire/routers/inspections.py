"""Inspections router - stateless scoring and reporting.

The caller posts a fully populated inspection; nothing is stored.
"""

import io

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from nspire.routers.deps import get_engine
from nspire.schemas.evaluation import InspectionEvaluation
from nspire.schemas.inspection import Inspection
from nspire.schemas.report import InspectionReport, ReportRequest
from nspire.services.engine import ComplianceEngine
from nspire.services.pdf_generator import get_pdf_generator

router = APIRouter(prefix="/inspections", tags=["inspections"])


@router.post("/evaluate", response_model=InspectionEvaluation)
async def evaluate_inspection(
    inspection: Inspection,
    engine: ComplianceEngine = Depends(get_engine),
):
    """Score, cycle, per-area status, and per-finding dispositions."""
    return engine.evaluate_inspection(inspection)


@router.post("/report", response_model=InspectionReport)
async def inspection_report(
    data: ReportRequest,
    engine: ComplianceEngine = Depends(get_engine),
):
    """Pre-inspection report as JSON."""
    return engine.build_report(data.inspection, data.property)


@router.post("/report.pdf")
async def inspection_report_pdf(
    data: ReportRequest,
    engine: ComplianceEngine = Depends(get_engine),
):
    """Pre-inspection report as a PDF download."""
    report = engine.build_report(data.inspection, data.property)
    pdf_bytes = get_pdf_generator().generate_inspection_report(report)

    filename = f"nspire_report_{data.inspection.id}.pdf"
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
