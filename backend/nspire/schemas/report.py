"""Inspection report schemas."""

from datetime import datetime
from typing import Optional

from nspire.schemas.base import BaseSchema
from nspire.schemas.evaluation import AreaStatus, FindingDisposition
from nspire.schemas.inspection import Area, Inspection, Property
from nspire.models.enums import InspectionCycle, PassFail


class ReportSummary(BaseSchema):
    """Finding counts for the report header."""

    total_findings: int = 0
    by_area_type: dict[str, int]
    by_severity: dict[str, int]
    by_category: dict[str, int]


class ReportArea(BaseSchema):
    """An area as it appears in the report."""

    area: Area
    status: AreaStatus
    findings: list[FindingDisposition]


class InspectionReport(BaseSchema):
    """Full pre-inspection report for one inspection."""

    title: str
    generated_at: datetime
    property: Property
    inspection_id: str
    inspection_date: datetime
    inspector: str
    score: int
    cycle: InspectionCycle
    requires_full_survey: bool
    voucher_result: Optional[PassFail] = None
    areas: list[ReportArea]
    summary: ReportSummary
    disclaimer: str = (
        "Score computed with provisional deduction weights. "
        "Validate against the authoritative NSPIRE scoring formula before relying on it for compliance."
    )


class ReportRequest(BaseSchema):
    """Body for report endpoints."""

    inspection: Inspection
    property: Property
