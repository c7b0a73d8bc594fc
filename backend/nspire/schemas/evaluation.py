"""Computed compliance values returned by the engine."""

from datetime import datetime, timedelta
from typing import Optional, Union

from pydantic import Field, computed_field

from nspire.schemas.base import BaseSchema, FrozenSchema
from nspire.models.enums import (
    AreaType, InspectionCycle, PassFail, ScoringModel, SeverityLevel, TimeUnit,
)


class RepairTimeframe(FrozenSchema):
    """Regulatory deadline for correcting a finding."""

    amount: int
    unit: TimeUnit

    def as_timedelta(self) -> timedelta:
        if self.unit == TimeUnit.HOURS:
            return timedelta(hours=self.amount)
        return timedelta(days=self.amount)

    @computed_field
    @property
    def label(self) -> str:
        """Display label, e.g. '24 Hours' or '30 Days'."""
        return f"{self.amount} {self.unit.value.capitalize()}"

    def __str__(self) -> str:
        return self.label


class SeverityRule(BaseSchema):
    """Resolved rules for one severity in one area type."""

    severity: str
    area_type: str
    label: str
    repair_timeframe: RepairTimeframe
    pass_fail: Optional[PassFail] = None


class FindingDisposition(BaseSchema):
    """Timeframe and disposition computed for a single finding."""

    finding_id: str
    area_id: str
    severity: str
    recognized_severity: bool
    repair_timeframe: RepairTimeframe
    repair_due_date: datetime
    hcv_repair_due_date: Optional[datetime] = None
    pass_fail: Optional[PassFail] = None


class AreaStatus(BaseSchema):
    """Per-area aggregate of findings."""

    area_id: str
    name: str
    area_type: AreaType
    type: str = ""
    worst_severity: Union[SeverityLevel, str] = Field(..., union_mode="left_to_right")
    finding_count: int
    severity_counts: dict[str, int]
    pass_fail: Optional[PassFail] = None


class ScoreBreakdown(BaseSchema):
    """Deductions per area type and the resulting score."""

    scoring_model: ScoringModel
    deductions: dict[str, float]
    total_deduction: float
    failing_unit_adjustment: bool = False
    score: int


class InspectionEvaluation(BaseSchema):
    """Inspection-level output handed to the presentation layer."""

    inspection_id: str
    score: int = Field(..., ge=0, le=100)
    cycle: InspectionCycle
    requires_full_survey: bool
    voucher_result: Optional[PassFail] = None
    breakdown: ScoreBreakdown
    areas: list[AreaStatus]
    findings: list[FindingDisposition]
