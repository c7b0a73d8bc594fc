"""ComplianceEngine - the single entry point over registry, resolver,
classifier, aggregator, and score calculator.

Stateless apart from its injected collaborators: evaluating the same
inspection twice gives the same result.
"""

from datetime import datetime, timedelta
from typing import Callable, Optional

from nspire.core.exceptions import NotFoundError
from nspire.models.enums import InspectionProgram
from nspire.schemas.evaluation import AreaStatus, FindingDisposition, InspectionEvaluation
from nspire.schemas.inspection import Area, Finding, FindingCreate, Inspection, Property
from nspire.schemas.report import InspectionReport
from nspire.services.aggregator import area_status
from nspire.services.classifier import FindingClassifier
from nspire.services.report import build_report
from nspire.services.scoring import (
    ScoreCalculator, inspection_cycle, requires_full_survey, voucher_result,
)
from nspire.services.severity import (
    parse_severity, pass_fail_status, repair_due_date, repair_timeframe,
)
from nspire.services.taxonomy import TaxonomyRegistry


class ComplianceEngine:
    """NSPIRE compliance computations over in-memory inspection records."""

    def __init__(
        self,
        registry: TaxonomyRegistry,
        calculator: Optional[ScoreCalculator] = None,
        classifier: Optional[FindingClassifier] = None,
    ):
        self.registry = registry
        self.calculator = calculator or ScoreCalculator()
        self.classifier = classifier or FindingClassifier(registry)

    def validate_finding(self, candidate: FindingCreate) -> Finding:
        return self.classifier.validate(candidate)

    def evaluate_finding(
        self,
        finding: Finding,
        area: Area,
        inspected_at: datetime,
        program: InspectionProgram = InspectionProgram.STANDARD,
    ) -> FindingDisposition:
        """Repair timeframe, due date, and unit disposition for one finding.

        Under the HCV program, a finding seeded from a catalogue entry with
        its own HCV repair window also gets ``hcv_repair_due_date``.
        """
        severity = finding.severity
        level = parse_severity(severity)
        return FindingDisposition(
            finding_id=finding.id,
            area_id=area.id,
            severity=level.value if level else str(severity),
            recognized_severity=level is not None,
            repair_timeframe=repair_timeframe(severity, area.area_type),
            repair_due_date=repair_due_date(severity, area.area_type, inspected_at),
            hcv_repair_due_date=self._hcv_repair_due_date(finding, program, inspected_at),
            pass_fail=pass_fail_status(severity, area.area_type),
        )

    def _hcv_repair_due_date(
        self,
        finding: Finding,
        program: InspectionProgram,
        inspected_at: datetime,
    ) -> Optional[datetime]:
        if program != InspectionProgram.HCV or not finding.deficiency_id:
            return None
        try:
            entry = self.registry.find_deficiency(finding.deficiency_id)
        except NotFoundError:
            # Unknown ids carry no HCV window
            return None
        if entry.hcv_repair_due is None:
            return None
        return inspected_at + timedelta(days=entry.hcv_repair_due)

    def evaluate_area(self, area: Area) -> AreaStatus:
        return area_status(area)

    def evaluate_inspection(self, inspection: Inspection) -> InspectionEvaluation:
        breakdown = self.calculator.score_breakdown(inspection)
        findings = [
            self.evaluate_finding(finding, area, inspection.date, inspection.program)
            for area in inspection.areas
            for finding in area.findings
        ]
        return InspectionEvaluation(
            inspection_id=inspection.id,
            score=breakdown.score,
            cycle=inspection_cycle(breakdown.score),
            requires_full_survey=requires_full_survey(breakdown.score),
            voucher_result=voucher_result(inspection),
            breakdown=breakdown,
            areas=[self.evaluate_area(area) for area in inspection.areas],
            findings=findings,
        )

    def score(self, inspection: Inspection) -> int:
        return self.calculator.score(inspection)

    def build_report(
        self,
        inspection: Inspection,
        property: Property,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> InspectionReport:
        return build_report(self, inspection, property, clock=clock)
