"""Inspection report builder.

Areas are listed unit first, then inside, then outside; input order is
kept within each area type.
"""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable, Optional

from nspire.models.enums import AreaType, SeverityLevel
from nspire.schemas.inspection import Inspection, Property
from nspire.schemas.report import InspectionReport, ReportArea, ReportSummary
from nspire.services.severity import parse_severity

if TYPE_CHECKING:
    from nspire.services.engine import ComplianceEngine

logger = logging.getLogger(__name__)

AREA_ORDER = [AreaType.UNIT, AreaType.INSIDE, AreaType.OUTSIDE]

OTHER_CATEGORY = "other"


def build_report(
    engine: "ComplianceEngine",
    inspection: Inspection,
    property: Property,
    clock: Optional[Callable[[], datetime]] = None,
) -> InspectionReport:
    """Build the pre-inspection report for ``inspection`` at ``property``."""
    evaluation = engine.evaluate_inspection(inspection)
    statuses = {status.area_id: status for status in evaluation.areas}

    findings_by_area: dict[str, list] = {}
    for disposition in evaluation.findings:
        findings_by_area.setdefault(disposition.area_id, []).append(disposition)

    ordered_areas = sorted(inspection.areas, key=lambda a: AREA_ORDER.index(a.area_type))

    by_area_type = {area_type.value: 0 for area_type in AREA_ORDER}
    by_severity = {level.value: 0 for level in SeverityLevel}
    by_category: Counter = Counter()

    for area in ordered_areas:
        by_area_type[area.area_type.value] += len(area.findings)
        for finding in area.findings:
            level = parse_severity(finding.severity)
            if level is not None:
                by_severity[level.value] += 1
            key = finding.category if engine.registry.has_category(finding.category) else OTHER_CATEGORY
            by_category[key] += 1

    summary = ReportSummary(
        total_findings=sum(by_area_type.values()),
        by_area_type=by_area_type,
        by_severity=by_severity,
        by_category=dict(by_category),
    )

    report = InspectionReport(
        title=f"NSPIRE Pre-Inspection Report: {property.name}",
        generated_at=(clock or (lambda: datetime.now(timezone.utc)))(),
        property=property,
        inspection_id=inspection.id,
        inspection_date=inspection.date,
        inspector=inspection.inspector,
        score=evaluation.score,
        cycle=evaluation.cycle,
        requires_full_survey=evaluation.requires_full_survey,
        voucher_result=evaluation.voucher_result,
        areas=[
            ReportArea(
                area=area,
                status=statuses[area.id],
                findings=findings_by_area.get(area.id, []),
            )
            for area in ordered_areas
        ],
        summary=summary,
    )
    logger.info(
        f"[REPORT] Built report for inspection {inspection.id}: "
        f"{summary.total_findings} findings, score {report.score}"
    )
    return report
