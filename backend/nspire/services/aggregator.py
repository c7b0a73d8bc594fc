"""Area Aggregator - folds an area's findings into a worst-case status."""

from collections import Counter
from typing import Iterable, Optional, Union

from nspire.models.enums import NO_SEVERITY, AreaType, PassFail, SeverityLevel
from nspire.schemas.evaluation import AreaStatus
from nspire.schemas.inspection import Area, Finding
from nspire.services.severity import parse_severity, pass_fail_status, severity_rank


def worst_severity(findings: Iterable[Finding]) -> Union[SeverityLevel, str]:
    """Highest recognized severity present, or "none".

    Rank alone decides; which finding carries it does not matter, so the
    result is the same for any ordering of ``findings``.
    """
    worst = max((f.severity for f in findings), key=severity_rank, default=None)
    if severity_rank(worst) == 0:
        return NO_SEVERITY
    return parse_severity(worst)


def finding_count(findings: Iterable[Finding]) -> int:
    return sum(1 for _ in findings)


def severity_counts(findings: Iterable[Finding]) -> dict[SeverityLevel, int]:
    """Findings per recognized severity (all four levels present)."""
    counts = Counter(parse_severity(f.severity) for f in findings)
    return {level: counts.get(level, 0) for level in SeverityLevel}


def area_pass_fail(area: Area) -> Optional[PassFail]:
    """Fail if any finding fails, Pass otherwise; None for non-unit areas."""
    if area.area_type != AreaType.UNIT:
        return None
    for finding in area.findings:
        if pass_fail_status(finding.severity, area.area_type) == PassFail.FAIL:
            return PassFail.FAIL
    return PassFail.PASS


def area_status(area: Area) -> AreaStatus:
    return AreaStatus(
        area_id=area.id,
        name=area.name,
        area_type=area.area_type,
        type=area.type,
        worst_severity=worst_severity(area.findings),
        finding_count=finding_count(area.findings),
        severity_counts={
            level.value: count for level, count in severity_counts(area.findings).items()
        },
        pass_fail=area_pass_fail(area),
    )
