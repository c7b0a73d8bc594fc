"""Severity Resolver - repair timeframes and unit pass/fail disposition.

Both rule tables are defined once here and shared by every caller.

Unrecognized severities (legacy spellings in historical data) are never
an error. They fall back to a 30-day timeframe, but to "Fail" for unit
disposition.
"""

from datetime import datetime
from typing import Any, Optional, Union

from nspire.models.enums import AreaType, PassFail, SeverityLevel, TimeUnit
from nspire.schemas.evaluation import RepairTimeframe, SeverityRule

HOURS_24 = RepairTimeframe(amount=24, unit=TimeUnit.HOURS)
DAYS_30 = RepairTimeframe(amount=30, unit=TimeUnit.DAYS)
DAYS_60 = RepairTimeframe(amount=60, unit=TimeUnit.DAYS)

# (unit areas, inside/outside areas)
REPAIR_TIMEFRAMES: dict[SeverityLevel, tuple[RepairTimeframe, RepairTimeframe]] = {
    SeverityLevel.LIFE_THREATENING: (HOURS_24, HOURS_24),
    SeverityLevel.SEVERE: (DAYS_30, HOURS_24),
    SeverityLevel.MODERATE: (DAYS_30, DAYS_30),
    SeverityLevel.LOW: (DAYS_60, DAYS_60),
}
UNRECOGNIZED_TIMEFRAME = DAYS_30

UNIT_PASS_FAIL: dict[SeverityLevel, PassFail] = {
    SeverityLevel.LIFE_THREATENING: PassFail.FAIL,
    SeverityLevel.SEVERE: PassFail.FAIL,
    SeverityLevel.MODERATE: PassFail.FAIL,
    SeverityLevel.LOW: PassFail.PASS,
}
UNRECOGNIZED_PASS_FAIL = PassFail.FAIL

SEVERITY_LABELS: dict[SeverityLevel, str] = {
    SeverityLevel.LIFE_THREATENING: "Life Threatening",
    SeverityLevel.SEVERE: "Severe",
    SeverityLevel.MODERATE: "Moderate",
    SeverityLevel.LOW: "Low",
}
UNRECOGNIZED_LABEL = "Moderate"


def parse_severity(value: Any) -> Optional[SeverityLevel]:
    """Return the SeverityLevel for ``value``, or None when unrecognized."""
    if isinstance(value, SeverityLevel):
        return value
    try:
        return SeverityLevel(value)
    except (ValueError, TypeError):
        return None


def severity_rank(value: Any) -> int:
    """Ordinal for worst-case comparison; unrecognized values rank 0."""
    level = parse_severity(value)
    return level.rank if level else 0


def _is_unit(area_type: Union[AreaType, str]) -> bool:
    return area_type == AreaType.UNIT


def repair_timeframe(
    severity: Union[SeverityLevel, str],
    area_type: Union[AreaType, str],
) -> RepairTimeframe:
    """Regulatory repair deadline for a severity in an area type."""
    level = parse_severity(severity)
    if level is None:
        return UNRECOGNIZED_TIMEFRAME
    unit_tf, common_tf = REPAIR_TIMEFRAMES[level]
    return unit_tf if _is_unit(area_type) else common_tf


def pass_fail_status(
    severity: Union[SeverityLevel, str],
    area_type: Union[AreaType, str],
) -> Optional[PassFail]:
    """Unit disposition; None for non-unit areas."""
    if not _is_unit(area_type):
        return None
    level = parse_severity(severity)
    if level is None:
        return UNRECOGNIZED_PASS_FAIL
    return UNIT_PASS_FAIL[level]


def repair_due_date(
    severity: Union[SeverityLevel, str],
    area_type: Union[AreaType, str],
    inspected_at: datetime,
) -> datetime:
    """Date by which the finding must be corrected."""
    return inspected_at + repair_timeframe(severity, area_type).as_timedelta()


def severity_label(severity: Union[SeverityLevel, str]) -> str:
    level = parse_severity(severity)
    return SEVERITY_LABELS[level] if level else UNRECOGNIZED_LABEL


def resolve_rule(
    severity: Union[SeverityLevel, str],
    area_type: Union[AreaType, str],
) -> SeverityRule:
    """All rules for one severity/area-type pair."""
    return SeverityRule(
        severity=severity.value if isinstance(severity, SeverityLevel) else str(severity),
        area_type=area_type.value if isinstance(area_type, AreaType) else str(area_type),
        label=severity_label(severity),
        repair_timeframe=repair_timeframe(severity, area_type),
        pass_fail=pass_fail_status(severity, area_type),
    )
