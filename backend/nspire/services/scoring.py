"""Score Calculator - folds all areas of an inspection into a compliance score.

Two models are available:

- baseline: start at 100 and deduct a fixed integer weight per finding.
  The default weights (20/10/5/1) are provisional and must be validated
  against the authoritative NSPIRE formula.
- nspire_weighted: area-weighted point table, each deduction divided by
  the unit sample, with the failing-unit cap at 59.

Both are order-independent sums over findings, deduct nothing for
unrecognized severities, and never raise the score when a finding is
added.
"""

import logging
import math
from typing import Optional

from nspire.core.config import Settings
from nspire.models.enums import (
    AreaType, InspectionCycle, PassFail, ScoringModel, SeverityLevel,
)
from nspire.schemas.evaluation import ScoreBreakdown
from nspire.schemas.inspection import Inspection
from nspire.services.aggregator import area_pass_fail
from nspire.services.severity import parse_severity

logger = logging.getLogger(__name__)

MAX_SCORE = 100
MIN_SCORE = 0

BASELINE_WEIGHTS: dict[SeverityLevel, int] = {
    SeverityLevel.LIFE_THREATENING: 20,
    SeverityLevel.SEVERE: 10,
    SeverityLevel.MODERATE: 5,
    SeverityLevel.LOW: 1,
}

# Points per finding by severity and area type (before unit-sample division)
NSPIRE_POINTS: dict[SeverityLevel, dict[AreaType, float]] = {
    SeverityLevel.LIFE_THREATENING: {
        AreaType.OUTSIDE: 49.60,
        AreaType.INSIDE: 54.50,
        AreaType.UNIT: 60.00,
    },
    SeverityLevel.SEVERE: {
        AreaType.OUTSIDE: 12.20,
        AreaType.INSIDE: 13.40,
        AreaType.UNIT: 14.80,
    },
    SeverityLevel.MODERATE: {
        AreaType.OUTSIDE: 4.50,
        AreaType.INSIDE: 5.00,
        AreaType.UNIT: 5.50,
    },
    SeverityLevel.LOW: {
        AreaType.OUTSIDE: 2.00,
        AreaType.INSIDE: 2.20,
        AreaType.UNIT: 2.40,
    },
}

# Unit deductions above this cap the score at FAILING_CAP
FAILING_UNIT_DEDUCTION = 30
FAILING_CAP = 59

CYCLE_THRESHOLDS: list[tuple[int, InspectionCycle]] = [
    (90, InspectionCycle.THREE_YEARS),
    (80, InspectionCycle.TWO_YEARS),
    (60, InspectionCycle.ONE_YEAR),
]
FULL_SURVEY_THRESHOLD = 60


def inspection_cycle(score: int) -> InspectionCycle:
    """Recommended inspection cycle for a score."""
    for threshold, cycle in CYCLE_THRESHOLDS:
        if score >= threshold:
            return cycle
    return InspectionCycle.FAILING


def requires_full_survey(score: int) -> bool:
    """A score below 60 requires a full post-inspection survey."""
    return score < FULL_SURVEY_THRESHOLD


def voucher_result(inspection: Inspection) -> Optional[PassFail]:
    """HCV disposition across unit areas; None when no unit was inspected."""
    unit_areas = [a for a in inspection.areas if a.area_type == AreaType.UNIT]
    if not unit_areas:
        return None
    if any(area_pass_fail(a) == PassFail.FAIL for a in unit_areas):
        return PassFail.FAIL
    return PassFail.PASS


def _clamp(score: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, score))


def _empty_deductions() -> dict[str, float]:
    return {area_type.value: 0 for area_type in AreaType}


class ScoreCalculator:
    """Baseline calculator: 100 minus a fixed weight per finding."""

    model = ScoringModel.BASELINE

    def __init__(self, weights: Optional[dict[SeverityLevel, int]] = None):
        self.weights = dict(BASELINE_WEIGHTS)
        if weights:
            self.weights.update(weights)

    def deduction(self, severity, area_type: AreaType) -> float:
        level = parse_severity(severity)
        if level is None:
            return 0
        return self.weights[level]

    def _deductions(self, inspection: Inspection) -> dict[str, float]:
        deductions = _empty_deductions()
        for area in inspection.areas:
            for finding in area.findings:
                deductions[area.area_type.value] += self.deduction(finding.severity, area.area_type)
        return deductions

    def score_breakdown(self, inspection: Inspection) -> ScoreBreakdown:
        deductions = self._deductions(inspection)
        total = sum(deductions.values())
        score = _clamp(MAX_SCORE - int(total))
        logger.debug(f"[SCORING] {inspection.id}: baseline deduction {total} -> {score}")
        return ScoreBreakdown(
            scoring_model=self.model,
            deductions=deductions,
            total_deduction=total,
            score=score,
        )

    def score(self, inspection: Inspection) -> int:
        """Compliance score in [0, 100]."""
        return self.score_breakdown(inspection).score


class NspireWeightedScoreCalculator(ScoreCalculator):
    """Area-weighted point deductions normalized by the unit sample."""

    model = ScoringModel.NSPIRE_WEIGHTED

    def __init__(self, points: Optional[dict[SeverityLevel, dict[AreaType, float]]] = None):
        super().__init__()
        self.points = points or NSPIRE_POINTS

    def deduction(self, severity, area_type: AreaType) -> float:
        level = parse_severity(severity)
        if level is None:
            return 0
        return self.points[level][area_type]

    def score_breakdown(self, inspection: Inspection) -> ScoreBreakdown:
        unit_sample = inspection.unit_sample or 1
        deductions = {
            area_type: points / unit_sample
            for area_type, points in self._deductions(inspection).items()
        }
        total = sum(deductions.values())

        raw = MAX_SCORE - total
        failing_unit = deductions[AreaType.UNIT.value] > FAILING_UNIT_DEDUCTION
        if failing_unit:
            raw = min(raw, FAILING_CAP)

        if FAILING_CAP < raw < FAILING_CAP + 1:
            score = FAILING_CAP
        else:
            score = math.floor(raw + 0.5)
        score = _clamp(score)

        logger.debug(
            f"[SCORING] {inspection.id}: weighted deduction {total:.2f} "
            f"(sample {unit_sample}, failing unit {failing_unit}) -> {score}"
        )
        return ScoreBreakdown(
            scoring_model=self.model,
            deductions={k: round(v, 2) for k, v in deductions.items()},
            total_deduction=round(total, 2),
            failing_unit_adjustment=failing_unit,
            score=score,
        )


def get_score_calculator(settings: Settings) -> ScoreCalculator:
    """Build the calculator selected by configuration."""
    if settings.scoring_model == ScoringModel.NSPIRE_WEIGHTED:
        return NspireWeightedScoreCalculator()
    return ScoreCalculator(settings.severity_weights)
