"""Score calculators, inspection cycle, and end-to-end evaluation."""

from datetime import timedelta
from itertools import permutations

import pytest

from nspire.core.config import Settings
from nspire.models.enums import (
    AreaType, InspectionCycle, InspectionProgram, PassFail, ScoringModel, SeverityLevel,
)
from nspire.services.engine import ComplianceEngine
from nspire.services.scoring import (
    NspireWeightedScoreCalculator,
    ScoreCalculator,
    get_score_calculator,
    inspection_cycle,
    requires_full_survey,
    voucher_result,
)


class TestInspectionCycle:

    @pytest.mark.parametrize("score, cycle", [
        (100, InspectionCycle.THREE_YEARS),
        (90, InspectionCycle.THREE_YEARS),
        (89, InspectionCycle.TWO_YEARS),
        (80, InspectionCycle.TWO_YEARS),
        (79, InspectionCycle.ONE_YEAR),
        (60, InspectionCycle.ONE_YEAR),
        (59, InspectionCycle.FAILING),
        (0, InspectionCycle.FAILING),
    ])
    def test_thresholds(self, score, cycle):
        assert inspection_cycle(score) == cycle

    def test_full_survey(self):
        assert requires_full_survey(59)
        assert not requires_full_survey(60)


class TestBaselineScore:

    def test_no_findings(self, make_inspection):
        assert ScoreCalculator().score(make_inspection()) == 100

    @pytest.mark.parametrize("severity, expected", [
        ("lifeThreatening", 80),
        ("severe", 90),
        ("moderate", 95),
        ("low", 99),
        ("high", 100),
    ])
    def test_single_finding(self, make_area, make_inspection, severity, expected):
        inspection = make_inspection([make_area(AreaType.UNIT, [severity])])
        assert ScoreCalculator().score(inspection) == expected

    def test_floor_at_zero(self, make_area, make_inspection):
        inspection = make_inspection([make_area(AreaType.OUTSIDE, ["lifeThreatening"] * 6)])
        assert ScoreCalculator().score(inspection) == 0

    def test_adding_findings_never_raises_score(self, make_area, make_inspection):
        severities = ["low", "high", "moderate", "lifeThreatening", "severe", "low"] * 4
        previous = 100
        for n in range(len(severities) + 1):
            inspection = make_inspection([make_area(AreaType.INSIDE, severities[:n])])
            score = ScoreCalculator().score(inspection)
            assert 0 <= score <= previous
            previous = score

    def test_order_independent(self, make_area, make_inspection):
        areas = [
            make_area(AreaType.UNIT, ["low", "severe"]),
            make_area(AreaType.INSIDE, ["moderate"]),
            make_area(AreaType.OUTSIDE, ["lifeThreatening", "high"]),
        ]
        scores = {ScoreCalculator().score(make_inspection(list(p))) for p in permutations(areas)}
        assert scores == {64}

    def test_breakdown(self, make_area, make_inspection):
        inspection = make_inspection([
            make_area(AreaType.UNIT, ["low"]),
            make_area(AreaType.OUTSIDE, ["severe", "moderate"]),
        ])
        breakdown = ScoreCalculator().score_breakdown(inspection)
        assert breakdown.scoring_model == ScoringModel.BASELINE
        assert breakdown.deductions == {"unit": 1, "inside": 0, "outside": 15}
        assert breakdown.total_deduction == 16
        assert breakdown.score == 84

    def test_custom_weights(self, make_area, make_inspection):
        calculator = ScoreCalculator({SeverityLevel.LOW: 3})
        inspection = make_inspection([make_area(AreaType.UNIT, ["low", "moderate"])])
        assert calculator.score(inspection) == 92


class TestNspireWeightedScore:

    def test_unit_sample_divides_deduction(self, make_area, make_inspection):
        inspection = make_inspection([make_area(AreaType.UNIT, ["moderate"])], unit_sample=2)
        assert NspireWeightedScoreCalculator().score(inspection) == 97

    def test_area_weights(self, make_area, make_inspection):
        calculator = NspireWeightedScoreCalculator()
        for area_type, expected in [(AreaType.OUTSIDE, 88), (AreaType.INSIDE, 87), (AreaType.UNIT, 85)]:
            inspection = make_inspection([make_area(area_type, ["severe"])])
            assert calculator.score(inspection) == expected

    def test_failing_unit_caps_at_59(self, make_area, make_inspection):
        # 6 x 5.5 = 33 points of unit deductions, otherwise 67
        inspection = make_inspection([make_area(AreaType.UNIT, ["moderate"] * 6)])
        breakdown = NspireWeightedScoreCalculator().score_breakdown(inspection)
        assert breakdown.failing_unit_adjustment
        assert breakdown.score == 59

    def test_just_below_60_is_59(self, make_area, make_inspection):
        # 2 x 12.2 + 3 x 4.5 + 2.2 = 40.1 -> raw 59.9
        inspection = make_inspection([
            make_area(AreaType.OUTSIDE, ["severe", "severe", "moderate", "moderate", "moderate"]),
            make_area(AreaType.INSIDE, ["low"]),
        ])
        breakdown = NspireWeightedScoreCalculator().score_breakdown(inspection)
        assert not breakdown.failing_unit_adjustment
        assert breakdown.score == 59

    def test_unrecognized_deducts_nothing(self, make_area, make_inspection):
        inspection = make_inspection([make_area(AreaType.UNIT, ["high"])])
        assert NspireWeightedScoreCalculator().score(inspection) == 100

    def test_floor_at_zero(self, make_area, make_inspection):
        inspection = make_inspection([make_area(AreaType.UNIT, ["lifeThreatening"] * 3)])
        assert NspireWeightedScoreCalculator().score(inspection) == 0


def test_calculator_from_settings():
    assert type(get_score_calculator(Settings())) is ScoreCalculator
    weighted = get_score_calculator(Settings(scoring_model=ScoringModel.NSPIRE_WEIGHTED))
    assert isinstance(weighted, NspireWeightedScoreCalculator)
    custom = get_score_calculator(Settings(weight_low=2))
    assert custom.weights[SeverityLevel.LOW] == 2


class TestVoucherResult:

    def test_no_units(self, make_area, make_inspection):
        assert voucher_result(make_inspection([make_area(AreaType.OUTSIDE, ["severe"])])) is None

    def test_all_units_pass(self, make_area, make_inspection):
        inspection = make_inspection([make_area(AreaType.UNIT, ["low"]), make_area(AreaType.UNIT)])
        assert voucher_result(inspection) == PassFail.PASS

    def test_one_failing_unit(self, make_area, make_inspection):
        inspection = make_inspection([make_area(AreaType.UNIT, ["low"]), make_area(AreaType.UNIT, ["severe"])])
        assert voucher_result(inspection) == PassFail.FAIL


class TestEvaluateInspection:

    def test_single_low_unit_finding(self, engine, make_area, make_inspection):
        inspection = make_inspection([make_area(AreaType.UNIT, ["low"])])
        evaluation = engine.evaluate_inspection(inspection)
        assert evaluation.score == 99
        assert evaluation.cycle == InspectionCycle.THREE_YEARS
        assert evaluation.areas[0].pass_fail == PassFail.PASS
        assert evaluation.findings[0].repair_timeframe.label == "60 Days"

    def test_single_life_threatening_unit_finding(self, engine, make_area, make_inspection):
        inspection = make_inspection([make_area(AreaType.UNIT, ["lifeThreatening"])])
        evaluation = engine.evaluate_inspection(inspection)
        assert evaluation.score == 80
        assert evaluation.cycle == InspectionCycle.TWO_YEARS
        assert evaluation.areas[0].pass_fail == PassFail.FAIL
        assert evaluation.voucher_result == PassFail.FAIL
        assert evaluation.findings[0].repair_timeframe.label == "24 Hours"
        assert not evaluation.requires_full_survey

    def test_dispositions(self, engine, make_area, make_inspection):
        inspection = make_inspection([make_area(AreaType.INSIDE, ["severe", "high"])])
        evaluation = engine.evaluate_inspection(inspection)
        severe, legacy = evaluation.findings
        assert severe.recognized_severity
        assert severe.pass_fail is None
        assert severe.repair_due_date == inspection.date + severe.repair_timeframe.as_timedelta()
        assert not legacy.recognized_severity
        assert legacy.severity == "high"
        assert legacy.repair_timeframe.label == "30 Days"
        assert evaluation.areas[0].worst_severity == SeverityLevel.SEVERE

    def test_repeatable(self, engine, make_area, make_inspection):
        inspection = make_inspection([make_area(AreaType.UNIT, ["moderate", "low"])])
        assert engine.evaluate_inspection(inspection) == engine.evaluate_inspection(inspection)

    def test_weighted_engine(self, registry, make_area, make_inspection):
        engine = ComplianceEngine(registry, calculator=NspireWeightedScoreCalculator())
        inspection = make_inspection([make_area(AreaType.UNIT, ["lifeThreatening"])])
        evaluation = engine.evaluate_inspection(inspection)
        assert evaluation.score == 40
        assert evaluation.requires_full_survey
        assert evaluation.cycle == InspectionCycle.FAILING


class TestHcvRepairWindow:

    def test_hcv_program_uses_catalogue_window(self, engine, make_area, make_finding, make_inspection):
        area = make_area(AreaType.UNIT, id="u1")
        area.findings.append(make_finding("severe", deficiency_id="gfci_missing", area_id="u1"))
        inspection = make_inspection([area], program=InspectionProgram.HCV)
        disposition = engine.evaluate_inspection(inspection).findings[0]
        assert disposition.repair_due_date == inspection.date + timedelta(days=30)
        assert disposition.hcv_repair_due_date == inspection.date + timedelta(days=30)

    def test_standard_program_has_no_hcv_window(self, engine, make_area, make_finding, make_inspection):
        area = make_area(AreaType.UNIT, id="u1")
        area.findings.append(make_finding("severe", deficiency_id="gfci_missing", area_id="u1"))
        disposition = engine.evaluate_inspection(make_inspection([area])).findings[0]
        assert disposition.hcv_repair_due_date is None

    @pytest.mark.parametrize("deficiency_id", [None, "smoke_alarm_missing", "retired_id"])
    def test_no_hcv_window(self, engine, make_area, make_finding, make_inspection, deficiency_id):
        area = make_area(AreaType.UNIT, id="u1")
        area.findings.append(make_finding("lifeThreatening", deficiency_id=deficiency_id, area_id="u1"))
        inspection = make_inspection([area], program=InspectionProgram.HCV)
        assert engine.evaluate_inspection(inspection).findings[0].hcv_repair_due_date is None


@pytest.mark.parametrize("unit_sample", [None, 1, 3])
def test_weighted_score_never_rises(make_area, make_inspection, unit_sample):
    calculator = NspireWeightedScoreCalculator()
    severities = ["low", "high", "moderate", "severe", "lifeThreatening", "low", "moderate"] * 3
    for area_type in AreaType:
        previous = 100
        for n in range(len(severities) + 1):
            inspection = make_inspection([make_area(area_type, severities[:n])], unit_sample=unit_sample)
            score = calculator.score(inspection)
            assert 0 <= score <= previous
            previous = score
