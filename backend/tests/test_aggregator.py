"""Area aggregation: worst severity, counts, and unit disposition."""

from itertools import permutations

from nspire.models.enums import NO_SEVERITY, AreaType, PassFail, SeverityLevel
from nspire.services.aggregator import (
    area_pass_fail,
    area_status,
    finding_count,
    severity_counts,
    worst_severity,
)


def test_empty_area(make_area):
    area = make_area(AreaType.UNIT)
    assert worst_severity(area.findings) == NO_SEVERITY
    assert finding_count(area.findings) == 0
    assert area_pass_fail(area) == PassFail.PASS


def test_worst_severity(make_area):
    area = make_area(AreaType.INSIDE, ["low", "severe", "moderate"])
    assert worst_severity(area.findings) == SeverityLevel.SEVERE


def test_worst_severity_ignores_unrecognized(make_area):
    assert worst_severity(make_area(severities=["high", "low"]).findings) == SeverityLevel.LOW
    assert worst_severity(make_area(severities=["high", "critical"]).findings) == NO_SEVERITY


def test_order_independent(make_finding):
    findings = [make_finding(s) for s in ("low", "lifeThreatening", "high", "moderate")]
    results = {worst_severity(list(p)) for p in permutations(findings)}
    assert results == {SeverityLevel.LIFE_THREATENING}


def test_severity_counts(make_area):
    area = make_area(severities=["low", "low", "severe", "high"])
    counts = severity_counts(area.findings)
    assert counts == {
        SeverityLevel.LIFE_THREATENING: 0,
        SeverityLevel.SEVERE: 1,
        SeverityLevel.MODERATE: 0,
        SeverityLevel.LOW: 2,
    }
    assert finding_count(area.findings) == 4


class TestAreaPassFail:

    def test_low_only_passes(self, make_area):
        assert area_pass_fail(make_area(severities=["low", "low"])) == PassFail.PASS

    def test_any_failing_finding_fails(self, make_area):
        assert area_pass_fail(make_area(severities=["low", "moderate"])) == PassFail.FAIL

    def test_unrecognized_fails(self, make_area):
        assert area_pass_fail(make_area(severities=["high"])) == PassFail.FAIL

    def test_not_applicable_to_common_areas(self, make_area):
        assert area_pass_fail(make_area(AreaType.OUTSIDE, ["lifeThreatening"])) is None


def test_area_status(make_area):
    area = make_area(AreaType.UNIT, ["moderate", "low"], name="Unit 101", type="2BR")
    status = area_status(area)
    assert status.area_id == area.id
    assert status.name == "Unit 101"
    assert status.type == "2BR"
    assert status.worst_severity == SeverityLevel.MODERATE
    assert status.finding_count == 2
    assert status.severity_counts["moderate"] == 1
    assert status.pass_fail == PassFail.FAIL


def test_worst_severity_follows_rank_order(make_finding):
    for stronger, weaker in [("lifeThreatening", "severe"), ("severe", "moderate"), ("moderate", "low")]:
        findings = [make_finding(weaker), make_finding("high"), make_finding(stronger)]
        assert worst_severity(findings) == SeverityLevel(stronger)
