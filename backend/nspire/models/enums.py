"""Enumeration types for the NSPIRE compliance domain model."""

from enum import Enum


class SeverityLevel(str, Enum):
    """Severity of a finding, ordered lifeThreatening > severe > moderate > low."""
    LIFE_THREATENING = "lifeThreatening"
    SEVERE = "severe"
    MODERATE = "moderate"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Ordinal used for worst-case comparison (higher is worse)."""
        return _SEVERITY_RANKS[self]


_SEVERITY_RANKS = {
    SeverityLevel.LOW: 1,
    SeverityLevel.MODERATE: 2,
    SeverityLevel.SEVERE: 3,
    SeverityLevel.LIFE_THREATENING: 4,
}

# Worst-case indicator for an area with no rankable findings
NO_SEVERITY = "none"


class AreaType(str, Enum):
    """Kind of inspectable area."""
    UNIT = "unit"        # Dwelling unit
    INSIDE = "inside"    # Common inside areas (hallway, laundry, office)
    OUTSIDE = "outside"  # Site and building exterior


class PassFail(str, Enum):
    """Unit disposition for voucher programs."""
    PASS = "Pass"
    FAIL = "Fail"


class HcvRating(str, Enum):
    """Housing Choice Voucher rating attached to a catalogued deficiency."""
    PASS = "pass"
    FAIL = "fail"


class TimeUnit(str, Enum):
    """Unit of a repair timeframe."""
    HOURS = "hours"
    DAYS = "days"


class FindingStatus(str, Enum):
    """Repair status of a finding."""
    OPEN = "open"
    SCHEDULED = "scheduled"
    REPAIRED = "repaired"
    VERIFIED = "verified"


class InspectionProgram(str, Enum):
    """Program the inspection is performed under."""
    STANDARD = "standard"
    HCV = "hcv"


class InspectionCycle(str, Enum):
    """Recommended interval until the next required inspection."""
    THREE_YEARS = "3 Years"
    TWO_YEARS = "2 Years"
    ONE_YEAR = "1 Year"
    FAILING = "Failing"


class ScoringModel(str, Enum):
    """Score calculator selection."""
    BASELINE = "baseline"
    NSPIRE_WEIGHTED = "nspire_weighted"
