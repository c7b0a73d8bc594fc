"""Domain enumerations for the NSPIRE compliance engine."""

from nspire.models.enums import (
    NO_SEVERITY,
    AreaType,
    FindingStatus,
    HcvRating,
    InspectionCycle,
    InspectionProgram,
    PassFail,
    ScoringModel,
    SeverityLevel,
    TimeUnit,
)

__all__ = [
    "NO_SEVERITY",
    "AreaType",
    "FindingStatus",
    "HcvRating",
    "InspectionCycle",
    "InspectionProgram",
    "PassFail",
    "ScoringModel",
    "SeverityLevel",
    "TimeUnit",
]
