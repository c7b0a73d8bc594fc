"""Services for the NSPIRE compliance engine."""

from nspire.services.taxonomy import TaxonomyRegistry, load_default_registry
from nspire.services.classifier import FindingClassifier
from nspire.services.scoring import (
    ScoreCalculator,
    NspireWeightedScoreCalculator,
    get_score_calculator,
)
from nspire.services.engine import ComplianceEngine
from nspire.services.report import build_report
from nspire.services.pdf_generator import PDFGenerator, get_pdf_generator

__all__ = [
    "TaxonomyRegistry",
    "load_default_registry",
    "FindingClassifier",
    "ScoreCalculator",
    "NspireWeightedScoreCalculator",
    "get_score_calculator",
    "ComplianceEngine",
    "build_report",
    "PDFGenerator",
    "get_pdf_generator",
]
