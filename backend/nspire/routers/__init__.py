"""API Routers for the NSPIRE compliance engine."""

from nspire.routers.taxonomy import router as taxonomy_router
from nspire.routers.severity import router as severity_router
from nspire.routers.findings import router as findings_router
from nspire.routers.inspections import router as inspections_router

__all__ = [
    "taxonomy_router",
    "severity_router",
    "findings_router",
    "inspections_router",
]
