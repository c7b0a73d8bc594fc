"""NSPIRE Compliance Engine - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nspire import __version__
from nspire.core.config import get_settings
from nspire.core.env_validation import validate_environment
from nspire.routers import (
    taxonomy_router,
    severity_router,
    findings_router,
    inspections_router,
)
from nspire.services.engine import ComplianceEngine
from nspire.services.scoring import get_score_calculator
from nspire.services.taxonomy import load_default_registry

# Hard-fails (exit 1) on invalid configuration
validate_environment()

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: the taxonomy is loaded once and shared read-only
    registry = load_default_registry(settings.taxonomy_path)
    app.state.engine = ComplianceEngine(
        registry,
        calculator=get_score_calculator(settings),
    )
    logger.info(
        f"[STARTUP] Taxonomy {registry.version} loaded, "
        f"scoring model {settings.scoring_model.value}"
    )
    yield
    # Shutdown
    app.state.engine = None


app = FastAPI(
    title=settings.app_name,
    description="NSPIRE pre-inspection compliance engine. Deficiency taxonomy, finding validation, severity rules, and inspection scoring.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

logger.info(f"[STARTUP] CORS configured with origins: {settings.origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API v1 routers
app.include_router(taxonomy_router, prefix=settings.api_v1_prefix)
app.include_router(severity_router, prefix=settings.api_v1_prefix)
app.include_router(findings_router, prefix=settings.api_v1_prefix)
app.include_router(inspections_router, prefix=settings.api_v1_prefix)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": __version__,
        "docs": "/docs" if settings.debug else "Disabled in production",
    }
