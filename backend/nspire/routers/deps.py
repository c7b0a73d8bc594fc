"""Request dependencies.

The registry and engine are built once in the application lifespan and
stored on ``app.state``; handlers receive them through ``Depends``.
"""

from fastapi import HTTPException, Request, status

from nspire.core.exceptions import NspireError, NotFoundError
from nspire.services.engine import ComplianceEngine
from nspire.services.taxonomy import TaxonomyRegistry


def get_engine(request: Request) -> ComplianceEngine:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Compliance engine not initialized",
        )
    return engine


def get_registry(request: Request) -> TaxonomyRegistry:
    return get_engine(request).registry


def to_http_error(exc: NspireError) -> HTTPException:
    """Translate an engine error into an HTTP error."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.to_dict())
    return HTTPException(status_code=422, detail=exc.to_dict())
