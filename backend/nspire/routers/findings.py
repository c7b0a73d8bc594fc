"""Findings router - validate inspector input against the taxonomy."""

from fastapi import APIRouter, Depends

from nspire.core.exceptions import NspireError
from nspire.routers.deps import get_engine, to_http_error
from nspire.schemas.inspection import Finding, FindingCreate
from nspire.services.engine import ComplianceEngine

router = APIRouter(prefix="/findings", tags=["findings"])


@router.post("/validate", response_model=Finding)
async def validate_finding(
    data: FindingCreate,
    engine: ComplianceEngine = Depends(get_engine),
):
    """Validate and normalize a finding.

    Returns 422 with the error kind (missing_field, unknown_category,
    invalid_subcategory) for correctable input, 404 for an unknown
    catalogue id.
    """
    try:
        return engine.validate_finding(data)
    except NspireError as e:
        raise to_http_error(e)
