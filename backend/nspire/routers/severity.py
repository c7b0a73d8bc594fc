"""Severity router - repair timeframe and pass/fail lookup."""

from fastapi import APIRouter, Query

from nspire.models.enums import AreaType
from nspire.schemas.evaluation import SeverityRule
from nspire.services.severity import resolve_rule

router = APIRouter(prefix="/severity", tags=["severity"])


@router.get("/{severity}", response_model=SeverityRule)
async def get_severity_rule(
    severity: str,
    area_type: AreaType = Query(AreaType.UNIT),
):
    """Resolve the rules for a severity in an area type.

    Unrecognized severities resolve to the fallback rules, never 404.
    """
    return resolve_rule(severity, area_type)
