"""Taxonomy router - read-only access to categories and the deficiency catalogue."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from nspire.core.exceptions import NotFoundError
from nspire.routers.deps import get_registry, to_http_error
from nspire.schemas.taxonomy import (
    Category, DeficiencyCatalogEntry, DeficiencyGroup, TaxonomySummary,
)
from nspire.services.taxonomy import TaxonomyRegistry

router = APIRouter(prefix="/taxonomy", tags=["taxonomy"])


@router.get("", response_model=TaxonomySummary)
async def get_taxonomy_summary(registry: TaxonomyRegistry = Depends(get_registry)):
    """Version and counts of the loaded taxonomy."""
    return registry.summary()


@router.get("/categories", response_model=list[Category])
async def list_categories(registry: TaxonomyRegistry = Depends(get_registry)):
    """List inspectable categories in order."""
    return list(registry.list_categories())


@router.get("/categories/{key}", response_model=Category)
async def get_category(key: str, registry: TaxonomyRegistry = Depends(get_registry)):
    """Get a category and its subcategories."""
    try:
        return registry.get_category(key)
    except NotFoundError as e:
        raise to_http_error(e)


@router.get("/groups", response_model=list[DeficiencyGroup])
async def list_deficiency_groups(registry: TaxonomyRegistry = Depends(get_registry)):
    """List deficiency groups of the catalogue."""
    return list(registry.list_deficiency_groups())


@router.get("/deficiencies", response_model=list[DeficiencyCatalogEntry])
async def list_deficiencies(
    category: Optional[str] = Query(None, description="Deficiency group key"),
    registry: TaxonomyRegistry = Depends(get_registry),
):
    """List catalogued deficiencies, optionally filtered by group."""
    try:
        return list(registry.list_deficiencies(category))
    except NotFoundError as e:
        raise to_http_error(e)


@router.get("/deficiencies/{deficiency_id}", response_model=DeficiencyCatalogEntry)
async def get_deficiency(deficiency_id: str, registry: TaxonomyRegistry = Depends(get_registry)):
    """Get a catalogued deficiency by id."""
    try:
        return registry.find_deficiency(deficiency_id)
    except NotFoundError as e:
        raise to_http_error(e)


@router.get("/life-threatening", response_model=list[DeficiencyCatalogEntry])
async def list_life_threatening(registry: TaxonomyRegistry = Depends(get_registry)):
    """HOTMA life-threatening deficiency list."""
    return list(registry.list_life_threatening())
