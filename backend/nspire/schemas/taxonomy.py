"""Taxonomy reference data schemas."""

from typing import Optional

from pydantic import Field

from nspire.schemas.base import FrozenSchema
from nspire.models.enums import HcvRating, SeverityLevel, TimeUnit


class Category(FrozenSchema):
    """An inspectable category and its ordered subcategories."""

    key: str = Field(..., min_length=1)
    name: str
    subcategories: tuple[str, ...] = ()


class DeficiencyGroup(FrozenSchema):
    """Grouping of catalogued deficiencies (fire & life safety, kitchen, ...)."""

    key: str = Field(..., min_length=1)
    name: str


class DeficiencyCatalogEntry(FrozenSchema):
    """A known deficiency with its default severity and repair window."""

    id: str = Field(..., min_length=1)
    category: str
    description: str
    severity: SeverityLevel
    repair_due: int = Field(..., gt=0)
    repair_due_unit: TimeUnit = TimeUnit.DAYS
    hcv_rating: HcvRating
    hcv_repair_due: Optional[int] = Field(None, gt=0)  # days, when HCV differs


class TaxonomySummary(FrozenSchema):
    """Counts for the loaded taxonomy."""

    version: str
    category_count: int
    deficiency_group_count: int
    deficiency_count: int
