"""Inspection, Area, Finding, and Property schemas.

These mirror the records kept by the persistence layer. The engine only
reads them; it never writes back.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from nspire.schemas.base import BaseSchema
from nspire.models.enums import (
    AreaType, FindingStatus, InspectionProgram, SeverityLevel,
)


class PhotoRef(BaseSchema):
    """Reference to a stored photo; the engine never loads the image."""

    id: Optional[str] = None
    url: Optional[str] = None
    path: Optional[str] = None
    caption: Optional[str] = None
    taken_at: Optional[datetime] = None


class Finding(BaseSchema):
    """A single recorded deficiency in one area.

    ``severity`` keeps legacy spellings verbatim; only the four recognized
    levels parse to ``SeverityLevel``.
    """

    id: str
    area_id: Optional[str] = None
    category: str
    subcategory: str
    deficiency: str
    deficiency_id: Optional[str] = None
    severity: Union[SeverityLevel, str] = Field(..., union_mode="left_to_right")
    notes: str = ""
    location: str = ""
    photos: list[PhotoRef] = Field(default_factory=list)
    status: Union[FindingStatus, str] = Field(FindingStatus.OPEN, union_mode="left_to_right")
    repair_due_date: Optional[datetime] = None
    created: datetime


class FindingCreate(BaseSchema):
    """Finding candidate as entered by the inspector (pre-validation)."""

    area_id: Optional[str] = None
    category: str = ""
    subcategory: str = ""
    deficiency: str = ""
    deficiency_id: Optional[str] = None
    severity: Optional[SeverityLevel] = None
    notes: str = ""
    location: str = ""
    photos: list[PhotoRef] = Field(default_factory=list)


class Area(BaseSchema):
    """An inspected area (unit, inside common area, or outside area)."""

    id: str
    name: str
    area_type: AreaType
    type: str = ""  # subtype, e.g. "hallway", "parking"
    findings: list[Finding] = Field(default_factory=list)


class Inspection(BaseSchema):
    """An inspection with its areas and findings fully populated."""

    id: str
    property_id: str
    date: datetime
    inspector: str = ""
    status: str = "In Progress"
    program: InspectionProgram = InspectionProgram.STANDARD
    unit_sample: Optional[int] = Field(None, gt=0)
    notes: str = ""
    areas: list[Area] = Field(default_factory=list)


class Property(BaseSchema):
    """A housing property."""

    id: str
    name: str = Field(..., min_length=1)
    address: str = ""
    units: int = Field(..., gt=0)
    building_count: int = Field(..., gt=0)
