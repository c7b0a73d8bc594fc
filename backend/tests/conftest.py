"""Shared fixtures for the compliance engine tests."""

from datetime import datetime, timezone
from itertools import count

import pytest

from nspire.models.enums import AreaType
from nspire.schemas.inspection import Area, Finding, Inspection, Property
from nspire.services.engine import ComplianceEngine
from nspire.services.taxonomy import load_default_registry

INSPECTED_AT = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def registry():
    """Packaged taxonomy, loaded once."""
    return load_default_registry()


@pytest.fixture
def engine(registry):
    return ComplianceEngine(registry)


@pytest.fixture
def make_finding():
    """Factory for findings with sensible defaults."""
    ids = count(1)

    def _make(severity="moderate", category="unit", subcategory="Bathroom", **kwargs):
        data = {
            "id": f"f{next(ids)}",
            "category": category,
            "subcategory": subcategory,
            "deficiency": "Sink drain leaking",
            "severity": severity,
            "created": INSPECTED_AT,
        }
        data.update(kwargs)
        return Finding(**data)

    return _make


@pytest.fixture
def make_area(make_finding):
    """Factory for an area holding one finding per severity given."""
    ids = count(1)

    def _make(area_type=AreaType.UNIT, severities=(), **kwargs):
        area_id = kwargs.pop("id", f"a{next(ids)}")
        return Area(
            id=area_id,
            name=kwargs.pop("name", f"Area {area_id}"),
            area_type=area_type,
            findings=[make_finding(severity, area_id=area_id) for severity in severities],
            **kwargs,
        )

    return _make


@pytest.fixture
def make_inspection():
    def _make(areas=(), **kwargs):
        return Inspection(
            id=kwargs.pop("id", "insp-1"),
            property_id=kwargs.pop("property_id", "prop-1"),
            date=kwargs.pop("date", INSPECTED_AT),
            areas=list(areas),
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_property():
    return Property(
        id="prop-1",
        name="Maple Court Apartments",
        address="12 Maple Court",
        units=24,
        building_count=2,
    )
