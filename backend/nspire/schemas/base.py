"""Base schema utilities."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with common configuration.

    Field names are snake_case in Python and camelCase on the wire, so
    inspection records exported from the document store (``areaType``,
    ``propertyId``) validate unchanged.
    """

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class FrozenSchema(BaseSchema):
    """Immutable reference data."""

    model_config = ConfigDict(frozen=True, validate_assignment=False)
