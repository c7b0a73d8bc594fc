"""Exception hierarchy for the compliance engine.

    NspireError (base)
    ├── NotFoundError
    ├── TaxonomyLoadError
    └── FindingValidationError
        ├── MissingFieldError
        ├── UnknownCategoryError
        └── InvalidSubcategoryError

Finding validation errors are user-correctable; their messages are meant
to be shown to the inspector as-is.
"""

from typing import Any, Optional


class NspireError(Exception):
    """Base exception with an error kind and context for responses."""

    kind = "nspire_error"

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.kind,
            "message": self.message,
            "context": self.context,
        }


class NotFoundError(NspireError):
    """Unknown category key, deficiency group, or catalogue id."""

    kind = "not_found"

    def __init__(self, resource: str, key: str):
        super().__init__(f"{resource} not found: {key}", {"resource": resource, "key": key})
        self.resource = resource
        self.key = key


class TaxonomyLoadError(NspireError):
    """Taxonomy resource is missing or malformed."""

    kind = "taxonomy_load_error"


class FindingValidationError(NspireError):
    """A finding candidate failed validation."""

    kind = "invalid_finding"


class MissingFieldError(FindingValidationError):
    kind = "missing_field"

    def __init__(self, fields: list[str]):
        super().__init__(
            f"Missing required field(s): {', '.join(fields)}",
            {"fields": list(fields)},
        )
        self.fields = list(fields)


class UnknownCategoryError(FindingValidationError):
    kind = "unknown_category"

    def __init__(self, category: str):
        super().__init__(f"Unknown category: {category}", {"category": category})
        self.category = category


class InvalidSubcategoryError(FindingValidationError):
    kind = "invalid_subcategory"

    def __init__(self, category: str, subcategory: str):
        super().__init__(
            f"Subcategory '{subcategory}' is not listed under category '{category}'",
            {"category": category, "subcategory": subcategory},
        )
        self.category = category
        self.subcategory = subcategory
