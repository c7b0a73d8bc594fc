"""Finding Classifier - validates inspector input against the taxonomy."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from nspire.core.exceptions import (
    InvalidSubcategoryError, MissingFieldError, UnknownCategoryError,
)
from nspire.models.enums import FindingStatus, SeverityLevel
from nspire.schemas.inspection import Finding, FindingCreate
from nspire.services.taxonomy import TaxonomyRegistry

logger = logging.getLogger(__name__)

DEFAULT_SEVERITY = SeverityLevel.MODERATE


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class FindingClassifier:
    """Turns a FindingCreate candidate into a normalized Finding.

    Checks run in order: catalogue seed, required fields, category,
    subcategory. The first failing check raises. Neither the registry nor
    any area is modified.
    """

    def __init__(
        self,
        registry: TaxonomyRegistry,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.registry = registry
        self._clock = clock or _utcnow
        self._id_factory = id_factory or _new_id

    def validate(self, candidate: FindingCreate) -> Finding:
        """Validate and normalize a finding candidate.

        Raises:
            NotFoundError: deficiency_id is not in the catalogue
            MissingFieldError: category, subcategory, or deficiency is empty
            UnknownCategoryError: category key is not in the registry
            InvalidSubcategoryError: subcategory is not listed under the category
        """
        deficiency = candidate.deficiency
        severity = candidate.severity

        if candidate.deficiency_id:
            entry = self.registry.find_deficiency(candidate.deficiency_id)
            deficiency = deficiency or entry.description
            severity = severity or entry.severity

        category_key = candidate.category
        subcategory = candidate.subcategory

        missing = [
            name for name, value in (
                ("category", category_key),
                ("subcategory", subcategory),
                ("deficiency", deficiency),
            )
            if not value
        ]
        if missing:
            logger.info(f"[CLASSIFIER] Rejected finding: missing {missing}")
            raise MissingFieldError(missing)

        if not self.registry.has_category(category_key):
            logger.info(f"[CLASSIFIER] Rejected finding: unknown category {category_key!r}")
            raise UnknownCategoryError(category_key)

        canonical = self._match_subcategory(category_key, subcategory)
        if canonical is None:
            logger.info(
                f"[CLASSIFIER] Rejected finding: subcategory {subcategory!r} not in {category_key!r}"
            )
            raise InvalidSubcategoryError(category_key, subcategory)

        return Finding(
            id=self._id_factory(),
            area_id=candidate.area_id,
            category=category_key,
            subcategory=canonical,
            deficiency=deficiency,
            deficiency_id=candidate.deficiency_id,
            severity=severity or DEFAULT_SEVERITY,
            notes=candidate.notes,
            location=candidate.location,
            photos=list(candidate.photos),
            status=FindingStatus.OPEN,
            created=self._clock(),
        )

    def _match_subcategory(self, category_key: str, subcategory: str) -> Optional[str]:
        """Canonical spelling of ``subcategory`` under the category, if listed."""
        wanted = subcategory.casefold()
        for name in self.registry.get_category(category_key).subcategories:
            if name.casefold() == wanted:
                return name
        return None
