"""Taxonomy Registry - NSPIRE categories and the deficiency catalogue.

Loaded once from a versioned JSON resource and read-only afterwards, so
regulatory updates ship as data, not code. The registry is built at
startup and passed explicitly to whatever needs it.

Resource format:
{
    "version": "2023.1",
    "categories": {key: {"name": ..., "subcategories": [...]}},
    "deficiencyGroups": {key: {"name": ...}},
    "deficiencies": {id: {"category", "description", "severity",
                          "repairDue", "repairDueUnit", "hcvRating",
                          "hcvRepairDue"?}},
    "lifeThreateningIds": [id, ...]
}
"""

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from nspire.core.exceptions import NotFoundError, TaxonomyLoadError
from nspire.models.enums import SeverityLevel
from nspire.schemas.taxonomy import (
    Category, DeficiencyCatalogEntry, DeficiencyGroup, TaxonomySummary,
)

logger = logging.getLogger(__name__)

DEFAULT_RESOURCE = "nspire_taxonomy.json"


class TaxonomyRegistry:
    """Immutable lookup over categories, deficiency groups, and the catalogue."""

    def __init__(
        self,
        categories: list[Category],
        deficiency_groups: list[DeficiencyGroup],
        deficiencies: list[DeficiencyCatalogEntry],
        life_threatening_ids: Optional[list[str]] = None,
        version: str = "unversioned",
    ):
        self.version = version
        self._categories = self._index(categories, "category", lambda c: c.key)
        self._groups = self._index(deficiency_groups, "deficiency group", lambda g: g.key)
        self._deficiencies = self._index(deficiencies, "deficiency", lambda d: d.id)

        for category in categories:
            if len(set(category.subcategories)) != len(category.subcategories):
                raise TaxonomyLoadError(
                    f"Duplicate subcategory under category '{category.key}'",
                    {"category": category.key},
                )

        for entry in deficiencies:
            if entry.category not in self._groups:
                raise TaxonomyLoadError(
                    f"Deficiency '{entry.id}' references unknown group '{entry.category}'",
                    {"deficiency": entry.id, "group": entry.category},
                )

        life_threatening_ids = tuple(life_threatening_ids or ())
        unknown = [i for i in life_threatening_ids if i not in self._deficiencies]
        if unknown:
            raise TaxonomyLoadError(
                f"Life-threatening list references unknown deficiencies: {', '.join(unknown)}",
                {"ids": unknown},
            )
        self._life_threatening_ids = life_threatening_ids

    @staticmethod
    def _index(items, label: str, key_of) -> dict:
        index = {}
        for item in items:
            key = key_of(item)
            if key in index:
                raise TaxonomyLoadError(f"Duplicate {label} key: {key}", {"key": key})
            index[key] = item
        return index

    # --- Loading ---

    @staticmethod
    def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise TaxonomyLoadError(
                f"Taxonomy section '{name}' must be an object keyed by id",
                {"section": name},
            )
        return section

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaxonomyRegistry":
        """Build a registry from the parsed resource format."""
        if not isinstance(data, dict):
            raise TaxonomyLoadError("Taxonomy resource must be a JSON object")

        try:
            categories = [
                Category(key=key, **body)
                for key, body in cls._section(data, "categories").items()
            ]
            groups = [
                DeficiencyGroup(key=key, **body)
                for key, body in cls._section(data, "deficiencyGroups").items()
            ]
            deficiencies = [
                DeficiencyCatalogEntry(id=def_id, **body)
                for def_id, body in cls._section(data, "deficiencies").items()
            ]
        except (TypeError, ValidationError) as e:
            raise TaxonomyLoadError(f"Invalid taxonomy data: {e}") from e

        life_threatening_ids = data.get("lifeThreateningIds") or []
        if not isinstance(life_threatening_ids, list):
            raise TaxonomyLoadError(
                "Taxonomy section 'lifeThreateningIds' must be a list",
                {"section": "lifeThreateningIds"},
            )

        return cls(
            categories=categories,
            deficiency_groups=groups,
            deficiencies=deficiencies,
            life_threatening_ids=life_threatening_ids,
            version=str(data.get("version", "unversioned")),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "TaxonomyRegistry":
        """Load a registry from a JSON file."""
        filepath = Path(path)
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise TaxonomyLoadError(f"Taxonomy file not found: {filepath}") from e
        except json.JSONDecodeError as e:
            raise TaxonomyLoadError(f"Invalid JSON in {filepath}: {e}") from e

        registry = cls.from_dict(data)
        logger.info(
            f"[TAXONOMY] Loaded v{registry.version} from {filepath}: "
            f"{len(registry._categories)} categories, {len(registry._deficiencies)} deficiencies"
        )
        return registry

    # --- Categories ---

    def list_categories(self) -> tuple[Category, ...]:
        """All categories in resource order."""
        return tuple(self._categories.values())

    def get_category(self, key: str) -> Category:
        """Category by key. Raises NotFoundError for unknown keys."""
        try:
            return self._categories[key]
        except KeyError:
            raise NotFoundError("Category", key) from None

    def has_category(self, key: str) -> bool:
        return key in self._categories

    # --- Deficiency catalogue ---

    def list_deficiency_groups(self) -> tuple[DeficiencyGroup, ...]:
        return tuple(self._groups.values())

    def get_deficiency_group(self, key: str) -> DeficiencyGroup:
        try:
            return self._groups[key]
        except KeyError:
            raise NotFoundError("Deficiency group", key) from None

    def list_deficiencies(self, category_key: Optional[str] = None) -> tuple[DeficiencyCatalogEntry, ...]:
        """Catalogue entries, optionally filtered by deficiency group key.

        An unknown group key raises NotFoundError rather than returning an
        empty list, so a typo never looks like "no deficiencies".
        """
        if category_key is None:
            return tuple(self._deficiencies.values())
        self.get_deficiency_group(category_key)
        return tuple(d for d in self._deficiencies.values() if d.category == category_key)

    def find_deficiency(self, deficiency_id: str) -> DeficiencyCatalogEntry:
        """Catalogue entry by id. Raises NotFoundError for unknown ids."""
        try:
            return self._deficiencies[deficiency_id]
        except KeyError:
            raise NotFoundError("Deficiency", deficiency_id) from None

    def list_deficiencies_by_severity(self, severity: SeverityLevel) -> tuple[DeficiencyCatalogEntry, ...]:
        return tuple(d for d in self._deficiencies.values() if d.severity == severity)

    def list_life_threatening(self) -> tuple[DeficiencyCatalogEntry, ...]:
        """HOTMA life-threatening deficiencies, in list order."""
        return tuple(self._deficiencies[i] for i in self._life_threatening_ids)

    def summary(self) -> TaxonomySummary:
        return TaxonomySummary(
            version=self.version,
            category_count=len(self._categories),
            deficiency_group_count=len(self._groups),
            deficiency_count=len(self._deficiencies),
        )


def default_taxonomy_path() -> Path:
    """Path of the packaged taxonomy resource."""
    return Path(str(resources.files("nspire.data").joinpath(DEFAULT_RESOURCE)))


def load_default_registry(path: Optional[Union[str, Path]] = None) -> TaxonomyRegistry:
    """Load the registry from ``path`` or the packaged resource."""
    return TaxonomyRegistry.from_file(path or default_taxonomy_path())
