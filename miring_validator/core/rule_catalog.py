"""
MIRING Rule Catalog.

Static lookup from (defect category, owner node, missing child or attribute)
to a MIRING rule id and default guidance. The rows live in a JSON data file so
that a new rule-set version only needs a new catalog file.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from ..models import DefectCategory, UNMAPPED_RULE_ID

DEFAULT_CATALOG_PATH = Path(__file__).parent.parent / "resources" / "rule_catalog.json"


@dataclass(frozen=True)
class RuleCatalogEntry:
    """One catalog row"""
    category: DefectCategory
    owner: str
    name: str
    rule_id: str
    explanation: str = ""
    solution: str = ""

    @property
    def is_mapped(self) -> bool:
        return self.rule_id != UNMAPPED_RULE_ID


class RuleCatalog:
    """
    Exact-match MIRING rule lookup.

    Lookups never fail: an unknown key yields the unmapped sentinel entry
    so a single uncataloged defect cannot abort a validation run.
    """

    def __init__(self,
                 rules: Dict[Tuple[DefectCategory, str, str], RuleCatalogEntry],
                 fixed: Dict[DefectCategory, RuleCatalogEntry],
                 version: str = "",
                 unmapped_rule_id: str = UNMAPPED_RULE_ID):
        self._rules = dict(rules)
        self._fixed = dict(fixed)
        self.version = version
        self.unmapped_rule_id = unmapped_rule_id
        self.logger = logging.getLogger(__name__)

    @classmethod
    def load(cls, catalog_path: Optional[Union[str, Path]] = None) -> "RuleCatalog":
        """
        Load a catalog from a JSON file.

        Args:
            catalog_path: Catalog file. If None, uses the bundled catalog.

        Raises:
            FileNotFoundError: If the catalog file does not exist
            ValueError: If the catalog file is not a valid catalog
        """
        path = Path(catalog_path) if catalog_path else DEFAULT_CATALOG_PATH
        if not path.exists():
            raise FileNotFoundError(f"Rule catalog not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Rule catalog is not valid JSON: {path}: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict) -> "RuleCatalog":
        """Build a catalog from its JSON structure"""
        unmapped_rule_id = data.get("unmapped_rule_id", UNMAPPED_RULE_ID)
        try:
            rules = {}
            for row in data.get("rules", []):
                entry = RuleCatalogEntry(
                    category=DefectCategory(row["category"]),
                    owner=row["owner"],
                    name=row["name"],
                    rule_id=row["rule_id"],
                    explanation=row.get("explanation", ""),
                    solution=row.get("solution", "")
                )
                rules[(entry.category, entry.owner, entry.name)] = entry

            fixed = {}
            for category_name, row in data.get("fixed", {}).items():
                category = DefectCategory(category_name)
                fixed[category] = RuleCatalogEntry(
                    category=category,
                    owner="",
                    name="",
                    rule_id=row["rule_id"],
                    explanation=row.get("explanation", ""),
                    solution=row.get("solution", "")
                )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed rule catalog row: {e}") from e

        return cls(rules, fixed, data.get("version", ""), unmapped_rule_id)

    def unmapped(self, category: DefectCategory, owner: str = "", name: str = "") -> RuleCatalogEntry:
        return RuleCatalogEntry(category, owner, name, self.unmapped_rule_id)

    def lookup(self, category: DefectCategory, owner: str, name: str) -> RuleCatalogEntry:
        """
        Resolve a defect to its MIRING rule.

        Args:
            category: Defect category
            owner: Parent node (missing child) or owning node (missing attribute)
            name: Missing child or attribute name

        Returns:
            Matching entry, or the unmapped sentinel entry
        """
        entry = self._rules.get((category, owner, name))
        if entry is None:
            self.logger.warning("No MIRING rule cataloged for %s: %s/%s", category.value, owner, name)
            return self.unmapped(category, owner, name)
        return entry

    def fixed_rule(self, category: DefectCategory) -> RuleCatalogEntry:
        """Rule used for every defect of a category that carries no node names"""
        entry = self._fixed.get(category)
        if entry is None:
            self.logger.warning("No fixed MIRING rule cataloged for %s", category.value)
            return self.unmapped(category)
        return entry

    def __len__(self):
        return len(self._rules)

    def __contains__(self, key) -> bool:
        return key in self._rules
