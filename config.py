"""
MIRING Validator - Centralized Configuration
============================================

This module provides centralized path management and configuration for the
MIRING validator. All paths are defined here to ensure consistency across the
command line tools.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, List
from pathlib import Path


class PathConfig:
    """Centralized path configuration for the MIRING validator"""

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize path configuration.

        Args:
            project_root: Root directory of the project. If None, uses current directory.
        """
        self.project_root = project_root or Path.cwd()

        # ========================================================================
        # DATA DIRECTORIES
        # ========================================================================
        # Structure:
        #   data/
        #     ├── input/              # HML files (.xml) to validate
        #     └── schemas/            # Optional overrides: *.xsd, *.sch, rule_catalog.json
        # ========================================================================
        self.data_dir = self.project_root / "data"
        self.input_dir = self.data_dir / "input"
        self.schemas_dir = self.data_dir / "schemas"

        # Bundled resources directories (inside miring_validator package)
        self.bundled_resources_dir = Path(__file__).parent / "miring_validator" / "resources"
        self.bundled_schemas_dir = self.bundled_resources_dir / "schemas"
        self.bundled_schematron_dir = self.bundled_resources_dir / "schematron"

        # Report output directory
        self.results_dir = self.project_root / "results"

        # Logging directory
        self.logs_dir = self.project_root / "logs"

        # User-provided files take precedence over bundled resources
        self.hml_schema = self._find_resource("*.xsd", self.bundled_schemas_dir / "hml-1.0.1-miring.xsd")
        self.schematron_rules = self._find_resource(
            "*.sch", self.bundled_schematron_dir / "miring-reference-sequence.sch"
        )
        self.rule_catalog = self._find_resource("rule_catalog.json", self.bundled_resources_dir / "rule_catalog.json")

    def _find_resource(self, pattern: str, bundled: Path) -> Path:
        """
        Get a resource path from the user data directory, falling back to the bundled one.

        Location: data/schemas/<pattern> (first match in name order)
        """
        if self.schemas_dir.exists():
            matches = sorted(self.schemas_dir.glob(pattern))
            if matches:
                return matches[0]
        return bundled

    def validate_paths(self) -> Dict[str, bool]:
        """
        Validate that required paths exist.

        Returns:
            Dictionary of path names and their existence status
        """
        return {
            "data_dir": self.data_dir.exists(),
            "input_dir": self.input_dir.exists(),
            "bundled_resources_dir": self.bundled_resources_dir.exists(),
            "hml_schema": self.hml_schema.exists(),
            "schematron_rules": self.schematron_rules.exists(),
            "rule_catalog": self.rule_catalog.exists(),
        }

    def ensure_results_dir(self, run_name: Optional[str] = None) -> Path:
        """
        Ensure the results directory exists and return its path.

        Args:
            run_name: Optional subdirectory for one validation run
        """
        results_dir = self.results_dir / run_name if run_name else self.results_dir
        results_dir.mkdir(parents=True, exist_ok=True)
        return results_dir


@dataclass
class ValidatorConfig:
    """Configuration for a MIRING validation run"""

    # Path configuration
    paths: PathConfig = field(default_factory=PathConfig)

    # Resource overrides; None uses the PathConfig resolution
    schema_path: Optional[str] = None
    schematron_path: Optional[str] = None
    catalog_path: Optional[str] = None

    # Pass settings
    run_schematron: bool = True

    # Output settings
    output_formats: List[str] = field(default_factory=lambda: ["xml", "json", "excel"])

    @classmethod
    def default(cls):
        """Create default configuration"""
        return cls()

    def resolved_schema_path(self) -> Path:
        return Path(self.schema_path) if self.schema_path else self.paths.hml_schema

    def resolved_schematron_path(self) -> Path:
        return Path(self.schematron_path) if self.schematron_path else self.paths.schematron_rules

    def resolved_catalog_path(self) -> Path:
        return Path(self.catalog_path) if self.catalog_path else self.paths.rule_catalog

    def validate(self):
        """Validate configuration settings"""
        if not self.resolved_schema_path().exists():
            raise ValueError(f"Schema file not found: {self.resolved_schema_path()}")

        if self.run_schematron and not self.resolved_schematron_path().exists():
            raise ValueError(f"Schematron file not found: {self.resolved_schematron_path()}")

        if not self.resolved_catalog_path().exists():
            raise ValueError(f"Rule catalog not found: {self.resolved_catalog_path()}")

        valid_formats = ["xml", "json", "excel"]
        unknown = [f for f in self.output_formats if f not in valid_formats]
        if unknown:
            raise ValueError(f"output_formats must be drawn from {valid_formats}, got: {unknown}")


# Global path configuration instance
_global_path_config = None


def get_path_config(project_root: Optional[Path] = None) -> PathConfig:
    """
    Get the global path configuration instance.

    Args:
        project_root: Optional project root directory. Only used on first call.

    Returns:
        PathConfig instance
    """
    global _global_path_config

    if _global_path_config is None:
        _global_path_config = PathConfig(project_root)

    return _global_path_config
