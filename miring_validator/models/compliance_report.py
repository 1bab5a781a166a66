# compliance_report.py

from dataclasses import dataclass, field
from typing import List, Dict, Optional, NamedTuple
from .diagnostic import Diagnostic, Severity


class HmlId(NamedTuple):
    """Subject identifier pair of an HML message"""
    root: str = ""
    extension: str = ""


@dataclass
class ComplianceReport:
    """MIRING compliance result for one HML document"""
    compliant: bool
    hml_id: HmlId = field(default_factory=HmlId)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    severity_breakdown: Dict[str, int] = field(default_factory=dict)
    score: float = 100.0
    schema_error_count: int = 0
    schematron_error_count: int = 0
    file_path: Optional[str] = None
    timestamp: Optional[str] = None

    def get_diagnostics_by_severity(self, severity: Severity) -> List[Diagnostic]:
        """Get all diagnostics of a specific severity"""
        return [d for d in self.diagnostics if d.severity == severity]

    def get_diagnostics_by_rule(self, rule_id: str) -> List[Diagnostic]:
        """Get all diagnostics attributed to a MIRING rule"""
        return [d for d in self.diagnostics if d.rule_id == rule_id]

    @property
    def rule_ids(self) -> List[str]:
        return [d.rule_id for d in self.diagnostics]

    @property
    def blocking_count(self) -> int:
        return len([d for d in self.diagnostics if d.severity.blocks_compliance])
