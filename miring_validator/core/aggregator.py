"""
Diagnostic Aggregator and Compliance Scorer.

Merges the diagnostics of both validation passes into one ComplianceReport.
"""

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ..models import ComplianceReport, Diagnostic, HmlId, Severity


class DiagnosticAggregator:
    """
    Build compliance reports from per-pass diagnostics.

    Any FATAL or INFORMATIONAL diagnostic makes a document non-compliant;
    WARNING diagnostics never do. No deduplication is performed: the same
    message from both passes records two independent opinions.
    """

    def __init__(self):
        # Graduated penalties for the 0-100 score
        self.penalty_weights = {
            Severity.FATAL: 10,
            Severity.INFORMATIONAL: 5,
            Severity.WARNING: 1
        }

    def aggregate(self,
                  schema_diagnostics: Sequence[Diagnostic],
                  schematron_diagnostics: Sequence[Diagnostic],
                  hml_id: Optional[HmlId] = None,
                  file_path: Optional[str] = None) -> ComplianceReport:
        """
        Merge both passes into a ComplianceReport.

        Schema diagnostics come first; order within each pass is preserved.
        """
        diagnostics = list(schema_diagnostics) + list(schematron_diagnostics)

        return ComplianceReport(
            compliant=self.calculate_verdict(diagnostics),
            hml_id=hml_id or HmlId(),
            diagnostics=diagnostics,
            severity_breakdown=self.severity_breakdown(diagnostics),
            score=self.calculate_score(diagnostics),
            schema_error_count=len(schema_diagnostics),
            schematron_error_count=len(schematron_diagnostics),
            file_path=file_path,
            timestamp=datetime.now().isoformat()
        )

    def calculate_verdict(self, diagnostics: Sequence[Diagnostic]) -> bool:
        return not any(d.severity.blocks_compliance for d in diagnostics)

    def severity_breakdown(self, diagnostics: Sequence[Diagnostic]) -> Dict[str, int]:
        breakdown = {severity.value: 0 for severity in Severity}
        for diagnostic in diagnostics:
            breakdown[diagnostic.severity.value] += 1
        return breakdown

    def rule_breakdown(self, diagnostics: Sequence[Diagnostic]) -> Dict[str, int]:
        """Count diagnostics per MIRING rule id, in first-seen order"""
        breakdown: Dict[str, int] = {}
        for diagnostic in diagnostics:
            breakdown[diagnostic.rule_id] = breakdown.get(diagnostic.rule_id, 0) + 1
        return breakdown

    def calculate_score(self, diagnostics: List[Diagnostic], base_score: float = 100.0) -> float:
        """Calculate overall graduated penalty score"""
        total_penalty = sum(self.penalty_weights.get(d.severity, 5) for d in diagnostics)

        # Cap maximum penalty at base_score
        total_penalty = min(total_penalty, base_score)
        return max(0.0, base_score - total_penalty)
