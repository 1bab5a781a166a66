from .core import (
    MiringValidator,
    SchemaValidator,
    SchematronValidator,
    RuleEngine,
    LxmlSchematronEngine,
    DiagnosticClassifier,
    DiagnosticAggregator,
    RuleCatalog,
    TraversalContext,
    TrackerContractViolation,
)
from .models import ComplianceReport, Diagnostic, DefectCategory, HmlId, Severity

__version__ = "1.0.0"

__all__ = [
    'MiringValidator', 'SchemaValidator', 'SchematronValidator', 'RuleEngine',
    'LxmlSchematronEngine', 'DiagnosticClassifier',
    'DiagnosticAggregator', 'RuleCatalog', 'TraversalContext', 'TrackerContractViolation',
    'ComplianceReport', 'Diagnostic', 'DefectCategory', 'HmlId', 'Severity',
]
