from .traversal_context import TraversalContext, TrackerContractViolation
from .rule_catalog import RuleCatalog, RuleCatalogEntry
from .diagnostic_classifier import DiagnosticClassifier
from .schema_validator import SchemaValidator, SchemaContentHandler
from .schematron_validator import SchematronValidator, RuleEngine, LxmlSchematronEngine
from .aggregator import DiagnosticAggregator
from .miring_validator import MiringValidator


__all__ = [
    'TraversalContext', 'TrackerContractViolation', 'RuleCatalog', 'RuleCatalogEntry',
    'DiagnosticClassifier', 'SchemaValidator', 'SchemaContentHandler',
    'SchematronValidator', 'RuleEngine', 'LxmlSchematronEngine',
    'DiagnosticAggregator', 'MiringValidator',
]
