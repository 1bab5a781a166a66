from .diagnostic import (
    Diagnostic,
    DefectCategory,
    Severity,
    UNMAPPED_RULE_ID,
    NO_GUIDANCE_SOLUTION,
)
from .compliance_report import ComplianceReport, HmlId


__all__ = [
    'Diagnostic', 'DefectCategory', 'Severity', 'UNMAPPED_RULE_ID',
    'NO_GUIDANCE_SOLUTION', 'ComplianceReport', 'HmlId',
]
