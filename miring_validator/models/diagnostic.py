# diagnostic.py

from enum import Enum
from dataclasses import dataclass

UNMAPPED_RULE_ID = "unmapped"
NO_GUIDANCE_SOLUTION = "No automated guidance available."


class Severity(Enum):
    """Severity of a MIRING diagnostic"""
    FATAL = "fatal"
    # The MIRING severity: a compliance defect, blocks compliance like FATAL
    INFORMATIONAL = "informational"
    WARNING = "warning"

    @property
    def blocks_compliance(self) -> bool:
        return self is not Severity.WARNING


class DefectCategory(Enum):
    """Classification of document defects"""
    PROLOG = "prolog"
    MISSING_CHILD = "missing_child"
    MISSING_ATTRIBUTE = "missing_attribute"
    SCHEMATRON = "schematron"
    UNCLASSIFIED = "unclassified"


@dataclass
class Diagnostic:
    """Single defect finding, normalized from either validation pass"""
    message: str
    severity: Severity
    rule_id: str = UNMAPPED_RULE_ID
    solution: str = NO_GUIDANCE_SOLUTION
    context: str = ""
    location: str = ""
    category: DefectCategory = DefectCategory.UNCLASSIFIED
    node: str = ""
    missing: str = ""
    raw_message: str = ""
    source: str = "schema"

    @property
    def is_mapped(self) -> bool:
        return self.rule_id != UNMAPPED_RULE_ID

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "category": self.category.value,
            "source": self.source,
            "message": self.message,
            "solution": self.solution,
            "location": self.location,
            "context": self.context,
        }

    def __str__(self):
        return f"[{self.rule_id}] {self.message} (Severity: {self.severity.value})"
