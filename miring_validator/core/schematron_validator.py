"""
Schematron Pass: MIRING business rules expressed in ISO Schematron.

The rule engine sits behind the narrow RuleEngine interface and returns an
SVRL findings document. A failing rule engine never fails the validation run:
the pass then contributes zero diagnostics.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from lxml import etree, isoschematron

from ..models import Diagnostic
from ..utils.hml_identifier import secure_parser, to_bytes
from .base_validator import BaseValidator
from .diagnostic_classifier import DiagnosticClassifier

DEFAULT_RULESET_PATH = Path(__file__).parent.parent / "resources" / "schematron" / "miring-reference-sequence.sch"

SVRL_NAMESPACES = {"svrl": "http://purl.oclc.org/dsdl/svrl"}
FINDING_XPATH = "//svrl:failed-assert/svrl:text | //svrl:successful-report/svrl:text"


class RuleEngine(ABC):
    """Capability interface of an external rule engine"""

    @abstractmethod
    def evaluate(self, document: Union[str, bytes], ruleset: Path) -> bytes:
        """
        Evaluate a document against a rule set.

        Returns:
            SVRL findings document
        """
        pass


class LxmlSchematronEngine(RuleEngine):
    """Rule engine adapter around lxml's ISO Schematron implementation"""

    def evaluate(self, document: Union[str, bytes], ruleset: Path) -> bytes:
        schematron = isoschematron.Schematron(
            etree.parse(str(ruleset), secure_parser()),
            store_report=True
        )
        candidate = etree.fromstring(to_bytes(document), secure_parser())
        schematron.validate(candidate)
        return etree.tostring(schematron.validation_report)


class SchematronValidator(BaseValidator):
    """Validate HML documents against the MIRING schematron rules"""

    def __init__(self,
                 ruleset_path: Optional[Union[str, Path]] = None,
                 engine: Optional[RuleEngine] = None,
                 classifier: Optional[DiagnosticClassifier] = None):
        """
        Args:
            ruleset_path: Schematron file (optional, uses bundled rules if not provided)
            engine: Rule engine (optional, defaults to lxml isoschematron)
            classifier: Diagnostic classifier (optional, uses bundled rule catalog if not provided)

        Raises:
            FileNotFoundError: If the schematron file does not exist
        """
        super().__init__()
        self.pass_name = "schematron"
        self.logger = logging.getLogger(__name__)

        self.ruleset_path = Path(ruleset_path) if ruleset_path else DEFAULT_RULESET_PATH
        if not self.ruleset_path.exists():
            raise FileNotFoundError(f"Schematron rules not found: {self.ruleset_path}")

        self.engine = engine or LxmlSchematronEngine()
        self.classifier = classifier or DiagnosticClassifier()

    def validate(self, xml: Union[str, bytes]) -> List[Diagnostic]:
        """
        Validate one HML document against the schematron rules.

        Args:
            xml: HML document text

        Returns:
            One diagnostic per finding; empty if the rule engine fails
        """
        try:
            report = self.engine.evaluate(xml, self.ruleset_path)
        except Exception as e:
            # Rule engine failures leave this pass empty
            self.logger.error("Error during schematron validation: %s", e, exc_info=True)
            return []

        diagnostics = self.diagnostics_from_report(report)
        self.logger.debug("%d schematron validation errors found", len(diagnostics))
        return diagnostics

    def diagnostics_from_report(self, report: Union[str, bytes]) -> List[Diagnostic]:
        return [
            self.classifier.classify_schematron_finding(finding)
            for finding in self.extract_findings(report)
        ]

    def extract_findings(self, report: Union[str, bytes]) -> List[str]:
        """
        Extract the finding texts of an SVRL document.

        Returns:
            Non-empty finding texts in document order; empty if the report is malformed
        """
        if not isinstance(report, (str, bytes)):
            self.logger.error("Schematron results are not a document: %r", type(report).__name__)
            return []

        try:
            root = etree.fromstring(to_bytes(report), secure_parser())
        except (etree.XMLSyntaxError, ValueError) as e:
            self.logger.error("Error forming DOM from schematron results: %s", e)
            return []

        findings = []
        for text_node in root.xpath(FINDING_XPATH, namespaces=SVRL_NAMESPACES):
            text = "".join(text_node.itertext()).strip()
            if text:
                findings.append(text)
        return findings
