"""
Diagnostic Classifier.

Turns schema engine messages and schematron findings into normalized
Diagnostic records attributed to MIRING rules.
"""

import logging
from typing import Optional

from ..models import (
    Diagnostic,
    DefectCategory,
    Severity,
    NO_GUIDANCE_SOLUTION,
)
from ..utils.message_parser import MessageParser
from .rule_catalog import RuleCatalog
from .traversal_context import TraversalContext


class DiagnosticClassifier:
    """
    Classify validator messages into the MIRING defect taxonomy.

    Schema messages are tested in a fixed order, first match wins:

    1. prolog content defect
    2. missing required child element
    3. missing required attribute
    4. unclassified

    A message whose markers cannot be found degrades to unclassified; the
    classifier never raises and never drops a message.
    """

    # Phrasings for content found before the document starts (Xerces, libxml2)
    PROLOG_MESSAGES = (
        "Content is not allowed in prolog.",
        "Start tag expected, '<' not found",
        "XML declaration allowed only at the start of the document",
    )

    MISSING_CHILD_CODES = ('cvc-complex-type.2.4.a', 'cvc-complex-type.2.4.b')
    # Codes whose message names the incomplete element itself
    INCOMPLETE_CONTENT_CODES = ('cvc-complex-type.2.4.b',)
    MISSING_CHILD_PHRASES = ('This element is not expected.', 'Missing child element(s).')
    INCOMPLETE_CONTENT_PHRASES = ('Missing child element(s).',)

    MISSING_ATTRIBUTE_CODES = ('cvc-complex-type.4',)
    MISSING_ATTRIBUTE_PHRASES = ('is required but missing',)

    def __init__(self, catalog: Optional[RuleCatalog] = None):
        self.catalog = catalog or RuleCatalog.load()
        self.parser = MessageParser()
        self.logger = logging.getLogger(__name__)

    def classify_schema_diagnostic(self, raw_message: str, context: TraversalContext) -> Diagnostic:
        """
        Classify one schema engine message.

        Args:
            raw_message: Message text as reported by the schema engine
            context: Traversal context of the current run, positioned at the parent of the defect

        Returns:
            Diagnostic for the message
        """
        message = raw_message.strip()

        if self._is_prolog_defect(message):
            return self._handle_prolog(message)

        diagnostic = None
        if self._is_missing_child(message):
            diagnostic = self._handle_missing_child(message, context)
        elif self._is_missing_attribute(message):
            diagnostic = self._handle_missing_attribute(message)

        if diagnostic is None:
            diagnostic = self.unclassified(message)
        return diagnostic

    def classify_schematron_finding(self, finding_text: str) -> Diagnostic:
        """
        Classify one schematron finding.

        Every finding maps to the same MIRING rule; the rule set cannot yet
        distinguish sub-rules. No location is available from this pass.
        """
        text = " ".join(finding_text.split())
        entry = self.catalog.fixed_rule(DefectCategory.SCHEMATRON)

        return Diagnostic(
            message=text,
            severity=Severity.INFORMATIONAL,
            rule_id=entry.rule_id,
            solution=entry.solution or NO_GUIDANCE_SOLUTION,
            context=entry.explanation,
            category=DefectCategory.SCHEMATRON,
            raw_message=finding_text,
            source="schematron"
        )

    def unclassified(self, raw_message: str) -> Diagnostic:
        """Diagnostic for a message outside the known taxonomy"""
        self.logger.warning("Schema message not classified: %s", raw_message)
        return Diagnostic(
            message=raw_message,
            severity=Severity.INFORMATIONAL,
            rule_id=self.catalog.unmapped_rule_id,
            solution=NO_GUIDANCE_SOLUTION,
            category=DefectCategory.UNCLASSIFIED,
            raw_message=raw_message
        )

    def _is_prolog_defect(self, message: str) -> bool:
        return any(message.startswith(phrase) for phrase in self.PROLOG_MESSAGES)

    def _is_missing_child(self, message: str) -> bool:
        return (self.parser.error_code(message) in self.MISSING_CHILD_CODES or
                any(phrase in message for phrase in self.MISSING_CHILD_PHRASES))

    def _is_missing_attribute(self, message: str) -> bool:
        return (self.parser.error_code(message) in self.MISSING_ATTRIBUTE_CODES or
                any(phrase in message for phrase in self.MISSING_ATTRIBUTE_PHRASES))

    def _handle_prolog(self, message: str) -> Diagnostic:
        entry = self.catalog.fixed_rule(DefectCategory.PROLOG)
        return Diagnostic(
            message=entry.explanation or message,
            severity=Severity.FATAL,
            rule_id=entry.rule_id,
            solution=entry.solution or NO_GUIDANCE_SOLUTION,
            category=DefectCategory.PROLOG,
            raw_message=message
        )

    def _handle_missing_child(self, message: str, context: TraversalContext) -> Optional[Diagnostic]:
        """
        Handle a missing required child element.

        When the engine lists several candidates the last one is taken as
        the missing node; with several legally missing children at one
        position this may name the wrong one.
        """
        missing_node = self.parser.expected_child(message)
        if not missing_node:
            self.logger.debug("Missing child message without a candidate set: %s", message)
            return None

        location = context.current_path()
        parent_node = context.current_parent_name()
        parent_attributes = context.current_parent_attributes()

        incomplete_node = self._incomplete_element(message)
        if incomplete_node and incomplete_node != parent_node:
            # The engine named the incomplete element; the tracker is one level above it
            parent_node = incomplete_node
            parent_attributes = {}
            location = f"{location}/{incomplete_node}" if location else incomplete_node

        entry = self.catalog.lookup(DefectCategory.MISSING_CHILD, parent_node, missing_node)

        error_message = f"There is a missing {missing_node} node underneath the {parent_node} node."
        solution_message = f"Please add exactly one {missing_node} node underneath the {parent_node} node."

        return Diagnostic(
            message=entry.explanation or error_message,
            severity=Severity.INFORMATIONAL,
            rule_id=entry.rule_id,
            solution=entry.solution or solution_message,
            context=self.parser.format_attributes(parent_node, parent_attributes),
            location=location,
            category=DefectCategory.MISSING_CHILD,
            node=parent_node,
            missing=missing_node,
            raw_message=message
        )

    def reports_incomplete_content(self, message: str) -> bool:
        """
        Whether the message names the element whose content is incomplete.

        Such messages concern the named element itself, so they are best
        delivered once that element is open in the traversal context.
        """
        return (self.parser.error_code(message) in self.INCOMPLETE_CONTENT_CODES or
                any(phrase in message for phrase in self.INCOMPLETE_CONTENT_PHRASES))

    def _incomplete_element(self, message: str) -> Optional[str]:
        """Name of the element whose content the message reports as incomplete"""
        quoted = self.parser.quoted_values(message)
        if not quoted or not self.reports_incomplete_content(message):
            return None
        # cvc-complex-type.2.4.b: The content of element 'X' is not complete. ...
        # Element '{ns}X': Missing child element(s). ...
        return self.parser.local_name(quoted[0])

    def _handle_missing_attribute(self, message: str) -> Optional[Diagnostic]:
        quoted = self.parser.quoted_values(message)
        if len(quoted) < 2:
            self.logger.debug("Missing attribute message without quoted names: %s", message)
            return None

        if self.parser.error_code(message) in self.MISSING_ATTRIBUTE_CODES:
            # Attribute 'A' must appear on element 'N'.
            attribute_name, node_name = quoted[0], quoted[1]
        else:
            # Element 'N': The attribute 'A' is required but missing.
            node_name, attribute_name = quoted[0], quoted[1]

        attribute_name = self.parser.local_name(attribute_name)
        node_name = self.parser.local_name(node_name)
        if not attribute_name or not node_name:
            return None

        entry = self.catalog.lookup(DefectCategory.MISSING_ATTRIBUTE, node_name, attribute_name)

        error_message = f"The node {node_name} is missing a {attribute_name} attribute."
        solution_message = f"Please add a {attribute_name} attribute to the {node_name} node."

        return Diagnostic(
            message=entry.explanation or error_message,
            severity=Severity.INFORMATIONAL,
            rule_id=entry.rule_id,
            solution=entry.solution or solution_message,
            category=DefectCategory.MISSING_ATTRIBUTE,
            node=node_name,
            missing=attribute_name,
            raw_message=message
        )
