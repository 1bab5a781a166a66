"""
Schema Pass: structural validation against the HML 1.0.1 XML Schema.

The lxml schema engine validates the document and the results are replayed as
a stream of element enter/exit and error callbacks in document order. Each
engine message is tied to the element it reports on by its node path and is
delivered just before that element is entered, so the traversal stack then
holds the parent of the defect, the same lag a streaming validator produces.
Messages about an element's own incomplete content are delivered just after
it is entered. Layout does not matter: a document on a single line replays
the same way.
"""

import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional, Union

from lxml import etree

from ..models import Diagnostic, Severity
from ..utils.hml_identifier import secure_parser, to_bytes
from .base_validator import BaseValidator
from .diagnostic_classifier import DiagnosticClassifier
from .traversal_context import TraversalContext, TrackerContractViolation

DEFAULT_SCHEMA_PATH = Path(__file__).parent.parent / "resources" / "schemas" / "hml-1.0.1-miring.xsd"


def _local_name(tag: str) -> str:
    return etree.QName(tag).localname


class SchemaContentHandler:
    """
    Receives the traversal and error callbacks of one schema validation run.

    Owns the run's TraversalContext and diagnostic list; create a new handler
    for every run.
    """

    def __init__(self, classifier: DiagnosticClassifier):
        self.classifier = classifier
        self.context = TraversalContext()
        self.diagnostics: List[Diagnostic] = []
        self.logger = logging.getLogger(__name__)

    def start(self, tag: str, attrib: Dict[str, str]):
        attributes = {_local_name(name): value for name, value in attrib.items()}
        self.context.on_element_enter(_local_name(tag), attributes)

    def end(self, tag: str):
        self.context.on_element_exit()

    def warning(self, message: str):
        self.logger.debug("Schema engine warning: %s", message)
        self._handle(message, Severity.WARNING)

    def error(self, message: str):
        self.logger.debug("Schema engine error: %s", message)
        self._handle(message)

    def fatal_error(self, message: str):
        self.logger.debug("Schema engine fatal error: %s", message)
        self._handle(message, Severity.FATAL)

    def _handle(self, message: str, severity: Optional[Severity] = None):
        diagnostic = self.classifier.classify_schema_diagnostic(message, self.context)
        if severity is not None:
            diagnostic.severity = severity
        self.diagnostics.append(diagnostic)

    def close(self) -> List[Diagnostic]:
        """
        Finish the run.

        Raises:
            TrackerContractViolation: If elements are still open
        """
        if not self.context.is_empty():
            raise TrackerContractViolation(
                f"Traversal ended with open elements: {self.context.current_path()}"
            )
        return list(self.diagnostics)


class SchemaValidator(BaseValidator):
    """Validate HML documents against the MIRING subset of the HML 1.0.1 schema"""

    def __init__(self,
                 schema_path: Optional[Union[str, Path]] = None,
                 classifier: Optional[DiagnosticClassifier] = None):
        """
        Args:
            schema_path: XML Schema file (optional, uses bundled schema if not provided)
            classifier: Diagnostic classifier (optional, uses bundled rule catalog if not provided)

        Raises:
            FileNotFoundError: If the schema file does not exist
            etree.XMLSchemaParseError: If the schema file is not a valid XML Schema
        """
        super().__init__()
        self.pass_name = "schema"
        self.logger = logging.getLogger(__name__)

        self.schema_path = Path(schema_path) if schema_path else DEFAULT_SCHEMA_PATH
        if not self.schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {self.schema_path}")

        self.schema_document = etree.parse(str(self.schema_path))
        # Compile once up front so a broken schema fails at construction
        etree.XMLSchema(self.schema_document)
        self.classifier = classifier or DiagnosticClassifier()

    def validate(self, xml: Union[str, bytes]) -> List[Diagnostic]:
        """
        Validate one HML document against the schema.

        Args:
            xml: HML document text

        Returns:
            Diagnostics in document order, empty if the document is schema valid

        Raises:
            TrackerContractViolation: If the traversal replay loses enter/exit parity
        """
        self.logger.debug("Starting a schema validation")
        handler = SchemaContentHandler(self.classifier)

        try:
            document = etree.fromstring(to_bytes(xml), secure_parser())
        except etree.XMLSyntaxError as e:
            self._report_syntax_error(e, handler)
            return handler.close()

        # A fresh validator per run: lxml validators keep their error log as state
        schema = etree.XMLSchema(self.schema_document)
        schema.validate(document)
        self._replay(document, list(schema.error_log), handler)

        diagnostics = handler.close()
        if diagnostics:
            self.logger.debug("%d schema validation errors found", len(diagnostics))
        else:
            self.logger.debug("ZERO schema validation errors found")
        return diagnostics

    def _replay(self, document: etree._Element, log_entries: list, handler: SchemaContentHandler):
        """
        Drive the handler with enter/exit events and engine messages in document order.

        Each message is tied to the element it reports on through its node
        path. It is delivered just before that element is entered, so the
        stack top is the element's parent. Messages reporting incomplete
        content of the named element are delivered just after it is entered,
        so its own attributes are available. Messages without a matching
        element are delivered once the traversal is complete.
        """
        before_start = defaultdict(list)
        after_start = defaultdict(list)
        unmatched = []

        for entry in log_entries:
            path = self._element_path(entry)
            if path is None:
                unmatched.append(entry)
            elif self.classifier.reports_incomplete_content(entry.message):
                after_start[path].append(entry)
            else:
                before_start[path].append(entry)

        tree = document.getroottree()
        for event, element in etree.iterwalk(document, events=("start", "end")):
            if not isinstance(element.tag, str):
                # comments and processing instructions
                continue
            if event == "start":
                path = tree.getpath(element)
                for entry in before_start.pop(path, []):
                    self._dispatch(entry, handler)
                handler.start(element.tag, element.attrib)
                for entry in after_start.pop(path, []):
                    self._dispatch(entry, handler)
            else:
                handler.end(element.tag)

        for entries in list(before_start.values()) + list(after_start.values()):
            unmatched.extend(entries)
        for entry in unmatched:
            self._dispatch(entry, handler)

    @staticmethod
    def _element_path(entry) -> Optional[str]:
        """Path of the element a log entry reports on; attribute paths map to their owner"""
        path = getattr(entry, 'path', None)
        if not path:
            return None
        if '/@' in path:
            path = path.split('/@', 1)[0]
        return path

    def _dispatch(self, entry, handler: SchemaContentHandler):
        if entry.level == etree.ErrorLevels.WARNING:
            handler.warning(entry.message)
        elif entry.level == etree.ErrorLevels.FATAL:
            handler.fatal_error(entry.message)
        else:
            handler.error(entry.message)

    def _report_syntax_error(self, error: etree.XMLSyntaxError, handler: SchemaContentHandler):
        """Deliver a document that is not well-formed as fatal engine messages"""
        self.logger.info("Document is not well-formed: %s", error)
        entries = [entry for entry in error.error_log if entry.level >= etree.ErrorLevels.ERROR]
        if not entries:
            handler.fatal_error(error.msg if getattr(error, 'msg', None) else str(error))
            return
        for entry in entries:
            handler.fatal_error(entry.message)
