"""
MIRING Compliance Validation.

This module runs the schema pass and the schematron pass over HML documents
and assembles MIRING compliance reports.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..models import ComplianceReport, DefectCategory, Diagnostic, Severity
from ..utils.hml_identifier import extract_hml_id
from ..utils.hml_file_reader import HmlFileReader
from .aggregator import DiagnosticAggregator
from .diagnostic_classifier import DiagnosticClassifier
from .rule_catalog import RuleCatalog
from .schema_validator import SchemaValidator
from .schematron_validator import RuleEngine, SchematronValidator


class MiringValidator:
    """
    Validate HML documents for MIRING compliance.

    Every call to validate() is an independent run with its own traversal
    state, so one instance can serve a whole batch.
    """

    def __init__(self,
                 schema_path: Optional[Union[str, Path]] = None,
                 schematron_path: Optional[Union[str, Path]] = None,
                 catalog_path: Optional[Union[str, Path]] = None,
                 rule_engine: Optional[RuleEngine] = None,
                 run_schematron: bool = True,
                 quiet: bool = False):
        """
        Initialize the validator.

        Args:
            schema_path: XML Schema file (optional, uses bundled HML schema if not provided)
            schematron_path: Schematron rules (optional, uses bundled rules if not provided)
            catalog_path: MIRING rule catalog (optional, uses bundled catalog if not provided)
            rule_engine: Schematron engine (optional, defaults to lxml isoschematron)
            run_schematron: Whether to run the schematron pass
            quiet: If True, suppress print statements (logging still active)
        """
        self.logger = logging.getLogger(__name__)
        self.quiet = quiet
        self.run_schematron = run_schematron

        self.catalog = RuleCatalog.load(catalog_path)
        self.classifier = DiagnosticClassifier(self.catalog)
        self.schema_validator = SchemaValidator(schema_path, self.classifier)
        self.schematron_validator = None
        if run_schematron:
            self.schematron_validator = SchematronValidator(schematron_path, rule_engine, self.classifier)
        self.aggregator = DiagnosticAggregator()

    def validate(self, xml: Union[str, bytes], file_path: Optional[str] = None) -> ComplianceReport:
        """
        Validate one HML document.

        Args:
            xml: HML document text
            file_path: Source file, recorded in the report

        Returns:
            ComplianceReport for the document

        Raises:
            TrackerContractViolation: If the schema pass loses traversal parity
        """
        self.logger.debug("Starting MIRING validation%s", f" of {file_path}" if file_path else "")

        schema_diagnostics = self.schema_validator.validate(xml)

        schematron_diagnostics: List[Diagnostic] = []
        if self.schematron_validator is not None:
            schematron_diagnostics = self.schematron_validator.validate(xml)

        report = self.aggregator.aggregate(
            schema_diagnostics,
            schematron_diagnostics,
            extract_hml_id(xml),
            file_path
        )
        self.logger.info(
            "MIRING validation finished: compliant=%s, %d schema and %d schematron diagnostics",
            report.compliant, report.schema_error_count, report.schematron_error_count
        )
        return report

    def validate_file(self, file_path: Union[str, Path]) -> ComplianceReport:
        """
        Validate one HML file.

        An unreadable file yields a non-compliant report with a single fatal diagnostic.
        """
        file_path = str(file_path)
        read_result = HmlFileReader.read_file(file_path)

        if not read_result['success']:
            self.logger.error("Could not read %s: %s", file_path, read_result['message'])
            diagnostic = Diagnostic(
                message=f"Could not read file: {read_result['message']}",
                severity=Severity.FATAL,
                rule_id=self.catalog.unmapped_rule_id,
                solution="Please provide a readable, non-empty HML file.",
                category=DefectCategory.UNCLASSIFIED,
                raw_message=read_result['error_type'],
                source="file"
            )
            return self.aggregator.aggregate([diagnostic], [], file_path=file_path)

        return self.validate(read_result['content'], file_path)

    def validate_directory(self, input_path: Union[str, Path], pattern: str = "*.xml") -> List[ComplianceReport]:
        """
        Validate every matching HML file in a directory.

        Args:
            input_path: Directory path containing HML files or single file path
            pattern: Glob pattern to match files (default: "*.xml")

        Returns:
            One ComplianceReport per file, in file name order
        """
        input_path = Path(input_path)
        reports = []

        if not input_path.exists():
            self.logger.error("Directory not found: %s", input_path)
            if not self.quiet:
                print(f"[ERROR] Directory not found: {input_path}")
            return reports

        if input_path.is_file():
            xml_files = [input_path]
        else:
            xml_files = list(input_path.glob(pattern))

        if not xml_files:
            self.logger.error("No HML files found in %s with pattern '%s'", input_path, pattern)
            if not self.quiet:
                print(f"[ERROR] No HML files found in {input_path} with pattern '{pattern}'")
            return reports

        self.logger.info("Found %d HML files to validate", len(xml_files))
        if not self.quiet:
            print(f"Found {len(xml_files)} HML files to validate")
            print(f"   Rule catalog: {self.catalog.version or 'unversioned'} ({len(self.catalog)} rules)")
            print(f"   Schematron pass: {'Enabled' if self.run_schematron else 'Disabled'}")
            print("=" * 60)

        for xml_file in sorted(xml_files):
            self.logger.info("Validating: %s", xml_file.name)
            report = self.validate_file(xml_file)
            reports.append(report)

            if not self.quiet:
                status = "[COMPLIANT]" if report.compliant else "[NOT COMPLIANT]"
                print(f"   {status} {xml_file.name} ({len(report.diagnostics)} diagnostics)")

        return reports

    def print_batch_summary(self, reports: List[ComplianceReport]):
        """Print a summary of a batch validation"""
        if not reports:
            print("No reports to summarize")
            return

        total = len(reports)
        compliant = sum(1 for r in reports if r.compliant)
        total_diagnostics = sum(len(r.diagnostics) for r in reports)

        print("\n" + "=" * 60)
        print("MIRING VALIDATION SUMMARY")
        print("=" * 60)
        print(f"Files validated: {total}")
        print(f"MIRING compliant: {compliant} ({compliant / total * 100:.1f}%)")
        print(f"Total diagnostics: {total_diagnostics}")

        for severity in Severity:
            count = sum(r.severity_breakdown.get(severity.value, 0) for r in reports)
            if count:
                print(f"   {severity.value}: {count}")
        print("=" * 60)
