"""
MIRING Batch Reporting.

This module saves the results of a batch validation as per-file MIRING report
documents, a JSON report and an Excel summary.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from ..models import ComplianceReport, Severity
from .report_generator import generate_report

DEFAULT_FORMATS = ("xml", "json", "excel")


class BatchReporter:
    """
    Reporting for batches of MIRING compliance reports.

    Generates XML report documents (one per file), a JSON report and an
    Excel workbook with Summary, Detailed Results and Rule Breakdown sheets.
    """

    def save_detailed_report(self, reports: List[ComplianceReport], output_dir: str = "output",
                             formats: Sequence[str] = DEFAULT_FORMATS):
        """
        Save comprehensive reports in multiple formats.

        XML reports go under an 'xml' subfolder, JSON under 'json'.
        The Excel summary is saved directly under output_dir.

        Args:
            reports: Compliance reports to save
            output_dir: Directory to save reports (default: "output")
            formats: Any of "xml", "json" and "excel" (default: all three)
        """
        if not reports:
            print("[INFO] No results to save - skipping report generation")
            return

        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        if "xml" in formats:
            xml_dir = output_path / "xml"
            xml_dir.mkdir(exist_ok=True)
            self.save_xml_reports(reports, xml_dir)
        if "json" in formats:
            json_dir = output_path / "json"
            json_dir.mkdir(exist_ok=True)
            self.save_json_report(reports, json_dir / "miring_validation_report.json")
        if "excel" in formats:
            self.save_excel_summary(reports, output_path / "miring_validation_report.xlsx")

        print(f"[OUTPUT] MIRING reports ({', '.join(formats)}) saved to: {output_path}")

    def save_xml_reports(self, reports: List[ComplianceReport], xml_dir: Path):
        """Write one MIRING report document per validated file"""
        for index, report in enumerate(reports, 1):
            if report.file_path:
                name = f"{Path(report.file_path).stem}_miring_report.xml"
            else:
                name = f"document_{index}_miring_report.xml"
            with open(xml_dir / name, 'w', encoding='utf-8') as f:
                f.write(generate_report(report))

    def save_json_report(self, reports: List[ComplianceReport], file_path: Path):
        """
        Save detailed JSON report.

        Args:
            reports: Compliance reports
            file_path: Path to save JSON report
        """
        report_data = {
            "timestamp": datetime.now().isoformat(),
            "evaluation_type": "MIRING Compliance",
            "total_files": len(reports),
            "summary": self.generate_summary(reports),
            "files": []
        }

        for report in reports:
            report_data["files"].append({
                "file_name": Path(report.file_path).name if report.file_path else "",
                "file_path": report.file_path or "",
                "hmlid_root": report.hml_id.root,
                "hmlid_extension": report.hml_id.extension,
                "miring_compliant": report.compliant,
                "score": report.score,
                "schema_errors": report.schema_error_count,
                "schematron_errors": report.schematron_error_count,
                "severity_breakdown": report.severity_breakdown,
                "diagnostics": [d.to_dict() for d in report.diagnostics]
            })

        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(report_data, f, indent=2, ensure_ascii=False)

    def generate_summary(self, reports: List[ComplianceReport]) -> Dict[str, Any]:
        """Generate batch summary statistics"""
        if not reports:
            return {}

        total_files = len(reports)
        compliant_files = sum(1 for r in reports if r.compliant)
        scores = [r.score for r in reports]

        severity_totals = {severity.value: 0 for severity in Severity}
        rule_breakdown: Dict[str, int] = {}
        for report in reports:
            for diagnostic in report.diagnostics:
                severity_totals[diagnostic.severity.value] += 1
                rule_breakdown[diagnostic.rule_id] = rule_breakdown.get(diagnostic.rule_id, 0) + 1

        return {
            "total_files": total_files,
            "compliant_files": compliant_files,
            "non_compliant_files": total_files - compliant_files,
            "compliance_rate": compliant_files / total_files * 100,
            "average_score": sum(scores) / len(scores),
            "min_score": min(scores),
            "max_score": max(scores),
            "total_diagnostics": sum(len(r.diagnostics) for r in reports),
            "schema_diagnostics": sum(r.schema_error_count for r in reports),
            "schematron_diagnostics": sum(r.schematron_error_count for r in reports),
            "severity_breakdown": severity_totals,
            "rule_breakdown": dict(sorted(rule_breakdown.items()))
        }

    def save_excel_summary(self, reports: List[ComplianceReport], file_path: Path):
        """
        Save Excel summary with 3 sheets: Summary, Detailed Results, Rule Breakdown.

        Args:
            reports: Compliance reports
            file_path: Path to save Excel file
        """
        wb = Workbook()

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")
        right_alignment = Alignment(horizontal="right", vertical="center")

        summary = self.generate_summary(reports)

        # SHEET 1: Summary Statistics
        ws_summary = wb.active
        ws_summary.title = "Summary"

        ws_summary['A1'] = "Metric"
        ws_summary['B1'] = "Value"
        for cell in (ws_summary['A1'], ws_summary['B1']):
            cell.font = header_font
            cell.fill = header_fill
        ws_summary['B1'].alignment = right_alignment

        summary_data = [
            ("Total Files", summary['total_files']),
            ("MIRING Compliant", summary['compliant_files']),
            ("Not Compliant", summary['non_compliant_files']),
            ("Compliance Rate (%)", f"{summary['compliance_rate']:.2f}"),
            ("Average Score", f"{summary['average_score']:.2f}"),
            ("Total Diagnostics", summary['total_diagnostics']),
            ("Schema Diagnostics", summary['schema_diagnostics']),
            ("Schematron Diagnostics", summary['schematron_diagnostics']),
        ]
        for severity, count in summary['severity_breakdown'].items():
            summary_data.append((f"Severity: {severity}", count))

        for row_idx, (metric, value) in enumerate(summary_data, 2):
            ws_summary[f'A{row_idx}'] = metric
            ws_summary[f'B{row_idx}'] = value
            ws_summary[f'B{row_idx}'].alignment = right_alignment

        ws_summary.column_dimensions['A'].width = 25
        ws_summary.column_dimensions['B'].width = 20

        # SHEET 2: Detailed Results, one row per diagnostic
        ws_details = wb.create_sheet(title="Detailed Results")
        headers = ['File Name', 'HML ID', 'MIRING Compliant', 'Rule ID', 'Severity',
                   'Description', 'Solution', 'Location', 'More Information']
        self._write_headers(ws_details, headers, header_font, header_fill, header_alignment)

        for report in reports:
            file_name = Path(report.file_path).name if report.file_path else ""
            hml_id = f"{report.hml_id.root}.{report.hml_id.extension}".strip(".")
            if not report.diagnostics:
                ws_details.append([file_name, hml_id, "Yes", "", "", "", "", "", ""])
                continue
            for diagnostic in report.diagnostics:
                ws_details.append([
                    file_name,
                    hml_id,
                    "Yes" if report.compliant else "No",
                    diagnostic.rule_id,
                    diagnostic.severity.value,
                    diagnostic.message,
                    diagnostic.solution,
                    diagnostic.location,
                    diagnostic.context
                ])

        self._fit_columns(ws_details, len(headers))

        # SHEET 3: Rule Breakdown
        ws_rules = wb.create_sheet(title="Rule Breakdown")
        self._write_headers(ws_rules, ['Rule ID', 'Count'], header_font, header_fill, header_alignment)
        for rule_id, count in summary['rule_breakdown'].items():
            ws_rules.append([rule_id, count])
        self._fit_columns(ws_rules, 2)

        wb.save(file_path)

    def _write_headers(self, worksheet, headers: List[str], font, fill, alignment):
        for col, header in enumerate(headers, 1):
            cell = worksheet.cell(row=1, column=col, value=header)
            cell.font = font
            cell.fill = fill
            cell.alignment = alignment

    def _fit_columns(self, worksheet, column_count: int, max_width: int = 60):
        for col in range(1, column_count + 1):
            letter = get_column_letter(col)
            width = max(
                (len(str(cell.value)) for cell in worksheet[letter] if cell.value is not None),
                default=10
            )
            worksheet.column_dimensions[letter].width = min(width + 2, max_width)
