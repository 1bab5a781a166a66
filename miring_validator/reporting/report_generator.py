"""
MIRING Report Generation.

Serializes a ComplianceReport into the MIRING report XML document.
"""

from datetime import datetime

from lxml import etree

from ..models import ComplianceReport

REPORT_ROOT = "MiringReport"
RESULTS_NODE = "InvalidMiringResults"
RESULT_NODE = "InvalidMiringResult"


def generate_report(report: ComplianceReport) -> str:
    """
    Build the MIRING report document.

    Args:
        report: Compliance report to serialize

    Returns:
        XML document text
    """
    root = etree.Element(REPORT_ROOT)
    root.set("miringCompliant", "true" if report.compliant else "false")
    root.set("timestamp", report.timestamp or datetime.now().isoformat())

    hmlid = etree.SubElement(root, "hmlid")
    hmlid.set("root", report.hml_id.root)
    hmlid.set("extension", report.hml_id.extension)

    results = etree.SubElement(root, RESULTS_NODE)
    for diagnostic in report.diagnostics:
        result = etree.SubElement(results, RESULT_NODE)
        result.set("miringRuleID", diagnostic.rule_id)
        result.set("severity", diagnostic.severity.value)

        etree.SubElement(result, "description").text = diagnostic.message
        etree.SubElement(result, "solutionText").text = diagnostic.solution
        if diagnostic.location:
            etree.SubElement(result, "location").text = diagnostic.location
        if diagnostic.context:
            etree.SubElement(result, "moreInformation").text = diagnostic.context

    return etree.tostring(root, pretty_print=True, xml_declaration=True, encoding="UTF-8").decode("utf-8")


def read_report(report_xml: str) -> etree._Element:
    """Parse a generated report back into an element tree"""
    return etree.fromstring(report_xml.encode("utf-8"))


def is_compliant(report_xml: str) -> bool:
    return read_report(report_xml).get("miringCompliant") == "true"


def contains_error_node(report_xml: str, description: str) -> bool:
    """Check whether the report holds a result with the given description"""
    root = read_report(report_xml)
    return any(
        node.text == description
        for node in root.iter("description")
    )


def get_hml_id_root(report_xml: str) -> str:
    hmlid = read_report(report_xml).find("hmlid")
    return hmlid.get("root", "") if hmlid is not None else ""


def get_hml_id_extension(report_xml: str) -> str:
    hmlid = read_report(report_xml).find("hmlid")
    return hmlid.get("extension", "") if hmlid is not None else ""
