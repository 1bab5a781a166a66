from miring_validator import ComplianceReport, Diagnostic, DiagnosticAggregator, HmlId, Severity
from miring_validator.reporting import generate_report
from miring_validator.reporting.report_generator import (
    contains_error_node,
    get_hml_id_extension,
    get_hml_id_root,
    is_compliant,
    read_report,
)


def diagnostics_for_report():
    return [
        Diagnostic("There is a missing hmlid node underneath the hml node.", Severity.INFORMATIONAL, "1.1.a",
                   "Please add exactly one hmlid node underneath the hml node.", location="hml"),
        Diagnostic("The node variant is missing a quality-score attribute.", Severity.INFORMATIONAL, "5.6.a",
                   "Please add a quality-score attribute to the variant node."),
        Diagnostic("The node variant is missing a filter attribute.", Severity.INFORMATIONAL, "5.7.a",
                   "Please add a filter attribute to the variant node."),
        Diagnostic("Deprecated attribute used.", Severity.WARNING),
        Diagnostic("The reference-sequence node Ref111 has an end attribute smaller than its start attribute.",
                   Severity.INFORMATIONAL, "4.2.3",
                   "Please verify the start and end attributes on your reference-sequence node.",
                   source="schematron"),
    ]


def test_report_contents():
    report = DiagnosticAggregator().aggregate(
        diagnostics_for_report()[:4], diagnostics_for_report()[4:], HmlId("1234", "abcd")
    )
    report_xml = generate_report(report)
    root = read_report(report_xml)

    assert report_xml.startswith("<?xml")
    assert root.tag == "MiringReport"
    assert len(root.findall("InvalidMiringResults/InvalidMiringResult")) == 5
    assert get_hml_id_root(report_xml) == "1234"
    assert get_hml_id_extension(report_xml) == "abcd"
    assert not is_compliant(report_xml)
    assert contains_error_node(report_xml, "The node variant is missing a quality-score attribute.")
    assert not contains_error_node(report_xml, "The node variant is missing an id attribute.")


def test_result_node_attributes():
    report = DiagnosticAggregator().aggregate(diagnostics_for_report()[:1], [])
    result = read_report(generate_report(report)).find("InvalidMiringResults/InvalidMiringResult")

    assert result.get("miringRuleID") == "1.1.a"
    assert result.get("severity") == "informational"
    assert result.findtext("description") == "There is a missing hmlid node underneath the hml node."
    assert result.findtext("solutionText") == "Please add exactly one hmlid node underneath the hml node."
    assert result.findtext("location") == "hml"
    assert result.find("moreInformation") is None


def test_compliance_flags():
    aggregator = DiagnosticAggregator()

    clean = generate_report(aggregator.aggregate([], []))
    warnings_only = generate_report(aggregator.aggregate([Diagnostic("Deprecated attribute used.", Severity.WARNING)], []))
    defect = generate_report(aggregator.aggregate(diagnostics_for_report()[:1], []))

    assert is_compliant(clean)
    assert is_compliant(warnings_only)
    assert not is_compliant(defect)


def test_empty_hml_id():
    report_xml = generate_report(ComplianceReport(compliant=True))

    assert get_hml_id_root(report_xml) == ""
    assert get_hml_id_extension(report_xml) == ""
    assert read_report(report_xml).find("InvalidMiringResults") is not None
