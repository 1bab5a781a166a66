import pytest

from miring_validator import DefectCategory, SchemaValidator, Severity, TrackerContractViolation
from miring_validator.core.schema_validator import SchemaContentHandler
from miring_validator.models import UNMAPPED_RULE_ID

NS = "http://schemas.nmdp.org/spec/hml/1.0.1"


@pytest.fixture
def schema_validator(classifier):
    return SchemaValidator(classifier=classifier)


def test_valid_document_has_no_diagnostics(schema_validator, valid_hml):
    assert schema_validator.validate(valid_hml) == []


def test_missing_hmlid(schema_validator, hml_missing_hmlid):
    diagnostics = schema_validator.validate(hml_missing_hmlid)

    hmlid = [d for d in diagnostics if d.rule_id == "1.1.a"]
    assert len(hmlid) == 1
    assert hmlid[0].node == "hml"
    assert hmlid[0].missing == "hmlid"
    assert hmlid[0].location == "hml"
    assert hmlid[0].context == "Parent node hml has these attributes: {version:1.0.1}"


def test_missing_quality_score(schema_validator, hml_missing_quality_score):
    diagnostics = schema_validator.validate(hml_missing_quality_score)

    assert len(diagnostics) == 1
    assert diagnostics[0].rule_id == "5.6.a"
    assert diagnostics[0].category == DefectCategory.MISSING_ATTRIBUTE
    assert diagnostics[0].message == "The node variant is missing a quality-score attribute."


def test_missing_allele_db(schema_validator, hml_missing_allele_db):
    diagnostics = schema_validator.validate(hml_missing_allele_db)
    assert [d.rule_id for d in diagnostics] == ["2.1.b"]


def test_invalid_value_is_unmapped(schema_validator, make_hml):
    document = make_hml(variant_attributes='id="0" reference-bases="A" alternate-bases="G" quality-score="high" filter="pass"')
    diagnostics = schema_validator.validate(document)

    assert diagnostics
    assert all(d.rule_id == UNMAPPED_RULE_ID for d in diagnostics)
    assert all(d.severity == Severity.INFORMATIONAL for d in diagnostics)


def test_prolog_content_is_fatal(schema_validator, hml_with_prolog_content):
    diagnostics = schema_validator.validate(hml_with_prolog_content)

    assert diagnostics
    assert all(d.severity == Severity.FATAL for d in diagnostics)
    assert diagnostics[0].category == DefectCategory.PROLOG
    assert diagnostics[0].rule_id == "1.1"


def test_runs_are_independent(schema_validator, valid_hml, hml_missing_quality_score):
    assert len(schema_validator.validate(hml_missing_quality_score)) == 1
    assert schema_validator.validate(valid_hml) == []
    assert len(schema_validator.validate(hml_missing_quality_score)) == 1


def test_missing_schema_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SchemaValidator(tmp_path / "absent.xsd")


def test_handler_tracks_local_names(classifier):
    handler = SchemaContentHandler(classifier)
    handler.start("{http://schemas.nmdp.org/spec/hml/1.0.1}hml", {"version": "1.0.1"})

    assert handler.context.current_parent_name() == "hml"
    assert handler.context.current_parent_attributes() == {"version": "1.0.1"}


def test_handler_severity_overrides(classifier):
    handler = SchemaContentHandler(classifier)
    handler.warning("cvc-complex-type.4: Attribute 'filter' must appear on element 'variant'.")
    handler.fatal_error("something unexpected")
    handler.error("something else")

    diagnostics = handler.close()
    assert [d.severity for d in diagnostics] == [Severity.WARNING, Severity.FATAL, Severity.INFORMATIONAL]
    assert diagnostics[0].rule_id == "5.7.a"


def test_handler_close_with_open_elements(classifier):
    handler = SchemaContentHandler(classifier)
    handler.start("hml", {})

    with pytest.raises(TrackerContractViolation):
        handler.close()


def test_handler_end_without_start(classifier):
    handler = SchemaContentHandler(classifier)

    with pytest.raises(TrackerContractViolation):
        handler.end("hml")


def test_single_line_missing_hmlid(schema_validator, one_line, hml_missing_hmlid):
    diagnostics = schema_validator.validate(one_line(hml_missing_hmlid))

    hmlid = [d for d in diagnostics if d.rule_id == "1.1.a"]
    assert len(hmlid) == 1
    assert hmlid[0].node == "hml"
    assert hmlid[0].location == "hml"
    assert UNMAPPED_RULE_ID not in [d.rule_id for d in diagnostics]


def test_single_line_missing_quality_score(schema_validator, one_line, hml_missing_quality_score):
    diagnostics = schema_validator.validate(one_line(hml_missing_quality_score))
    assert [d.rule_id for d in diagnostics] == ["5.6.a"]


def test_incomplete_content_keeps_parent_attributes(schema_validator):
    document = f'<hml xmlns="{NS}" version="1.0.1"><hmlid root="1.2.3" extension="42"/></hml>'
    diagnostics = schema_validator.validate(document)

    reporting_center = [d for d in diagnostics if d.rule_id == "1.2.a"]
    assert len(reporting_center) == 1
    assert reporting_center[0].node == "hml"
    assert reporting_center[0].missing == "reporting-center"
    assert reporting_center[0].location == "hml"
    assert reporting_center[0].context == "Parent node hml has these attributes: {version:1.0.1}"
