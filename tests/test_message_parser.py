from miring_validator.utils import MessageParser


def test_error_code():
    assert MessageParser.error_code("cvc-complex-type.4: Attribute 'a' must appear on element 'n'.") == "cvc-complex-type.4"
    assert MessageParser.error_code("Element 'n': The attribute 'a' is required but missing.") == ""
    assert MessageParser.error_code("") == ""


def test_quoted_values_in_order():
    message = "cvc-complex-type.4: Attribute 'quality-score' must appear on element 'variant'."
    assert MessageParser.quoted_values(message) == ["quality-score", "variant"]


def test_quoted_values_ignores_unpaired_quote():
    assert MessageParser.quoted_values("Element 'hml' is 'broken") == ["hml"]
    assert MessageParser.quoted_values("no quotes here") == []


def test_local_name_strips_namespaces():
    assert MessageParser.local_name('"http://schemas.nmdp.org/spec/hml/1.0.1":hmlid') == "hmlid"
    assert MessageParser.local_name("{http://schemas.nmdp.org/spec/hml/1.0.1}variant") == "variant"
    assert MessageParser.local_name(" 'sample' ") == "sample"


def test_expected_child_xerces_candidate_set():
    message = ("cvc-complex-type.2.4.a: Invalid content was found starting with element 'sample'. "
               "One of '{\"http://schemas.nmdp.org/spec/hml/1.0.1\":property, "
               "\"http://schemas.nmdp.org/spec/hml/1.0.1\":hmlid}' is expected.")
    assert MessageParser.expected_child(message) == "hmlid"


def test_expected_child_libxml2_candidate_set():
    message = ("Element '{http://schemas.nmdp.org/spec/hml/1.0.1}reporting-center': This element is not expected. "
               "Expected is one of ( {http://schemas.nmdp.org/spec/hml/1.0.1}property, "
               "{http://schemas.nmdp.org/spec/hml/1.0.1}hmlid ).")
    assert MessageParser.expected_child(message) == "hmlid"


def test_expected_child_skips_truncation_marker():
    message = "Element 'x': This element is not expected. Expected is one of ( a, b, ... )."
    assert MessageParser.expected_child(message) == "b"


def test_expected_child_without_candidates():
    assert MessageParser.expected_child("cvc-complex-type.2.4.a: Invalid content was found.") is None
    assert MessageParser.expected_child("Expected is ( )") is None


def test_format_attributes():
    rendered = MessageParser.format_attributes("sample", {"id": "1367-7150-8", "center-code": "567"})
    assert rendered == "Parent node sample has these attributes: {id:1367-7150-8}, {center-code:567}"
    assert MessageParser.format_attributes("hml", {}) == ""


def test_expected_child_ignores_element_names():
    message = "Element '{http://schemas.nmdp.org/spec/hml/1.0.1}foo': This element is not expected."
    assert MessageParser.expected_child(message) is None


def test_expected_child_xerces_without_candidate_set():
    message = "cvc-complex-type.2.4.d: Invalid content was found starting with element '{\"urn:x\":foo}'."
    assert MessageParser.expected_child(message) is None
