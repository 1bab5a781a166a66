"""Shared HML documents and validator fixtures."""

import pytest

from miring_validator import DiagnosticClassifier, RuleCatalog

HML_NAMESPACE = "http://schemas.nmdp.org/spec/hml/1.0.1"

HMLID = '<hmlid root="2.16.840.1.113883.3.1470" extension="1234567"/>'
ALLELE_ATTRIBUTES = 'allele-db="IMGT/HLA" allele-version="3.18.0"'
VARIANT_ATTRIBUTES = 'id="0" reference-bases="A" alternate-bases="G" quality-score="95" filter="pass"'

HML_TEMPLATE = """{prolog}<?xml version="1.0" encoding="UTF-8"?>
<hml xmlns="{namespace}" version="1.0.1">
  {hmlid}
  <reporting-center reporting-center-id="567"/>
  <sample id="1367-7150-8" center-code="567">
    <typing gene-family="HLA" date="2015-01-20">
      <allele-assignment {allele_attributes}>
        <glstring>HLA-A*01:01:01:01</glstring>
      </allele-assignment>
      <consensus-sequence date="2015-01-20">
        <reference-database availability="public" curated="true">
          <reference-sequence id="Ref111" name="HLA-A*01:01:01:01" start="{reference_start}" end="{reference_end}"/>
        </reference-database>
        <consensus-sequence-block reference-sequence-id="Ref111" start="0" end="3503">
          <sequence>ACGTACGTAC</sequence>
          <variant {variant_attributes} start="12" end="13"/>
        </consensus-sequence-block>
      </consensus-sequence>
    </typing>
  </sample>
</hml>
"""


def build_hml(prolog="", hmlid=HMLID, allele_attributes=ALLELE_ATTRIBUTES,
              variant_attributes=VARIANT_ATTRIBUTES, reference_start="0", reference_end="3503"):
    """HML document with one element per line, valid unless a part is overridden"""
    return HML_TEMPLATE.format(
        prolog=prolog,
        namespace=HML_NAMESPACE,
        hmlid=hmlid,
        allele_attributes=allele_attributes,
        variant_attributes=variant_attributes,
        reference_start=reference_start,
        reference_end=reference_end
    )


@pytest.fixture
def make_hml():
    return build_hml


@pytest.fixture
def valid_hml():
    return build_hml()


@pytest.fixture
def hml_missing_hmlid():
    return build_hml(hmlid="")


@pytest.fixture
def hml_missing_quality_score():
    return build_hml(variant_attributes='id="0" reference-bases="A" alternate-bases="G" filter="pass"')


@pytest.fixture
def hml_missing_allele_db():
    return build_hml(allele_attributes='allele-version="3.18.0"')


@pytest.fixture
def hml_reversed_reference_sequence():
    return build_hml(reference_start="3503", reference_end="100")


@pytest.fixture
def hml_with_prolog_content():
    return build_hml(prolog="junk")


@pytest.fixture
def catalog():
    return RuleCatalog.load()


@pytest.fixture
def classifier(catalog):
    return DiagnosticClassifier(catalog)


def flatten(document):
    """The same document with all layout whitespace between tags removed"""
    return "".join(line.strip() for line in document.splitlines())


@pytest.fixture
def one_line():
    return flatten
