import logging
from typing import Union

from lxml import etree

from ..models import HmlId

logger = logging.getLogger(__name__)


def secure_parser() -> etree.XMLParser:
    """Parser that keeps line numbers and never resolves entities or fetches URLs"""
    return etree.XMLParser(resolve_entities=False, no_network=True)


def to_bytes(xml: Union[str, bytes]) -> bytes:
    if isinstance(xml, bytes):
        return xml
    return xml.encode('utf-8')


def extract_hml_id(xml: Union[str, bytes]) -> HmlId:
    """
    Read the root and extension attributes of the first hmlid node.

    Args:
        xml: HML document text

    Returns:
        HmlId, with empty fields when the node is absent or the document is not well-formed
    """
    try:
        document = etree.fromstring(to_bytes(xml), secure_parser())
    except (etree.XMLSyntaxError, ValueError) as e:
        logger.debug("Cannot read hmlid from malformed document: %s", e)
        return HmlId()

    hmlid = document.find('.//{*}hmlid')
    if hmlid is None and etree.QName(document).localname == 'hmlid':
        hmlid = document
    if hmlid is None:
        return HmlId()

    return HmlId(
        root=hmlid.get('root', ''),
        extension=hmlid.get('extension', '')
    )
