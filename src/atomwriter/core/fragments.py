"""Parse XHTML fragments into XmlNode trees."""

from lxml import etree

from atomwriter.core.exceptions import FragmentParseError
from atomwriter.core.logging import get_logger
from atomwriter.core.tree import XmlNode

logger = get_logger(__name__)

_XML_NS = "http://www.w3.org/XML/1998/namespace"
_WRAPPER = "atomwriter-fragment"
_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True, remove_pis=True)


def parse_fragment(text: str) -> list[XmlNode | str]:
    """Parse a well-formed XHTML fragment into nodes and text.

    The fragment may hold several top-level elements with text between them,
    e.g. ``"<p>one</p> and <p>two</p>"``.

    Unqualified markup stays unqualified and picks up XHTML from the content
    div. Elements declaring a default namespace keep it as ``xmlns``, and
    prefixed attributes (``xlink:href``) keep their prefix and declaration.

    Raises:
        FragmentParseError: If the fragment is not well-formed XML.

    """
    source = f"<{_WRAPPER}>{text}</{_WRAPPER}>"
    try:
        root = etree.fromstring(source.encode("utf-8"), parser=_PARSER)
    except etree.XMLSyntaxError as e:
        logger.warning("Rejected malformed XHTML fragment: %s", e)
        raise FragmentParseError(text, e) from e

    nodes = _convert_children(root)
    logger.debug("Parsed XHTML fragment into %d top-level nodes", len(nodes))
    return nodes


def _convert_children(element: etree._Element, namespace: str | None = None) -> list[XmlNode | str]:
    children: list[XmlNode | str] = []
    if element.text:
        children.append(element.text)
    for child in element:
        children.append(_convert(child, namespace))
        if child.tail:
            children.append(child.tail)
    return children


def _convert(element: etree._Element, parent_namespace: str | None) -> XmlNode:
    qname = etree.QName(element)
    attributes: dict[str, str] = {}
    # Unprefixed markup has no namespace here and inherits XHTML from the
    # content div; an explicit default namespace stays where it was declared.
    if qname.namespace != parent_namespace:
        attributes["xmlns"] = qname.namespace or ""

    prefixes = {uri: prefix for prefix, uri in element.nsmap.items() if prefix}
    for name, value in element.attrib.items():
        attr = etree.QName(name)
        if attr.namespace is None:
            attributes[attr.localname] = value
        elif attr.namespace == _XML_NS:
            attributes[f"xml:{attr.localname}"] = value
        else:
            prefix = prefixes.get(attr.namespace, "ns0")
            attributes[f"xmlns:{prefix}"] = attr.namespace
            attributes[f"{prefix}:{attr.localname}"] = value

    return XmlNode(qname.localname, attributes or None, _convert_children(element, qname.namespace))
