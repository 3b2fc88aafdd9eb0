"""XML serialization of XmlNode trees and Atom documents."""

import io
from xml.sax.saxutils import escape

from atomwriter.core.logging import get_logger
from atomwriter.core.ports import TextSink
from atomwriter.core.tree import ATOM_NS, XmlNode

logger = get_logger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'

_TEXT_ENTITIES = {"\r": "&#13;"}
_ATTRIBUTE_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}


def escape_text(text: str) -> str:
    return escape(text, _TEXT_ENTITIES)


def escape_attribute(value: str) -> str:
    return escape(value, _ATTRIBUTE_ENTITIES)


def serialize(node: XmlNode, sink: TextSink, attributes: dict[str, str] | None = None) -> None:
    """Write ``node`` and its subtree to ``sink``.

    ``attributes`` overrides the node's own attributes, which is how the
    document root gets its namespace declaration without touching the tree.
    """
    attrs = node.attributes if attributes is None else attributes
    sink.write(f"<{node.tag}")
    for name, value in (attrs or {}).items():
        sink.write(f' {name}="{escape_attribute(value)}"')

    if node.is_empty:
        sink.write("/>")
        return

    sink.write(">")
    for child in node.children:
        if isinstance(child, XmlNode):
            serialize(child, sink)
        else:
            sink.write(escape_text(child))
    sink.write(f"</{node.tag}>")


def render(node: XmlNode) -> str:
    buffer = io.StringIO()
    serialize(node, buffer)
    return buffer.getvalue()


def write_feed(feed: XmlNode, sink: TextSink) -> None:
    """Write a complete Atom document: the XML declaration, then ``feed`` in the Atom namespace."""
    sink.write(XML_DECLARATION)
    sink.write("\n")
    serialize(feed, sink, attributes={"xmlns": ATOM_NS, **(feed.attributes or {})})
    logger.debug("Wrote Atom feed with %d entries", len(feed.find_all("entry")))


def feed_to_xml_string(feed: XmlNode) -> str:
    """Serialize a feed to an Atom XML string."""
    buffer = io.StringIO()
    write_feed(feed, buffer)
    return buffer.getvalue()
