"""Content massaging: raw text, HTML or XHTML input into typed content constructs."""

from collections.abc import Sequence
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, InstanceOf

from atomwriter.core.fragments import parse_fragment
from atomwriter.core.ports import FragmentParser
from atomwriter.core.tree import XHTML_NS, XmlNode


class TextContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str

    @property
    def type_attribute(self) -> str | None:
        return None

    def to_node(self, tag: str) -> XmlNode:
        return XmlNode.simple(tag, self.text)


class HtmlContent(BaseModel):
    """HTML kept verbatim; the serializer escapes it as text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["html"] = "html"
    html: str

    @property
    def type_attribute(self) -> str | None:
        return "html"

    def to_node(self, tag: str) -> XmlNode:
        return XmlNode(tag, {"type": "html"}, [self.html])


class XhtmlContent(BaseModel):
    """Inline XHTML wrapped in a ``div`` in the XHTML namespace."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["xhtml"] = "xhtml"
    div: InstanceOf[XmlNode]

    @property
    def type_attribute(self) -> str | None:
        return "xhtml"

    def to_node(self, tag: str) -> XmlNode:
        return XmlNode(tag, {"type": "xhtml"}, [self.div.copy()])


ContentNode = Annotated[TextContent | HtmlContent | XhtmlContent, Field(discriminator="kind")]
CONTENT_TYPES = (TextContent, HtmlContent, XhtmlContent)


def text_content(text: str) -> TextContent:
    return TextContent(text=text)


def html_content(html: str) -> HtmlContent:
    """Wrap an HTML string as ``type="html"`` content without validating it."""
    return HtmlContent(html=html)


def xhtml_content(
    value: str | XmlNode | Sequence[XmlNode | str],
    parser: FragmentParser = parse_fragment,
) -> XhtmlContent:
    """Build ``type="xhtml"`` content from markup text or an existing tree.

    Strings are handed to ``parser``; trees are copied, never aliased. Input
    that is a single XHTML ``div``, whether given as markup or as a tree,
    becomes the wrapper itself; anything else is wrapped in a new one.

    Raises:
        FragmentParseError: If ``value`` is a string that does not parse.

    """
    if isinstance(value, str):
        nodes = parser(value)
    elif isinstance(value, XmlNode):
        nodes = [value.copy()]
    else:
        nodes = [item.copy() if isinstance(item, XmlNode) else item for item in value]

    significant = [node for node in nodes if not (isinstance(node, str) and not node.strip())]
    if len(significant) == 1 and isinstance(significant[0], XmlNode) and _is_xhtml_div(significant[0]):
        return XhtmlContent(div=significant[0])
    return XhtmlContent(div=XmlNode("div", {"xmlns": XHTML_NS}, nodes))


def as_content(value: "str | XmlNode | ContentNode") -> ContentNode:
    """Classify ``add_entry`` content input: text, an XHTML tree, or ready content."""
    if isinstance(value, CONTENT_TYPES):
        return value
    if isinstance(value, str):
        return text_content(value)
    if isinstance(value, XmlNode):
        return xhtml_content(value)
    msg = f"Unsupported content type: {type(value).__name__}"
    raise TypeError(msg)


def _is_xhtml_div(node: XmlNode) -> bool:
    return node.tag == "div" and node.get("xmlns") == XHTML_NS
