"""Atom feed document model.

A ``Feed`` and its ``Entry`` objects are ``XmlNode`` trees. Their fields are
child elements keyed by tag and are changed through two primitives only:
``set_singleton`` (replace in place, or append when missing) and
``append_repeatable`` (always append).
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, TypeAlias

from atomwriter.core.authors import resolve_author
from atomwriter.core.config import AtomWriterConfig
from atomwriter.core.content import (
    CONTENT_TYPES,
    ContentNode,
    as_content,
    html_content,
    text_content,
    xhtml_content,
)
from atomwriter.core.fragments import parse_fragment
from atomwriter.core.logging import get_logger
from atomwriter.core.ports import FragmentParser
from atomwriter.core.serializer import feed_to_xml_string
from atomwriter.core.timestamps import format_rfc3339
from atomwriter.core.tree import XmlNode

logger = get_logger(__name__)

FieldValue: TypeAlias = "str | Mapping[str, str] | XmlNode | ContentNode"
Timestamp: TypeAlias = datetime | str | None

SELF_LINK_TYPE = "application/atom+xml"


def _field_node(name: str, value: FieldValue) -> XmlNode:
    """Build the ``name`` element for a field value."""
    if isinstance(value, CONTENT_TYPES):
        return value.to_node(name)
    if isinstance(value, str):
        return XmlNode.simple(name, value)
    if isinstance(value, XmlNode):
        copied = value.copy()
        return XmlNode(name, copied.attributes, copied.children)
    if isinstance(value, Mapping):
        return XmlNode(name, {str(k): str(v) for k, v in value.items()}, [])
    msg = f"Unsupported value for field '{name}': {type(value).__name__}"
    raise TypeError(msg)


def _timestamp(updated: Timestamp) -> str:
    if isinstance(updated, str):
        return updated
    return format_rfc3339(updated)


class AtomElement(XmlNode):
    """An Atom container element whose children are its fields."""

    # Fields are inserted before the first child with one of these tags.
    trailing_tags: ClassVar[frozenset[str]] = frozenset()

    def set_singleton(self, name: str, value: FieldValue) -> XmlNode:
        """Replace the ``name`` field in place, or add it if it is missing.

        Text fields get their text replaced; structured fields (``link``,
        ``author``, content) get their whole attribute and child set replaced.
        Returns the field node, which stays attached to this element.
        """
        node = _field_node(name, value)
        existing = self.find(name)
        if existing is None:
            self._insert_field(node)
            return node

        existing.attributes = node.attributes
        existing.children = node.children
        logger.debug("Replaced <%s> in <%s>", name, self.tag)
        return existing

    def append_repeatable(self, name: str, value: FieldValue) -> XmlNode:
        """Add another ``name`` field even when one already exists."""
        node = _field_node(name, value)
        self._insert_field(node)
        return node

    def _insert_field(self, node: XmlNode) -> None:
        for index, child in enumerate(self.children):
            if isinstance(child, XmlNode) and child.tag in self.trailing_tags:
                self.children.insert(index, node)
                return
        self.children.append(node)


class Entry(AtomElement):
    """A single ``entry`` element."""

    @classmethod
    def create(
        cls,
        title: str | None,
        link: str | None,
        content: ContentNode | None,
        summary: ContentNode | None = None,
        updated: Timestamp = None,
        id: str | None = None,
    ) -> "Entry":
        """Build an entry. ``id`` defaults to ``link`` and ``updated`` to now.

        Missing title, link or content are left out rather than rejected.
        """
        entry = cls("entry")
        if title is not None:
            entry.set_singleton("title", title)
        if link is not None:
            entry.set_singleton("link", {"href": link})
        entry_id = id if id is not None else link
        if entry_id is not None:
            entry.set_singleton("id", entry_id)
        entry.set_singleton("updated", _timestamp(updated))
        if summary is not None:
            entry.set_singleton("summary", summary)
        if content is not None:
            entry.set_singleton("content", content)
        return entry


@dataclass(repr=False)
class Feed(AtomElement):
    """The ``feed`` element: singleton metadata followed by entries in append order."""

    trailing_tags: ClassVar[frozenset[str]] = frozenset({"entry"})

    config: AtomWriterConfig | None = field(default=None, compare=False)

    @classmethod
    def create(
        cls,
        title: str | None,
        link: str | None,
        author: object = None,
        self_link: str | None = None,
        updated: Timestamp = None,
        id: str | None = None,
        config: AtomWriterConfig | None = None,
    ) -> "Feed":
        """Create a feed with its singleton fields and no entries.

        Args:
            title: Feed title.
            link: Permanent link of the site the feed describes.
            author: ``None`` for the configured default, a name, a
                ``(name, email)`` pair, or a ready ``author`` XmlNode.
            self_link: URL the feed itself is published at.
            updated: Datetime or RFC 3339 text; defaults to now.
            id: Feed id; defaults to ``link``. Must stay the same across
                regenerations of the same feed.
            config: Settings holding the default author. Loaded from the
                environment when omitted.

        """
        if config is None:
            config = AtomWriterConfig.load()

        feed = cls("feed", config=config)
        if title is not None:
            feed.set_singleton("title", title)
        if link is not None:
            feed.set_singleton("link", {"href": link})
        if self_link is not None:
            feed.append_repeatable("link", {"href": self_link, "rel": "self", "type": SELF_LINK_TYPE})
        feed.set_author(author)
        feed.set_singleton("updated", _timestamp(updated))
        feed_id = id if id is not None else link
        if feed_id is not None:
            feed.set_singleton("id", feed_id)
        return feed

    @property
    def entries(self) -> list[XmlNode]:
        return self.find_all("entry")

    def set_author(self, author: object) -> XmlNode:
        """Resolve ``author`` against the configured defaults and store it."""
        config = self.config if self.config is not None else AtomWriterConfig.load()
        return self.set_singleton("author", resolve_author(author, config.author))

    def append_entry(self, entry: Entry) -> Entry:
        self.children.append(entry)
        logger.debug("Appended entry %d to feed", len(self.entries))
        return entry

    def add_entry(
        self,
        title: str | None,
        link: str | None,
        content: "str | XmlNode | ContentNode | None",
        summary: "str | XmlNode | ContentNode | None" = None,
        updated: Timestamp = None,
        id: str | None = None,
    ) -> Entry:
        """Append an entry and return it for further ``set_singleton`` calls.

        Strings are plain text, XmlNodes are inline XHTML, and content built
        by the ``content`` helpers is used as is.
        """
        return self.append_entry(
            Entry.create(
                title,
                link,
                as_content(content) if content is not None else None,
                summary=as_content(summary) if summary is not None else None,
                updated=updated,
                id=id,
            )
        )

    def add_text_entry(
        self,
        title: str | None,
        link: str | None,
        content: str | None,
        summary: str | None = None,
        updated: Timestamp = None,
        id: str | None = None,
    ) -> Entry:
        return self.append_entry(
            Entry.create(
                title,
                link,
                text_content(content) if content is not None else None,
                summary=text_content(summary) if summary is not None else None,
                updated=updated,
                id=id,
            )
        )

    def add_html_entry(
        self,
        title: str | None,
        link: str | None,
        content: str | None,
        summary: str | None = None,
        updated: Timestamp = None,
        id: str | None = None,
    ) -> Entry:
        return self.append_entry(
            Entry.create(
                title,
                link,
                html_content(content) if content is not None else None,
                summary=html_content(summary) if summary is not None else None,
                updated=updated,
                id=id,
            )
        )

    def add_xhtml_entry(
        self,
        title: str | None,
        link: str | None,
        content: "str | XmlNode | Sequence[XmlNode | str] | None",
        summary: "str | XmlNode | Sequence[XmlNode | str] | None" = None,
        updated: Timestamp = None,
        id: str | None = None,
        parser: FragmentParser = parse_fragment,
    ) -> Entry:
        """Like ``add_entry`` with content and summary parsed as XHTML.

        Raises:
            FragmentParseError: If a string fragment is not well-formed.

        """
        return self.append_entry(
            Entry.create(
                title,
                link,
                xhtml_content(content, parser) if content is not None else None,
                summary=xhtml_content(summary, parser) if summary is not None else None,
                updated=updated,
                id=id,
            )
        )

    def to_xml(self) -> str:
        return feed_to_xml_string(self)
