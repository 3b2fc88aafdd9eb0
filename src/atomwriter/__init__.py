"""atomwriter - build Atom 1.0 feeds in memory and serialize them to XML.

Typical use:
    feed = Feed.create("My feed", "http://example.org")
    feed.add_text_entry("Hello world", "http://example.org/hello", "Hello the world!")
    xml = feed.to_xml()
"""

from .core.authors import classify_author, resolve_author
from .core.config import AtomWriterConfig, AuthorSettings
from .core.content import html_content, text_content, xhtml_content
from .core.exceptions import AtomWriterError, AuthorShapeError, FragmentParseError
from .core.feed import Entry, Feed
from .core.identifiers import tag_uri
from .core.logging import get_logger, setup_logging
from .core.serializer import feed_to_xml_string, render, write_feed
from .core.timestamps import format_rfc3339
from .core.tree import ATOM_NS, XHTML_NS, XmlNode

__all__ = [
    "ATOM_NS",
    "XHTML_NS",
    "AtomWriterConfig",
    "AtomWriterError",
    "AuthorSettings",
    "AuthorShapeError",
    "Entry",
    "Feed",
    "FragmentParseError",
    "XmlNode",
    "classify_author",
    "feed_to_xml_string",
    "format_rfc3339",
    "get_logger",
    "html_content",
    "render",
    "resolve_author",
    "setup_logging",
    "tag_uri",
    "text_content",
    "write_feed",
    "xhtml_content",
]
