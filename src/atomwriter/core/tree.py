"""Generic XML tree shared by feeds, entries and content fragments."""

from __future__ import annotations

import copy
from collections.abc import Iterator
from dataclasses import dataclass, field

ATOM_NS = "http://www.w3.org/2005/Atom"
XHTML_NS = "http://www.w3.org/1999/xhtml"


@dataclass
class XmlNode:
    """A minimal element: ``(tag, attributes, children)``.

    ``attributes`` is ``None`` for a simple element. Children are either
    nested nodes or text, and both attributes and children keep insertion
    order on output.
    """

    tag: str
    attributes: dict[str, str] | None = None
    children: list[XmlNode | str] = field(default_factory=list)

    @classmethod
    def simple(cls, tag: str, text: str) -> XmlNode:
        return cls(tag, None, [text])

    @property
    def is_simple(self) -> bool:
        return self.attributes is None and len(self.children) == 1 and isinstance(self.children[0], str)

    @property
    def is_empty(self) -> bool:
        return not any(child != "" for child in self.children)

    @property
    def text(self) -> str:
        """Concatenated direct text children."""
        return "".join(child for child in self.children if isinstance(child, str))

    def elements(self) -> Iterator[XmlNode]:
        for child in self.children:
            if isinstance(child, XmlNode):
                yield child

    def find(self, tag: str) -> XmlNode | None:
        return next((child for child in self.elements() if child.tag == tag), None)

    def find_all(self, tag: str) -> list[XmlNode]:
        return [child for child in self.elements() if child.tag == tag]

    def get(self, name: str, default: str | None = None) -> str | None:
        if self.attributes is None:
            return default
        return self.attributes.get(name, default)

    def copy(self) -> XmlNode:
        return copy.deepcopy(self)
