from collections.abc import Callable
from datetime import datetime
from typing import Protocol, runtime_checkable

from atomwriter.core.tree import XmlNode


@runtime_checkable
class TextSink(Protocol):
    """Receives serialized text (io.StringIO, an open text file, sys.stdout)."""

    def write(self, text: str, /) -> object: ...


@runtime_checkable
class FragmentParser(Protocol):
    """Parses XHTML markup into nodes and text. Raises FragmentParseError on bad input."""

    def __call__(self, text: str, /) -> list[XmlNode | str]: ...


Clock = Callable[[], datetime]
