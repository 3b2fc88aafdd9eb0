"""Core exceptions for atomwriter."""


class AtomWriterError(Exception):
    """Base exception for all atomwriter errors."""


class FragmentParseError(AtomWriterError, ValueError):
    """Raised when an XHTML fragment is not well-formed."""

    def __init__(self, fragment: str, reason: str | Exception) -> None:
        self.fragment = fragment
        self.reason = reason
        super().__init__(f"Failed to parse XHTML fragment: {reason}")


class AuthorShapeError(AtomWriterError, TypeError):
    """Raised when author input matches none of the supported shapes."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Cannot build an author from {type(value).__name__}: {value!r}")
