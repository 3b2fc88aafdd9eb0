"""Author resolution: polymorphic author input into an Atom person construct."""

from collections.abc import Sequence
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, InstanceOf

from atomwriter.core.config import AuthorSettings
from atomwriter.core.exceptions import AuthorShapeError
from atomwriter.core.tree import XmlNode


class DefaultAuthor(BaseModel):
    """Name and email taken from the configured defaults."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["default"] = "default"


class NameOnlyAuthor(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["name"] = "name"
    name: str


class NameAndEmailAuthor(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["name_and_email"] = "name_and_email"
    name: str
    email: str | None = None


class RawAuthor(BaseModel):
    """A fully formed author element, rendered verbatim."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["raw"] = "raw"
    node: InstanceOf[XmlNode]


AuthorNode = Annotated[
    DefaultAuthor | NameOnlyAuthor | NameAndEmailAuthor | RawAuthor,
    Field(discriminator="kind"),
]
AUTHOR_TYPES = (DefaultAuthor, NameOnlyAuthor, NameAndEmailAuthor, RawAuthor)


def classify_author(value: object) -> AuthorNode:
    """Classify author input, in this order.

    1. ``None``: the configured default author.
    2. A string: a full name. No email is added, not even the default one.
    3. A two-element sequence: ``(name, email)``. Parts that are not
       strings go through ``str()``; a ``None`` email is left out.
    4. An ``XmlNode``: an already formed author element.

    Already classified variants pass through unchanged.

    Raises:
        AuthorShapeError: If ``value`` fits none of the shapes (numbers,
            mappings, sequences of any other length), since those have no
            rendering as a person construct.

    """
    if isinstance(value, AUTHOR_TYPES):
        return value
    if value is None:
        return DefaultAuthor()
    if isinstance(value, str):
        return NameOnlyAuthor(name=value)
    if isinstance(value, Sequence) and not isinstance(value, bytes | bytearray) and len(value) == 2:
        name, email = value
        return NameAndEmailAuthor(
            name="" if name is None else str(name),
            email=None if email is None else str(email),
        )
    if isinstance(value, XmlNode):
        return RawAuthor(node=value)
    raise AuthorShapeError(value)


def author_to_node(author: AuthorNode, defaults: AuthorSettings) -> XmlNode:
    match author:
        case DefaultAuthor():
            return _person(defaults.name, defaults.email)
        case NameOnlyAuthor(name=name):
            return _person(name)
        case NameAndEmailAuthor(name=name, email=email):
            return _person(name, email)
        case RawAuthor(node=node):
            return node.copy()


def resolve_author(value: object, defaults: AuthorSettings) -> XmlNode:
    return author_to_node(classify_author(value), defaults)


def _person(name: str, email: str | None = None) -> XmlNode:
    author = XmlNode("author", None, [XmlNode.simple("name", name)])
    if email is not None:
        author.children.append(XmlNode.simple("email", email))
    return author
