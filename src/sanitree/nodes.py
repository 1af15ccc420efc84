"""Typed hast nodes for sanitree.

All nodes are frozen dataclasses with slots for:
- Immutability: the sanitizer builds a new tree and never edits its input
- Thread safety: nodes (and schemas) can be shared across threads
- Pattern matching: the cleaner dispatches with ``match`` over a closed union

Node Hierarchy:
Node (base: data, position)
├── Root        (children)
├── Element     (tag_name, properties, children)
├── Text        (value)
└── "Other" kinds, always dropped by the sanitizer
    ├── Comment
    ├── Doctype
    ├── Raw
    └── Unknown (directives, processing instructions, unrecognized types)

The ``data`` and ``position`` fields are opaque: the sanitizer copies them
from an input node onto the node it emits in its place and never looks
inside.

Trees built from untrusted input are not type-checked at construction, so a
``Text.value`` may hold a non-string and ``Element.properties`` may hold
arbitrary objects. The cleaner treats every such value as absent.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, TypeAlias

from sanitree.location import Position

# PEP 695 aliases for property values
Primitive: TypeAlias = str | int | float | bool
PropertyValue: TypeAlias = Primitive | tuple[Primitive, ...]


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all hast nodes.

    ``type`` is the hast discriminator (``"root"``, ``"element"``, ...).

    """

    type: ClassVar[str] = ""

    data: Mapping[str, Any] | None = field(default=None, kw_only=True)
    position: Position | None = field(default=None, kw_only=True)


# =============================================================================
# Parents
# =============================================================================


@dataclass(frozen=True, slots=True)
class Root(Node):
    """Document or fragment root.

    Sanitizing a Root always yields a Root; sanitizing anything else that
    survives as several sibling nodes yields a fresh Root around them.

    """

    type: ClassVar[str] = "root"

    children: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Element(Node):
    """An HTML element.

    hast: {"type": "element", "tagName": "a", "properties": {"href": "#x"}}
    HTML: <a href="#x"></a>

    Property names use the hast (DOM) spelling: ``className``, ``longDesc``,
    ``dataFoo``.

    """

    type: ClassVar[str] = "element"

    tag_name: str | None
    properties: Mapping[str, Any] = field(default_factory=dict)
    children: tuple[Node, ...] = ()


# =============================================================================
# Literals
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Character data."""

    type: ClassVar[str] = "text"

    value: str


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """HTML comment: <!-- value -->"""

    type: ClassVar[str] = "comment"

    value: str = ""


@dataclass(frozen=True, slots=True)
class Doctype(Node):
    """Document type declaration: <!doctype name>"""

    type: ClassVar[str] = "doctype"

    name: str | None = None


@dataclass(frozen=True, slots=True)
class Raw(Node):
    """Unparsed markup to be emitted verbatim by a serializer."""

    type: ClassVar[str] = "raw"

    value: str = ""


@dataclass(frozen=True, slots=True)
class Unknown(Node):
    """Any node kind sanitree has no class for.

    Covers declarations and processing instructions (hast ``directive``),
    ``characterData`` and anything with an unrecognized ``type`` string,
    which is kept in ``type_name``.

    """

    type: ClassVar[str] = "unknown"

    type_name: str
    value: Any = None


# PEP 695 alias for the closed set of node kinds
AnyNode: TypeAlias = Root | Element | Text | Comment | Doctype | Raw | Unknown

# hast ``type`` strings with a dedicated class
NODE_TYPES: dict[str, type[Node]] = {
    "root": Root,
    "element": Element,
    "text": Text,
    "comment": Comment,
    "doctype": Doctype,
    "raw": Raw,
}


def is_node(value: object) -> bool:
    """Check whether ``value`` is one of the sanitree node kinds."""
    return isinstance(value, Node) and type(value) is not Node
