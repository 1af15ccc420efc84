"""Small constructors for building hast trees by hand.

``h`` builds elements the way hyperscript does, ``u`` builds any node kind
from its hast ``type`` string. Both are meant for tests, fixtures and
programmatic tree construction; they do no sanitizing.

Example:
    >>> from sanitree.builder import h, u
    >>> h("ul", h("li", "one"), h("li", "two")).children[1].children[0].value
    'two'
    >>> u("comment", "note").value
    'note'
"""

from collections.abc import Iterable, Mapping
from typing import Any

from sanitree.location import Position
from sanitree.nodes import (
    Comment,
    Doctype,
    Element,
    Node,
    Raw,
    Root,
    Text,
    Unknown,
)


def _is_child(value: object) -> bool:
    return isinstance(value, (Node, str, int, float, list, tuple)) or value is None


def _children(values: Iterable[Any]) -> tuple[Node, ...]:
    """Flatten child arguments into nodes (strings and numbers become Text)."""
    result: list[Node] = []
    for value in values:
        if value is None:
            continue
        if isinstance(value, Node):
            result.append(value)
        elif isinstance(value, str):
            result.append(Text(value))
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            result.append(Text(str(value)))
        elif isinstance(value, (list, tuple)):
            result.extend(_children(value))
        else:
            msg = f"Expected node, string, number or list as child, got {type(value).__name__}"
            raise TypeError(msg)
    return tuple(result)


def h(tag_name: str | None = None, properties: Any = None, *children: Any) -> Element | Root:
    """Build an element.

    Args:
        tag_name: Tag of the element. Without one a Root is built instead.
        properties: Property mapping. If a node, string, number or list is
            given here it is taken as the first child.
        *children: Nodes, strings or (nested) lists of them

    Returns:
        Element, or Root when ``tag_name`` is None

    Example:
        >>> h("a", {"href": "#top"}, "Top").properties
        {'href': '#top'}

    """
    if _is_child(properties) and not isinstance(properties, Mapping):
        children = (properties, *children)
        properties = None

    if tag_name is None:
        return Root(children=_children(children))

    props = {
        name: value
        for name, value in (properties or {}).items()
        if value is not None
    }
    return Element(tag_name, properties=props, children=_children(children))


def u(type_name: str, props: Any = None, value: Any = None) -> Node:
    """Build a node from its hast ``type``.

    Args:
        type_name: hast type (``"root"``, ``"text"``, ``"element"``, ...).
            Unrecognized types build an Unknown node.
        props: Mapping of extra fields (``tagName``, ``properties``,
            ``data``, ``position``, ``name``). A string or list here is
            taken as ``value`` / children instead.
        value: String value for literals, or a list of children for parents

    Returns:
        The node

    """
    if not isinstance(props, Mapping):
        if value is None:
            value = props
        props = {}

    extra: dict[str, Any] = {
        "data": props.get("data"),
        "position": props.get("position")
        if isinstance(props.get("position"), Position)
        else Position.from_dict(props.get("position")),
    }

    match type_name:
        case "root":
            return Root(children=_children(value or ()), **extra)
        case "element":
            return Element(
                props.get("tagName"),
                properties=dict(props.get("properties") or {}),
                children=_children(value or ()),
                **extra,
            )
        case "text":
            return Text(value, **extra)
        case "comment":
            return Comment("" if value is None else value, **extra)
        case "doctype":
            return Doctype(props.get("name"), **extra)
        case "raw":
            return Raw("" if value is None else value, **extra)
        case _:
            return Unknown(type_name, value, **extra)
