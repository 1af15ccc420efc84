"""hast JSON interchange for sanitree nodes.

Converts nodes to/from the JSON-compatible dict layout used by the unified
ecosystem (``type`` discriminator, camelCase ``tagName``). Useful for:
- Sanitizing trees produced by JavaScript tooling
- Caching sanitized trees to disk
- Debugging and inspection

Two readers:
- from_dict() is strict and raises NodeFormatError on a broken tree.
- coerce_node() is lenient and never raises. It is what sanitize() uses on
  untrusted mappings: unreadable children are skipped and odd values are
  kept so the cleaner can judge (and drop) them.

Example:
    from sanitree.serialization import from_json, to_json

    tree = from_json('{"type": "element", "tagName": "p", "children": []}')
    assert from_json(to_json(tree)) == tree

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

import json
from collections.abc import Mapping
from typing import Any

from sanitree.errors import NodeFormatError
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


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a hast JSON-compatible dict.

    Tuple property values become lists. ``data`` and ``position`` are only
    emitted when set.

    Args:
        node: Any sanitree node.

    Returns:
        Dict with ``type`` and the node's hast fields.

    """
    match node:
        case Root():
            result: dict[str, Any] = {
                "type": "root",
                "children": [to_dict(child) for child in node.children],
            }
        case Element():
            result = {
                "type": "element",
                "tagName": node.tag_name,
                "properties": {
                    name: _serialize_value(value) for name, value in node.properties.items()
                },
                "children": [to_dict(child) for child in node.children],
            }
        case Text() | Comment() | Raw():
            result = {"type": node.type, "value": node.value}
        case Doctype():
            result = {"type": "doctype", "name": node.name}
        case Unknown():
            result = {"type": node.type_name}
            if node.value is not None:
                result["value"] = node.value
        case _:
            msg = f"Cannot serialize {type(node).__name__}"
            raise TypeError(msg)

    if node.data is not None:
        result["data"] = dict(node.data)
    if isinstance(node.position, Position):
        result["position"] = node.position.to_dict()
    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single property value."""
    if isinstance(value, tuple):
        return list(value)
    # Primitives: str, int, float, bool
    return value


def from_dict(data: Mapping[str, Any]) -> Node:
    """Reconstruct a node from a hast dict.

    Unrecognized ``type`` strings become Unknown nodes.

    Args:
        data: Dict with ``type`` and node fields (as produced by to_dict).

    Returns:
        Typed node (frozen dataclass).

    Raises:
        NodeFormatError: If a node has no string ``type`` or ``children`` is
            not a list of node dicts.

    """
    return _read(data, "", strict=True)  # type: ignore[return-value]


def coerce_node(value: object) -> Node | None:
    """Leniently read an untrusted hast dict.

    Returns:
        The node, or None when ``value`` is not a mapping with a string
        ``type``. Children that cannot be read are skipped.

    Note:
        ``data`` and ``position`` are only opaque for node inputs. Read from
        a dict, ``position`` is rebuilt as a Position (extra unist keys such
        as ``indent`` are lost, and a partial position becomes None) and a
        ``data`` value that is not a mapping becomes None.

    """
    return _read(value, "", strict=False)


def _read(value: object, path: str, *, strict: bool) -> Node | None:
    if not isinstance(value, Mapping):
        if strict:
            msg = f"Expected a node dict, got {type(value).__name__}"
            raise NodeFormatError(msg, path or None)
        return None

    type_name = value.get("type")
    if not isinstance(type_name, str):
        if strict:
            msg = "Missing 'type' field in serialized node"
            raise NodeFormatError(msg, path or None)
        return None

    extra: dict[str, Any] = {
        "data": value.get("data") if isinstance(value.get("data"), Mapping) else None,
        "position": Position.from_dict(value.get("position")),
    }

    match type_name:
        case "root":
            return Root(children=_read_children(value, path, strict=strict), **extra)
        case "element":
            properties = value.get("properties")
            return Element(
                value.get("tagName"),
                properties=dict(properties) if isinstance(properties, Mapping) else {},
                children=_read_children(value, path, strict=strict),
                **extra,
            )
        case "text":
            return Text(value.get("value"), **extra)
        case "comment":
            return Comment(value.get("value", ""), **extra)
        case "doctype":
            return Doctype(value.get("name"), **extra)
        case "raw":
            return Raw(value.get("value", ""), **extra)
        case _:
            return Unknown(type_name, value.get("value"), **extra)


def _child_path(path: str, index: int) -> str:
    return f"{path}.children[{index}]" if path else f"children[{index}]"


def _read_children(value: Mapping[str, Any], path: str, *, strict: bool) -> tuple[Node, ...]:
    children = value.get("children", [])
    if not isinstance(children, (list, tuple)):
        if strict:
            msg = f"Expected 'children' to be a list, got {type(children).__name__}"
            raise NodeFormatError(msg, path or None)
        return ()
    return tuple(
        node
        for index, child in enumerate(children)
        if (node := _read(child, _child_path(path, index), strict=strict)) is not None
    )


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize a node to a hast JSON string.

    Output is deterministic (sorted keys).

    Args:
        node: Node to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(node), sort_keys=True, indent=indent)


def from_json(data: str) -> Node:
    """Deserialize a node from a hast JSON string.

    Raises:
        NodeFormatError: If the JSON is not a hast tree.

    """
    return from_dict(json.loads(data))
