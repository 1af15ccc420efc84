"""The sanitizing tree transform.

clean() walks a hast tree top-down, threading the tags of the kept enclosing
elements, and returns what a node turns into as a tuple of zero or more
nodes:

- ``()``: the node (and its subtree) is dropped
- ``(node,)``: the node is kept, rebuilt from its sanitized parts
- ``(a, b, ...)``: the element was unwrapped: its own tag and properties
  are gone and its sanitized children take its place among its siblings

Parents are rebuilt from the concatenated tuples of their children, so the
input tree is never modified.

Nothing here raises on input data. Wrong types, missing fields and unknown
node kinds all degrade to "drop" or "unwrap".

Thread Safety:
clean() is pure and safe to call from any thread with a shared Schema.

"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sanitree.nodes import Comment, Doctype, Element, Node, Raw, Root, Text, Unknown
from sanitree.schema import Schema
from sanitree.structure import is_structurally_valid
from sanitree.utils.logger import get_logger
from sanitree.values import sanitize_value

logger = get_logger(__name__)


def clean(node: object, ancestor_tags: Sequence[str], schema: Schema) -> tuple[Node, ...]:
    """Sanitize one node.

    Args:
        node: Node from the untrusted tree (any value is accepted)
        ancestor_tags: Tags of the kept enclosing elements, nearest last
        schema: Policy to apply

    Returns:
        The nodes that replace ``node`` in its parent.

    """
    match node:
        case Root():
            return (
                Root(
                    children=_clean_children(node.children, ancestor_tags, schema),
                    data=node.data,
                    position=node.position,
                ),
            )
        case Element():
            return _clean_element(node, ancestor_tags, schema)
        case Text():
            return _clean_text(node, ancestor_tags, schema)
        case Comment() | Doctype() | Raw() | Unknown():
            return ()
        case _:
            return ()


def _clean_children(
    children: object, ancestor_tags: Sequence[str], schema: Schema
) -> tuple[Node, ...]:
    """Clean each child and concatenate the replacements in order."""
    if not isinstance(children, (list, tuple)):
        return ()
    return tuple(
        replacement
        for child in children
        for replacement in clean(child, ancestor_tags, schema)
    )


def _clean_text(node: Text, ancestor_tags: Sequence[str], schema: Schema) -> tuple[Node, ...]:
    if not isinstance(node.value, str):
        return ()
    if ancestor_tags and schema.is_stripped(ancestor_tags[-1]):
        return ()
    return (Text(node.value, data=node.data, position=node.position),)


def _clean_element(
    node: Element, ancestor_tags: Sequence[str], schema: Schema
) -> tuple[Node, ...]:
    tag_name = node.tag_name

    # Stripping wins over the allow-list.
    if schema.is_stripped(tag_name):
        logger.debug("Dropping <%s> and its subtree", tag_name)
        return ()

    if not schema.allows_tag(tag_name):
        logger.debug("Unwrapping disallowed element %r", tag_name)
        return _clean_children(node.children, ancestor_tags, schema)

    if not is_structurally_valid(tag_name, ancestor_tags, schema):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Unwrapping <%s> outside of %s",
                tag_name,
                "/".join(sorted(schema.required_ancestors(tag_name))),
            )
        return _clean_children(node.children, ancestor_tags, schema)

    return (
        Element(
            tag_name,
            properties=_clean_properties(tag_name, node.properties, schema),
            children=_clean_children(node.children, (*ancestor_tags, tag_name), schema),
            data=node.data,
            position=node.position,
        ),
    )


def _clean_properties(tag_name: str, properties: object, schema: Schema) -> dict[str, Any]:
    """Keep the allowed properties whose values survive sanitize_value()."""
    if not isinstance(properties, Mapping):
        return {}

    result: dict[str, Any] = {}
    for name, raw_value in properties.items():
        if not isinstance(name, str) or not schema.allows_attribute(tag_name, name):
            continue
        value = sanitize_value(tag_name, name, raw_value, schema)
        if value is None:
            logger.debug("Dropping %s[%s]: rejected value", tag_name, name)
            continue
        result[name] = value
    return result
