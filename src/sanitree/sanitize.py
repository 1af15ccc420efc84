"""Sanitize an untrusted hast tree into a safe subset.

sanitize() is the public entry point. It runs the cleaner over the input and
collapses the result into a single node of minimal shape:

- a Root input always comes back as a Root (possibly with no children)
- an input that survives as exactly one node comes back as that node
- several surviving nodes come back wrapped in a fresh Root
- nothing surviving, or input that is not a node at all, gives ``Root()``

Example:
    >>> from sanitree import h, sanitize
    >>> sanitize(h("a", {"href": "javascript:alert(1)"}, "click"))
    Element(data=None, position=None, tag_name='a', properties={}, children=(Text(data=None, position=None, value='click'),))
    >>> sanitize(h("li", "x"))
    Text(data=None, position=None, value='x')

"""

from collections.abc import Mapping

from sanitree.cleaner import clean
from sanitree.config import get_default_schema
from sanitree.nodes import Node, Root, is_node
from sanitree.schema import Schema
from sanitree.serialization import coerce_node


def collapse(nodes: tuple[Node, ...]) -> Node:
    """Turn the cleaner's replacement nodes into one node."""
    if not nodes:
        return Root()
    if len(nodes) == 1:
        return nodes[0]
    return Root(children=nodes)


def sanitize(node: object, schema: Schema | None = None) -> Node:
    """Sanitize a hast tree.

    Args:
        node: Node to sanitize. A plain mapping is read as hast JSON first;
            anything that is not a node yields an empty Root.
        schema: Policy to apply. Defaults to the context's default schema
            (see sanitree.config), which is DEFAULT_SCHEMA unless overridden.

    Returns:
        A freshly built node; the input is not modified.

    """
    if schema is None:
        schema = get_default_schema()

    if isinstance(node, Mapping):
        node = coerce_node(node)

    if not is_node(node):
        return Root()

    result = clean(node, (), schema)
    if isinstance(node, Root):
        return result[0]
    return collapse(result)
