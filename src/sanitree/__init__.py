"""
sanitree — Sanitize untrusted hast trees

Turns an untrusted HTML syntax tree into a safe subset: disallowed elements
are unwrapped or stripped, attributes are filtered against an allow-list,
URLs are scheme-checked and ids/names are prefixed against DOM clobbering.
Pure Python, zero runtime dependencies, immutable trees.

Quick Start:
    >>> from sanitree import h, sanitize
    >>> clean = sanitize(h("div", {"id": "getElementById"}, h("script", "alert(1)")))
    >>> clean.properties
    {'id': 'user-content-getElementById'}
    >>> clean.children
    ()

Custom Schemas:
    >>> from sanitree import DEFAULT_SCHEMA
    >>> schema = DEFAULT_SCHEMA.extend().allow_attributes("*", "data*").build()
    >>> sanitize(h("div", {"dataFoo": "bar"}), schema).properties
    {'dataFoo': 'bar'}

hast JSON:
    >>> sanitize({"type": "text", "value": "hi"}).value
    'hi'
"""

from sanitree.builder import h, u
from sanitree.cleaner import clean
from sanitree.config import (
    get_default_schema,
    reset_default_schema,
    schema_context,
    set_default_schema,
)
from sanitree.defaults import DEFAULT_SCHEMA, GITHUB_SCHEMA
from sanitree.errors import NodeFormatError, SanitreeError, SchemaError
from sanitree.location import Point, Position
from sanitree.nodes import (
    AnyNode,
    Comment,
    Doctype,
    Element,
    Node,
    PropertyValue,
    Raw,
    Root,
    Text,
    Unknown,
)
from sanitree.sanitize import sanitize
from sanitree.schema import Schema, SchemaBuilder
from sanitree.serialization import coerce_node, from_dict, from_json, to_dict, to_json
from sanitree.values import sanitize_value
from sanitree.visitor import BaseVisitor, iter_nodes

__version__ = "0.1.0"

__all__ = [
    # Main API
    "sanitize",
    "clean",
    "sanitize_value",
    # Schema
    "DEFAULT_SCHEMA",
    "GITHUB_SCHEMA",
    "Schema",
    "SchemaBuilder",
    # Configuration
    "get_default_schema",
    "reset_default_schema",
    "schema_context",
    "set_default_schema",
    # Nodes
    "AnyNode",
    "Comment",
    "Doctype",
    "Element",
    "Node",
    "PropertyValue",
    "Raw",
    "Root",
    "Text",
    "Unknown",
    "Point",
    "Position",
    # Construction
    "h",
    "u",
    # Serialization
    "coerce_node",
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    # Visitor
    "BaseVisitor",
    "iter_nodes",
    # Errors
    "NodeFormatError",
    "SanitreeError",
    "SchemaError",
    # Version
    "__version__",
]
