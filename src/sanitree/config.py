"""ContextVar-based default schema for sanitree.

sanitize(node) without an explicit schema reads the schema from a ContextVar
(PEP 567). The baked-in DEFAULT_SCHEMA is the value until a caller overrides
it for the current context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and an override in one thread never leaks into
    another. Schemas themselves are immutable.

Usage:
    from sanitree.config import schema_context

    with schema_context(my_schema):
        clean = sanitize(tree)  # uses my_schema

    # Or set it for the rest of the context
    set_default_schema(my_schema)
    try:
        clean = sanitize(tree)
    finally:
        reset_default_schema()

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from sanitree.defaults import DEFAULT_SCHEMA
from sanitree.schema import Schema

# Thread-local default schema via ContextVar
_default_schema: ContextVar[Schema] = ContextVar(
    "default_schema",
    default=DEFAULT_SCHEMA,
)


def get_default_schema() -> Schema:
    """Get the schema sanitize() uses when none is passed.

    Returns:
        The active Schema for this thread/context.

    """
    return _default_schema.get()


def set_default_schema(schema: Schema) -> None:
    """Set the default schema for the current context.

    Args:
        schema: Schema instance to use for this context.

    Raises:
        TypeError: If ``schema`` is not a Schema.

    """
    if not isinstance(schema, Schema):
        msg = f"expected a Schema, got {type(schema).__name__}"
        raise TypeError(msg)
    _default_schema.set(schema)


def reset_default_schema() -> None:
    """Reset to DEFAULT_SCHEMA.

    Only affects the current thread's context.

    """
    _default_schema.set(DEFAULT_SCHEMA)


@contextmanager
def schema_context(schema: Schema) -> Iterator[None]:
    """Context manager for a temporary default schema.

    Args:
        schema: Schema to use within the context.

    Yields:
        None

    Example:
        >>> from sanitree import h, sanitize
        >>> strict = DEFAULT_SCHEMA.extend().disallow_tags("a").build()
        >>> with schema_context(strict):
        ...     node = sanitize(h("a", "x"))
        >>> node.value
        'x'

    Thread Safety:
        Only affects the current thread's context. Properly restores the
        previous schema even if an exception is raised.

    """
    if not isinstance(schema, Schema):
        msg = f"expected a Schema, got {type(schema).__name__}"
        raise TypeError(msg)
    token = _default_schema.set(schema)
    try:
        yield
    finally:
        _default_schema.reset(token)


__all__ = [
    "get_default_schema",
    "reset_default_schema",
    "schema_context",
    "set_default_schema",
]
