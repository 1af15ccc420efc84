"""Attribute value sanitizing.

Each property that survives the allow-list goes through sanitize_value():

1. Coerce to a primitive (str, int, float, bool) or a tuple of primitives.
2. Check the URL scheme if the schema lists the property under protocols.
3. Prefix clobber-prone values (``id``, ``name``) against DOM clobbering.

Scheme detection scans for the first of ``:``, ``/``, ``?`` and ``#``. Only a
colon that comes first delimits a scheme, so ``example.com?foo:bar`` is a
relative reference while ``javascript:alert(1)`` is checked (and rejected).

Thread Safety:
All functions are pure — safe to call from any thread.

"""

from collections.abc import Iterable

from sanitree.nodes import Primitive, PropertyValue
from sanitree.schema import Schema

# ASCII whitespace plus LINE SEPARATOR / PARAGRAPH SEPARATOR, which
# browsers skip before a scheme.
_LEADING_IGNORABLE = " \t\n\f\r\u2028\u2029"

_URL_DELIMITERS = frozenset(":/?#")


def _is_primitive(value: object) -> bool:
    # bool is an int subclass, so it is covered here
    return isinstance(value, (str, int, float))


def coerce_value(raw: object) -> PropertyValue | None:
    """Coerce a raw property value.

    Returns:
        The primitive itself, a tuple holding the primitive items of a
        list/tuple (possibly empty), or None for anything else.
    """
    if _is_primitive(raw):
        return raw  # type: ignore[return-value]
    if isinstance(raw, (list, tuple)):
        return tuple(item for item in raw if _is_primitive(item))
    return None


def url_scheme(value: str) -> str | None:
    """Get the scheme of a URL, or None for relative references.

    Example:
        >>> url_scheme("\\u2028JavaScript:alert(1)")
        'JavaScript'
        >>> url_scheme("example.com?foo:bar") is None
        True
    """
    stripped = value.lstrip(_LEADING_IGNORABLE)
    for index, char in enumerate(stripped):
        if char in _URL_DELIMITERS:
            return stripped[:index] if char == ":" else None
    return None


def has_allowed_scheme(value: str, allowed: Iterable[str]) -> bool:
    """Check that ``value`` is relative or uses one of ``allowed`` (any case)."""
    scheme = url_scheme(value)
    if scheme is None:
        return True
    return scheme.lower() in allowed


def _sanitize_primitive(
    attribute_name: str, value: Primitive, schema: Schema
) -> Primitive | None:
    if not isinstance(value, str):
        return value

    protocols = schema.protocols_for(attribute_name)
    if protocols is not None and not has_allowed_scheme(value, protocols):
        return None

    if schema.is_clobbered(attribute_name) and not value.startswith(schema.clobber_prefix):
        return schema.clobber_prefix + value

    return value


def sanitize_value(
    tag_name: str, attribute_name: str, raw_value: object, schema: Schema
) -> PropertyValue | None:
    """Sanitize one property value of an allowed attribute.

    Every element tag is eligible for clobber prefixing; ``tag_name`` is
    accepted so policies can be keyed on it without changing callers.

    Args:
        tag_name: Tag of the element carrying the property
        attribute_name: hast property name (e.g., "href", "longDesc")
        raw_value: Value from the untrusted tree
        schema: Policy to apply

    Returns:
        The value to keep, or None when the property must be omitted.
        Sequences are checked item by item; failing items are dropped and an
        emptied sequence is kept as ``()``.
    """
    value = coerce_value(raw_value)
    if value is None:
        return None

    if isinstance(value, tuple):
        return tuple(
            result
            for item in value
            if (result := _sanitize_primitive(attribute_name, item, schema)) is not None
        )

    return _sanitize_primitive(attribute_name, value, schema)
