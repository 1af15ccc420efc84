"""Sanitization schema: the allow-lists the cleaner consults.

A Schema is pure data. It answers membership questions (is this tag
allowed, may this attribute appear on it, which URL schemes does it accept)
and never fails a lookup: anything missing from the configuration is simply
not permitted.

Thread Safety:
Schema is immutable after creation. Safe to share.
Use SchemaBuilder for mutable construction.

Example:
    >>> from sanitree.defaults import DEFAULT_SCHEMA
    >>> schema = (
    ...     DEFAULT_SCHEMA.extend()
    ...     .allow_tags("span")
    ...     .allow_attributes("*", "data*")
    ...     .build()
    ... )
    >>> schema.allows_attribute("span", "dataFoo")
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from sanitree.errors import SchemaError

WILDCARD = "*"
DATA_WILDCARD = "data*"

_EMPTY: frozenset[str] = frozenset()

# hast-style camelCase keys accepted by Schema.from_dict
_FIELD_ALIASES = {
    "tagNames": "tag_names",
    "clobberPrefix": "clobber_prefix",
}


def _to_frozenset(key: str, value: Any) -> frozenset[str]:
    """Normalize a collection of names, rejecting bare strings."""
    if isinstance(value, frozenset) and all(isinstance(v, str) for v in value):
        return value
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        msg = f"expected a collection of strings, got {type(value).__name__}"
        raise SchemaError(key, msg)
    items = tuple(value)
    for item in items:
        if not isinstance(item, str):
            msg = f"expected string entries, got {type(item).__name__} ({item!r})"
            raise SchemaError(key, msg)
    return frozenset(items)


def _to_mapping(
    key: str, value: Any, *, lower: bool = False
) -> Mapping[str, frozenset[str]]:
    """Normalize a mapping of name -> collection of names (read-only)."""
    if not isinstance(value, Mapping):
        msg = f"expected a mapping, got {type(value).__name__}"
        raise SchemaError(key, msg)
    normalized: dict[str, frozenset[str]] = {}
    for name, names in value.items():
        if not isinstance(name, str):
            msg = f"expected string keys, got {type(name).__name__} ({name!r})"
            raise SchemaError(key, msg)
        entries = _to_frozenset(f"{key}.{name}", names)
        if lower:
            entries = frozenset(entry.lower() for entry in entries)
        normalized[name] = entries
    return MappingProxyType(normalized)


def _is_data_attribute(name: str) -> bool:
    return len(name) > 4 and name[:4].lower() == "data"


@dataclass(frozen=True, slots=True)
class Schema:
    """Immutable sanitization policy.

    Attributes:
        tag_names: Element tag names that may be kept
        attributes: Tag name (or ``"*"`` for every tag) -> allowed property
            names. The entry ``"data*"`` allows every ``data...`` property.
        protocols: Property name -> allowed URL schemes (lower-cased).
            Properties missing here are not scheme-checked.
        ancestors: Tag name -> tags of which at least one must enclose it
        clobber: Property names whose values get ``clobber_prefix``
        clobber_prefix: Prefix that keeps ids/names out of the global scope
        strip: Tags whose whole subtree, text included, is dropped

    Collections passed in are normalized to frozensets and read-only
    mappings, so a Schema can be reused across threads.

    """

    tag_names: frozenset[str] = _EMPTY
    attributes: Mapping[str, frozenset[str]] = field(default_factory=dict)
    protocols: Mapping[str, frozenset[str]] = field(default_factory=dict)
    ancestors: Mapping[str, frozenset[str]] = field(default_factory=dict)
    clobber: frozenset[str] = frozenset({"id", "name"})
    clobber_prefix: str = "user-content-"
    strip: frozenset[str] = frozenset({"script"})

    def __post_init__(self) -> None:
        # Normalize user collections so lookups are plain membership checks.
        object.__setattr__(self, "tag_names", _to_frozenset("tagNames", self.tag_names))
        object.__setattr__(self, "attributes", _to_mapping("attributes", self.attributes))
        object.__setattr__(
            self, "protocols", _to_mapping("protocols", self.protocols, lower=True)
        )
        object.__setattr__(self, "ancestors", _to_mapping("ancestors", self.ancestors))
        object.__setattr__(self, "clobber", _to_frozenset("clobber", self.clobber))
        object.__setattr__(self, "strip", _to_frozenset("strip", self.strip))
        if not isinstance(self.clobber_prefix, str):
            msg = f"expected a string, got {type(self.clobber_prefix).__name__}"
            raise SchemaError("clobberPrefix", msg)

    # -- Lookups ---------------------------------------------------------------

    def allows_tag(self, tag_name: object) -> bool:
        """Check if an element with this tag name may be kept."""
        return (
            isinstance(tag_name, str)
            and tag_name != ""
            and tag_name != WILDCARD
            and tag_name in self.tag_names
        )

    def allows_attribute(self, tag_name: str, name: str) -> bool:
        """Check if property ``name`` may appear on ``tag_name``.

        Permission comes from the tag's own entry or the ``"*"`` entry.
        """
        specific = self.attributes.get(tag_name, _EMPTY)
        generic = self.attributes.get(WILDCARD, _EMPTY)
        if name in specific or name in generic:
            return True
        return _is_data_attribute(name) and (
            DATA_WILDCARD in specific or DATA_WILDCARD in generic
        )

    def protocols_for(self, name: str) -> frozenset[str] | None:
        """Get the URL schemes allowed in property ``name``.

        Returns:
            Allowed schemes, or None when the property is not scheme-checked
        """
        return self.protocols.get(name)

    def required_ancestors(self, tag_name: str) -> frozenset[str]:
        """Tags of which one must enclose ``tag_name`` (empty: no rule)."""
        return self.ancestors.get(tag_name, _EMPTY)

    def is_stripped(self, tag_name: object) -> bool:
        """Check if the subtree of ``tag_name`` is dropped wholesale."""
        return isinstance(tag_name, str) and tag_name in self.strip

    def is_clobbered(self, name: str) -> bool:
        """Check if values of property ``name`` get the clobber prefix."""
        return name in self.clobber

    # -- Conversion ------------------------------------------------------------

    def extend(self) -> SchemaBuilder:
        """Start a builder pre-populated with this schema."""
        return SchemaBuilder.from_schema(self)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> Schema:
        """Create a Schema from a dictionary.

        Accepts the hast-util-sanitize JSON layout (``tagNames``,
        ``clobberPrefix``) as well as the snake_case field names. Unknown
        keys are silently ignored; omitted keys take the field defaults.

        Args:
            config_dict: Dictionary with schema values.

        Returns:
            New Schema instance.

        Raises:
            SchemaError: If a known key holds a value of the wrong shape.

        Example:
            >>> schema = Schema.from_dict({
            ...     "tagNames": ["a", "p"],
            ...     "attributes": {"a": ["href"]},
            ...     "protocols": {"href": ["https"]},
            ...     "unknown_key": "ignored",
            ... })
            >>> schema.allows_tag("a")
            True

        """
        if not isinstance(config_dict, Mapping):
            msg = f"expected a mapping, got {type(config_dict).__name__}"
            raise SchemaError("schema", msg)
        valid_fields = set(cls.__dataclass_fields__)
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            name = _FIELD_ALIASES.get(key, key)
            if name in valid_fields:
                filtered[name] = value
        return cls(**filtered)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the hast-util-sanitize JSON layout (sorted lists)."""
        return {
            "tagNames": sorted(self.tag_names),
            "attributes": {k: sorted(v) for k, v in sorted(self.attributes.items())},
            "protocols": {k: sorted(v) for k, v in sorted(self.protocols.items())},
            "ancestors": {k: sorted(v) for k, v in sorted(self.ancestors.items())},
            "clobber": sorted(self.clobber),
            "clobberPrefix": self.clobber_prefix,
            "strip": sorted(self.strip),
        }


class SchemaBuilder:
    """Mutable builder for Schema.

    Every operation names exactly what it changes, then build() creates an
    immutable Schema. Seeding a builder from a schema copies its contents,
    so the source schema is never modified.

    Example:
        >>> builder = SchemaBuilder().allow_tags("ul", "li")
        >>> schema = builder.require_ancestors("li", "ul").build()
        >>> schema.required_ancestors("li")
        frozenset({'ul'})
    """

    __slots__ = (
        "_tag_names",
        "_attributes",
        "_protocols",
        "_ancestors",
        "_clobber",
        "_clobber_prefix",
        "_strip",
    )

    def __init__(self) -> None:
        """Initialize a builder that permits nothing."""
        defaults = Schema()
        self._tag_names: set[str] = set()
        self._attributes: dict[str, set[str]] = {}
        self._protocols: dict[str, set[str]] = {}
        self._ancestors: dict[str, set[str]] = {}
        self._clobber: set[str] = set(defaults.clobber)
        self._clobber_prefix: str = defaults.clobber_prefix
        self._strip: set[str] = set(defaults.strip)

    @classmethod
    def from_schema(cls, schema: Schema) -> SchemaBuilder:
        """Create a builder holding a copy of ``schema``."""
        builder = cls()
        builder._tag_names = set(schema.tag_names)
        builder._attributes = {k: set(v) for k, v in schema.attributes.items()}
        builder._protocols = {k: set(v) for k, v in schema.protocols.items()}
        builder._ancestors = {k: set(v) for k, v in schema.ancestors.items()}
        builder._clobber = set(schema.clobber)
        builder._clobber_prefix = schema.clobber_prefix
        builder._strip = set(schema.strip)
        return builder

    # -- Tags ------------------------------------------------------------------

    def allow_tags(self, *names: str) -> SchemaBuilder:
        """Permit elements with these tag names."""
        self._tag_names.update(_to_frozenset("tagNames", names))
        return self

    def disallow_tags(self, *names: str) -> SchemaBuilder:
        """Stop permitting these tag names (their children are unwrapped)."""
        self._tag_names.difference_update(names)
        return self

    def strip_tags(self, *names: str) -> SchemaBuilder:
        """Drop these tags together with everything inside them."""
        self._strip.update(_to_frozenset("strip", names))
        return self

    def unstrip_tags(self, *names: str) -> SchemaBuilder:
        self._strip.difference_update(names)
        return self

    # -- Attributes ------------------------------------------------------------

    def allow_attributes(self, tag_name: str, *names: str) -> SchemaBuilder:
        """Permit properties on ``tag_name`` (``"*"`` for every tag).

        Args:
            tag_name: Tag the properties apply to, or ``"*"``
            *names: Property names; ``"data*"`` allows all ``data...`` names

        Returns:
            Self for chaining
        """
        entries = _to_frozenset(f"attributes.{tag_name}", names)
        self._attributes.setdefault(tag_name, set()).update(entries)
        return self

    def disallow_attributes(self, tag_name: str, *names: str) -> SchemaBuilder:
        if tag_name in self._attributes:
            self._attributes[tag_name].difference_update(names)
        return self

    # -- Protocols -------------------------------------------------------------

    def set_protocols(self, attribute: str, *schemes: str) -> SchemaBuilder:
        """Replace the allowed URL schemes of ``attribute``.

        Calling with no schemes keeps the attribute scheme-checked but only
        accepts relative references.
        """
        entries = _to_frozenset(f"protocols.{attribute}", schemes)
        self._protocols[attribute] = {scheme.lower() for scheme in entries}
        return self

    def allow_protocols(self, attribute: str, *schemes: str) -> SchemaBuilder:
        """Add URL schemes to ``attribute``, keeping the existing ones."""
        entries = _to_frozenset(f"protocols.{attribute}", schemes)
        self._protocols.setdefault(attribute, set()).update(s.lower() for s in entries)
        return self

    def unchecked_protocols(self, attribute: str) -> SchemaBuilder:
        """Stop scheme-checking ``attribute`` altogether."""
        self._protocols.pop(attribute, None)
        return self

    # -- Structure -------------------------------------------------------------

    def require_ancestors(self, tag_name: str, *ancestors: str) -> SchemaBuilder:
        """Replace the ancestor rule of ``tag_name``."""
        self._ancestors[tag_name] = set(_to_frozenset(f"ancestors.{tag_name}", ancestors))
        return self

    def drop_ancestor_rule(self, tag_name: str) -> SchemaBuilder:
        self._ancestors.pop(tag_name, None)
        return self

    # -- Clobbering ------------------------------------------------------------

    def set_clobber(self, *names: str) -> SchemaBuilder:
        """Replace the property names that get the clobber prefix."""
        self._clobber = set(_to_frozenset("clobber", names))
        return self

    def set_clobber_prefix(self, prefix: str) -> SchemaBuilder:
        if not isinstance(prefix, str):
            msg = f"expected a string, got {type(prefix).__name__}"
            raise SchemaError("clobberPrefix", msg)
        self._clobber_prefix = prefix
        return self

    def build(self) -> Schema:
        """Build an immutable Schema from the current state.

        Returns:
            Immutable Schema
        """
        return Schema(
            tag_names=frozenset(self._tag_names),
            attributes={k: frozenset(v) for k, v in self._attributes.items()},
            protocols={k: frozenset(v) for k, v in self._protocols.items()},
            ancestors={k: frozenset(v) for k, v in self._ancestors.items()},
            clobber=frozenset(self._clobber),
            clobber_prefix=self._clobber_prefix,
            strip=frozenset(self._strip),
        )
