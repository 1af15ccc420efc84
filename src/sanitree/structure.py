"""Structural context checks.

Some elements only make sense inside others: a ``li`` needs a list, table
parts need a ``table``. The requirement is met by any enclosing element, not
only the parent, so ``ol > div > li`` is valid.
"""

from collections.abc import Sequence

from sanitree.schema import Schema


def is_structurally_valid(
    tag_name: str, ancestor_tags: Sequence[str], schema: Schema
) -> bool:
    """Check the ancestor rule for ``tag_name``.

    Args:
        tag_name: Tag of the element being judged
        ancestor_tags: Tags of the kept enclosing elements, nearest last
        schema: Policy holding the ancestor rules

    Returns:
        True when there is no rule for the tag or one of the required tags
        encloses it at any depth.
    """
    required = schema.required_ancestors(tag_name)
    if not required:
        return True
    return any(tag in required for tag in ancestor_tags)
