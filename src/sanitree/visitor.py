"""Tree visitor for sanitree nodes.

Provides a base visitor class with match-based dispatch and a pre-order
node iterator, for inspecting trees before or after sanitizing.

Example, collecting the tag names that survived sanitizing:

    class TagCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.tags: list[str] = []

        def visit_element(self, node: Element) -> None:
            self.tags.append(node.tag_name)

    collector = TagCollector()
    collector.visit(sanitize(tree))

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. iter_nodes is pure.

"""

from collections.abc import Iterator
from typing import Generic, TypeVar

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


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node kinds you care about.
    Unhandled kinds fall through to ``visit_default``. Children are walked
    automatically after the ``visit_*`` call.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method.

        Walks children automatically after the visit method returns.

        """
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node kinds without a specific ``visit_*`` override.

        Default returns None (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    def visit_root(self, node: Root) -> T:
        return self.visit_default(node)

    def visit_element(self, node: Element) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_comment(self, node: Comment) -> T:
        return self.visit_default(node)

    def visit_doctype(self, node: Doctype) -> T:
        return self.visit_default(node)

    def visit_raw(self, node: Raw) -> T:
        return self.visit_default(node)

    def visit_unknown(self, node: Unknown) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Root():
                return self.visit_root(node)
            case Element():
                return self.visit_element(node)
            case Text():
                return self.visit_text(node)
            case Comment():
                return self.visit_comment(node)
            case Doctype():
                return self.visit_doctype(node)
            case Raw():
                return self.visit_raw(node)
            case Unknown():
                return self.visit_unknown(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        """Recursively visit child nodes."""
        match node:
            case Root(children=children) | Element(children=children):
                for child in children:
                    self.visit(child)
            case _:
                pass  # Literals: no children


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all its descendants in document order."""
    yield node
    match node:
        case Root(children=children) | Element(children=children):
            for child in children:
                yield from iter_nodes(child)
        case _:
            pass
