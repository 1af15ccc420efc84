"""Source positions carried by hast nodes.

Provides Point and Position dataclasses in the unist shape
(``{"start": {"line", "column", "offset"}, "end": {...}}``). The sanitizer
never interprets positions; it copies them from each input node onto the
node it builds in its place.

Thread Safety:
Point and Position are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class Point:
    """One place in the source file.

    ``line`` and ``column`` are 1-indexed, ``offset`` is 0-indexed.

    Examples:
        >>> Point(line=1, column=1)
        Point(line=1, column=1, offset=None)
        >>> str(Point(3, 7))
        '3:7'

    """

    line: int
    column: int
    offset: int | None = None

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"

    def to_dict(self) -> dict[str, int]:
        result = {"line": self.line, "column": self.column}
        if self.offset is not None:
            result["offset"] = self.offset
        return result

    @classmethod
    def from_dict(cls, data: object) -> Point | None:
        """Read a unist point, returning None when it is malformed."""
        if not isinstance(data, Mapping):
            return None
        line = data.get("line")
        column = data.get("column")
        offset = data.get("offset")
        if not _is_int(line) or not _is_int(column):
            return None
        return cls(line=line, column=column, offset=offset if _is_int(offset) else None)


@dataclass(frozen=True, slots=True)
class Position:
    """Span of source text a node was generated from.

    Attributes:
        start: First character of the node
        end: Position just past the last character of the node

    Examples:
        >>> pos = Position(Point(1, 1), Point(2, 1))
        >>> str(pos)
        '1:1-2:1'

    """

    start: Point
    end: Point

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    @classmethod
    def from_dict(cls, data: object) -> Position | None:
        """Read a unist position.

        Returns None unless both ``start`` and ``end`` are valid points, so
        that readers of untrusted trees can treat a broken position as absent.
        """
        if not isinstance(data, Mapping):
            return None
        start = Point.from_dict(data.get("start"))
        end = Point.from_dict(data.get("end"))
        if start is None or end is None:
            return None
        return cls(start=start, end=end)
