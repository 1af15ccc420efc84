"""Exception classes for sanitree.

Sanitizing itself never raises: hostile or malformed trees degrade to
dropped or unwrapped nodes. These exceptions only cover the configuration
and interchange boundaries (building a Schema, reading hast JSON strictly).
"""

from __future__ import annotations


class SanitreeError(Exception):
    """Base exception for all sanitree errors.

    Subclass this for specific error categories.
    """

    pass


class SchemaError(SanitreeError):
    """Error in sanitization schema configuration.

    Raised when a schema field receives a value of the wrong shape, e.g. a
    bare string where a collection of tag names is expected.
    """

    def __init__(self, key: str, message: str) -> None:
        """Initialize schema error.

        Args:
            key: Schema field that was misconfigured (e.g., "tagNames")
            message: Description of the problem
        """
        self.key = key
        super().__init__(f"Schema '{key}': {message}")


class NodeFormatError(SanitreeError, ValueError):
    """Error reading a serialized node.

    Raised by the strict hast JSON reader when a node dict has no usable
    ``type`` discriminator. Subclasses ValueError for callers that already
    catch decoding errors.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize node format error.

        Args:
            message: Error description
            path: Location of the bad node inside the tree (e.g., "children[2]")
        """
        self.message = message
        self.path = path

        location = f"{path}: " if path else ""
        super().__init__(f"{location}{message}")
