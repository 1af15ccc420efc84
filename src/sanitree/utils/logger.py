"""Logger lookup for sanitree modules.

Every sanitree logger hangs off the ``sanitree`` logger, so a caller can turn
on the cleaner's drop/unwrap trail with one line and without seeing anything
from other libraries:

    >>> import logging
    >>> logging.getLogger("sanitree").setLevel(logging.DEBUG)

The library only logs at DEBUG and never installs handlers.
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "sanitree"


def get_logger(name: str) -> logging.Logger:
    """Get the logger for a sanitree module.

    Args:
        name: Module name, usually ``__name__``. Names outside the package
            are placed under it.

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("sanitree.cleaner").name
        'sanitree.cleaner'
        >>> get_logger("policies").name
        'sanitree.policies'
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
