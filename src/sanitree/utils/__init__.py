"""Utility modules for sanitree.

Provides:
- logger: get_logger for logging
"""

from sanitree.utils.logger import get_logger

__all__ = [
    "get_logger",
]
