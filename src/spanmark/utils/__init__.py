"""Utility helpers for spanmark.

Contents:
- logger: get_logger for namespaced logging
"""

from spanmark.utils.logger import get_logger

__all__ = [
    "get_logger",
]
