"""
Utility functions for the sanitizer.

This module provides helper functions for:
- Path construction for error reporting in nested graphs
- Change detection between an original and a sanitized value
"""

from typing import Any, Optional


def join_path(prefix: Optional[str], field_name: Any) -> str:
    """Join a path prefix with a field name.

    Args:
        prefix: The current path prefix, or None.
        field_name: The field name to append.

    Returns:
        The combined path string (e.g., "parent.child").
    """
    segment = str(field_name)
    if prefix:
        return f"{prefix}.{segment}"
    return segment


def join_list_path(prefix: Optional[str], index: int) -> str:
    """Join a path prefix with a list index.

    Args:
        prefix: The current path prefix, or None.
        index: The list index to append.

    Returns:
        The combined path string (e.g., "items[0]").
    """
    if prefix:
        return f"{prefix}[{index}]"
    return f"[{index}]"


def has_changed(original: Any, sanitized: Any) -> bool:
    """Strings compare by content, everything else by identity."""
    if isinstance(original, str) and isinstance(sanitized, str):
        return original != sanitized
    return sanitized is not original
