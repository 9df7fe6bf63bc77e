"""
Public sanitizer entry point.

This module provides:
- Sanitizer, which binds settings, the text policies and the graph walker
"""

from typing import Any, Optional

from .text import TextSanitizer
from .types import SanitizerSettings
from .walker import GraphWalker


class Sanitizer:
    """Normalize and escape every string reachable from an object graph.

    The sanitizer keeps no state between calls, so one instance can be
    shared by concurrent callers as long as they work on disjoint graphs.

    Example:
        sanitizer = Sanitizer()
        sanitizer.sanitize(request_payload)  # mutates in place
        root = sanitizer.sanitize_graph(frozen_response)  # may be a new instance
    """

    def __init__(self, settings: Optional[SanitizerSettings] = None):
        """Initialize the sanitizer.

        Args:
            settings: Explicit settings; loaded from Django settings when omitted.
        """
        self.settings = settings or SanitizerSettings.from_settings()
        self.text = TextSanitizer(self.settings)
        self.walker = GraphWalker(self.text, self.settings)

    def sanitize(self, root: Any) -> None:
        """Sanitize the graph reachable from ``root`` in place.

        A replacement for an immutable root is discarded; use
        ``sanitize_graph`` when the root itself may be immutable.

        Raises:
            ValidationError: If any string cannot be made safe.
        """
        self.walker.walk(root)

    def sanitize_graph(self, root: Any) -> Any:
        """Sanitize the graph and return the root reference to keep.

        The original root is returned unless it is an immutable composite
        with at least one changed component, or a string.

        Raises:
            ValidationError: If any string cannot be made safe.
        """
        return self.walker.walk(root)

    def sanitize_text(self, value: Optional[str]) -> Optional[str]:
        """Apply the strict policy to a single string, whatever it looks like.

        Raises:
            ValidationError: If characters outside the whitelist remain.
        """
        if value is None:
            return None
        return self.text.sanitize_strict(value)

    def sanitize_lenient_text(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return self.text.sanitize_lenient(value)

    def sanitize_uri(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return self.text.sanitize_uri(value)
