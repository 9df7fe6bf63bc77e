"""
Object-graph sanitization package.

This package provides:
- Text policies (strict, lenient, URI) for single strings
- Structural classification of arbitrary Python values
- Container adapters for sequences, mappings, fixed sequences and composites
- A cycle-safe graph walker and the Sanitizer facade on top of it

Main Components:
    - TextPolicy: Enum selecting how a string is cleaned
    - SanitizerSettings: Configuration for sanitizer behavior
    - TextSanitizer: String cleaning policies
    - GraphWalker: Recursive, identity-tracked graph traversal
    - Sanitizer: Public entry point
    - sanitize_arguments: Decorator for handler payloads

Example:
    from rail_sanitizer.sanitizer import sanitize, sanitize_graph, sanitize_text

    sanitize(payload)  # in place
    response = sanitize_graph(response)  # immutable roots may be rebuilt
    name = sanitize_text("  John  ")  # "John"
"""

from typing import Any, Optional

from .adapters import (
    ADAPTERS,
    AssociativeAdapter,
    ContainerAdapter,
    FixedSequenceAdapter,
    ImmutableCompositeAdapter,
    MutableCompositeAdapter,
    OrderedSequenceAdapter,
)
from .classifier import classify, field_policies, is_scalar, transient_fields
from .decorators import sanitize_arguments
from .fields import lenient_text, strict_text, text_field, transient, uri_text
from .sanitizer import Sanitizer
from .text import TextSanitizer, normalize_text
from .types import SanitizerSettings, TextPolicy, ValueKind
from .walker import GraphWalker

# Global instance - created lazily so Django settings are read on first use
_default_sanitizer: Optional[Sanitizer] = None


def get_default_sanitizer() -> Sanitizer:
    """Get or create the shared Sanitizer built from Django settings."""
    global _default_sanitizer
    if _default_sanitizer is None:
        _default_sanitizer = Sanitizer()
    return _default_sanitizer


def reset_default_sanitizer() -> None:
    """Drop the shared Sanitizer so the next use reloads settings."""
    global _default_sanitizer
    _default_sanitizer = None


def sanitize(root: Any) -> None:
    """Sanitize a graph in place with the shared Sanitizer."""
    get_default_sanitizer().sanitize(root)


def sanitize_graph(root: Any) -> Any:
    """Sanitize a graph and return the (possibly new) root."""
    return get_default_sanitizer().sanitize_graph(root)


def sanitize_text(value: Optional[str]) -> Optional[str]:
    """Apply the strict text policy to a single string."""
    return get_default_sanitizer().sanitize_text(value)


__all__ = [
    # Enums and settings
    "TextPolicy",
    "ValueKind",
    "SanitizerSettings",
    # Classes
    "Sanitizer",
    "TextSanitizer",
    "GraphWalker",
    "ContainerAdapter",
    "OrderedSequenceAdapter",
    "AssociativeAdapter",
    "FixedSequenceAdapter",
    "ImmutableCompositeAdapter",
    "MutableCompositeAdapter",
    "ADAPTERS",
    # Field helpers
    "text_field",
    "strict_text",
    "lenient_text",
    "uri_text",
    "transient",
    # Decorators
    "sanitize_arguments",
    # Functions
    "classify",
    "field_policies",
    "transient_fields",
    "is_scalar",
    "normalize_text",
    "get_default_sanitizer",
    "reset_default_sanitizer",
    "sanitize",
    "sanitize_graph",
    "sanitize_text",
]
