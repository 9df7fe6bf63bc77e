"""
rail-sanitizer: cycle-safe sanitization of request and response object graphs.

Typical use from a service layer::

    from rail_sanitizer import ValidationError, sanitize_graph

    try:
        payload = sanitize_graph(payload)
    except ValidationError as exc:
        return JsonResponse(exc.to_dict(), status=400)
"""

from .defaults import LIBRARY_VERSION
from .exceptions import MutationUnsupported, SanitizationError, ValidationError
from .sanitizer import (
    Sanitizer,
    SanitizerSettings,
    TextPolicy,
    lenient_text,
    sanitize,
    sanitize_arguments,
    sanitize_graph,
    sanitize_text,
    strict_text,
    transient,
    uri_text,
)

__version__ = LIBRARY_VERSION

__all__ = [
    "Sanitizer",
    "SanitizerSettings",
    "TextPolicy",
    "SanitizationError",
    "ValidationError",
    "MutationUnsupported",
    "sanitize",
    "sanitize_graph",
    "sanitize_text",
    "sanitize_arguments",
    "strict_text",
    "lenient_text",
    "uri_text",
    "transient",
]
