"""
Exceptions raised by the sanitizer.

``ValidationError`` is the only error callers ever see: the input cannot be
made safe and must be rejected. ``MutationUnsupported`` is internal; the
graph walker catches it, logs it and keeps going.
"""

from typing import Any, Optional


class SanitizationError(Exception):
    """Base exception for sanitizer errors."""

    default_code = "SANITIZATION_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ValidationError(SanitizationError):
    """Raised when text fails the whitelist or a URI-like string cannot be parsed."""

    default_code = "INVALID_INPUT"

    def with_path(self, path: Optional[str]) -> "ValidationError":
        """Record where in the graph the failure happened (innermost path wins)."""
        if self.path is None and path:
            self.path = path
        return self

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.code, "path": self.path}


class MutationUnsupported(SanitizationError):
    """Raised when a container or attribute refuses an in-place update."""

    default_code = "MUTATION_UNSUPPORTED"

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.cause = cause
        super().__init__(message, path=path)


INVALID_CHARACTERS = "invalid characters"
INVALID_URI = "invalid URI"
MAX_DEPTH_EXCEEDED = "maximum nesting depth exceeded"
