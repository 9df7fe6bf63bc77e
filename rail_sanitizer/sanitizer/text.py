"""
String cleaning policies.

This module provides:
- normalize_text: Unicode/invisible/control cleanup shared by every policy
- TextSanitizer: strict, lenient and URI policies over plain strings
"""

import html
import logging
import unicodedata
from typing import Optional
from urllib.parse import SplitResult, urlsplit, urlunsplit

import bleach

from ..exceptions import INVALID_CHARACTERS, INVALID_URI, ValidationError
from .types import (
    BAD_PERCENT_ESCAPE,
    BOM,
    EVENT_HANDLER,
    INVISIBLE_CHARACTERS,
    JAVASCRIPT_SCHEME,
    SCRIPT_BLOCK,
    STRICT_TEXT_PUNCTUATION,
    SanitizerSettings,
    TextPolicy,
    URI_FORBIDDEN,
    WHITESPACE_RUN,
)

logger = logging.getLogger(__name__)


def _collapse_whitespace(value: str) -> str:
    return WHITESPACE_RUN.sub(" ", value.strip())


def normalize_text(value: str) -> str:
    """Apply the normalization steps every policy starts with.

    NFC normalization, BOM and bidi/zero-width removal, control character
    removal, then trim and collapse whitespace runs to a single space.
    """
    value = unicodedata.normalize("NFC", value)
    value = INVISIBLE_CHARACTERS.sub("", value.replace(BOM, ""))
    value = "".join(ch for ch in value if unicodedata.category(ch) != "Cc")
    return _collapse_whitespace(value)


def strip_markup(value: str) -> str:
    """Remove script blocks, ``javascript:`` schemes and inline event handlers."""
    stripped = SCRIPT_BLOCK.sub("", value)
    stripped = JAVASCRIPT_SCHEME.sub("", stripped)
    stripped = EVENT_HANDLER.sub("", stripped)
    if stripped != value:
        # Removed markup can leave doubled or edge whitespace behind.
        stripped = _collapse_whitespace(stripped)
    return stripped


def is_strict_text(value: str) -> bool:
    """Letters of any script, ASCII digits, space, hyphen, underscore, apostrophe, period."""
    for ch in value:
        if ch in STRICT_TEXT_PUNCTUATION or "0" <= ch <= "9":
            continue
        if unicodedata.category(ch).startswith("L"):
            continue
        return False
    return True


def _remove_dot_segments(path: str) -> str:
    """RFC 3986 section 5.2.4."""
    if "." not in path:
        return path

    output: list[str] = []
    segments = path.split("/")
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment == ".":
            if last:
                output.append("")
            continue
        if segment == "..":
            if len(output) > 1 or (output and output[0] != ""):
                output.pop()
            if last:
                output.append("")
            continue
        output.append(segment)

    normalized = "/".join(output)
    if path.startswith("/") and not normalized.startswith("/"):
        normalized = "/" + normalized
    return normalized


def _lower_host(parts: SplitResult) -> str:
    netloc = parts.netloc
    if not netloc:
        return netloc
    userinfo, at, hostport = netloc.rpartition("@")
    return f"{userinfo}{at}{hostport.lower()}"


def canonicalize_uri(value: str) -> str:
    """Parse and normalize a URI reference.

    Raises:
        ValidationError: If the value is not a well-formed URI reference.
    """
    if URI_FORBIDDEN.search(value) or BAD_PERCENT_ESCAPE.search(value):
        raise ValidationError(INVALID_URI, code="INVALID_URI")
    try:
        parts = urlsplit(value)
        # Accessing the port validates it.
        parts.port
    except ValueError as exc:
        logger.debug("URI parse failure: %s", exc)
        raise ValidationError(INVALID_URI, code="INVALID_URI") from exc

    return urlunsplit(
        (
            parts.scheme.lower(),
            _lower_host(parts),
            _remove_dot_segments(parts.path),
            parts.query,
            parts.fragment,
        )
    )


class TextSanitizer:
    """Clean single strings according to a text policy.

    Example:
        sanitizer = TextSanitizer(SanitizerSettings())
        sanitizer.sanitize_strict("  <script>x</script>John ")  # "John"
        sanitizer.sanitize_uri("/items/../items/123")  # "/items/123"
    """

    def __init__(self, settings: Optional[SanitizerSettings] = None):
        self.settings = settings or SanitizerSettings()

    def looks_like_uri(self, value: str) -> bool:
        """Heuristic URI detection based on the shape of the trimmed string."""
        if not self.settings.uri_detection or not value:
            return False
        return value.strip().startswith(self.settings.uri_prefixes)

    def sanitize_strict(self, value: str) -> str:
        """Normalize, strip unsafe markup, then whitelist-validate.

        Raises:
            ValidationError: If characters outside the whitelist remain.
        """
        cleaned = strip_markup(normalize_text(value))
        if not is_strict_text(cleaned):
            raise ValidationError(INVALID_CHARACTERS, code="INVALID_CHARACTERS")
        return cleaned

    def sanitize_lenient(self, value: str) -> str:
        """Normalize, strip unsafe markup and any tag that is not explicitly allowed.

        No whitelist check is applied, so punctuation survives.
        """
        cleaned = strip_markup(normalize_text(value))
        if "<" not in cleaned and "&" not in cleaned:
            return cleaned
        cleaned = bleach.clean(
            cleaned,
            tags=set(self.settings.lenient_allowed_tags),
            attributes=self.settings.lenient_allowed_attributes,
            strip=True,
            strip_comments=True,
        )
        return _collapse_whitespace(cleaned)

    def sanitize_uri(self, value: str) -> str:
        """Normalize, parse and canonicalize a URI, then HTML-escape it.

        Entities are decoded once before parsing so an already escaped URI is
        returned unchanged.

        Raises:
            ValidationError: If the value cannot be parsed as a URI.
        """
        cleaned = html.unescape(normalize_text(value))
        return html.escape(canonicalize_uri(cleaned), quote=True)

    def sanitize(self, value: str, policy: TextPolicy = TextPolicy.AUTO) -> str:
        """Dispatch to the policy; AUTO picks URI or strict from the string shape."""
        if policy is TextPolicy.AUTO:
            policy = TextPolicy.URI if self.looks_like_uri(value) else TextPolicy.STRICT
        if policy is TextPolicy.URI:
            return self.sanitize_uri(value)
        if policy is TextPolicy.LENIENT:
            return self.sanitize_lenient(value)
        return self.sanitize_strict(value)
