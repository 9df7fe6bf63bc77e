"""
Type definitions for the sanitizer.

This module provides:
- TextPolicy enum for choosing how a string is cleaned
- ValueKind enum for the handling categories of the graph walk
- SanitizerSettings for configuring sanitizer behavior
- Patterns and metadata keys shared by the other modules
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..config_proxy import get_setting
from ..defaults import DEFAULT_URI_PREFIXES, max_depth_limit

logger = logging.getLogger(__name__)


class TextPolicy(Enum):
    """How a string value is cleaned."""

    AUTO = "auto"
    STRICT = "strict"
    LENIENT = "lenient"
    URI = "uri"


class ValueKind(Enum):
    """Handling category of a value met during the graph walk."""

    SCALAR = "scalar"
    TEXT = "text"
    ORDERED_SEQUENCE = "ordered_sequence"
    ASSOCIATIVE = "associative"
    FIXED_SEQUENCE = "fixed_sequence"
    IMMUTABLE_COMPOSITE = "immutable_composite"
    MUTABLE_COMPOSITE = "mutable_composite"


# Keys used in dataclasses.field(metadata=...)
POLICY_METADATA_KEY = "text_policy"
TRANSIENT_METADATA_KEY = "transient"

# Class attribute mapping field names to a TextPolicy
POLICY_ATTRIBUTE = "__text_policies__"

# Class attribute listing instance fields the walk must skip
TRANSIENT_ATTRIBUTE = "__transient_fields__"

BOM = "\ufeff"
INVISIBLE_CHARACTERS = re.compile("[\u200b-\u200f\u202a-\u202e]")
WHITESPACE_RUN = re.compile(r"\s{2,}")
SCRIPT_BLOCK = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
JAVASCRIPT_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
EVENT_HANDLER = re.compile(r"on\w+\s*=", re.IGNORECASE)

STRICT_TEXT_PUNCTUATION = frozenset(" -_'.")

# Characters a URI can never contain unescaped.
URI_FORBIDDEN = re.compile(r"[\s<>\"{}|\\^`]")
BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass
class SanitizerSettings:
    """Configuration for sanitizer behavior.

    Attributes:
        uri_detection: Route URI-looking strings through the URI policy.
        uri_prefixes: Prefixes that make a trimmed string URI-like.
        max_depth: Nesting limit for the graph walk; None disables it.
        lenient_allowed_tags: Tags kept by the lenient policy.
        lenient_allowed_attributes: Attributes kept on those tags.
    """

    uri_detection: bool = True
    uri_prefixes: tuple[str, ...] = field(
        default_factory=lambda: tuple(DEFAULT_URI_PREFIXES)
    )
    max_depth: Optional[int] = 100
    lenient_allowed_tags: list[str] = field(default_factory=list)
    lenient_allowed_attributes: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_settings(cls) -> "SanitizerSettings":
        """Build settings from runtime overrides, Django settings and defaults."""
        uri_detection = bool(get_setting("sanitizer_settings.uri_detection", True))
        prefixes = get_setting("sanitizer_settings.uri_prefixes", None)
        max_depth = get_setting("sanitizer_settings.max_depth", None)
        tags = get_setting("sanitizer_settings.lenient_allowed_tags", None)
        attrs = get_setting("sanitizer_settings.lenient_allowed_attributes", None)

        if isinstance(prefixes, str):
            prefixes = [prefixes]
        if not isinstance(prefixes, (list, tuple)):
            prefixes = DEFAULT_URI_PREFIXES
        prefixes = tuple(p for p in prefixes if isinstance(p, str) and p)

        return cls(
            uri_detection=uri_detection,
            uri_prefixes=prefixes or tuple(DEFAULT_URI_PREFIXES),
            max_depth=_parse_max_depth(max_depth),
            lenient_allowed_tags=list(tags) if tags else [],
            lenient_allowed_attributes=dict(attrs) if attrs else {},
        )


def _parse_max_depth(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        depth = int(value)
    except (TypeError, ValueError):
        return 100
    if depth <= 0:
        return None
    limit = max_depth_limit()
    if depth > limit:
        logger.warning(
            "max_depth %s exceeds the interpreter stack, using %s", depth, limit
        )
        return limit
    return depth


def parse_text_policy(value: Any) -> TextPolicy:
    """Coerce a TextPolicy or its string value; unknown values mean AUTO."""
    if isinstance(value, TextPolicy):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        for policy in TextPolicy:
            if policy.value == normalized:
                return policy
    return TextPolicy.AUTO
