"""
Dataclass field helpers for declaring text policies.

Example:
    @dataclass
    class ItemRequest:
        name: str = strict_text()
        notes: str = lenient_text(default="")
        link: str = uri_text(default="")
        cache: dict = transient(default_factory=dict)
"""

import dataclasses
from typing import Any

from .types import POLICY_METADATA_KEY, TRANSIENT_METADATA_KEY, TextPolicy


def _with_metadata(extra: dict[str, Any], kwargs: dict[str, Any]) -> Any:
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata.update(extra)
    return dataclasses.field(metadata=metadata, **kwargs)


def text_field(policy: TextPolicy, **kwargs: Any) -> Any:
    """``dataclasses.field`` carrying an explicit text policy."""
    return _with_metadata({POLICY_METADATA_KEY: policy}, kwargs)


def strict_text(**kwargs: Any) -> Any:
    """Always apply the strict policy, even when the value looks like a URI."""
    return text_field(TextPolicy.STRICT, **kwargs)


def lenient_text(**kwargs: Any) -> Any:
    """Free-form text: normalized and stripped of markup, no character whitelist."""
    return text_field(TextPolicy.LENIENT, **kwargs)


def uri_text(**kwargs: Any) -> Any:
    """Always apply the URI policy."""
    return text_field(TextPolicy.URI, **kwargs)


def transient(**kwargs: Any) -> Any:
    """Exclude the field from sanitization."""
    return _with_metadata({TRANSIENT_METADATA_KEY: True}, kwargs)
