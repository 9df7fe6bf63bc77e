"""
Default configuration for the rail-sanitizer library.

Every setting the sanitizer reads is listed here. Projects override any of
them through the ``RAIL_SANITIZER`` dictionary in their Django settings or,
at runtime, through ``rail_sanitizer.config_proxy.configure_runtime_settings``.
"""

from __future__ import annotations

import sys
from typing import Any

LIBRARY_VERSION = "0.1.0"
LIBRARY_NAME = "rail-sanitizer"

DEFAULT_URI_PREFIXES = ["/", "http://", "https://"]


# --------------------------------------------------------------------------- #
# Library-wide defaults (grouped by feature area)
# --------------------------------------------------------------------------- #
LIBRARY_DEFAULTS: dict[str, Any] = {
    "sanitizer_settings": {
        # Route strings that look like paths/URLs through the URI policy.
        "uri_detection": True,
        "uri_prefixes": list(DEFAULT_URI_PREFIXES),
        # Nesting guard for the graph walk; 0 disables it.
        "max_depth": 100,
        # Tags/attributes kept by the lenient (free-form) text policy.
        "lenient_allowed_tags": [],
        "lenient_allowed_attributes": {},
    },
}


def get_default(key: str, default: Any = None) -> Any:
    """Return a library default using dot notation (``section.key``)."""
    current: Any = LIBRARY_DEFAULTS
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def max_depth_limit() -> int:
    """Deepest nesting a walk can reach before the interpreter stack runs out."""
    return max(1, sys.getrecursionlimit() // 4)
