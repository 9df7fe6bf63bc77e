"""
Configuration management for rail-sanitizer.

This module provides a settings proxy that resolves sanitizer configuration
from runtime overrides, the Django ``RAIL_SANITIZER`` setting and the library
defaults, in that order.
"""

import copy
import logging
from typing import Any, Optional

from django.conf import settings

from .defaults import LIBRARY_DEFAULTS, max_depth_limit

logger = logging.getLogger(__name__)

DJANGO_SETTING_NAME = "RAIL_SANITIZER"

# Runtime overrides (avoids modifying Django settings)
_RUNTIME_SETTINGS: dict[str, Any] = {}


class SettingsProxy:
    """
    Proxy for accessing rail-sanitizer settings with hierarchical resolution.

    Settings are resolved in the following order:
    1. Runtime overrides (via configure_runtime_settings)
    2. Django settings (RAIL_SANITIZER)
    3. Library defaults (LIBRARY_DEFAULTS)
    """

    def __init__(self):
        self._cache: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value with hierarchical resolution and caching.

        Args:
            key: Setting key to retrieve (dot notation)
            default: Default value if setting is not found

        Returns:
            The setting value from the highest priority source
        """
        if key in self._cache:
            return self._cache[key]

        for source in (
            self._get_runtime_setting,
            self._get_django_setting,
            self._get_library_default,
        ):
            value = source(key)
            if value is not None:
                self._cache[key] = value
                return value

        self._cache[key] = default
        return default

    def _get_runtime_setting(self, key: str) -> Any:
        return self._get_nested_value(_RUNTIME_SETTINGS, key)

    def _get_django_setting(self, key: str) -> Any:
        """
        Get setting from the Django RAIL_SANITIZER dictionary.

        Returns None when Django settings are not configured, so the library
        can be used outside a Django project with its defaults.
        """
        if not settings.configured:
            return None
        return self._get_nested_value(getattr(settings, DJANGO_SETTING_NAME, {}), key)

    def _get_library_default(self, key: str) -> Any:
        return self._get_nested_value(LIBRARY_DEFAULTS, key)

    def _get_nested_value(self, data: dict[str, Any], key: str) -> Any:
        """
        Get nested value from dictionary using dot notation.

        Args:
            data: Dictionary to search in
            key: Key to retrieve (supports dot notation for nested access)

        Returns:
            The value or None if not found
        """
        if not isinstance(data, dict):
            return None

        current: Any = data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def clear_cache(self) -> None:
        """Clear the settings cache."""
        self._cache.clear()

    def validate(self) -> dict[str, Any]:
        """
        Validate current settings configuration.

        Returns:
            Dictionary with validation results
        """
        validation_results: dict[str, Any] = {"valid": True, "errors": [], "warnings": []}

        django_settings = (
            getattr(settings, DJANGO_SETTING_NAME, {}) if settings.configured else {}
        )
        if not isinstance(django_settings, dict):
            validation_results["errors"].append(
                f"{DJANGO_SETTING_NAME} must be a dictionary"
            )
            validation_results["valid"] = False
            return validation_results

        unknown_sections = set(django_settings) - set(LIBRARY_DEFAULTS)
        for section in sorted(unknown_sections):
            validation_results["warnings"].append(
                f"Unknown {DJANGO_SETTING_NAME} section '{section}'"
            )

        prefixes = self.get("sanitizer_settings.uri_prefixes")
        if not isinstance(prefixes, (list, tuple)) or not all(
            isinstance(prefix, str) and prefix for prefix in prefixes
        ):
            validation_results["errors"].append(
                "Setting 'sanitizer_settings.uri_prefixes' must be a list of non-empty strings"
            )
            validation_results["valid"] = False

        max_depth = self.get("sanitizer_settings.max_depth")
        if max_depth is not None and (
            isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0
        ):
            validation_results["errors"].append(
                "Setting 'sanitizer_settings.max_depth' must be a non-negative integer"
            )
            validation_results["valid"] = False
        elif max_depth is not None and max_depth > max_depth_limit():
            validation_results["warnings"].append(
                f"Setting 'sanitizer_settings.max_depth' ({max_depth}) exceeds the "
                f"interpreter stack and is clamped to {max_depth_limit()}"
            )

        return validation_results


def get_settings_proxy() -> SettingsProxy:
    """Return a fresh settings proxy (its cache lives as long as the proxy)."""
    return SettingsProxy()


def get_setting(key: str, default: Any = None) -> Any:
    """
    Get a setting value using the hierarchical settings system.

    Args:
        key: Setting key to retrieve
        default: Default value if setting is not found

    Returns:
        The setting value from the highest priority source
    """
    return get_settings_proxy().get(key, default)


def configure_runtime_settings(clear_existing: bool = False, **overrides: Any) -> None:
    """
    Configure runtime settings overrides.

    Keys are section names, values are dictionaries merged into that section::

        configure_runtime_settings(sanitizer_settings={"max_depth": 50})

    Args:
        clear_existing: Whether to drop previously configured overrides first
        **overrides: Sections to override
    """
    if clear_existing:
        _RUNTIME_SETTINGS.clear()

    for section, values in overrides.items():
        if isinstance(values, dict):
            merged = dict(_RUNTIME_SETTINGS.get(section, {}))
            merged.update(copy.deepcopy(values))
            _RUNTIME_SETTINGS[section] = merged
        else:
            _RUNTIME_SETTINGS[section] = values
    logger.debug("Runtime sanitizer settings updated: %s", sorted(overrides))


def clear_runtime_settings(section: Optional[str] = None) -> None:
    """
    Clear runtime settings overrides.

    Args:
        section: If provided, only clear this section. If None, clear everything.
    """
    if section:
        _RUNTIME_SETTINGS.pop(section, None)
    else:
        _RUNTIME_SETTINGS.clear()
