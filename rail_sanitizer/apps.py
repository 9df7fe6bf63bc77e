"""
Django app configuration for the rail-sanitizer library.

This module configures:
- Validation of the RAIL_SANITIZER settings block
- A fresh shared Sanitizer once settings are loaded
"""

import logging

from django.apps import AppConfig as BaseAppConfig

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for rail-sanitizer."""

    name = "rail_sanitizer"
    verbose_name = "Rail Sanitizer"
    label = "rail_sanitizer"

    def ready(self):
        """Validate configuration after Django has loaded."""
        self._validate_configuration()

        from .defaults import LIBRARY_NAME
        from .sanitizer import reset_default_sanitizer

        reset_default_sanitizer()
        logger.debug("%s initialized", LIBRARY_NAME)

    def _validate_configuration(self):
        """Log configuration problems; never abort start-up."""
        from .config_proxy import get_settings_proxy

        results = get_settings_proxy().validate()
        for warning in results["warnings"]:
            logger.warning("Sanitizer configuration: %s", warning)
        for error in results["errors"]:
            logger.warning("Invalid sanitizer configuration, defaults apply: %s", error)
        return results
