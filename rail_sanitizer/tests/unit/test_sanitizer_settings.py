"""
Unit tests for settings resolution, validation and the app configuration.
"""

import logging

import pytest
from django.apps import apps
from django.test import override_settings

from rail_sanitizer.config_proxy import (
    SettingsProxy,
    clear_runtime_settings,
    configure_runtime_settings,
    get_setting,
)
from rail_sanitizer.defaults import DEFAULT_URI_PREFIXES, get_default, max_depth_limit
from rail_sanitizer.exceptions import ValidationError
from rail_sanitizer.sanitizer import Sanitizer, SanitizerSettings, sanitize_text
from rail_sanitizer.sanitizer.types import TextPolicy, parse_text_policy

pytestmark = pytest.mark.unit


def test_from_settings_uses_defaults():
    settings = SanitizerSettings.from_settings()

    assert settings.uri_detection is True
    assert settings.uri_prefixes == tuple(DEFAULT_URI_PREFIXES)
    assert settings.max_depth == 100
    assert settings.lenient_allowed_tags == []


def test_library_defaults_lookup():
    assert get_default("sanitizer_settings.max_depth") == 100
    assert get_default("sanitizer_settings.missing", "fallback") == "fallback"


def test_runtime_overrides_take_priority():
    configure_runtime_settings(sanitizer_settings={"uri_detection": False})

    assert get_setting("sanitizer_settings.uri_detection") is False
    assert get_setting("sanitizer_settings.max_depth") == 100

    sanitizer = Sanitizer()
    with pytest.raises(ValidationError):
        sanitizer.sanitize({"href": "/items/1"})


def test_runtime_overrides_merge_and_clear():
    configure_runtime_settings(sanitizer_settings={"max_depth": 5})
    configure_runtime_settings(sanitizer_settings={"uri_detection": False})

    assert get_setting("sanitizer_settings.max_depth") == 5
    assert get_setting("sanitizer_settings.uri_detection") is False

    clear_runtime_settings("sanitizer_settings")
    assert get_setting("sanitizer_settings.max_depth") == 100


def test_django_settings_prefixes():
    with override_settings(
        RAIL_SANITIZER={"sanitizer_settings": {"uri_prefixes": ["ftp://"]}}
    ):
        settings = SanitizerSettings.from_settings()

    assert settings.uri_prefixes == ("ftp://",)
    sanitizer = Sanitizer(settings)
    assert sanitizer.text.looks_like_uri("ftp://files.example.com/a")
    assert not sanitizer.text.looks_like_uri("/items/1")


def test_single_string_prefix_is_accepted():
    configure_runtime_settings(sanitizer_settings={"uri_prefixes": "urn:"})
    assert SanitizerSettings.from_settings().uri_prefixes == ("urn:",)


@pytest.mark.parametrize(
    "configured, expected",
    [("abc", 100), (0, None), (-3, None), ("25", 25), (10**6, max_depth_limit())],
)
def test_max_depth_is_coerced(configured, expected):
    configure_runtime_settings(sanitizer_settings={"max_depth": configured})
    assert SanitizerSettings.from_settings().max_depth == expected


def test_lenient_tags_from_settings():
    configure_runtime_settings(
        sanitizer_settings={
            "lenient_allowed_tags": ["a"],
            "lenient_allowed_attributes": {"a": ["href"]},
        }
    )
    sanitizer = Sanitizer()

    cleaned = sanitizer.sanitize_lenient_text('<a href="/x" title="t">go</a>')

    assert cleaned == '<a href="/x">go</a>'


def test_shared_sanitizer_follows_reset():
    assert sanitize_text(" a ") == "a"
    configure_runtime_settings(sanitizer_settings={"uri_detection": False})

    from rail_sanitizer.sanitizer import get_default_sanitizer, reset_default_sanitizer

    assert get_default_sanitizer().settings.uri_detection is True
    reset_default_sanitizer()
    assert get_default_sanitizer().settings.uri_detection is False


def test_validate_accepts_test_configuration():
    results = SettingsProxy().validate()
    assert results == {"valid": True, "errors": [], "warnings": []}


def test_validate_reports_problems():
    with override_settings(
        RAIL_SANITIZER={
            "sanitizer_settings": {"uri_prefixes": ["", 3], "max_depth": -1},
            "graphql": {},
        }
    ):
        results = SettingsProxy().validate()

    assert results["valid"] is False
    assert len(results["errors"]) == 2
    assert results["warnings"] == ["Unknown RAIL_SANITIZER section 'graphql'"]


def test_validate_rejects_non_dict_setting():
    with override_settings(RAIL_SANITIZER=["nope"]):
        results = SettingsProxy().validate()
    assert results["errors"] == ["RAIL_SANITIZER must be a dictionary"]


def test_app_config_logs_configuration_problems(caplog):
    caplog.set_level(logging.WARNING, logger="rail_sanitizer.apps")
    app_config = apps.get_app_config("rail_sanitizer")

    with override_settings(RAIL_SANITIZER={"sanitizer_settings": {"max_depth": "deep"}}):
        results = app_config._validate_configuration()

    assert results["valid"] is False
    assert "max_depth" in caplog.text


def test_parse_text_policy():
    assert parse_text_policy("URI") is TextPolicy.URI
    assert parse_text_policy(TextPolicy.LENIENT) is TextPolicy.LENIENT
    assert parse_text_policy("unknown") is TextPolicy.AUTO
    assert parse_text_policy(None) is TextPolicy.AUTO


def test_validate_warns_about_depth_beyond_stack():
    configure_runtime_settings(sanitizer_settings={"max_depth": 10**6})

    results = SettingsProxy().validate()

    assert results["valid"] is True
    assert len(results["warnings"]) == 1
    assert "clamped" in results["warnings"][0]
