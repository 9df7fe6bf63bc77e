"""
Unit tests for the sanitize_arguments decorator.
"""

from dataclasses import dataclass

import pytest

from rail_sanitizer.exceptions import ValidationError
from rail_sanitizer.sanitizer import Sanitizer, SanitizerSettings, sanitize_arguments

pytestmark = pytest.mark.unit


@dataclass(frozen=True)
class Payload:
    name: str


def test_data_keyword_is_sanitized():
    @sanitize_arguments()
    def handler(request, data):
        return data

    data = {"name": "  Ann  "}
    result = handler("request", data=data)

    assert result is data
    assert data == {"name": "Ann"}


def test_frozen_payload_is_replaced():
    @sanitize_arguments(sanitizer=Sanitizer(SanitizerSettings()))
    def handler(input=None, item_data=None):
        return input, item_data

    result_input, result_item = handler(input=Payload(" a "), item_data=[" b "])

    assert result_input == Payload("a")
    assert result_item == ["b"]


def test_validator_receives_sanitized_arguments():
    seen = {}

    def validator(*args, **kwargs):
        seen.update(kwargs)

    @sanitize_arguments(validator_func=validator)
    def handler(data):
        return "ok"

    assert handler(data={"name": " Bo "}) == "ok"
    assert seen == {"data": {"name": "Bo"}}


def test_rejected_payload_blocks_the_call():
    calls = []

    @sanitize_arguments()
    def handler(data):
        calls.append(data)

    with pytest.raises(ValidationError) as exc_info:
        handler(data={"name": "hi@#$"})

    assert exc_info.value.path == "name"
    assert calls == []


def test_other_arguments_are_left_alone():
    @sanitize_arguments()
    def handler(title, data=None, note=None):
        return title, note

    assert handler(" raw! ", data={}, note=" raw! ") == (" raw! ", " raw! ")


def test_wrapper_keeps_function_metadata():
    @sanitize_arguments()
    def create_item(data):
        """Create an item."""

    assert create_item.__name__ == "create_item"
    assert create_item.__doc__ == "Create an item."
