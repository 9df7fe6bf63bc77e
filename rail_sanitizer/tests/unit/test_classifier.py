"""
Unit tests for value classification.
"""

import datetime
import uuid
from collections import OrderedDict, deque, namedtuple
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType

import pytest

from rail_sanitizer.sanitizer import ValueKind, classify, is_scalar

pytestmark = pytest.mark.unit


class Status(Enum):
    OPEN = "open"


@dataclass(frozen=True)
class Frozen:
    name: str


@dataclass
class Mutable:
    name: str


class Grid:
    def __len__(self):
        return 0

    def __getitem__(self, index):
        raise IndexError(index)

    def __setitem__(self, index, value):
        raise IndexError(index)


Pair = namedtuple("Pair", "a b")


@pytest.mark.parametrize(
    "value",
    [
        None,
        True,
        3,
        1.5,
        Decimal("2"),
        b"raw",
        datetime.date(2024, 1, 1),
        uuid.uuid4(),
        Status.OPEN,
        len,
        Mutable,
        classify,
    ],
)
def test_scalars(value):
    assert is_scalar(value)
    assert classify(value) is ValueKind.SCALAR


def test_text():
    assert classify("abc") is ValueKind.TEXT


@pytest.mark.parametrize(
    "value, kind",
    [
        ({}, ValueKind.ASSOCIATIVE),
        (OrderedDict(), ValueKind.ASSOCIATIVE),
        (MappingProxyType({}), ValueKind.ASSOCIATIVE),
        ((), ValueKind.IMMUTABLE_COMPOSITE),
        (frozenset(), ValueKind.IMMUTABLE_COMPOSITE),
        (Pair(1, 2), ValueKind.IMMUTABLE_COMPOSITE),
        (Frozen("a"), ValueKind.IMMUTABLE_COMPOSITE),
        ([], ValueKind.ORDERED_SEQUENCE),
        (deque(), ValueKind.ORDERED_SEQUENCE),
        (set(), ValueKind.ORDERED_SEQUENCE),
        (Grid(), ValueKind.FIXED_SEQUENCE),
        (Mutable("a"), ValueKind.MUTABLE_COMPOSITE),
        (object(), ValueKind.MUTABLE_COMPOSITE),
    ],
)
def test_containers(value, kind):
    assert classify(value) is kind
