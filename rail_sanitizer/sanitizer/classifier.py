"""
Value classification for the graph walk.

Classification is structural: it looks at the type and shape of a value,
never at its contents. The only content-based decision (URI-like strings)
lives in ``TextSanitizer.looks_like_uri``.
"""

import dataclasses
import datetime
import types
import uuid
from collections.abc import Mapping, MutableSequence, MutableSet, Sequence, Set
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from functools import lru_cache
from typing import Any

from .types import (
    POLICY_ATTRIBUTE,
    POLICY_METADATA_KEY,
    TRANSIENT_ATTRIBUTE,
    TRANSIENT_METADATA_KEY,
    TextPolicy,
    ValueKind,
    parse_text_policy,
)

SCALAR_TYPES = (
    bool,
    int,
    float,
    complex,
    Decimal,
    Fraction,
    bytes,
    bytearray,
    memoryview,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
    range,
)

# Values without sanitizable state of their own.
OPAQUE_TYPES = (
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.GeneratorType,
    types.CoroutineType,
)


def is_scalar(value: Any) -> bool:
    """Scalars pass through unchanged and are never tracked as visited."""
    if value is None or isinstance(value, Enum):
        return True
    return isinstance(value, SCALAR_TYPES) or isinstance(value, OPAQUE_TYPES)


def is_named_tuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def is_frozen_dataclass(value: Any) -> bool:
    if isinstance(value, type) or not dataclasses.is_dataclass(value):
        return False
    return bool(type(value).__dataclass_params__.frozen)


def is_django_model(value: Any) -> bool:
    meta = getattr(type(value), "_meta", None)
    return meta is not None and hasattr(meta, "concrete_fields")


def is_fixed_sequence(value: Any) -> bool:
    """Index-settable, fixed-length containers that are not sequence ABCs."""
    value_type = type(value)
    return all(
        hasattr(value_type, name) for name in ("__len__", "__getitem__", "__setitem__")
    )


def classify(value: Any) -> ValueKind:
    """Decide which handling category applies to a value."""
    if is_scalar(value):
        return ValueKind.SCALAR
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, Mapping):
        return ValueKind.ASSOCIATIVE
    if isinstance(value, (tuple, frozenset)) or is_frozen_dataclass(value):
        return ValueKind.IMMUTABLE_COMPOSITE
    if isinstance(value, (MutableSequence, MutableSet, Sequence, Set)):
        return ValueKind.ORDERED_SEQUENCE
    if is_fixed_sequence(value):
        return ValueKind.FIXED_SEQUENCE
    return ValueKind.MUTABLE_COMPOSITE


@lru_cache(maxsize=512)
def field_policies(value_type: type) -> dict[str, TextPolicy]:
    """Text policy overrides declared on a class.

    Sources, lowest priority first: ``__text_policies__`` mappings along the
    MRO (subclasses win), then dataclass field metadata.
    """
    policies: dict[str, TextPolicy] = {}
    for klass in reversed(value_type.__mro__):
        declared = klass.__dict__.get(POLICY_ATTRIBUTE)
        if isinstance(declared, Mapping):
            for name, policy in declared.items():
                policies[name] = parse_text_policy(policy)

    if dataclasses.is_dataclass(value_type):
        for dc_field in dataclasses.fields(value_type):
            if POLICY_METADATA_KEY in dc_field.metadata:
                policies[dc_field.name] = parse_text_policy(
                    dc_field.metadata[POLICY_METADATA_KEY]
                )
    return policies


def policy_for(owner: Any, name: str) -> TextPolicy:
    return field_policies(type(owner)).get(name, TextPolicy.AUTO)


@lru_cache(maxsize=512)
def transient_fields(value_type: type) -> frozenset:
    """Instance fields excluded from the walk.

    ``__transient_fields__`` iterables are merged along the MRO; dataclass
    fields declared with ``transient()`` are added on top.
    """
    names: set[str] = set()
    for klass in reversed(value_type.__mro__):
        declared = klass.__dict__.get(TRANSIENT_ATTRIBUTE)
        if isinstance(declared, str):
            declared = (declared,)
        if declared:
            names.update(declared)

    if dataclasses.is_dataclass(value_type):
        names.update(
            dc_field.name
            for dc_field in dataclasses.fields(value_type)
            if dc_field.metadata.get(TRANSIENT_METADATA_KEY, False)
        )
    return frozenset(names)
