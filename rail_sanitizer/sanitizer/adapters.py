"""
Container adapters for the graph walk.

Each adapter knows how to read the children of one kind of container and
how to put sanitized children back: in place, by rebuilding the contents,
or by constructing a new instance. The walker hands every adapter a
``visit`` callback and never touches container internals itself.
"""

import dataclasses
import logging
from collections.abc import MutableSequence, MutableSet
from typing import Any, Callable, Iterator, Optional

from ..exceptions import MutationUnsupported
from .classifier import (
    is_django_model,
    is_frozen_dataclass,
    is_named_tuple,
    policy_for,
    transient_fields,
)
from .types import ValueKind
from .utils import has_changed, join_list_path, join_path

logger = logging.getLogger(__name__)

Visit = Callable[..., Any]

# Errors containers and descriptors raise when they refuse a write.
WRITE_ERRORS = (TypeError, AttributeError, ValueError, IndexError, KeyError, NotImplementedError)


def _log_unsupported(exc: MutationUnsupported) -> None:
    logger.debug(
        "Mutation unsupported at %s: %s",
        exc.path or "<root>",
        exc.message,
        exc_info=exc.cause,
    )


class ContainerAdapter:
    """Base class for per-kind container handling."""

    kind: ValueKind

    def sanitize(self, value: Any, visit: Visit, path: Optional[str]) -> Any:
        """Sanitize the children of ``value`` and return the value to keep."""
        raise NotImplementedError


class OrderedSequenceAdapter(ContainerAdapter):
    """Lists, deques, sets and read-only sequence views.

    Positions are replaced in place while the sequence allows it. Once a
    write is refused the remaining elements are still sanitized and the
    whole content is rebuilt with clear() and re-adding.
    """

    kind = ValueKind.ORDERED_SEQUENCE

    def sanitize(self, value: Any, visit: Visit, path: Optional[str]) -> Any:
        snapshot = list(value)
        replacements: list[Any] = []
        in_place = isinstance(value, MutableSequence)
        changed = False

        for index, item in enumerate(snapshot):
            item_path = join_list_path(path, index)
            sanitized = visit(item, item_path)
            replacements.append(sanitized)
            if not has_changed(item, sanitized):
                continue
            changed = True
            if in_place:
                try:
                    self._replace_at(value, index, item, sanitized, item_path)
                except MutationUnsupported as exc:
                    _log_unsupported(exc)
                    in_place = False

        if changed and not in_place:
            try:
                self._rebuild(value, replacements, path)
            except MutationUnsupported as exc:
                _log_unsupported(exc)
        return value

    def _replace_at(
        self, value: Any, index: int, original: Any, sanitized: Any, path: str
    ) -> None:
        try:
            if value[index] is not original:
                raise MutationUnsupported("sequence modified during sanitization", path)
            value[index] = sanitized
        except WRITE_ERRORS as exc:
            raise MutationUnsupported("positional replace refused", path, exc)

    def _rebuild(self, value: Any, replacements: list[Any], path: Optional[str]) -> None:
        try:
            if isinstance(value, MutableSet):
                value.clear()
                for item in replacements:
                    value.add(item)
            elif isinstance(value, MutableSequence):
                value.clear()
                value.extend(replacements)
            else:
                raise MutationUnsupported(
                    f"{type(value).__name__} is read-only", path
                )
        except WRITE_ERRORS as exc:
            raise MutationUnsupported("rebuild refused", path, exc)


class AssociativeAdapter(ContainerAdapter):
    """Mappings: keys and values are sanitized independently.

    Entries are snapshotted first; changed entries are removed and then
    re-inserted under their sanitized key. Entries whose new key is empty
    are dropped.
    """

    kind = ValueKind.ASSOCIATIVE

    def sanitize(self, value: Any, visit: Visit, path: Optional[str]) -> Any:
        removals: list[Any] = []
        insertions: list[tuple[Any, Any]] = []

        for key, item in list(value.items()):
            entry_path = join_path(path, key)
            new_key = visit(key, entry_path)
            new_item = visit(item, entry_path)
            if has_changed(key, new_key) or has_changed(item, new_item):
                removals.append(key)
                insertions.append((new_key, new_item))

        if not removals:
            return value

        try:
            for key in removals:
                del value[key]
            for key, item in insertions:
                if key is None or key == "":
                    logger.debug("Dropping entry with empty key at %s", path or "<root>")
                    continue
                value[key] = item
        except WRITE_ERRORS as exc:
            _log_unsupported(MutationUnsupported("mapping update refused", path, exc))
        return value


class FixedSequenceAdapter(ContainerAdapter):
    """Fixed-length, index-settable containers; the length never changes."""

    kind = ValueKind.FIXED_SEQUENCE

    def sanitize(self, value: Any, visit: Visit, path: Optional[str]) -> Any:
        for index in range(len(value)):
            item_path = join_list_path(path, index)
            try:
                item = value[index]
            except WRITE_ERRORS as exc:
                # Keyed containers that are not registered as a Mapping.
                _log_unsupported(
                    MutationUnsupported("integer index refused", item_path, exc)
                )
                break
            sanitized = visit(item, item_path)
            if not has_changed(item, sanitized):
                continue
            try:
                value[index] = sanitized
            except WRITE_ERRORS as exc:
                _log_unsupported(MutationUnsupported("index set refused", item_path, exc))
        return value


class ImmutableCompositeAdapter(ContainerAdapter):
    """Frozen dataclasses, named tuples, tuples and frozensets.

    Components are read in declaration order. A new instance is built only
    when at least one component changed; otherwise the original is returned.
    """

    kind = ValueKind.IMMUTABLE_COMPOSITE

    def sanitize(self, value: Any, visit: Visit, path: Optional[str]) -> Any:
        names, originals = self.components(value)
        sanitized_values: list[Any] = []
        changed = False

        for position, original in enumerate(originals):
            name = names[position] if names else None
            if name is not None:
                sanitized = visit(original, join_path(path, name), policy_for(value, name))
            else:
                sanitized = visit(original, join_list_path(path, position))
            sanitized_values.append(sanitized)
            changed = changed or has_changed(original, sanitized)

        if not changed:
            return value

        try:
            return self.rebuild(value, names, sanitized_values)
        except (TypeError, ValueError) as exc:
            _log_unsupported(
                MutationUnsupported(f"cannot rebuild {type(value).__name__}", path, exc)
            )
            return value

    def components(self, value: Any) -> tuple[Optional[list[str]], list[Any]]:
        """Return component names (None for positional types) and values."""
        if is_frozen_dataclass(value):
            names = [f.name for f in dataclasses.fields(value) if f.init]
            return names, [getattr(value, name) for name in names]
        if is_named_tuple(value):
            return list(type(value)._fields), list(value)
        return None, list(value)

    def rebuild(self, value: Any, names: Optional[list[str]], values: list[Any]) -> Any:
        """Construct a new instance of the same type from all component values."""
        value_type = type(value)
        if is_frozen_dataclass(value):
            return value_type(**dict(zip(names, values)))
        if is_named_tuple(value):
            return value_type._make(values)
        return value_type(values)


class MutableCompositeAdapter(ContainerAdapter):
    """Objects with settable attributes: dataclasses, Django models, plain objects.

    Only instance state is walked, private attributes included. Names listed
    in ``__transient_fields__``, dataclass fields marked transient, deferred
    and non-concrete Django model fields are skipped.
    """

    kind = ValueKind.MUTABLE_COMPOSITE

    def sanitize(self, value: Any, visit: Visit, path: Optional[str]) -> Any:
        for name in self.field_names(value):
            field_path = join_path(path, name)
            try:
                original = getattr(value, name)
            except AttributeError as exc:
                logger.debug("Cannot read field %s: %s", field_path, exc)
                continue

            sanitized = visit(original, field_path, policy_for(value, name))
            if not has_changed(original, sanitized):
                continue
            try:
                setattr(value, name, sanitized)
            except WRITE_ERRORS as exc:
                _log_unsupported(MutationUnsupported("field write refused", field_path, exc))
        return value

    def field_names(self, value: Any) -> list[str]:
        """Persistent instance fields, inherited ones included."""
        excluded = transient_fields(type(value))
        if is_django_model(value):
            # Reading a deferred field would query the database.
            deferred = getattr(value, "get_deferred_fields", None)
            if deferred is not None:
                excluded = excluded | deferred()
            names = [f.attname for f in type(value)._meta.concrete_fields]
        elif dataclasses.is_dataclass(value):
            names = [f.name for f in dataclasses.fields(value)]
        else:
            names = list(dict.fromkeys(self._instance_attributes(value)))
        return [name for name in names if name not in excluded]

    def _instance_attributes(self, value: Any) -> Iterator[str]:
        for klass in reversed(type(value).__mro__):
            slots = klass.__dict__.get("__slots__", ())
            if isinstance(slots, str):
                slots = (slots,)
            for slot in slots:
                if slot not in ("__dict__", "__weakref__"):
                    yield slot
        instance_dict = getattr(value, "__dict__", None)
        if isinstance(instance_dict, dict):
            yield from instance_dict


ADAPTERS: dict[ValueKind, ContainerAdapter] = {
    adapter.kind: adapter
    for adapter in (
        OrderedSequenceAdapter(),
        AssociativeAdapter(),
        FixedSequenceAdapter(),
        ImmutableCompositeAdapter(),
        MutableCompositeAdapter(),
    )
}
