"""Pure predicates classifying runtime types for extraction.

Every type the bridge walks falls into exactly one shape: a leaf (an
indivisible value), a dictionary, a collection, or an object with members.
Shapes are derived on demand and never cached; classification is cheap next
to a model call.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import datetime
import decimal
from enum import Enum
import types
import typing
from typing import Any
import uuid

from pydantic import BaseModel


class NumericKind(str, Enum):
    """Numeric sub-kind of a leaf type."""

    INTEGER = "integer"
    FLOATING = "floating"
    NOT_NUMERIC = "not_numeric"


_FLOATING_TYPES: tuple[type, ...] = (float, decimal.Decimal)
_DATETIME_TYPES: tuple[type, ...] = (
    datetime.datetime,
    datetime.date,
    datetime.time,
    datetime.timedelta,
)
_STRING_LIKE: tuple[type, ...] = (str, bytes, bytearray)
UNION_ORIGINS = (typing.Union, types.UnionType)


def unwrap_annotated(tp: Any) -> Any:
    """Strip any number of ``Annotated[...]`` layers."""
    while typing.get_origin(tp) is typing.Annotated:
        tp = typing.get_args(tp)[0]
    return tp


def unwrap_optional(tp: Any) -> Any:
    """Return ``X`` for ``X | None`` / ``Optional[X]``; other types unchanged.

    Unions with more than one non-None member are left as they are.
    """
    tp = unwrap_annotated(tp)
    if typing.get_origin(tp) in UNION_ORIGINS:
        members = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(members) == 1:
            return unwrap_annotated(members[0])
    return tp


def is_optional(tp: Any) -> bool:
    """Return True if ``tp`` admits None (``X | None``, ``X | Y | None``)."""
    tp = unwrap_annotated(tp)
    return typing.get_origin(tp) in UNION_ORIGINS and type(None) in typing.get_args(tp)


def is_union(tp: Any) -> bool:
    """True for a union still holding more than one non-None member."""
    return typing.get_origin(unwrap_optional(tp)) in UNION_ORIGINS


def union_members(tp: Any) -> tuple[Any, ...]:
    """Non-None members of a union, ``Annotated`` layers stripped."""
    return tuple(
        unwrap_annotated(a)
        for a in typing.get_args(unwrap_optional(tp))
        if a is not type(None)
    )


def _as_class(tp: Any) -> type | None:
    """Return the runtime class behind ``tp`` (generic origin or class itself)."""
    origin = typing.get_origin(tp)
    if origin in UNION_ORIGINS:
        return None
    candidate = origin if origin is not None else tp
    return candidate if isinstance(candidate, type) else None


def is_object_shape(tp: Any) -> bool:
    """True for record-like classes that are iterable at runtime but hold members."""
    cls = _as_class(unwrap_optional(tp))
    if cls is None:
        return False
    return (
        issubclass(cls, BaseModel)
        or dataclasses.is_dataclass(cls)
        or typing.is_typeddict(cls)
        or (issubclass(cls, tuple) and hasattr(cls, "_fields"))
    )


def is_enum(tp: Any) -> bool:
    tp = unwrap_optional(tp)
    if typing.get_origin(tp) is typing.Literal:
        return True
    return isinstance(tp, type) and issubclass(tp, Enum)


def numeric_kind(tp: Any) -> NumericKind:
    """Classify ``tp`` as integer, floating-point, or not numeric."""
    tp = unwrap_optional(tp)
    if not isinstance(tp, type) or issubclass(tp, (bool, Enum)):
        return NumericKind.NOT_NUMERIC
    if issubclass(tp, int):
        return NumericKind.INTEGER
    if issubclass(tp, _FLOATING_TYPES):
        return NumericKind.FLOATING
    return NumericKind.NOT_NUMERIC


def is_numeric(tp: Any) -> bool:
    return numeric_kind(tp) is not NumericKind.NOT_NUMERIC


def is_integer(tp: Any) -> bool:
    return numeric_kind(tp) is NumericKind.INTEGER


def is_floating_point(tp: Any) -> bool:
    return numeric_kind(tp) is NumericKind.FLOATING


def is_datetime_family(tp: Any) -> bool:
    """True for instants, dates, times of day and durations."""
    tp = unwrap_optional(tp)
    return isinstance(tp, type) and issubclass(tp, _DATETIME_TYPES)


def is_leaf(tp: Any) -> bool:
    """True if ``tp`` is an indivisible value, nullable or not.

    A union is a leaf when every one of its members is.
    """
    tp = unwrap_optional(tp)
    if is_union(tp):
        return all(is_leaf(member) for member in union_members(tp))
    if is_enum(tp):
        return True
    if not isinstance(tp, type):
        return False
    return (
        tp is bool
        or issubclass(tp, _STRING_LIKE)
        or is_numeric(tp)
        or is_datetime_family(tp)
        or issubclass(tp, uuid.UUID)
    )


def is_dictionary(tp: Any) -> bool:
    """True for mapping types (``dict``, ``Mapping`` and their parametrisations)."""
    tp = unwrap_optional(tp)
    cls = _as_class(tp)
    if cls is None or is_object_shape(tp):
        return False
    return issubclass(cls, collections.abc.Mapping)


def is_collection(tp: Any) -> bool:
    """True for any iterable type except strings and record-like objects.

    Mappings are iterable too, so callers check `is_dictionary` first.
    """
    tp = unwrap_optional(tp)
    cls = _as_class(tp)
    if cls is None or is_leaf(tp) or is_object_shape(tp):
        return False
    return issubclass(cls, collections.abc.Iterable)


def _parametrised_base(cls: type, abc: type) -> tuple[Any, ...] | None:
    """Find type arguments of the first original base that is a subclass of ``abc``."""
    for klass in cls.__mro__:
        for base in types.get_original_bases(klass) if klass is not object else ():
            origin = typing.get_origin(base)
            args = typing.get_args(base)
            if isinstance(origin, type) and issubclass(origin, abc) and args:
                return args
    return None


def collection_element_type(tp: Any) -> Any:
    """Return the element type of a collection, or ``Any`` when unknown.

    ``tuple[X, ...]`` and fixed ``tuple[X, Y]`` both report ``X``. A bare
    ``list`` or a legacy untyped iterable has no element type to report.
    """
    tp = unwrap_optional(tp)
    args = typing.get_args(tp)
    if args:
        first = args[0]
        if first == () or first is Ellipsis:
            return Any
        return first
    cls = _as_class(tp)
    if cls is None:
        return Any
    found = _parametrised_base(cls, collections.abc.Iterable)
    return found[0] if found else Any


def dictionary_key_value_types(tp: Any) -> tuple[Any, Any] | None:
    """Return ``(key, value)`` types of a mapping, or None if not resolvable."""
    tp = unwrap_optional(tp)
    args = typing.get_args(tp)
    if len(args) == 2:
        return args[0], args[1]
    cls = _as_class(tp)
    if cls is None:
        return None
    found = _parametrised_base(cls, collections.abc.Mapping)
    if found and len(found) == 2:
        return found[0], found[1]
    return None


def type_name(tp: Any) -> str:
    """Readable name of a type for messages and prompts."""
    tp = unwrap_annotated(tp)
    name = getattr(tp, "__name__", None)
    if name and not typing.get_args(tp):
        return name
    return repr(tp).replace("typing.", "")
