"""Enumeration of the readable members of a type.

A member is anything a populated value exposes by attribute name: pydantic
fields and computed fields, dataclass fields, TypedDict/NamedTuple items, and
for plain classes their annotated attributes plus typed read-only properties.
"""

from __future__ import annotations

from collections.abc import Iterable
import dataclasses
import inspect
import logging
import types
import typing
from typing import Any

from pydantic import BaseModel
from pydantic.fields import ComputedFieldInfo, FieldInfo, PydanticUndefined

from gemini_bridge.exceptions import CircularTypeReferenceError
from gemini_bridge.typesystem.classifier import type_name, unwrap_optional

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class Member:
    """One externally visible member of a type."""

    name: str
    annotation: Any
    description: str | None = None
    required: bool = True


def _first_line(doc: str | None) -> str | None:
    if not doc:
        return None
    line = inspect.cleandoc(doc).splitlines()[0].strip()
    return line or None


def _annotated_description(annotation: Any) -> str | None:
    """Pull a description out of ``Annotated[X, "text"]`` or ``Annotated[X, Field(...)]``."""
    if typing.get_origin(annotation) is not typing.Annotated:
        return None
    for meta in typing.get_args(annotation)[1:]:
        if isinstance(meta, str) and meta.strip():
            return meta.strip()
        if isinstance(meta, FieldInfo) and meta.description:
            return meta.description
    return None


def _resolved_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        # Unresolvable forward references fall back to the raw annotations
        log.debug("Could not resolve annotations of %s: %s", cls, e)
        return dict(inspect.get_annotations(cls))


def _pydantic_members(cls: type[BaseModel]) -> Iterable[Member]:
    for name, info in cls.model_fields.items():
        described = info.description or next(
            (m for m in info.metadata if isinstance(m, str) and m.strip()), None
        )
        yield Member(name, info.annotation, described)
    for name, info in cls.model_computed_fields.items():
        doc = getattr(getattr(info, "wrapped_property", None), "__doc__", None)
        yield Member(name, _computed_return_type(info), info.description or _first_line(doc))


def _computed_return_type(info: ComputedFieldInfo) -> Any:
    returns = info.return_type
    if returns is PydanticUndefined or isinstance(returns, str):
        fget = getattr(getattr(info, "wrapped_property", None), "fget", None)
        try:
            returns = typing.get_type_hints(fget).get("return", Any) if fget else Any
        except (NameError, TypeError):
            returns = Any
    return returns


def _dataclass_members(cls: type, *, init_only: bool = False) -> Iterable[Member]:
    hints = _resolved_hints(cls)
    for field in dataclasses.fields(cls):
        if init_only and not field.init:
            continue
        annotation = hints.get(field.name, field.type)
        description = field.metadata.get("description") or _annotated_description(
            annotation
        )
        required = (
            field.default is dataclasses.MISSING
            and field.default_factory is dataclasses.MISSING
        )
        yield Member(field.name, annotation, description, required)


def _annotated_members(cls: type) -> Iterable[Member]:
    for name, annotation in _resolved_hints(cls).items():
        if typing.get_origin(annotation) is typing.ClassVar or annotation is typing.ClassVar:
            continue
        yield Member(name, annotation, _annotated_description(annotation))


def _property_members(cls: type) -> Iterable[Member]:
    for name, attr in inspect.getmembers(cls, lambda a: isinstance(a, property)):
        if attr.fget is None:
            continue
        try:
            returns = typing.get_type_hints(attr.fget, include_extras=True).get("return")
        except (NameError, TypeError):
            returns = None
        if returns is None:
            continue
        yield Member(name, returns, _first_line(attr.__doc__))


def get_members(tp: Any) -> list[Member]:
    """Return the public readable members of ``tp``, sorted by name.

    Anything that is not a class (``Any``, an unresolved type variable) has no
    members.
    """
    tp = unwrap_optional(tp)
    origin = typing.get_origin(tp)
    if origin in (typing.Union, types.UnionType):
        return []
    cls = origin if isinstance(origin, type) else tp
    if not isinstance(cls, type) or cls is object:
        return []

    if issubclass(cls, BaseModel):
        found = list(_pydantic_members(cls))
    elif dataclasses.is_dataclass(cls):
        found = [*_dataclass_members(cls), *_property_members(cls)]
    elif typing.is_typeddict(cls) or (issubclass(cls, tuple) and hasattr(cls, "_fields")):
        found = list(_annotated_members(cls))
    else:
        found = [*_annotated_members(cls), *_property_members(cls)]

    unique: dict[str, Member] = {}
    for member in found:
        if member.name.startswith("_"):
            continue
        unique.setdefault(member.name, member)
    return sorted(unique.values(), key=lambda m: m.name)


def get_settable_members(cls: type) -> list[Member]:
    """Return the members a populated instance is built from, in declaration order.

    Unlike `get_members` this leaves out properties, computed fields and
    dataclass fields excluded from ``__init__``. ``required`` is False where
    the class supplies a default.
    """
    if issubclass(cls, BaseModel):
        found = [
            Member(name, info.annotation, info.description, info.is_required())
            for name, info in cls.model_fields.items()
        ]
    elif dataclasses.is_dataclass(cls):
        found = list(_dataclass_members(cls, init_only=True))
    elif typing.is_typeddict(cls):
        found = [
            dataclasses.replace(m, required=m.name in cls.__required_keys__)
            for m in _annotated_members(cls)
        ]
    elif issubclass(cls, tuple) and hasattr(cls, "_fields"):
        defaults = getattr(cls, "_field_defaults", {})
        found = [
            dataclasses.replace(m, required=m.name not in defaults)
            for m in _annotated_members(cls)
        ]
    else:
        found = [
            dataclasses.replace(m, required=not hasattr(cls, m.name))
            for m in _annotated_members(cls)
        ]
    return [m for m in found if not m.name.startswith("_")]


def check_not_visited(tp: Any, visited: frozenset[Any]) -> None:
    """Raise if ``tp`` is already open on the current traversal branch."""
    if unwrap_optional(tp) in visited:
        raise CircularTypeReferenceError(type_name(unwrap_optional(tp)))
