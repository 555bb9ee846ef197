"""Validation stand-ins for targets pydantic cannot build from JSON.

pydantic validates its own models, dataclasses, TypedDicts and NamedTuples
natively. A plain annotated class is none of those, so before structuring every
plain class in the target graph is swapped for a generated model with the same
data members (`wire_type`). After validation the caller's own objects are
rebuilt from the generated ones (`bind_value`).
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import logging
import typing
from typing import Any

from pydantic import BaseModel, Field, create_model

from gemini_bridge.typesystem.classifier import (
    UNION_ORIGINS,
    collection_element_type,
    dictionary_key_value_types,
    is_collection,
    is_dictionary,
    is_leaf,
)
from gemini_bridge.typesystem.members import get_settable_members

log = logging.getLogger(__name__)


def _is_record(cls: type) -> bool:
    """Record types pydantic builds itself once their members validate."""
    return (
        dataclasses.is_dataclass(cls)
        or typing.is_typeddict(cls)
        or (issubclass(cls, tuple) and hasattr(cls, "_fields"))
    )


def wire_type(tp: Any) -> Any:
    """Return an annotation pydantic can validate in place of ``tp``.

    The result equals ``tp`` whenever nothing in its graph needs replacing.
    """
    return _wire(tp, frozenset())


def _wire(tp: Any, open_types: frozenset[type]) -> Any:
    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is typing.Annotated:
        wired = _wire(args[0], open_types)
        return tp if wired == args[0] else typing.Annotated[(wired, *args[1:])]

    if origin in UNION_ORIGINS:
        wired_args = tuple(_wire(a, open_types) for a in args)
        return tp if wired_args == args else typing.Union[wired_args]  # noqa: UP007

    if is_leaf(tp):
        return tp

    if is_dictionary(tp):
        pair = dictionary_key_value_types(tp)
        if pair is None:
            return tp
        key, value = (_wire(t, open_types) for t in pair)
        return tp if (key, value) == pair else dict[key, value]

    if is_collection(tp):
        container = origin if isinstance(origin, type) else tp
        if issubclass(container, tuple) and args:
            wired_args = tuple(a if a is Ellipsis else _wire(a, open_types) for a in args)
            return tp if wired_args == args else tuple[wired_args]
        element = collection_element_type(tp)
        wired = _wire(element, open_types)
        # Sets come back as lists: generated models are not hashable
        return tp if wired == element else list[wired]

    if not isinstance(tp, type) or issubclass(tp, BaseModel) or tp in open_types:
        return tp
    return _wire_model(tp, open_types) or tp


@functools.lru_cache(maxsize=256)
def _wire_model(cls: type, open_types: frozenset[type]) -> type[BaseModel] | None:
    """Generate the stand-in model for ``cls``, or None if none is needed."""
    members = get_settable_members(cls)
    if not members:
        return None

    branch = open_types | {cls}
    wired = {m.name: _wire(m.annotation, branch) for m in members}
    if _is_record(cls) and all(wired[m.name] == m.annotation for m in members):
        return None

    fields: dict[str, Any] = {}
    for m in members:
        if m.required:
            fields[m.name] = (wired[m.name], Field(description=m.description))
        else:
            # Omitted optional members keep the class default when rebuilt
            fields[m.name] = (
                typing.Optional[wired[m.name]],  # noqa: UP045
                Field(None, description=m.description),
            )
    log.debug("Generated validation model for %s with %d fields", cls.__name__, len(fields))
    return create_model(cls.__name__, __module__=cls.__module__, **fields)


def bind_value(tp: Any, value: Any) -> Any:
    """Rebuild ``value``, validated against ``wire_type(tp)``, as a ``tp`` value.

    Raises:
        TypeError: If a class rejects the validated members.
    """
    if value is None or wire_type(tp) == tp:
        return value

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is typing.Annotated:
        return bind_value(args[0], value)

    if origin in UNION_ORIGINS:
        for member in args:
            wired = wire_type(member)
            if wired is not member and isinstance(wired, type) and isinstance(value, wired):
                return bind_value(member, value)
        return value

    if is_dictionary(tp):
        key, val = dictionary_key_value_types(tp)  # type: ignore[misc]
        return {bind_value(key, k): bind_value(val, v) for k, v in value.items()}

    if is_collection(tp):
        container = origin if isinstance(origin, type) else tp
        if issubclass(container, tuple) and args and Ellipsis not in args:
            return tuple(bind_value(a, v) for a, v in zip(args, value, strict=False))
        element = collection_element_type(tp)
        items = [bind_value(element, v) for v in value]
        return items if inspect.isabstract(container) else container(items)

    return _instantiate(tp, value)


def _instantiate(cls: type, validated: BaseModel) -> Any:
    values: dict[str, Any] = {}
    for m in get_settable_members(cls):
        raw = getattr(validated, m.name)
        if raw is None and not m.required:
            continue
        values[m.name] = bind_value(m.annotation, raw)

    if _is_record(cls):
        return cls(**values)
    return _construct_plain(cls, values)


def _construct_plain(cls: type, values: dict[str, Any]) -> Any:
    """Call a custom ``__init__`` when it accepts the members, else set attributes."""
    if cls.__init__ is not object.__init__:
        try:
            inspect.signature(cls).bind(**values)
        except TypeError:
            log.debug("%s.__init__ does not take its members; setting attributes", cls.__name__)
        else:
            return cls(**values)
    instance = cls.__new__(cls)
    for name, value in values.items():
        setattr(instance, name, value)
    return instance
