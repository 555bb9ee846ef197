"""Semantic type labels for model prompts."""

from __future__ import annotations

import datetime
from typing import Any
import uuid

from gemini_bridge.typesystem.classifier import (
    is_enum,
    is_floating_point,
    is_integer,
    is_leaf,
    is_union,
    union_members,
    unwrap_optional,
)

DATETIME_HINT = "datetime-iso (assume 00:00:00 if time component missing)"
DATE_HINT = "date-iso"
TIME_HINT = "time-iso (HH:MM:SS)"
UUID_HINT = "uuid"


def type_label(tp: Any, include_format_hints: bool = False) -> str:
    """Map a type to the label a language model sees next to a property.

    Nullable wrappers are unwrapped first. Without format hints every leaf
    collapses to one of ``string``/``number``/``boolean``; with hints, numeric
    and temporal kinds carry their expected format. A union joins the labels of
    its members (``integer | string``). Non-leaf types are ``any``.
    """
    tp = unwrap_optional(tp)

    if is_union(tp):
        labels = dict.fromkeys(type_label(m, include_format_hints) for m in union_members(tp))
        return " | ".join(labels)

    if tp is str:
        return "string"
    # bool is an int subclass, so it must be matched before the integer family
    if tp is bool:
        return "boolean"
    if is_integer(tp):
        return "integer" if include_format_hints else "number"
    if is_floating_point(tp):
        return "decimal" if include_format_hints else "number"
    if isinstance(tp, type):
        # datetime is a date subclass
        if issubclass(tp, datetime.datetime):
            return DATETIME_HINT if include_format_hints else "string"
        if issubclass(tp, datetime.date):
            return DATE_HINT if include_format_hints else "string"
        if issubclass(tp, (datetime.time, datetime.timedelta)):
            return TIME_HINT if include_format_hints else "string"
        if issubclass(tp, uuid.UUID):
            return UUID_HINT if include_format_hints else "string"
    if is_enum(tp) or is_leaf(tp):
        return "string"
    return "any"
