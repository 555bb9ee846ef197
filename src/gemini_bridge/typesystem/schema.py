"""Nested, comment-annotated pseudo-schema for structuring prompts.

Unlike path extraction this output is advisory: a type reached again on its own
branch is rendered as ``object`` rather than failing the request.
"""

from __future__ import annotations

from typing import Any

from gemini_bridge.exceptions import CircularTypeReferenceError
from gemini_bridge.typesystem.classifier import (
    collection_element_type,
    dictionary_key_value_types,
    is_collection,
    is_dictionary,
    is_leaf,
    is_optional,
    is_union,
    union_members,
    unwrap_optional,
)
from gemini_bridge.typesystem.members import check_not_visited, get_members
from gemini_bridge.typesystem.names import type_label

_INDENT = "  "


def generate_schema(root: Any) -> str:
    """Render the whole type graph of ``root`` as one indented string.

    Example output for an invoice model::

        {
          // Total amount due
          "amount": decimal,
          "order_id": string
        }
    """
    return _schema(root, "", frozenset())


def _schema(tp: Any, indent: str, visited: frozenset[Any]) -> str:
    if is_optional(tp) and is_leaf(tp):
        return f"{type_label(tp, include_format_hints=True)} | null"

    tp = unwrap_optional(tp)

    if is_dictionary(tp):
        pair = dictionary_key_value_types(tp)
        if pair is None:
            return "Dictionary<string, any>"
        key, value = pair
        key_label = type_label(key, include_format_hints=True)
        if key_label == "any":
            key_label = "string"
        return f"Dictionary<{key_label}, {_value(value, indent, visited)}>"

    if is_collection(tp):
        element = collection_element_type(tp)
        if is_leaf(element):
            return f"Array<{type_label(element, include_format_hints=True)}>"
        if is_dictionary(element) or is_collection(element):
            return f"Array<{_value(element, indent, visited)}>"
        return f"[\n{indent}{_INDENT}{_schema(element, indent + _INDENT, visited)}\n{indent}]"

    if is_leaf(tp):
        return type_label(tp, include_format_hints=True)

    if is_union(tp):
        shapes = " | ".join(_schema(m, indent, visited) for m in union_members(tp))
        return f"{shapes} | null" if is_optional(tp) else shapes

    return _object(tp, indent, visited)


def _value(tp: Any, indent: str, visited: frozenset[Any]) -> str:
    """Inline representation for dictionary values and nested collections."""
    tp = unwrap_optional(tp)
    if is_leaf(tp):
        return type_label(tp, include_format_hints=True)
    if is_collection(tp) and not is_dictionary(tp):
        return f"Array<{_value(collection_element_type(tp), indent, visited)}>"
    return _schema(tp, indent, visited)


def _object(tp: Any, indent: str, visited: frozenset[Any]) -> str:
    try:
        check_not_visited(tp, visited)
    except CircularTypeReferenceError:
        return "object"

    members = get_members(tp)
    if not members:
        return "any"

    branch = visited | {tp}
    lines = ["{"]
    for position, member in enumerate(members):
        if member.description:
            lines.append(f"{indent}{_INDENT}// {member.description}")
        rendered = _schema(member.annotation, indent + _INDENT, branch)
        comma = "," if position < len(members) - 1 else ""
        lines.append(f'{indent}{_INDENT}"{member.name}": {rendered}{comma}')
    lines.append(f"{indent}}}")
    return "\n".join(lines)
