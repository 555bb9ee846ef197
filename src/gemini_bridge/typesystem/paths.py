"""Flat, addressable property paths for a type graph.

The walk is depth-first and synchronous. Each branch carries its own frozen
set of open types, so a type reachable from two unrelated siblings is fine
while a type reachable from itself raises `CircularTypeReferenceError`.
"""

from __future__ import annotations

from collections.abc import Sequence
import dataclasses
import itertools
import logging
from typing import Any

from gemini_bridge.core.types import PropertyDescriptor
from gemini_bridge.typesystem.classifier import (
    collection_element_type,
    dictionary_key_value_types,
    is_collection,
    is_dictionary,
    is_leaf,
    is_union,
    type_name,
    union_members,
    unwrap_optional,
)
from gemini_bridge.typesystem.members import Member, check_not_visited, get_members
from gemini_bridge.typesystem.names import type_label

log = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 5


@dataclasses.dataclass(frozen=True, slots=True)
class _PathWalker:
    max_depth: int
    include_format_hints: bool
    flatten_collections: bool

    def collect(
        self,
        tp: Any,
        prefix: str,
        visited: frozenset[Any],
        depth: int,
        location: str,
    ) -> list[PropertyDescriptor]:
        """Collect descriptors for every member of object type ``tp``."""
        if depth >= self.max_depth:
            log.warning(
                "Depth limit %d reached at '%s'; members of %s were omitted",
                self.max_depth,
                location or "<root>",
                type_name(tp),
            )
            return []

        check_not_visited(tp, visited)
        branch = visited | {unwrap_optional(tp)}

        found: list[PropertyDescriptor] = []
        for member in get_members(tp):
            found.extend(self._member(member, prefix, branch, depth, location))
        return found

    def _member(
        self,
        member: Member,
        prefix: str,
        visited: frozenset[Any],
        depth: int,
        location: str,
    ) -> list[PropertyDescriptor]:
        path = f"{prefix}.{member.name}" if prefix else member.name
        where = f"{location}.{member.name}" if location else member.name
        tp = member.annotation

        if is_leaf(tp):
            label = type_label(tp, self.include_format_hints)
            return [PropertyDescriptor(path, label, member.description)]

        if is_union(tp):
            label = self.value_repr(tp, visited, depth, where)
            return [PropertyDescriptor(path, label, member.description)]

        if is_dictionary(tp):
            label = self.dictionary_label(tp, visited, depth, where)
            return [PropertyDescriptor(path, label, member.description)]

        if is_collection(tp):
            return self._collection(member, path, visited, depth, where)

        return self.collect(tp, path, visited, depth + 1, where)

    def _collection(
        self,
        member: Member,
        path: str,
        visited: frozenset[Any],
        depth: int,
        where: str,
    ) -> list[PropertyDescriptor]:
        element = collection_element_type(member.annotation)

        if (
            is_leaf(element)
            or is_union(element)
            or is_dictionary(element)
            or is_collection(element)
        ):
            label = f"Array<{self.value_repr(element, visited, depth, where)}>"
            return [PropertyDescriptor(path, label, member.description)]

        if self.flatten_collections:
            nested = self.collect(element, f"{path}[*]", visited, depth + 1, f"{where}[*]")
            if nested:
                return nested
            return [PropertyDescriptor(path, "Array<object>", member.description)]

        nested = self.collect(element, "", visited, depth + 1, f"{where}[*]")
        label = f"Array<{fold_nested(nested)}>" if nested else "Array<object>"
        return [PropertyDescriptor(path, label, member.description)]

    def dictionary_label(
        self, tp: Any, visited: frozenset[Any], depth: int, where: str
    ) -> str:
        pair = dictionary_key_value_types(tp)
        if pair is None:
            return "Dictionary<string, any>"
        key, value = pair
        key_label = type_label(key, self.include_format_hints)
        if key_label == "any":
            key_label = "string"
        return f"Dictionary<{key_label}, {self.value_repr(value, visited, depth, where)}>"

    def value_repr(
        self, tp: Any, visited: frozenset[Any], depth: int, where: str
    ) -> str:
        """Collapse a type into one label string, never into separate paths."""
        if is_leaf(tp):
            return type_label(tp, self.include_format_hints)
        if is_union(tp):
            shapes = (self.value_repr(m, visited, depth, where) for m in union_members(tp))
            return " | ".join(dict.fromkeys(shapes))
        if is_dictionary(tp):
            return self.dictionary_label(tp, visited, depth, where)
        if is_collection(tp):
            element = collection_element_type(tp)
            return f"Array<{self.value_repr(element, visited, depth, f'{where}[*]')}>"
        nested = self.collect(tp, "", visited, depth + 1, where)
        return fold_nested(nested) if nested else "object"


def fold_nested(descriptors: Sequence[PropertyDescriptor]) -> str:
    """Fold flat descriptors back into one ``{a: label, b: {c: label}}`` string.

    Descriptors are grouped by their first path segment; groups with deeper
    paths are folded recursively on the remainder.
    """
    if not descriptors:
        return "{}"

    def head(d: PropertyDescriptor) -> str:
        return d.path.split(".", 1)[0]

    parts: list[str] = []
    ordered = sorted(descriptors, key=lambda d: d.path)
    for key, group in itertools.groupby(ordered, key=head):
        entries = list(group)
        children = [
            dataclasses.replace(d, path=d.path.split(".", 1)[1])
            for d in entries
            if "." in d.path
        ]
        if children:
            parts.append(f"{key}: {fold_nested(children)}")
        else:
            parts.append(f"{key}: {entries[0].type_label}")
    return "{" + ", ".join(parts) + "}"


def extract_property_descriptors(
    root: Any,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    include_format_hints: bool = True,
    flatten_collections: bool = False,
) -> list[PropertyDescriptor]:
    """Walk ``root`` and return one descriptor per leaf-reachable member.

    Args:
        root: The type to analyze. Leaf types have no members and yield an
            empty list.
        max_depth: Nesting levels to descend before a subtree is dropped. A
            dropped subtree is reported as a warning log record.
        include_format_hints: Use format-bearing labels (``integer``,
            ``date-iso``...) instead of plain JSON kinds.
        flatten_collections: Emit ``items[*].field`` descriptors for
            collections of objects instead of one folded summary entry.

    Returns:
        Descriptors sorted by path.

    Raises:
        CircularTypeReferenceError: If a type is reachable from itself.
        ValueError: If ``max_depth`` is below 1.
    """
    if max_depth < 1:
        raise ValueError("max_depth must be >= 1")
    if is_leaf(root):
        return []
    walker = _PathWalker(max_depth, include_format_hints, flatten_collections)
    found = walker.collect(root, "", frozenset(), 0, "")
    return sorted(found, key=lambda d: d.path)


def extract_property_paths(
    root: Any,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    include_format_hints: bool = True,
    flatten_collections: bool = False,
) -> list[str]:
    """Same walk as `extract_property_descriptors`, rendered as strings."""
    return [
        d.full_description
        for d in extract_property_descriptors(
            root,
            max_depth=max_depth,
            include_format_hints=include_format_hints,
            flatten_collections=flatten_collections,
        )
    ]


def describe_value(
    tp: Any,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    include_format_hints: bool = True,
) -> str:
    """Render ``tp`` as one label string (``integer``, ``Array<{a: string}>``...).

    Used where a whole value is asked about at once rather than per path.
    """
    walker = _PathWalker(max_depth, include_format_hints, flatten_collections=False)
    return walker.value_repr(tp, frozenset(), -1, "")
