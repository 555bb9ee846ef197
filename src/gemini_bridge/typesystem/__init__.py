"""Runtime type introspection: classification, labels, paths and schemas."""

from gemini_bridge.typesystem.binding import bind_value, wire_type
from gemini_bridge.typesystem.classifier import (
    NumericKind,
    collection_element_type,
    dictionary_key_value_types,
    is_collection,
    is_datetime_family,
    is_dictionary,
    is_enum,
    is_floating_point,
    is_integer,
    is_leaf,
    is_numeric,
    is_union,
    numeric_kind,
    unwrap_optional,
)
from gemini_bridge.typesystem.members import (
    Member,
    check_not_visited,
    get_members,
    get_settable_members,
)
from gemini_bridge.typesystem.names import type_label
from gemini_bridge.typesystem.paths import (
    describe_value,
    extract_property_descriptors,
    extract_property_paths,
)
from gemini_bridge.typesystem.schema import generate_schema

__all__ = [
    "Member",
    "NumericKind",
    "bind_value",
    "check_not_visited",
    "collection_element_type",
    "describe_value",
    "dictionary_key_value_types",
    "extract_property_descriptors",
    "extract_property_paths",
    "generate_schema",
    "get_members",
    "get_settable_members",
    "is_collection",
    "is_datetime_family",
    "is_dictionary",
    "is_enum",
    "is_floating_point",
    "is_integer",
    "is_leaf",
    "is_numeric",
    "is_union",
    "numeric_kind",
    "type_label",
    "unwrap_optional",
    "wire_type",
]
