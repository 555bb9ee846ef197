"""Configuration data types.

Configuration is resolved once, frozen, and then flows into the bridge; nothing
downstream reads the environment.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, NamedTuple

ConfigOrigin = Literal["programmatic", "env", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]

FIELD_ORDER = (
    "api_key",
    "reasoning_model",
    "structuring_model",
    "max_depth",
    "include_format_hints",
    "flatten_collections",
)


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing.

    Carries the origin of every field for auditing.
    """

    api_key: str | None
    reasoning_model: str
    structuring_model: str
    max_depth: int
    include_format_hints: bool
    flatten_collections: bool

    origin: SourceMap

    def __repr__(self) -> str:
        """Repr with redacted API key for safe debugging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"ResolvedConfig(api_key={api_key_display!r}, "
            f"reasoning_model={self.reasoning_model!r}, "
            f"structuring_model={self.structuring_model!r}, "
            f"max_depth={self.max_depth!r}, "
            f"include_format_hints={self.include_format_hints!r}, "
            f"flatten_collections={self.flatten_collections!r}, "
            f"origin={dict(self.origin)!r})"
        )

    __str__ = __repr__

    def to_frozen(self) -> "FrozenConfig":
        """Drop the audit metadata and return the immutable form."""
        return FrozenConfig(
            api_key=self.api_key,
            reasoning_model=self.reasoning_model,
            structuring_model=self.structuring_model,
            max_depth=self.max_depth,
            include_format_hints=self.include_format_hints,
            flatten_collections=self.flatten_collections,
        )

    def audit(self) -> str:
        """Render one ``field: origin:value`` line per field, API key redacted."""
        lines = []
        for field in FIELD_ORDER:
            if field not in self.origin:
                continue
            origin = self.origin[field]
            value = getattr(self, field)
            if field == "api_key":
                display = f"{origin}:None" if value is None else f"{origin}:<redacted>"
            elif origin == "env":
                display = f"env:GEMINI_{field.upper()}={value}"
            else:
                display = f"{origin}:{value}"
            lines.append(f"{field}: {display}")
        return "\n".join(lines)


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration handed to `create_bridge`."""

    api_key: str | None
    reasoning_model: str
    structuring_model: str
    max_depth: int
    include_format_hints: bool
    flatten_collections: bool

    def __repr__(self) -> str:
        """Representation with redacted API key for safe debugging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"FrozenConfig(api_key={api_key_display!r}, "
            f"reasoning_model={self.reasoning_model!r}, "
            f"structuring_model={self.structuring_model!r}, "
            f"max_depth={self.max_depth!r}, "
            f"include_format_hints={self.include_format_hints!r}, "
            f"flatten_collections={self.flatten_collections!r})"
        )

    __str__ = __repr__
