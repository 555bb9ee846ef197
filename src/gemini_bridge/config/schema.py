"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from the environment, the project file and programmatic overrides into
the correct types with proper defaults.
"""

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_bridge.typesystem.paths import DEFAULT_MAX_DEPTH


class BridgeSettings(BaseSettings):
    """Pydantic settings schema for the bridge.

    Reads ``GEMINI_*`` environment variables. Both model roles must name a
    model; the API key is only required once a real client is built.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=None,
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars for forward compatibility
    )

    api_key: str | None = Field(
        default=None,
        description="Google Gemini API key",
    )

    reasoning_model: str = Field(
        default="gemini-2.5-flash",
        description="Model answering feasibility and extraction questions",
        min_length=1,
    )

    structuring_model: str = Field(
        default="gemini-2.0-flash",
        description="Model converting the extracted corpus to JSON",
        min_length=1,
    )

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        description="Nesting levels walked before a subtree is dropped",
        ge=1,
    )

    include_format_hints: bool = Field(
        default=True,
        description="Use format-bearing labels such as integer or date-iso",
    )

    flatten_collections: bool = Field(
        default=False,
        description="Ask about each field of collection elements separately",
    )

    @classmethod
    def defaults(cls) -> dict[str, Any]:
        """Declared defaults, without consulting the environment."""
        return {name: field.default for name, field in cls.model_fields.items()}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary suitable for source annotation."""
        return self.model_dump()
