"""Configuration resolution with precedence handling.

Programmatic > Environment > Project file > Defaults
"""

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gemini_bridge.exceptions import ConfigurationError

from .env_loader import EnvironmentConfigLoader
from .file_loader import FileConfigLoader
from .schema import BridgeSettings
from .types import ConfigOrigin, ResolvedConfig

log = logging.getLogger(__name__)


class ConfigResolver:
    """Merges configuration sources and records where each value came from."""

    def __init__(self) -> None:
        self.file_loader = FileConfigLoader()
        self.env_loader = EnvironmentConfigLoader()

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        profile: str | None = None,
        project_root: Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources with proper precedence.

        Args:
            programmatic: Overrides with the highest precedence. Unknown keys
                are ignored.
            profile: Profile to load from the project file. Defaults to
                ``GEMINI_PROFILE``.
            project_root: Directory to search for pyproject.toml.

        Returns:
            ResolvedConfig with merged values and source tracking.

        Raises:
            ConfigurationError: If the merged values fail validation.
            ConfigFileError: If the project file is malformed.
            ValueError: If an environment variable holds an invalid value.
        """
        if profile is None:
            profile = os.getenv("GEMINI_PROFILE")

        merged: dict[str, Any] = BridgeSettings.defaults()
        origin: dict[str, ConfigOrigin] = dict.fromkeys(merged, "default")

        layers: list[tuple[ConfigOrigin, dict[str, Any]]] = [
            (
                "file",
                self.file_loader.load_project_config(
                    project_root=project_root, profile=profile
                ),
            ),
            ("env", self.env_loader.load_env_config()),
            ("programmatic", dict(programmatic or {})),
        ]
        for source, values in layers:
            for field, value in values.items():
                if field in merged:  # Only override known fields
                    merged[field] = value
                    origin[field] = source
                else:
                    log.debug("Ignoring unknown %s config key %r", source, field)

        try:
            validated = BridgeSettings(**merged).to_dict()
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        return ResolvedConfig(**validated, origin=origin)
