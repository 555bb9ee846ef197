"""Project file configuration with profile support.

Settings live under ``[tool.gemini_bridge]`` in the nearest ``pyproject.toml``;
named profiles under ``[tool.gemini_bridge.profiles.<name>]`` replace the base
table when selected.
"""

from pathlib import Path
import tomllib
from typing import Any

from gemini_bridge.exceptions import ConfigurationError

_TOOL_SECTION = "gemini_bridge"


class ConfigFileError(ConfigurationError):
    """Raised when configuration file loading fails."""

    def __init__(
        self, file_path: Path, message: str, cause: Exception | None = None
    ) -> None:
        """Initialize with file path, message, and optional cause."""
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(f"Config file error in {file_path}: {message}")


class FileConfigLoader:
    """Loads ``[tool.gemini_bridge]`` from a project's pyproject.toml."""

    def load_project_config(
        self, project_root: Path | None = None, profile: str | None = None
    ) -> dict[str, Any]:
        """Load configuration from pyproject.toml.

        Args:
            project_root: Directory to search from. If None, searches the
                current directory and its parents.
            profile: Optional profile name; None loads the base table.

        Returns:
            Configuration values, or an empty dict when there is no file or no
            ``gemini_bridge`` section.

        Raises:
            ConfigFileError: If the file cannot be parsed or the profile is unknown.
        """
        pyproject_path = self.find_pyproject_toml(project_root)
        if not pyproject_path:
            return {}

        try:
            with pyproject_path.open(mode="rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigFileError(
                pyproject_path, f"Failed to parse TOML: {e}", cause=e
            ) from e

        section = data.get("tool", {}).get(_TOOL_SECTION, {})
        if not section:
            return {}

        if profile:
            profiles = section.get("profiles", {})
            if profile not in profiles:
                raise ConfigFileError(
                    pyproject_path,
                    f"Profile '{profile}' not found. Available profiles: {sorted(profiles)}",
                )
            return dict(profiles[profile])

        config = dict(section)
        config.pop("profiles", None)
        return config

    def find_pyproject_toml(self, start_dir: Path | None = None) -> Path | None:
        """Find pyproject.toml by searching up the directory tree."""
        current = Path(start_dir or Path.cwd()).resolve()
        for directory in (current, *current.parents):
            candidate = directory / "pyproject.toml"
            if candidate.exists():
                return candidate
        return None
