"""Configuration for the bridge.

Resolve once, freeze, then pass the frozen value to `create_bridge`:

- ResolvedConfig: merged configuration with the origin of every field
- FrozenConfig: the immutable form the bridge is built from
"""

from pathlib import Path
from typing import Any

from .file_loader import ConfigFileError, FileConfigLoader
from .resolver import ConfigResolver
from .schema import BridgeSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

_resolver = ConfigResolver()


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    profile: str | None = None,
    project_root: Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration with precedence programmatic > env > file > defaults.

    Example:
        config = resolve_config({"max_depth": 3}, profile="production")
        print(config.audit())
        bridge = create_bridge(config.to_frozen())
    """
    return _resolver.resolve(programmatic, profile=profile, project_root=project_root)


__all__ = [
    "BridgeSettings",
    "ConfigFileError",
    "ConfigOrigin",
    "ConfigResolver",
    "FileConfigLoader",
    "FrozenConfig",
    "ResolvedConfig",
    "SourceMap",
    "resolve_config",
]
