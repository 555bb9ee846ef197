from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from gemini_bridge.config import ConfigFileError, FrozenConfig, resolve_config
from gemini_bridge.exceptions import ConfigurationError

PYPROJECT = """
[tool.gemini_bridge]
max_depth = 3
reasoning_model = "file-model"

[tool.gemini_bridge.profiles.fast]
max_depth = 2
"""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "pyproject.toml").write_text(PYPROJECT)
    return tmp_path


@pytest.mark.unit
def test_defaults_without_any_source(tmp_path):
    config = resolve_config(project_root=tmp_path)

    assert config.max_depth == 5
    assert config.reasoning_model == "gemini-2.5-flash"
    assert config.include_format_hints is True
    assert config.flatten_collections is False
    assert set(config.origin.values()) == {"default"}


@pytest.mark.unit
def test_project_file_overrides_defaults(project):
    config = resolve_config(project_root=project)

    assert config.max_depth == 3
    assert config.reasoning_model == "file-model"
    assert config.origin["max_depth"] == "file"
    assert config.origin["structuring_model"] == "default"


@pytest.mark.unit
def test_precedence_programmatic_over_env_over_file(project, monkeypatch):
    monkeypatch.setenv("GEMINI_MAX_DEPTH", "4")
    monkeypatch.setenv("GEMINI_FLATTEN_COLLECTIONS", "true")

    from_env = resolve_config(project_root=project)
    assert from_env.max_depth == 4
    assert from_env.flatten_collections is True
    assert from_env.origin["max_depth"] == "env"

    explicit = resolve_config({"max_depth": 1}, project_root=project)
    assert explicit.max_depth == 1
    assert explicit.origin["max_depth"] == "programmatic"


@pytest.mark.unit
def test_profile_replaces_base_table(project):
    config = resolve_config(profile="fast", project_root=project)

    assert config.max_depth == 2
    assert config.reasoning_model == "gemini-2.5-flash"


@pytest.mark.unit
def test_profile_from_environment(project, monkeypatch):
    monkeypatch.setenv("GEMINI_PROFILE", "fast")

    assert resolve_config(project_root=project).max_depth == 2


@pytest.mark.unit
def test_unknown_profile_is_a_file_error(project):
    with pytest.raises(ConfigFileError, match="missing"):
        resolve_config(profile="missing", project_root=project)


@pytest.mark.unit
def test_malformed_toml_is_a_file_error(tmp_path):
    (tmp_path / "pyproject.toml").write_text("[tool.gemini_bridge\nmax_depth = ")

    with pytest.raises(ConfigFileError) as info:
        resolve_config(project_root=tmp_path)
    assert info.value.file_path == (tmp_path / "pyproject.toml").resolve()


@pytest.mark.unit
def test_invalid_merged_value_is_a_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError, match="max_depth"):
        resolve_config({"max_depth": 0}, project_root=tmp_path)


@pytest.mark.unit
def test_invalid_env_value_redacts_api_key(tmp_path, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "secret-key")
    monkeypatch.setenv("GEMINI_MAX_DEPTH", "deep")

    with pytest.raises(ValueError, match="GEMINI_MAX_DEPTH=deep") as info:
        resolve_config(project_root=tmp_path)
    assert "secret-key" not in str(info.value)


@pytest.mark.unit
def test_unknown_programmatic_keys_are_ignored(tmp_path):
    config = resolve_config({"temperature": 0.2}, project_root=tmp_path)

    assert "temperature" not in config.origin


@pytest.mark.unit
def test_audit_and_reprs_never_show_the_api_key(tmp_path, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "secret-key")

    config = resolve_config({"max_depth": 2}, project_root=tmp_path)
    audit = config.audit()

    assert "api_key: env:<redacted>" in audit
    assert "max_depth: programmatic:2" in audit
    assert "reasoning_model: default:gemini-2.5-flash" in audit
    assert "secret-key" not in audit
    assert "secret-key" not in repr(config)
    assert "secret-key" not in repr(config.to_frozen())


@pytest.mark.unit
def test_env_values_show_their_variable_in_audit(tmp_path, monkeypatch):
    monkeypatch.setenv("GEMINI_REASONING_MODEL", "env-model")

    audit = resolve_config(project_root=tmp_path).audit()

    assert "reasoning_model: env:GEMINI_REASONING_MODEL=env-model" in audit
    assert "api_key: default:None" in audit


@pytest.mark.unit
def test_frozen_config_is_immutable(tmp_path):
    frozen = resolve_config(project_root=tmp_path).to_frozen()

    assert isinstance(frozen, FrozenConfig)
    with pytest.raises(dataclasses.FrozenInstanceError):
        frozen.max_depth = 9  # type: ignore[misc]
