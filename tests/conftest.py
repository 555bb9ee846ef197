"""
Global test configuration.
"""

import os

import pytest

from tests.helpers import FakeReasoningModel, FakeStructuringModel


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_gemini_env(request, monkeypatch):
    """Ensure a clean GEMINI_* environment for each test.

    Escape hatch: mark a test with @pytest.mark.allow_env_pollution to keep
    the current environment unchanged.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith("GEMINI_"):
            monkeypatch.delenv(key, raising=False)
    # Avoid DEBUG toggles affecting telemetry
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture
def reasoning_model():
    """A reasoning model answering YES to every feasibility question."""
    return FakeReasoningModel()


@pytest.fixture
def structuring_model():
    """A structuring model returning nothing until a payload is set."""
    return FakeStructuringModel()
