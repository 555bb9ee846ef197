"""Interfaces of the two external model roles the bridge depends on."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class ReasoningModel(Protocol):
    """Answers free-form questions about a text in natural language."""

    async def reason(self, prompt: str, system_instructions: str) -> str:
        """Return the model's answer to ``prompt`` under ``system_instructions``."""
        ...


@runtime_checkable
class StructuringModel(Protocol):
    """Converts text into an instance of a pydantic model."""

    async def generate_structured[M: BaseModel](
        self, prompt: str, response_model: type[M]
    ) -> M | None:
        """Return a parsed ``response_model`` or None when the model produced nothing.

        Raises:
            ResponseParseError: If the output was present but did not parse.
        """
        ...
