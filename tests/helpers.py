"""Deterministic model fakes and sample target types shared by tests."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
import dataclasses
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from gemini_bridge.pipeline.prompts import FEASIBILITY_INSTRUCTIONS

# --- Model fakes ---


class FakeReasoningModel:
    """Answers by matching substrings of the prompt.

    Feasibility and extraction questions are told apart by their system
    instructions. An answer that is an exception instance is raised instead.
    """

    def __init__(
        self,
        feasibility: Mapping[str, Any] | None = None,
        extraction: Mapping[str, Any] | None = None,
        *,
        default_feasibility: str = "YES",
        default_extraction: str = "value",
    ) -> None:
        self.feasibility = dict(feasibility or {})
        self.extraction = dict(extraction or {})
        self.default_feasibility = default_feasibility
        self.default_extraction = default_extraction
        self.calls: list[tuple[str, str]] = []

    @property
    def feasibility_calls(self) -> list[str]:
        return [p for p, s in self.calls if s == FEASIBILITY_INSTRUCTIONS]

    @property
    def extraction_calls(self) -> list[str]:
        return [p for p, s in self.calls if s != FEASIBILITY_INSTRUCTIONS]

    async def reason(self, prompt: str, system_instructions: str) -> str:
        self.calls.append((prompt, system_instructions))
        await asyncio.sleep(0)
        if system_instructions == FEASIBILITY_INSTRUCTIONS:
            answers, default = self.feasibility, self.default_feasibility
        else:
            answers, default = self.extraction, self.default_extraction
        for needle, answer in answers.items():
            if needle in prompt:
                if isinstance(answer, BaseException):
                    raise answer
                return answer
        return default


class BlockingReasoningModel:
    """Never answers; used to cancel a run mid-phase."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.calls = 0

    async def reason(self, prompt: str, system_instructions: str) -> str:  # noqa: ARG002
        self.calls += 1
        self.started.set()
        await asyncio.Event().wait()
        return "YES"  # pragma: no cover


class FakeStructuringModel:
    """Returns ``response_model`` built from a preset ``result`` payload."""

    def __init__(self, payload: Any = None, *, error: BaseException | None = None):
        self.payload = payload
        self.error = error
        self.prompts: list[str] = []
        self.response_models: list[type] = []

    async def generate_structured(self, prompt: str, response_model: type) -> Any:
        self.prompts.append(prompt)
        self.response_models.append(response_model)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        if self.payload is None:
            return None
        return response_model.model_validate({"result": self.payload})


# --- Sample target types ---


class Invoice(BaseModel):
    Amount: Decimal
    OrderId: str


class Contact(BaseModel):
    name: str = Field(description="Full name of the person")
    email: str
    phone: str


@dataclasses.dataclass
class Address:
    street: str
    city: str


@dataclasses.dataclass
class Customer:
    name: str
    billing: Address
    shipping: Address
