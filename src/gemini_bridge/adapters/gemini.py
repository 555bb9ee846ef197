"""Google GenAI implementations of the reasoning and structuring roles."""

from __future__ import annotations

import logging
import re

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from gemini_bridge.exceptions import ResponseParseError
from gemini_bridge.pipeline.prompts import STRUCTURING_INSTRUCTIONS

log = logging.getLogger(__name__)

_FENCE = re.compile(r"```[A-Za-z]*")
_THINK_END = "</think>"


def clean_response_text(text: str | None) -> str:
    """Strip code fences and any reasoning preamble ending in ``</think>``."""
    if not text:
        return ""
    _, marker, tail = text.rpartition(_THINK_END)
    cleaned = tail if marker else text
    return _FENCE.sub("", cleaned).strip()


class GeminiReasoningModel:
    """Reasoning role backed by ``client.aio.models.generate_content``."""

    def __init__(self, client: genai.Client, model: str) -> None:
        self._client = client
        self.model = model

    async def reason(self, prompt: str, system_instructions: str) -> str:
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_instructions,
                response_mime_type="text/plain",
            ),
        )
        return clean_response_text(response.text)


class GeminiStructuringModel:
    """Structuring role requesting JSON output and validating it with pydantic.

    The expected shape travels inside the prompt as a pseudo-schema rather than
    as ``response_schema``, which rejects many of the shapes a caller may target
    (unions, mappings with non-string keys, arbitrary classes).
    """

    def __init__(self, client: genai.Client, model: str) -> None:
        self._client = client
        self.model = model

    async def generate_structured[M: BaseModel](
        self, prompt: str, response_model: type[M]
    ) -> M | None:
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=STRUCTURING_INSTRUCTIONS,
                response_mime_type="application/json",
            ),
        )
        text = clean_response_text(response.text)
        if not text:
            log.debug("Structuring model %s returned empty output", self.model)
            return None
        return _parse(text, response_model)


def _parse[M: BaseModel](text: str, response_model: type[M]) -> M:
    try:
        return response_model.model_validate_json(text)
    except ValidationError as e:
        raise ResponseParseError(
            f"Response does not match {response_model.__name__}: "
            f"{e.error_count()} validation error(s)",
            raw_response=text,
        ) from e
