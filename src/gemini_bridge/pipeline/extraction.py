"""Extraction stage: pull the raw value of each property out of the text."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gemini_bridge.core.types import (
    AssessedCommand,
    ExtractedCommand,
    Failure,
    Result,
    Success,
)
from gemini_bridge.exceptions import AnalysisError
from gemini_bridge.pipeline import prompts
from gemini_bridge.pipeline._fanout import gather_settled

if TYPE_CHECKING:
    from gemini_bridge.adapters.base import ReasoningModel

log = logging.getLogger(__name__)

ANALYSIS_FAILED = (
    "Failed to analyze the provided text. Please verify the content and try again."
)


class ExtractionHandler:
    """Builds a labeled, newline-separated corpus of extracted values."""

    def __init__(self, reasoning_model: ReasoningModel) -> None:
        self._model = reasoning_model

    async def handle(self, command: AssessedCommand) -> Result[ExtractedCommand]:
        try:
            corpus = await self._extract(command)
        except AnalysisError as e:
            return Failure(str(e))
        return Success(ExtractedCommand(command, corpus))

    async def _extract(self, command: AssessedCommand) -> str:
        """Return the corpus or raise `AnalysisError` with a safe message."""
        request = command.initial.request
        try:
            if command.is_whole_value:
                return await self._model.reason(
                    prompts.value_extraction_prompt(
                        request.text, request.query, command.value_label or "any"
                    ),
                    prompts.VALUE_EXTRACTION_INSTRUCTIONS,
                )
            values = await gather_settled(
                self._model.reason(
                    prompts.property_extraction_prompt(request.text, request.query, d),
                    prompts.PROPERTY_EXTRACTION_INSTRUCTIONS,
                )
                for d in command.properties
            )
        except Exception as e:
            log.error(
                "Failed to extract raw information. Input length: %d, Query: %s, Type: %s",
                len(request.text),
                request.query,
                command.initial.target_name,
                exc_info=True,
            )
            raise AnalysisError(ANALYSIS_FAILED) from e

        return "\n".join(
            f"{d.path}: {value}"
            for d, value in zip(command.properties, values, strict=True)
        )
