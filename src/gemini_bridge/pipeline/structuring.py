"""Structuring stage: turn the extracted corpus into the target value."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from gemini_bridge.core.types import Envelope, ExtractedCommand, Failure, Result, Success
from gemini_bridge.exceptions import ResponseParseError
from gemini_bridge.pipeline import prompts
from gemini_bridge.typesystem import bind_value, generate_schema, wire_type

if TYPE_CHECKING:
    from gemini_bridge.adapters.base import StructuringModel

log = logging.getLogger(__name__)

STRUCTURING_UNAVAILABLE = "The information extraction service is temporarily unavailable."


class StructuringHandler:
    """Requests an ``Envelope[target]`` from the structuring model.

    The envelope's single ``result`` field gives leaf targets a named root, so
    ``int`` and a nested model travel through the same contract. Plain classes
    are validated through generated stand-in models and rebuilt afterwards.
    """

    def __init__(self, structuring_model: StructuringModel) -> None:
        self._model = structuring_model

    async def handle(self, command: ExtractedCommand) -> Result[Any]:
        initial = command.assessed.initial
        request = initial.request
        try:
            envelope_type: type[Envelope[Any]] = Envelope[wire_type(initial.target)]  # type: ignore[misc]
            schema = generate_schema(envelope_type)
            envelope = await self._model.generate_structured(
                prompts.structuring_prompt(command.corpus, schema), envelope_type
            )
            value = None if envelope is None else bind_value(initial.target, envelope.result)
        except ResponseParseError as e:
            log.error(
                "Structuring response did not match %s. Response: %s",
                initial.target_name,
                e.raw_response,
                exc_info=True,
            )
            return Failure(STRUCTURING_UNAVAILABLE)
        except Exception:
            log.error(
                "Failed to generate structured data from raw information. "
                "Input length: %d, Query: %s, Type: %s",
                len(request.text),
                request.query,
                initial.target_name,
                exc_info=True,
            )
            return Failure(STRUCTURING_UNAVAILABLE)

        if value is None:
            log.warning("Structuring returned no value for %s", initial.target_name)
            return Failure(STRUCTURING_UNAVAILABLE)
        return Success(value)
