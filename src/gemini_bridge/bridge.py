"""The primary user-facing entry point.

`TextBridge` runs an extraction request through three stages, strictly in
order: feasibility, extraction, structuring. The first stage that returns a
`Failure` ends the run; its message is what the caller sees.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, overload

from google import genai

from gemini_bridge.adapters.gemini import GeminiReasoningModel, GeminiStructuringModel
from gemini_bridge.config import FrozenConfig, resolve_config
from gemini_bridge.core.types import (
    ExtractionMode,
    ExtractionRequest,
    Failure,
    InitialCommand,
    Result,
    Success,
)
from gemini_bridge.exceptions import ConfigurationError, InvariantViolationError
from gemini_bridge.pipeline.extraction import ExtractionHandler
from gemini_bridge.pipeline.feasibility import FeasibilityHandler
from gemini_bridge.pipeline.structuring import StructuringHandler
from gemini_bridge.telemetry import TelemetryContext, TelemetryReporter
from gemini_bridge.typesystem.paths import DEFAULT_MAX_DEPTH

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gemini_bridge.adapters.base import ReasoningModel, StructuringModel
    from gemini_bridge.pipeline.base import BaseAsyncHandler

log = logging.getLogger(__name__)


class TextBridge:
    """Populates arbitrary types from free-form text with two model roles.

    Example:
        bridge = create_bridge()
        result = await bridge.extract(Invoice, email_body, "Extract the invoice")
        if result.is_success:
            invoice = result.value
    """

    def __init__(
        self,
        reasoning_model: ReasoningModel,
        structuring_model: StructuringModel,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        include_format_hints: bool = True,
        flatten_collections: bool = False,
        reporters: Sequence[TelemetryReporter] = (),
    ) -> None:
        if reasoning_model is None or structuring_model is None:
            raise ValueError("Both a reasoning and a structuring model are required.")
        if max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        self._reporters = tuple(reporters)
        self._pipeline: tuple[BaseAsyncHandler[Any, Any], ...] = (
            FeasibilityHandler(
                reasoning_model,
                max_depth=max_depth,
                include_format_hints=include_format_hints,
                flatten_collections=flatten_collections,
            ),
            ExtractionHandler(reasoning_model),
            StructuringHandler(structuring_model),
        )

    @property
    def stage_names(self) -> tuple[str, ...]:
        """Stage names in execution order."""
        return tuple(type(h).__name__ for h in self._pipeline)

    @overload
    async def extract[T](
        self,
        target: type[T],
        text: str,
        query: str,
        mode: ExtractionMode = ...,
    ) -> Result[T]: ...

    @overload
    async def extract(
        self,
        target: Any,
        text: str,
        query: str,
        mode: ExtractionMode = ...,
    ) -> Result[Any]: ...

    async def extract(
        self,
        target: Any,
        text: str,
        query: str,
        mode: ExtractionMode = ExtractionMode.ALL_OR_NOTHING,
    ) -> Result[Any]:
        """Populate ``target`` from ``text`` in the context of ``query``.

        Args:
            target: Any supported type: a leaf (``int``, ``datetime``...), a
                pydantic model, dataclass, TypedDict, NamedTuple, collection or
                mapping of those.
            text: The free-form input to extract from.
            query: What the caller wants from the text.
            mode: Extraction strategy; only all-or-nothing exists.

        Returns:
            ``Success(value)`` or a ``Failure`` explaining what is missing or
            which service was unavailable.

        Raises:
            InputValidationError: If ``text`` or ``query`` is blank, or
                ``mode`` is unsupported. Raised before any model call.
            asyncio.CancelledError: If the calling task is cancelled; never
                converted into a ``Failure``.
        """
        request = ExtractionRequest(text=text, query=query, mode=mode)
        current: Any = InitialCommand(request=request, target=target)
        ctx = TelemetryContext(*self._reporters)

        with ctx("bridge.extract", target=current.target_name):
            for handler in self._pipeline:
                stage = type(handler).__name__
                with ctx("bridge.stage", stage=stage):
                    result = await handler.handle(current)

                if not isinstance(result, Success | Failure):
                    raise InvariantViolationError(
                        f"{stage} returned a non-Result value; expected Success|Failure."
                    )
                if isinstance(result, Failure):
                    ctx.count("bridge.failure", stage=stage)
                    log.debug("Extraction stopped at %s: %s", stage, result.error)
                    return result
                current = result.value

        return Success(current)


def create_bridge(
    config: FrozenConfig | None = None,
    *,
    client: genai.Client | None = None,
    reporters: Sequence[TelemetryReporter] = (),
) -> TextBridge:
    """Create a bridge backed by Google GenAI.

    This is the only place ambient configuration is resolved: without
    ``config``, values come from the environment and pyproject.toml.

    Args:
        config: Frozen configuration; resolved from the environment if None.
        client: An existing ``genai.Client``; one is built from the API key
            otherwise.
        reporters: Telemetry reporters for stage timings.

    Raises:
        ConfigurationError: If no client is given and no API key is configured.
    """
    final_config = config if config is not None else resolve_config().to_frozen()

    if client is None:
        if not final_config.api_key:
            raise ConfigurationError(
                "An API key is required. Set GEMINI_API_KEY, add api_key to "
                "[tool.gemini_bridge] in pyproject.toml, or pass it programmatically."
            )
        client = genai.Client(api_key=final_config.api_key)

    return TextBridge(
        GeminiReasoningModel(client, final_config.reasoning_model),
        GeminiStructuringModel(client, final_config.structuring_model),
        max_depth=final_config.max_depth,
        include_format_hints=final_config.include_format_hints,
        flatten_collections=final_config.flatten_collections,
        reporters=reporters,
    )
