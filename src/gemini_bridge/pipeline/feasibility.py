"""Feasibility stage: can the text answer every requested property?

Every property question runs concurrently and always to completion, so a
negative outcome reports every missing property in one pass.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from typing import TYPE_CHECKING

from gemini_bridge.core.types import (
    AssessedCommand,
    Failure,
    InitialCommand,
    PropertyDescriptor,
    Result,
    Success,
)
from gemini_bridge.exceptions import CircularTypeReferenceError
from gemini_bridge.pipeline import prompts
from gemini_bridge.pipeline._fanout import gather_settled
from gemini_bridge.typesystem import (
    describe_value,
    extract_property_descriptors,
    is_leaf,
)
from gemini_bridge.typesystem.paths import DEFAULT_MAX_DEPTH

if TYPE_CHECKING:
    from gemini_bridge.adapters.base import ReasoningModel

log = logging.getLogger(__name__)

FEASIBILITY_UNAVAILABLE = (
    "Unable to process your request at this time. Please try again later."
)
NOT_ENOUGH_INFORMATION = "Not enough information available"

_LEADING_MARKUP = re.compile(r"^[\s*_#>`]+")


@dataclasses.dataclass(frozen=True, slots=True)
class FeasibilityVerdict:
    """Interpreted answer to one feasibility question."""

    feasible: bool
    explanation: str


def parse_verdict(answer: str) -> FeasibilityVerdict:
    """Interpret a loose ``YES``/``NO: explanation`` answer.

    Only answers starting with "yes" (any case, ignoring leading markdown) are
    affirmative. The explanation is whatever follows the first colon.
    """
    cleaned = _LEADING_MARKUP.sub("", answer or "")
    feasible = cleaned.lower().startswith("yes")
    _, colon, rest = cleaned.partition(":")
    explanation = rest.strip().strip("*_").strip() if colon else ""
    return FeasibilityVerdict(feasible, explanation or NOT_ENOUGH_INFORMATION)


class FeasibilityHandler:
    """Asks the reasoning model whether the text covers the target's properties."""

    def __init__(
        self,
        reasoning_model: ReasoningModel,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        include_format_hints: bool = True,
        flatten_collections: bool = False,
    ) -> None:
        self._model = reasoning_model
        self._max_depth = max_depth
        self._include_format_hints = include_format_hints
        self._flatten_collections = flatten_collections

    async def handle(self, command: InitialCommand) -> Result[AssessedCommand]:
        """Assess the request; succeed only if every answer is affirmative."""
        try:
            assessed = self._plan(command)
        except CircularTypeReferenceError as e:
            log.error("Cannot analyze target %s: %s", command.target_name, e)
            return Failure(str(e))

        try:
            if assessed.is_whole_value:
                return await self._assess_value(assessed)
            return await self._assess_properties(assessed)
        except Exception:
            request = command.request
            log.error(
                "Failed to check query feasibility. Input length: %d, Query: %s, Type: %s",
                len(request.text),
                request.query,
                command.target_name,
                exc_info=True,
            )
            return Failure(FEASIBILITY_UNAVAILABLE)

    def _plan(self, command: InitialCommand) -> AssessedCommand:
        """Decide between per-property questions and one whole-value question."""
        if not is_leaf(command.target):
            properties = extract_property_descriptors(
                command.target,
                max_depth=self._max_depth,
                include_format_hints=self._include_format_hints,
                flatten_collections=self._flatten_collections,
            )
            if properties:
                return AssessedCommand(command, tuple(properties))
        label = describe_value(
            command.target,
            max_depth=self._max_depth,
            include_format_hints=self._include_format_hints,
        )
        return AssessedCommand(command, (), value_label=label)

    async def _assess_value(self, assessed: AssessedCommand) -> Result[AssessedCommand]:
        request = assessed.initial.request
        answer = await self._model.reason(
            prompts.value_feasibility_prompt(
                request.text, request.query, assessed.value_label or "any"
            ),
            prompts.FEASIBILITY_INSTRUCTIONS,
        )
        verdict = parse_verdict(answer)
        if verdict.feasible:
            return Success(assessed)
        return Failure(verdict.explanation)

    async def _assess_properties(
        self, assessed: AssessedCommand
    ) -> Result[AssessedCommand]:
        request = assessed.initial.request
        answers = await gather_settled(
            self._model.reason(
                prompts.property_feasibility_prompt(request.text, request.query, d),
                prompts.FEASIBILITY_INSTRUCTIONS,
            )
            for d in assessed.properties
        )
        missing = [
            _explain(descriptor, verdict)
            for descriptor, verdict in zip(
                assessed.properties, map(parse_verdict, answers), strict=True
            )
            if not verdict.feasible
        ]
        if missing:
            log.info(
                "%d of %d properties of %s are not inferable",
                len(missing),
                len(assessed.properties),
                assessed.initial.target_name,
            )
            return Failure("; ".join(missing))
        return Success(assessed)


def _explain(descriptor: PropertyDescriptor, verdict: FeasibilityVerdict) -> str:
    return f"{descriptor.path}: {descriptor.type_label} - {verdict.explanation}"
