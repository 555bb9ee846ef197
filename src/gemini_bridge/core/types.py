"""Core data types that flow through the extraction pipeline.

This module defines the immutable data structures that represent the state of
an extraction request as it moves through the feasibility, extraction and
structuring stages. Each stage transforms the data into a new state, so a
stage can never observe a half-processed request.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
import typing

from pydantic import BaseModel, ConfigDict, Field

from gemini_bridge.exceptions import InputValidationError

T = typing.TypeVar("T")
TResult = typing.TypeVar("TResult")

# --- Minimal guard helpers ---


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name and issubclass(exc, InputValidationError):
            raise exc(f"{field_name}: {message}", field_name)
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


def _is_blank(value: object) -> bool:
    return not isinstance(value, str) or value.strip() == ""


# --- Result type ---
# Business failures are data, not exceptions: every stage returns either a
# Success carrying the next state or a Failure carrying a user-safe message.


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful outcome carrying a value."""

    value: TSuccess

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False


@dataclasses.dataclass(frozen=True, slots=True)
class Failure:
    """A failed outcome carrying a short, human-safe error message."""

    error: str

    def __post_init__(self) -> None:
        """Reject empty error messages; callers always get an explanation."""
        _require(
            condition=not _is_blank(self.error),
            message="must be a non-empty str",
            field_name="error",
        )

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True


Result = Success[T] | Failure

# --- Request types ---


class ExtractionMode(str, Enum):
    """Strategy used when some requested information is missing."""

    # Any missing property fails the whole request with a combined explanation.
    ALL_OR_NOTHING = "all_or_nothing"


@dataclasses.dataclass(frozen=True, slots=True)
class ExtractionRequest:
    """A validated request to populate a target type from free-form text."""

    text: str
    query: str
    mode: ExtractionMode = ExtractionMode.ALL_OR_NOTHING

    def __post_init__(self) -> None:
        """Validate eagerly so nothing reaches a model with a bad request."""
        _require(
            condition=not _is_blank(self.text),
            message="cannot be None or whitespace",
            field_name="text",
            exc=InputValidationError,
        )
        _require(
            condition=not _is_blank(self.query),
            message="cannot be None or whitespace",
            field_name="query",
            exc=InputValidationError,
        )
        _require(
            condition=isinstance(self.mode, ExtractionMode),
            message=f"unsupported extraction mode {self.mode!r}; "
            f"only {ExtractionMode.ALL_OR_NOTHING.value!r} is available",
            field_name="mode",
            exc=InputValidationError,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class PropertyDescriptor:
    """One addressable, leaf-reachable member of a type graph."""

    path: str
    type_label: str
    description: str | None = None

    @property
    def full_description(self) -> str:
        """Render as ``path: label`` or ``path: label - description``."""
        if self.description:
            return f"{self.path}: {self.type_label} - {self.description}"
        return f"{self.path}: {self.type_label}"


class Envelope(BaseModel, typing.Generic[TResult]):
    """Single-field wrapper giving every target type a named root.

    Leaf targets (``int``, ``str``...) have no property names of their own; the
    envelope lets leaf and object targets share one structuring contract.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    result: TResult = Field(description="The extracted value")


# --- Pipeline command states ---


@dataclasses.dataclass(frozen=True, slots=True)
class InitialCommand:
    """The request and target type as received from the caller."""

    request: ExtractionRequest
    target: typing.Any

    @property
    def target_name(self) -> str:
        return getattr(self.target, "__name__", repr(self.target))


@dataclasses.dataclass(frozen=True, slots=True)
class AssessedCommand:
    """State after every property passed the feasibility check.

    ``properties`` is empty when the target has no addressable members (a leaf,
    a collection or a mapping); the whole value is then assessed and extracted
    as one unit and ``value_label`` describes its shape.
    """

    initial: InitialCommand
    properties: tuple[PropertyDescriptor, ...] = ()
    value_label: str | None = None

    @property
    def is_whole_value(self) -> bool:
        return not self.properties


@dataclasses.dataclass(frozen=True, slots=True)
class ExtractedCommand:
    """State after raw values were pulled from the text."""

    assessed: AssessedCommand
    corpus: str
