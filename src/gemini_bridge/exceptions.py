"""Exceptions raised by the bridge.

Business failures (missing information, unavailable services) never surface as
exceptions; they flow back to callers as `Failure` results. The types below
cover programming errors, type-graph problems and internal signals.
"""


class BridgeError(Exception):
    """Base exception for all gemini_bridge errors."""


class InputValidationError(BridgeError, ValueError):
    """Raised when an extraction request is rejected before any model call."""

    def __init__(self, message: str, field_name: str | None = None) -> None:
        """Initialize with a message and the offending field, if known."""
        self.field_name = field_name
        super().__init__(message)


class CircularTypeReferenceError(BridgeError):
    """Raised when a type is reached again on the branch that opened it."""

    def __init__(self, type_name: str) -> None:
        """Initialize with the name of the type that closes the cycle."""
        self.type_name = type_name
        super().__init__(
            f"Circular reference detected: {type_name} is already being processed "
            "in the current path. Consider excluding the back-reference from the "
            "model to break the circular dependency."
        )


class AnalysisError(BridgeError):
    """Raised by the extraction stage when raw value extraction fails.

    The message is always safe to show to end users; the original exception
    is chained for logging only.
    """


class ResponseParseError(BridgeError):
    """Raised when a structuring response cannot be parsed into the model."""

    def __init__(self, message: str, raw_response: str, schema: str | None = None):
        """Initialize with the raw model output and optional schema for logs."""
        self.raw_response = raw_response
        self.schema = schema
        super().__init__(message)


class ConfigurationError(BridgeError):
    """Raised when configuration is missing or invalid."""


class InvariantViolationError(BridgeError):
    """Raised when a pipeline stage breaks the Success|Failure contract."""
