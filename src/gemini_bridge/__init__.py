"""Populate typed values from free-form text with Gemini models."""

import importlib.metadata
import logging

from gemini_bridge.adapters import (
    GeminiReasoningModel,
    GeminiStructuringModel,
    ReasoningModel,
    StructuringModel,
)
from gemini_bridge.bridge import TextBridge, create_bridge
from gemini_bridge.config import FrozenConfig, ResolvedConfig, resolve_config
from gemini_bridge.core.types import (
    Envelope,
    ExtractionMode,
    ExtractionRequest,
    Failure,
    PropertyDescriptor,
    Result,
    Success,
)
from gemini_bridge.exceptions import (
    AnalysisError,
    BridgeError,
    CircularTypeReferenceError,
    ConfigurationError,
    InputValidationError,
    InvariantViolationError,
    ResponseParseError,
)
from gemini_bridge.telemetry import InMemoryReporter, TelemetryContext, TelemetryReporter
from gemini_bridge.typesystem import (
    extract_property_descriptors,
    extract_property_paths,
    generate_schema,
    type_label,
)

try:
    __version__ = importlib.metadata.version("gemini-bridge")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Entry points
    "TextBridge",
    "create_bridge",
    # Results and requests
    "Envelope",
    "ExtractionMode",
    "ExtractionRequest",
    "Failure",
    "PropertyDescriptor",
    "Result",
    "Success",
    # Model roles
    "GeminiReasoningModel",
    "GeminiStructuringModel",
    "ReasoningModel",
    "StructuringModel",
    # Configuration
    "FrozenConfig",
    "ResolvedConfig",
    "resolve_config",
    # Type introspection
    "extract_property_descriptors",
    "extract_property_paths",
    "generate_schema",
    "type_label",
    # Telemetry
    "InMemoryReporter",
    "TelemetryContext",
    "TelemetryReporter",
    # Errors
    "AnalysisError",
    "BridgeError",
    "CircularTypeReferenceError",
    "ConfigurationError",
    "InputValidationError",
    "InvariantViolationError",
    "ResponseParseError",
]
