"""Model adapters: role protocols and the Google GenAI implementations."""

from gemini_bridge.adapters.base import ReasoningModel, StructuringModel
from gemini_bridge.adapters.gemini import (
    GeminiReasoningModel,
    GeminiStructuringModel,
    clean_response_text,
)

__all__ = [
    "GeminiReasoningModel",
    "GeminiStructuringModel",
    "ReasoningModel",
    "StructuringModel",
    "clean_response_text",
]
