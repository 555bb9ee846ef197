"""Pipeline stages turning an extraction request into a populated value."""

from gemini_bridge.pipeline.base import BaseAsyncHandler
from gemini_bridge.pipeline.extraction import ExtractionHandler
from gemini_bridge.pipeline.feasibility import (
    FeasibilityHandler,
    FeasibilityVerdict,
    parse_verdict,
)
from gemini_bridge.pipeline.structuring import StructuringHandler

__all__ = [
    "BaseAsyncHandler",
    "ExtractionHandler",
    "FeasibilityHandler",
    "FeasibilityVerdict",
    "StructuringHandler",
    "parse_verdict",
]
