"""
Classified errors raised by the generation pipeline and its collaborators.
"""
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Failure classes of plan generation."""

    INPUT_VALIDATION = "input_validation"
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"
    INCOMPLETE_RESPONSE = "incomplete_response"
    INVALID_FORMAT = "invalid_format"
    INVALID_STRUCTURE = "invalid_structure"


class PlanGenerationError(Exception):
    """
    A plan-generation failure tagged with its kind.

    ``detail`` holds bounded diagnostics (upstream message, raw text length,
    a short preview, field violations). It never carries the full model output.
    """

    def __init__(self, kind: ErrorKind, message: str, detail: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail or {}


class SpeechSynthesisError(Exception):
    """Text-to-speech request failed; status_code mirrors the upstream status."""

    def __init__(self, message: str, status_code: int = 500, details: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class PlanStoreError(Exception):
    """Saved-plan storage could not be written."""
