from .inputs import Modality, ValidationInput
from .probe import ProbeOutcome, ProbePolicy, ProbeResult
from .results import (
    Verdict,
    ConfidenceScore,
    ValidationResult,
    ValidationRecord,
    ValidationResponse,
)
from .requests import (
    TextValidationRequest,
    ImageValidationRequest,
    VideoValidationRequest,
    URLValidationRequest,
)

__all__ = [
    "Modality",
    "ValidationInput",

    "ProbeOutcome",
    "ProbePolicy",
    "ProbeResult",

    "Verdict",
    "ConfidenceScore",
    "ValidationResult",
    "ValidationRecord",
    "ValidationResponse",

    "TextValidationRequest",
    "ImageValidationRequest",
    "VideoValidationRequest",
    "URLValidationRequest",
]
