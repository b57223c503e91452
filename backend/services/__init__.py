from .prober import LivenessProber, HttpLivenessProber
from .persistence import (
    ValidationRepository,
    InMemoryValidationRepository,
    SupabaseValidationRepository,
    build_record,
    get_repository,
)
from .validation_service import ValidationService

__all__ = [
    "LivenessProber",
    "HttpLivenessProber",
    "ValidationRepository",
    "InMemoryValidationRepository",
    "SupabaseValidationRepository",
    "build_record",
    "get_repository",
    "ValidationService",
]
