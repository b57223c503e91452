from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, TypedDict, List

from .inputs import Modality

class Verdict(str, Enum):
    AUTHENTIC = "authentic"
    FAKE = "fake"

@dataclass(frozen=True)
class ConfidenceScore:
    raw: float
    jitter: float
    value: float

@dataclass(frozen=True)
class ValidationResult:
    modality: Modality
    verdict: Verdict
    confidence_score: float
    message: str
    findings: Tuple[str, ...]
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    raw_score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verdict": self.verdict.value,
            "confidence_score": self.confidence_score,
            "message": self.message,
            "findings": list(self.findings),
            "metadata": dict(self.metadata),
        }

class ValidationRecord(TypedDict):
    """Row written to the ``validations`` table."""
    input_type: str
    input_data: str
    result: str
    confidence_score: str
    details: Dict[str, Any]

class ValidationResponse(TypedDict):
    """Complete response from the /validate endpoints."""
    id: Optional[str]
    verdict: str
    confidence_score: float
    message: str
    findings: List[str]
    metadata: Dict[str, Any]
    persisted: bool
