from dataclasses import dataclass
from enum import Enum
from typing import Optional

class ProbeOutcome(str, Enum):
    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"
    FAILED = "failed"

@dataclass(frozen=True)
class ProbePolicy:
    """How a HEAD probe is issued. A ``None`` timeout means the prober default applies."""
    follow_redirects: bool = True
    timeout: Optional[float] = None

@dataclass(frozen=True)
class ProbeResult:
    outcome: ProbeOutcome
    status_code: Optional[int] = None
    content_type: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def from_status(cls, status_code: int, content_type: Optional[str]) -> "ProbeResult":
        outcome = ProbeOutcome.REACHABLE if 200 <= status_code < 300 else ProbeOutcome.UNREACHABLE
        return cls(outcome=outcome, status_code=status_code, content_type=content_type)

    @classmethod
    def failed(cls, reason: str) -> "ProbeResult":
        return cls(outcome=ProbeOutcome.FAILED, reason=reason)

    @property
    def reachable(self) -> bool:
        return self.outcome is ProbeOutcome.REACHABLE

    @property
    def failed_to_probe(self) -> bool:
        return self.outcome is ProbeOutcome.FAILED
