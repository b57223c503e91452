from types import MappingProxyType
from typing import Any, Mapping, Sequence

from models.inputs import Modality
from models.results import ConfidenceScore, ValidationResult, Verdict
from .rules import RuleSet


class ResultBuilder:

    def build(
        self,
        ruleset: RuleSet,
        facts: Mapping[str, Any],
        findings: Sequence[str],
        score: ConfidenceScore,
        verdict: Verdict,
        halted: bool = False
    ) -> ValidationResult:
        if halted:
            verdict = Verdict.FAKE
            message = ruleset.halt_message or ruleset.messages[1]
        else:
            authentic_message, fake_message = ruleset.messages
            message = authentic_message if verdict is Verdict.AUTHENTIC else fake_message

        return ValidationResult(
            modality=Modality(ruleset.modality),
            verdict=verdict,
            confidence_score=score.value,
            message=message,
            findings=tuple(findings),
            metadata=MappingProxyType(ruleset.metadata(facts)),
            raw_score=score.raw,
        )
