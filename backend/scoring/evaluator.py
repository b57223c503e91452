from typing import List, TYPE_CHECKING

from config import logger
from config.constants import SCORING_CONFIG
from models.probe import ProbeResult
from models.results import ValidationResult
from .aggregator import ScoreAggregator
from .result_builder import ResultBuilder
from .rules import RuleContext, RuleSet, apply_rule

if TYPE_CHECKING:
    from services.prober import LivenessProber


class ModalityEvaluator:
    """Runs one modality's rule table and hands the total to the aggregator."""

    def __init__(
        self,
        ruleset: RuleSet,
        prober: "LivenessProber" = None,
        aggregator: ScoreAggregator = None,
        builder: ResultBuilder = None
    ):
        self.ruleset = ruleset
        self.prober = prober
        self.aggregator = aggregator or ScoreAggregator()
        self.builder = builder or ResultBuilder()
        self.scoring = SCORING_CONFIG.for_modality(ruleset.modality)

    async def evaluate(self, subject: str) -> ValidationResult:
        facts = self.ruleset.extract_facts(subject)
        ctx = RuleContext(subject=subject, facts=facts)

        raw_score = self.scoring.BASELINE
        findings: List[str] = []
        halted = False

        for rule in self.ruleset.rules:
            if rule.requires_probe and ctx.probe is None:
                ctx.probe = await self._probe(subject)

            outcome = apply_rule(rule, ctx)
            raw_score += outcome.delta
            findings.extend(outcome.findings)
            logger.debug(
                "%s rule %s: delta=%s running=%s",
                self.ruleset.modality, outcome.rule, outcome.delta, raw_score
            )
            if outcome.halt:
                halted = True
                break

        score = self.aggregator.aggregate(raw_score, self.scoring.JITTER_MAX)
        verdict = self.aggregator.decide_verdict(score.value)

        logger.info(
            f"{self.ruleset.modality} evaluation: raw={score.raw} jitter={score.jitter:.2f} "
            f"score={score.value} verdict={verdict.value} findings={len(findings)}"
        )
        return self.builder.build(self.ruleset, facts, findings, score, verdict, halted=halted)

    async def _probe(self, subject: str) -> ProbeResult:
        if self.prober is None:
            return ProbeResult.failed("liveness probing disabled")
        return await self.prober.probe(subject, self.ruleset.probe_policy)
