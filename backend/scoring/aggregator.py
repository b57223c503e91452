import random
from typing import Callable, Optional

from config.constants import SCORING_CONFIG, ScoringConfig
from models.results import ConfidenceScore, Verdict

JitterSource = Callable[[float], float]


def random_jitter(rng: Optional[random.Random] = None) -> JitterSource:
    """Uniform jitter over ``[0, jitter_max]``; pass a seeded ``Random`` for reproducible draws."""
    rng = rng or random.Random()
    return lambda jitter_max: rng.uniform(0.0, jitter_max)


def fixed_jitter(value: float) -> JitterSource:
    """Pre-drawn jitter, capped at the modality's maximum."""
    return lambda jitter_max: min(value, jitter_max)


class ScoreAggregator:
    """Turns a raw rule total into the reported confidence score and verdict."""

    def __init__(self, jitter_source: JitterSource = None, config: ScoringConfig = None):
        self.config = config or SCORING_CONFIG
        self.jitter_source = jitter_source or random_jitter()

    def aggregate(self, raw: float, jitter_max: float) -> ConfidenceScore:
        jitter = self.draw_jitter(jitter_max)
        value = round(self.clamp(raw + jitter), self.config.SCORE_PRECISION)
        return ConfidenceScore(raw=raw, jitter=jitter, value=value)

    def draw_jitter(self, jitter_max: float) -> float:
        jitter = float(self.jitter_source(jitter_max))
        return min(max(jitter, 0.0), jitter_max)

    def clamp(self, score: float) -> float:
        return max(self.config.MIN_SCORE, min(self.config.MAX_SCORE, score))

    def decide_verdict(self, score: float) -> Verdict:
        if score > self.config.AUTHENTIC_THRESHOLD:
            return Verdict.AUTHENTIC
        return Verdict.FAKE
