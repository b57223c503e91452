from models.inputs import Modality
from .rules import Branch, Rule, RuleContext, RuleOutcome, RuleSet, apply_rule
from .text_rules import TEXT_RULES
from .url_rules import URL_RULES, parse_url
from .image_rules import IMAGE_RULES
from .video_rules import VIDEO_RULES
from .aggregator import ScoreAggregator, random_jitter, fixed_jitter
from .result_builder import ResultBuilder
from .evaluator import ModalityEvaluator

RULE_SETS = {
    Modality.TEXT: TEXT_RULES,
    Modality.IMAGE: IMAGE_RULES,
    Modality.VIDEO: VIDEO_RULES,
    Modality.URL: URL_RULES,
}

__all__ = [
    "Branch",
    "Rule",
    "RuleContext",
    "RuleOutcome",
    "RuleSet",
    "apply_rule",
    "TEXT_RULES",
    "URL_RULES",
    "IMAGE_RULES",
    "VIDEO_RULES",
    "RULE_SETS",
    "parse_url",
    "ScoreAggregator",
    "random_jitter",
    "fixed_jitter",
    "ResultBuilder",
    "ModalityEvaluator",
]
