import re
from typing import List, Tuple

from config.constants import SCORING_CONFIG
from .rules import Branch, Facts, Rule, RuleContext, RuleSet, always, fact

SUSPICIOUS_PHRASES: Tuple[Tuple[str, re.Pattern], ...] = (
    ("urgency or clickbait phrasing",
     re.compile(r"\b(click here|act now|limited time|urgent|congratulations)\b", re.IGNORECASE)),
    ("account verification phrasing",
     re.compile(r"\b(verify your account|suspended|confirm identity)\b", re.IGNORECASE)),
    ("prize or lottery phrasing",
     re.compile(r"\b(winner|prize|free money|lottery)\b", re.IGNORECASE)),
)
URL_PATTERN = re.compile(r"https?://[^\s]+", re.IGNORECASE)
REPEATED_CHARACTER_PATTERN = re.compile(r"(.)\1{10,}", re.IGNORECASE)
UPPERCASE_PATTERN = re.compile(r"[A-Z]")

PENALTY_PER_OCCURRENCE = 10


def count_suspicious_patterns(text: str) -> List[Tuple[str, int]]:
    """Occurrence count per firing category, in category order."""
    hits = []
    for label, pattern in SUSPICIOUS_PHRASES:
        count = sum(1 for _ in pattern.finditer(text))
        if count:
            hits.append((label, count))

    if len(URL_PATTERN.findall(text)) >= SCORING_CONFIG.TEXT_URL_FLOOD_COUNT:
        hits.append(("link flooding", 1))

    runs = sum(1 for _ in REPEATED_CHARACTER_PATTERN.finditer(text))
    if runs:
        hits.append(("repeated character run", runs))
    return hits


def uppercase_ratio(text: str) -> float:
    if not text:
        return 0.0
    return len(UPPERCASE_PATTERN.findall(text)) / len(text)


def extract_text_facts(text: str) -> Facts:
    hits = count_suspicious_patterns(text)
    ratio = uppercase_ratio(text)
    length = len(text)
    return {
        "length": length,
        "uppercase_ratio": ratio,
        "caps_ratio": round(ratio, 2),
        "pattern_hits": hits,
        "suspicious_count": sum(count for _, count in hits),
        "patterns_detected": len(hits),
        "length_out_of_range": length < SCORING_CONFIG.TEXT_MIN_LENGTH or length > SCORING_CONFIG.TEXT_MAX_LENGTH,
        "mostly_uppercase": ratio > SCORING_CONFIG.TEXT_CAPS_RATIO_LIMIT,
    }


def _pattern_findings(ctx: RuleContext) -> List[str]:
    return [
        f"Suspicious pattern ({label}): {count} occurrence{'s' if count != 1 else ''}"
        for label, count in ctx.facts["pattern_hits"]
    ]


TEXT_RULES = RuleSet(
    modality="text",
    extract_facts=extract_text_facts,
    rules=(
        Rule("suspicious_patterns", (
            Branch(fact("suspicious_count"),
                   lambda ctx: -PENALTY_PER_OCCURRENCE * ctx.facts["suspicious_count"],
                   _pattern_findings),
        )),
        Rule("length", (
            Branch(fact("length_out_of_range"), -10, "Text length outside expected range ({length} characters)"),
            Branch(always, 10, "Text length within expected range ({length} characters)"),
        )),
        Rule("caps_ratio", (
            Branch(fact("mostly_uppercase"), -20, "Excessive capitalization ({caps_ratio:.2f} of characters uppercase)"),
        )),
    ),
    messages=(
        "Text appears to be authentic and trustworthy",
        "Text shows signs of manipulation or suspicious patterns",
    ),
    metadata_keys=("length", "caps_ratio", "patterns_detected"),
)
