import re

from config.constants import PROBE_POLICIES, TRUSTED_SOURCES
from .rules import Branch, Facts, Rule, RuleContext, RuleSet, always, fact, no_fact, probe_rule

VIDEO_EXTENSION_PATTERN = re.compile(
    r"\.(%s)(\?.*)?$" % "|".join(TRUSTED_SOURCES.VIDEO_EXTENSIONS), re.IGNORECASE
)

SUSPICIOUS_INDICATORS = (
    re.compile(r"\b(free|download|crack|hack)\b", re.IGNORECASE),
    re.compile(r"\.(exe|zip|rar)\b", re.IGNORECASE),
    re.compile(r"suspicious-domain\.xyz", re.IGNORECASE),
)


def extract_video_facts(url: str) -> Facts:
    return {
        "has_valid_extension": bool(VIDEO_EXTENSION_PATTERN.search(url)),
        "is_trusted_domain": any(platform in url for platform in TRUSTED_SOURCES.VIDEO_PLATFORMS),
        "has_suspicious_indicators": any(pattern.search(url) for pattern in SUSPICIOUS_INDICATORS),
    }


def _is_playable_content(ctx: RuleContext) -> bool:
    content_type = (ctx.probe.content_type or "").lower()
    return content_type.startswith("video/") or "html" in content_type


VIDEO_RULES = RuleSet(
    modality="video",
    extract_facts=extract_video_facts,
    probe_policy=PROBE_POLICIES.VIDEO,
    rules=(
        # Platform pages (e.g. a YouTube watch URL) carry no file extension.
        Rule("file_extension", (
            Branch(fact("has_valid_extension"), 20, "Valid video file extension detected"),
            Branch(no_fact("is_trusted_domain"), -10, "No standard video extension found"),
        )),
        Rule("trusted_platform", (
            Branch(fact("is_trusted_domain"), 30, "Video hosted on trusted streaming platform"),
            Branch(always, -5, "Video hosted on unknown platform"),
        )),
        Rule("suspicious_indicators", (
            Branch(fact("has_suspicious_indicators"), -30, "Suspicious patterns detected in URL"),
        )),
        probe_rule(
            "liveness",
            accept=_is_playable_content,
            accepted=(15, "Accessible URL with content-type: {content_type}"),
            rejected=(-10, "Unexpected content-type for video"),
            unreachable=(-20, "Video URL not accessible or returns error"),
            failed=(-15, "Failed to verify video accessibility"),
        ),
    ),
    messages=(
        "Video appears to be authentic and from a reliable source",
        "Video shows signs of manipulation or untrusted source",
    ),
    metadata_keys=("has_valid_extension", "is_trusted_domain", "has_suspicious_indicators"),
)
