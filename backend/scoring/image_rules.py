import re

from config.constants import PROBE_POLICIES, TRUSTED_SOURCES
from .rules import Branch, Facts, Rule, RuleContext, RuleSet, always, fact, probe_rule

IMAGE_EXTENSION_PATTERN = re.compile(
    r"\.(%s)(\?.*)?$" % "|".join(TRUSTED_SOURCES.IMAGE_EXTENSIONS), re.IGNORECASE
)


def extract_image_facts(url: str) -> Facts:
    return {
        "has_valid_extension": bool(IMAGE_EXTENSION_PATTERN.search(url)),
        "is_trusted_domain": any(host in url for host in TRUSTED_SOURCES.IMAGE_HOSTS),
    }


def _is_image_content(ctx: RuleContext) -> bool:
    return (ctx.probe.content_type or "").lower().startswith("image/")


IMAGE_RULES = RuleSet(
    modality="image",
    extract_facts=extract_image_facts,
    probe_policy=PROBE_POLICIES.IMAGE,
    rules=(
        Rule("file_extension", (
            Branch(fact("has_valid_extension"), 20, "Valid image file extension detected"),
            Branch(always, -15, "No standard image extension found"),
        )),
        Rule("trusted_host", (
            Branch(fact("is_trusted_domain"), 25, "Image hosted on trusted domain"),
            Branch(always, -10, "Image hosted on unknown domain"),
        )),
        probe_rule(
            "liveness",
            accept=_is_image_content,
            accepted=(15, "Valid content-type: {content_type}"),
            rejected=(-20, "Invalid or missing image content-type"),
            unreachable=(-25, "Image URL not accessible"),
            failed=(-20, "Failed to verify image accessibility"),
        ),
    ),
    messages=(
        "Image appears to be authentic and from a reliable source",
        "Image shows signs of manipulation or untrusted source",
    ),
    metadata_keys=("has_valid_extension", "is_trusted_domain"),
)
