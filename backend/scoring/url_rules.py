import re
from typing import Optional
from urllib.parse import SplitResult, urlsplit

from config.constants import SCORING_CONFIG, PROBE_POLICIES, TRUSTED_SOURCES
from .rules import Branch, Facts, Rule, RuleSet, always, fact, no_fact

SCHEME_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9+.\-]*")
WWW_PREFIX = re.compile(r"^www\.")
FORBIDDEN_HOST_CHARS = re.compile(r"[%<>^|\\\"`{}]")

DECEPTION_PATTERNS = (
    re.compile(r"login|signin|verify|account|secure|update", re.IGNORECASE),
    re.compile(r"paypal|amazon|apple|microsoft|netflix", re.IGNORECASE),
    re.compile(r"[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}"),
    re.compile(r"-{2,}"),
    re.compile(r"\d{5,}"),
)


def parse_url(value: str) -> Optional[SplitResult]:
    """Return the split URL when ``value`` is an absolute URL with a host, else ``None``."""
    if not value or any(ch.isspace() for ch in value):
        return None
    try:
        parts = urlsplit(value)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return None
    if not SCHEME_PATTERN.fullmatch(parts.scheme) or not parts.hostname:
        return None
    if FORBIDDEN_HOST_CHARS.search(parts.hostname):
        return None
    try:
        parts.hostname.encode("idna")
    except UnicodeError:
        return None
    return parts


def extract_url_facts(url: str) -> Facts:
    parts = parse_url(url)
    if parts is None:
        return {"valid_url": False, "domain": None, "protocol": None, "is_trusted_domain": False}

    domain = WWW_PREFIX.sub("", parts.hostname)
    protocol = parts.scheme.lower()
    matches = sum(1 for pattern in DECEPTION_PATTERNS if pattern.search(url))
    return {
        "valid_url": True,
        "domain": domain,
        "protocol": protocol,
        "protocol_label": protocol.upper(),
        "is_trusted_domain": TRUSTED_SOURCES.is_whitelisted_domain(domain),
        "suspicious_tld": domain.endswith(TRUSTED_SOURCES.SUSPICIOUS_TLDS),
        "is_https": protocol == "https",
        "deception_matches": matches,
        "domain_too_long": len(domain) > SCORING_CONFIG.URL_MAX_DOMAIN_LENGTH,
    }


def _status_between(low: int, high: int):
    return lambda ctx: ctx.probe.status_code is not None and low <= ctx.probe.status_code < high


URL_RULES = RuleSet(
    modality="url",
    extract_facts=extract_url_facts,
    probe_policy=PROBE_POLICIES.URL,
    rules=(
        Rule("url_format", (
            Branch(no_fact("valid_url"), -30, "Invalid URL format", halt=True),
            Branch(always, 10, "Valid URL format"),
        )),
        Rule("domain_whitelist", (
            Branch(fact("is_trusted_domain"), 30, "Domain is on trusted whitelist"),
            Branch(always, -5, "Domain not on trusted whitelist"),
        )),
        Rule("suspicious_tld", (
            Branch(fact("suspicious_tld"), -25, "Suspicious top-level domain detected"),
        )),
        Rule("protocol", (
            Branch(fact("is_https"), 15, "Secure HTTPS protocol"),
            Branch(always, -15, "Insecure {protocol_label} protocol"),
        )),
        Rule("deception_patterns", (
            Branch(lambda ctx: ctx.facts["deception_matches"] > 2, -20,
                   "{deception_matches} suspicious patterns detected in URL"),
            Branch(fact("deception_matches"), -10, "{deception_matches} potential suspicious pattern(s)"),
        )),
        Rule("domain_length", (
            Branch(fact("domain_too_long"), -10, "Unusually long domain name"),
        )),
        Rule("liveness", requires_probe=True, branches=(
            Branch(lambda ctx: ctx.probe.failed_to_probe, -10, "Unable to verify URL accessibility"),
            Branch(_status_between(200, 400), 10, "URL is accessible and responds correctly"),
            Branch(_status_between(400, 1000), -15, "URL returns error status: {status_code}"),
        )),
    ),
    messages=(
        "URL appears to be safe and trustworthy",
        "URL shows signs of potential phishing or malicious activity",
    ),
    metadata_keys=("domain", "protocol", "is_trusted_domain"),
    halt_message="Invalid URL format detected",
)
