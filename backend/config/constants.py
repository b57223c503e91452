from dataclasses import dataclass
from typing import Tuple

from models.probe import ProbePolicy

@dataclass(frozen=True)
class ModalityScoring:
    BASELINE: float
    JITTER_MAX: float

@dataclass(frozen=True)
class ScoringConfig:
    TEXT: ModalityScoring = ModalityScoring(BASELINE=70.0, JITTER_MAX=10.0)
    IMAGE: ModalityScoring = ModalityScoring(BASELINE=50.0, JITTER_MAX=10.0)
    VIDEO: ModalityScoring = ModalityScoring(BASELINE=50.0, JITTER_MAX=10.0)
    URL: ModalityScoring = ModalityScoring(BASELINE=50.0, JITTER_MAX=5.0)

    MIN_SCORE: float = 0.0
    MAX_SCORE: float = 100.0
    AUTHENTIC_THRESHOLD: float = 50.0
    SCORE_PRECISION: int = 2

    TEXT_MIN_LENGTH: int = 20
    TEXT_MAX_LENGTH: int = 5000
    TEXT_CAPS_RATIO_LIMIT: float = 0.5
    TEXT_URL_FLOOD_COUNT: int = 3

    URL_MAX_DOMAIN_LENGTH: int = 30

    def for_modality(self, modality: str) -> ModalityScoring:
        return getattr(self, modality.upper())

@dataclass(frozen=True)
class ProbePolicies:
    """HEAD request policies used by the probe-dependent rules."""
    URL: ProbePolicy = ProbePolicy(follow_redirects=False, timeout=5.0)
    IMAGE: ProbePolicy = ProbePolicy(follow_redirects=True, timeout=None)
    VIDEO: ProbePolicy = ProbePolicy(follow_redirects=True, timeout=None)

@dataclass(frozen=True)
class TrustedSources:
    URL_DOMAINS: Tuple[str, ...] = (
        "google.com", "youtube.com", "facebook.com", "twitter.com", "x.com",
        "linkedin.com", "github.com", "stackoverflow.com", "wikipedia.org",
        "amazon.com", "microsoft.com", "apple.com", "cloudflare.com",
        "supabase.com", "vercel.com", "netlify.com", "mozilla.org",
    )
    SUSPICIOUS_TLDS: Tuple[str, ...] = (".xyz", ".top", ".click", ".loan", ".win", ".bid")
    IMAGE_HOSTS: Tuple[str, ...] = (
        "pexels.com",
        "unsplash.com",
        "githubusercontent.com",
        "cloudinary.com",
        "imgur.com",
    )
    VIDEO_PLATFORMS: Tuple[str, ...] = (
        "youtube.com",
        "youtu.be",
        "vimeo.com",
        "cloudinary.com",
        "wistia.com",
        "vidyard.com",
        "streamable.com",
    )
    IMAGE_EXTENSIONS: Tuple[str, ...] = ("jpg", "jpeg", "png", "gif", "webp", "bmp", "svg")
    VIDEO_EXTENSIONS: Tuple[str, ...] = ("mp4", "mov", "avi", "mkv", "webm", "flv", "wmv", "m4v")

    def is_whitelisted_domain(self, domain: str) -> bool:
        domain = domain.lower()
        return any(domain == trusted or domain.endswith(f".{trusted}") for trusted in self.URL_DOMAINS)

@dataclass(frozen=True)
class PersistenceConfig:
    MAX_INPUT_LENGTH: int = 500

SCORING_CONFIG = ScoringConfig()
PROBE_POLICIES = ProbePolicies()
TRUSTED_SOURCES = TrustedSources()
PERSISTENCE_CONFIG = PersistenceConfig()
