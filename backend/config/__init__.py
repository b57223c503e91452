import logging

from .settings import Settings, settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

from .constants import (
    SCORING_CONFIG,
    PROBE_POLICIES,
    TRUSTED_SOURCES,
    PERSISTENCE_CONFIG,
    ModalityScoring,
)

def check_persistence_on_startup():
    """Report whether results will be stored remotely or kept in memory."""
    if settings.persistence_configured:
        logger.info("Supabase persistence configured for table '%s'.", settings.SUPABASE_TABLE)
    elif settings.PERSISTENCE_REQUIRED:
        logger.warning(
            "PERSISTENCE_REQUIRED is set but SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY are missing. "
            "Results will only be kept in memory."
        )
    else:
        logger.info("No persistence backend configured; results are kept in memory.")

__all__ = [
    "logger",
    "settings",
    "Settings",
    "check_persistence_on_startup",
    "SCORING_CONFIG",
    "PROBE_POLICIES",
    "TRUSTED_SOURCES",
    "PERSISTENCE_CONFIG",
    "ModalityScoring",
]
