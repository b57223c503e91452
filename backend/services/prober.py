from typing import Optional, Protocol

import httpx

from config import logger, settings
from models.probe import ProbePolicy, ProbeResult


class LivenessProber(Protocol):
    """Capability: check whether a URL answers a header-only request."""

    async def probe(self, url: str, policy: ProbePolicy) -> ProbeResult:
        ...


class HttpLivenessProber:
    """HEAD-request prober backed by ``httpx``. Every failure resolves to ``ProbeResult.failed``."""

    def __init__(self, default_timeout: Optional[float] = None):
        self.default_timeout = default_timeout or settings.PROBE_DEFAULT_TIMEOUT

    async def probe(self, url: str, policy: ProbePolicy) -> ProbeResult:
        timeout = policy.timeout if policy.timeout is not None else self.default_timeout
        try:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=policy.follow_redirects) as client:
                response = await client.head(url)
        except httpx.TimeoutException:
            logger.warning("Liveness probe timed out after %ss for URL %s", timeout, url)
            return ProbeResult.failed(f"timed out after {timeout}s")
        except httpx.HTTPError as e:
            logger.warning("Liveness probe request error for URL %s: %s", url, str(e))
            return ProbeResult.failed(type(e).__name__)
        except Exception as e:
            logger.warning("Liveness probe could not be issued for URL %s: %s", url, str(e))
            return ProbeResult.failed(type(e).__name__)

        result = ProbeResult.from_status(response.status_code, response.headers.get("content-type"))
        logger.info(
            "Liveness probe for %s: status=%s content-type=%s outcome=%s",
            url, result.status_code, result.content_type, result.outcome.value
        )
        return result
