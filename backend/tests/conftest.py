import pytest
import os
import sys
from pathlib import Path
from typing import List, Optional
from unittest.mock import MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent))

# Settings are read at import time, so keep the suite independent of any local .env.
for _key in ("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY"):
    os.environ.pop(_key, None)
os.environ["PERSISTENCE_REQUIRED"] = "false"

from models.probe import ProbeOutcome, ProbePolicy, ProbeResult


class FakeProber:
    """Deterministic stand-in for the HTTP liveness prober."""

    def __init__(self, result: ProbeResult):
        self.result = result
        self.calls: List[tuple] = []

    async def probe(self, url: str, policy: ProbePolicy) -> ProbeResult:
        self.calls.append((url, policy))
        return self.result


class FailingRepository:
    def __init__(self):
        self.attempts = 0

    async def save(self, record):
        from exceptions import PersistenceException
        self.attempts += 1
        raise PersistenceException("database unavailable")


def reachable(content_type: Optional[str] = None, status_code: int = 200) -> ProbeResult:
    return ProbeResult.from_status(status_code, content_type)


@pytest.fixture
def make_prober():
    return FakeProber


@pytest.fixture
def reachable_html_prober():
    return FakeProber(reachable("text/html; charset=utf-8"))


@pytest.fixture
def failed_prober():
    return FakeProber(ProbeResult(outcome=ProbeOutcome.FAILED, reason="ConnectError"))


@pytest.fixture
def no_jitter_aggregator():
    from scoring import ScoreAggregator, fixed_jitter
    return ScoreAggregator(jitter_source=fixed_jitter(0.0))


@pytest.fixture
def memory_repository():
    from services import InMemoryValidationRepository
    return InMemoryValidationRepository()


@pytest.fixture
def failing_repository():
    return FailingRepository()


@pytest.fixture
def validation_service(reachable_html_prober, no_jitter_aggregator, memory_repository):
    from services import ValidationService
    return ValidationService(
        prober=reachable_html_prober,
        aggregator=no_jitter_aggregator,
        repository=memory_repository,
        persistence_required=False,
    )


@pytest.fixture
def test_client(validation_service):
    """Create a TestClient for the FastAPI app with network collaborators replaced."""
    from fastapi.testclient import TestClient
    import main
    main.app.dependency_overrides[main.get_validation_service] = lambda: validation_service
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_persistence_breaker():
    from services.persistence import SupabaseValidationRepository
    breaker = SupabaseValidationRepository.save._circuit_breaker
    breaker.reset()
    yield
    breaker.reset()


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.AsyncClient used as an async context manager."""
    from unittest.mock import AsyncMock
    mock_client = MagicMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client
