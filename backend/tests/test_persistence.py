import pytest
import httpx
from types import MappingProxyType
from unittest.mock import AsyncMock, MagicMock, patch

from config import settings
from exceptions import CircuitBreakerOpenException, PersistenceException
from models.inputs import Modality, ValidationInput
from models.results import ValidationResult, Verdict
from services.persistence import (
    InMemoryValidationRepository,
    SupabaseValidationRepository,
    build_record,
)
from utils.circuit_breaker import CircuitState


def sample_result() -> ValidationResult:
    return ValidationResult(
        modality=Modality.URL,
        verdict=Verdict.AUTHENTIC,
        confidence_score=87.456,
        message="URL appears to be safe and trustworthy",
        findings=("Valid URL format", "Domain is on trusted whitelist"),
        metadata=MappingProxyType({"domain": "github.com", "protocol": "https", "is_trusted_domain": True}),
        raw_score=85,
    )


def supabase_repository() -> SupabaseValidationRepository:
    return SupabaseValidationRepository(
        endpoint="https://project.supabase.co/rest/v1/validations",
        service_key="service-key",
        timeout=2.0,
    )


class TestBuildRecord:

    def test_record_shape(self):
        record = build_record(ValidationInput(Modality.URL, "https://github.com"), sample_result())

        assert record == {
            "input_type": "url",
            "input_data": "https://github.com",
            "result": "authentic",
            "confidence_score": "87.46",
            "details": {
                "analysis": ["Valid URL format", "Domain is on trusted whitelist"],
                "domain": "github.com",
                "protocol": "https",
                "is_trusted_domain": True,
            },
        }

    def test_input_is_truncated_to_500_characters(self):
        record = build_record(ValidationInput(Modality.TEXT, "x" * 900), sample_result())
        assert len(record["input_data"]) == 500


@pytest.mark.asyncio
class TestInMemoryRepository:

    async def test_assigns_ids(self):
        repository = InMemoryValidationRepository()
        record = build_record(ValidationInput(Modality.URL, "https://github.com"), sample_result())

        first = await repository.save(record)
        second = await repository.save(record)

        assert first != second
        assert [r["id"] for r in repository.records] == [first, second]

    async def test_oldest_records_are_evicted_past_limit(self):
        repository = InMemoryValidationRepository(limit=3)
        record = build_record(ValidationInput(Modality.URL, "https://github.com"), sample_result())

        ids = [await repository.save(record) for _ in range(5)]

        assert len(repository.records) == 3
        assert [r["id"] for r in repository.records] == ids[2:]

    async def test_default_limit_comes_from_settings(self):
        assert InMemoryValidationRepository().records.maxlen == settings.MEMORY_REPOSITORY_LIMIT


@pytest.mark.asyncio
class TestSupabaseRepository:

    async def test_successful_insert(self, mock_httpx_client):
        response = MagicMock()
        response.raise_for_status = MagicMock()
        response.json.return_value = [{"id": "3f2c0a"}]
        mock_httpx_client.post = AsyncMock(return_value=response)
        record = build_record(ValidationInput(Modality.URL, "https://github.com"), sample_result())

        with patch("services.persistence.httpx.AsyncClient", return_value=mock_httpx_client):
            record_id = await supabase_repository().save(record)

        assert record_id == "3f2c0a"
        _, kwargs = mock_httpx_client.post.call_args
        assert kwargs["json"] == record
        assert kwargs["headers"]["Authorization"] == "Bearer service-key"
        assert kwargs["headers"]["Prefer"] == "return=representation"

    async def test_http_error_raises_persistence_exception(self, mock_httpx_client):
        request = httpx.Request("POST", "https://project.supabase.co/rest/v1/validations")
        error_response = httpx.Response(503, request=request)
        response = MagicMock()
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError("unavailable", request=request, response=error_response)
        )
        mock_httpx_client.post = AsyncMock(return_value=response)

        with patch("services.persistence.httpx.AsyncClient", return_value=mock_httpx_client):
            with pytest.raises(PersistenceException) as exc_info:
                await supabase_repository().save({"input_type": "url"})

        assert exc_info.value.details["reason"] == "HTTP 503"

    async def test_unconfigured_repository_raises(self):
        repository = SupabaseValidationRepository(endpoint=None, service_key=None)
        repository.endpoint = None
        repository.service_key = None
        with pytest.raises(PersistenceException):
            await repository.save({"input_type": "url"})

    async def test_repeated_failures_open_the_circuit(self, mock_httpx_client):
        mock_httpx_client.post = AsyncMock(side_effect=httpx.ConnectError("refused"))
        repository = supabase_repository()
        breaker = SupabaseValidationRepository.save._circuit_breaker

        with patch("services.persistence.httpx.AsyncClient", return_value=mock_httpx_client):
            for _ in range(breaker.failure_threshold):
                with pytest.raises(PersistenceException):
                    await repository.save({"input_type": "url"})

            assert breaker.state is CircuitState.OPEN
            with pytest.raises(CircuitBreakerOpenException):
                await repository.save({"input_type": "url"})

        assert mock_httpx_client.post.await_count == breaker.failure_threshold
