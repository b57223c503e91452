import uuid
from collections import deque
from typing import Any, Deque, Dict, Optional, Protocol

import httpx

from config import logger, settings, PERSISTENCE_CONFIG
from exceptions import PersistenceException
from models.inputs import ValidationInput
from models.results import ValidationRecord, ValidationResult
from utils.circuit_breaker import circuit_breaker


def build_record(validation_input: ValidationInput, result: ValidationResult) -> ValidationRecord:
    """Shape a result into the row stored in the ``validations`` table."""
    details: Dict[str, Any] = {"analysis": list(result.findings)}
    details.update(result.metadata)
    return {
        "input_type": validation_input.modality.value,
        "input_data": validation_input.value[:PERSISTENCE_CONFIG.MAX_INPUT_LENGTH],
        "result": result.verdict.value,
        "confidence_score": f"{result.confidence_score:.2f}",
        "details": details,
    }


class ValidationRepository(Protocol):
    async def save(self, record: ValidationRecord) -> Optional[str]:
        ...


class InMemoryValidationRepository:
    """Keeps the most recent ``limit`` records; older ones are evicted."""

    def __init__(self, limit: Optional[int] = None):
        self.limit = limit or settings.MEMORY_REPOSITORY_LIMIT
        self.records: Deque[Dict[str, Any]] = deque(maxlen=self.limit)

    async def save(self, record: ValidationRecord) -> Optional[str]:
        record_id = str(uuid.uuid4())
        self.records.append({"id": record_id, **record})
        return record_id


class SupabaseValidationRepository:
    """Inserts records through the Supabase PostgREST endpoint."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        service_key: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.endpoint = endpoint or settings.SUPABASE_REST_ENDPOINT
        self.service_key = service_key or settings.SUPABASE_SERVICE_ROLE_KEY
        self.timeout = timeout or settings.PERSISTENCE_TIMEOUT

    @circuit_breaker(
        failure_threshold=5,
        recovery_timeout=60.0,
        expected_exception=PersistenceException,
        name="supabase_validations"
    )
    async def save(self, record: ValidationRecord) -> Optional[str]:
        if not self.endpoint or not self.service_key:
            raise PersistenceException("Supabase is not configured", recoverable=False)

        headers = {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, headers=headers, json=record)
                response.raise_for_status()
                rows = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Supabase HTTP error %s: %s", e.response.status_code, e.response.text)
            raise PersistenceException(f"HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            logger.error("Supabase request error: %s", str(e))
            raise PersistenceException(f"Request failed: {type(e).__name__}")
        except ValueError as e:
            logger.error("Supabase returned a non-JSON body: %s", e)
            raise PersistenceException("Malformed response")

        row = rows[0] if isinstance(rows, list) and rows else rows
        if isinstance(row, dict):
            return row.get("id")
        return None


def get_repository() -> ValidationRepository:
    if settings.persistence_configured:
        return SupabaseValidationRepository()
    return InMemoryValidationRepository()
