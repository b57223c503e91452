import asyncio
from typing import Dict, Optional

from config import logger, settings
from exceptions import AuthenticityException, InternalFailureException, PersistenceException
from models.inputs import Modality, ValidationInput
from models.results import ValidationResponse, ValidationResult
from scoring import RULE_SETS, ModalityEvaluator, ScoreAggregator
from utils.validation import InputValidator
from .persistence import ValidationRepository, build_record, get_repository
from .prober import HttpLivenessProber, LivenessProber


class ValidationService:

    def __init__(
        self,
        prober: LivenessProber = None,
        aggregator: ScoreAggregator = None,
        repository: ValidationRepository = None,
        persistence_required: Optional[bool] = None
    ):
        self.prober = prober or HttpLivenessProber()
        self.aggregator = aggregator or ScoreAggregator()
        self.repository = repository or get_repository()
        self.persistence_required = (
            settings.PERSISTENCE_REQUIRED if persistence_required is None else persistence_required
        )
        self.evaluators: Dict[Modality, ModalityEvaluator] = {
            modality: ModalityEvaluator(ruleset, prober=self.prober, aggregator=self.aggregator)
            for modality, ruleset in RULE_SETS.items()
        }

    async def evaluate(self, validation_input: ValidationInput) -> ValidationResult:
        """Score an already validated input without touching persistence."""
        evaluator = self.evaluators[validation_input.modality]
        try:
            return await evaluator.evaluate(validation_input.subject)
        except AuthenticityException:
            raise
        except Exception:
            logger.exception(f"Unexpected error while evaluating {validation_input.modality.value} input.")
            raise InternalFailureException(validation_input.modality.value)

    async def validate(self, modality: Modality, value: Optional[str]) -> ValidationResponse:
        validation_input = InputValidator.require_content(modality, value)

        start_time = asyncio.get_event_loop().time()
        result = await self.evaluate(validation_input)
        record_id, persisted = await self._persist(validation_input, result)

        duration = round(asyncio.get_event_loop().time() - start_time, 2)
        logger.info(
            f"Validated {modality.value} input '{InputValidator.sanitize_for_log(validation_input.value)}' "
            f"in {duration} seconds: {result.verdict.value} ({result.confidence_score})"
        )
        return self._build_response(result, record_id, persisted)

    async def _persist(self, validation_input: ValidationInput, result: ValidationResult):
        try:
            record_id = await self.repository.save(build_record(validation_input, result))
            return record_id, True
        except PersistenceException as e:
            if self.persistence_required:
                logger.error("Persistence failed and is required: %s", e.message)
                raise
            logger.warning("Persistence failed, returning unsaved result: %s", e.message)
            return None, False

    def _build_response(
        self,
        result: ValidationResult,
        record_id: Optional[str],
        persisted: bool
    ) -> ValidationResponse:
        return {
            "id": record_id,
            **result.to_dict(),
            "persisted": persisted,
        }
