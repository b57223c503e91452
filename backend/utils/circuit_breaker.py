import time
from enum import Enum
from typing import Callable, Any, Optional
from functools import wraps
from config import logger
from exceptions import CircuitBreakerOpenException

class CircuitState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"

class CircuitBreaker:
    """Stops calling a failing collaborator until ``recovery_timeout`` has elapsed.

    Rejected calls fail fast with ``CircuitBreakerOpenException``; nothing is retried.
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        recovery_timeout: float = 60.0,
        expected_exception: type = Exception,
        name: Optional[str] = None
    ):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exception = expected_exception
        self.name = name or "unnamed"

        self._failure_count = 0
        self._last_failure_time: Optional[float] = None
        self._state = CircuitState.CLOSED
        self._trial_in_flight = False

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def reset(self):
        self._failure_count = 0
        self._last_failure_time = None
        self._state = CircuitState.CLOSED
        self._trial_in_flight = False

    async def call(self, func: Callable, *args, **kwargs) -> Any:
        if self._state == CircuitState.OPEN:
            if not self._should_attempt_reset():
                logger.warning(
                    f"Circuit breaker {self.name} is open, rejecting call",
                    extra={
                        "circuit_breaker": self.name,
                        "failure_count": self._failure_count,
                        "state": "open"
                    }
                )
                raise CircuitBreakerOpenException(self.name, self._failure_count)
            logger.info(
                f"Circuit breaker {self.name}: Transitioning to half-open state",
                extra={"circuit_breaker": self.name, "state": "half_open"}
            )
            self._state = CircuitState.HALF_OPEN
        elif self._state == CircuitState.HALF_OPEN and self._trial_in_flight:
            logger.warning(
                f"Circuit breaker {self.name} is half-open with a trial call in flight, rejecting call",
                extra={"circuit_breaker": self.name, "state": "half_open"}
            )
            raise CircuitBreakerOpenException(self.name, self._failure_count)

        # State checks above never await, so only one caller can claim the trial.
        is_trial = self._state == CircuitState.HALF_OPEN
        if is_trial:
            self._trial_in_flight = True
        try:
            result = await func(*args, **kwargs)
        except self.expected_exception:
            self._on_failure()
            raise
        finally:
            if is_trial:
                self._trial_in_flight = False
        self._on_success()
        return result

    def _should_attempt_reset(self) -> bool:
        return (
            self._last_failure_time is not None
            and time.monotonic() - self._last_failure_time >= self.recovery_timeout
        )

    def _on_success(self):
        if self._state == CircuitState.HALF_OPEN:
            logger.info(
                f"Circuit breaker {self.name}: Recovery successful, closing circuit",
                extra={"circuit_breaker": self.name, "state": "closed"}
            )
        self._failure_count = 0
        self._state = CircuitState.CLOSED

    def _on_failure(self):
        self._failure_count += 1
        self._last_failure_time = time.monotonic()

        if self._state == CircuitState.HALF_OPEN or self._failure_count >= self.failure_threshold:
            logger.error(
                f"Circuit breaker {self.name}: Failure threshold reached, opening circuit",
                extra={
                    "circuit_breaker": self.name,
                    "failure_count": self._failure_count,
                    "threshold": self.failure_threshold,
                    "state": "open"
                }
            )
            self._state = CircuitState.OPEN

def circuit_breaker(
    failure_threshold: int = 5,
    recovery_timeout: float = 60.0,
    expected_exception: type = Exception,
    name: Optional[str] = None
):
    breaker = CircuitBreaker(
        failure_threshold=failure_threshold,
        recovery_timeout=recovery_timeout,
        expected_exception=expected_exception,
        name=name
    )

    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            return await breaker.call(func, *args, **kwargs)
        wrapper._circuit_breaker = breaker
        return wrapper
    return decorator
