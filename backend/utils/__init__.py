from .validation import InputValidator
from .circuit_breaker import CircuitBreaker, CircuitState, circuit_breaker

__all__ = [
    "InputValidator",
    "CircuitBreaker",
    "CircuitState",
    "circuit_breaker",
]
