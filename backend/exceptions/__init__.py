from typing import Optional, Dict, Any

class AuthenticityException(Exception):
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }

class InvalidInputException(AuthenticityException):
    status_code = 400

    def __init__(self, field: str, reason: str):
        super().__init__(
            reason,
            {"field": field, "reason": reason}
        )

class PersistenceException(AuthenticityException):
    def __init__(self, reason: str, recoverable: bool = True):
        super().__init__(
            f"Persistence failed: {reason}",
            {"reason": reason, "recoverable": recoverable}
        )

class InternalFailureException(AuthenticityException):
    def __init__(self, modality: Optional[str] = None):
        super().__init__(
            "Internal server error",
            {"modality": modality} if modality else {}
        )

class CircuitBreakerOpenException(PersistenceException):
    def __init__(self, service_name: str, failure_count: int):
        super().__init__(f"circuit breaker open for {service_name}", recoverable=True)
        self.details.update({"service": service_name, "failure_count": failure_count})
