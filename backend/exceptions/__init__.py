from typing import Optional, Dict, Any

class CleanNewsException(Exception):
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

class APIException(CleanNewsException):
    pass

class ValidationException(CleanNewsException, ValueError):
    """Raised from request validators, so pydantic reports it as a field error."""
    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Validation failed for {field}: {reason}",
            {"field": field, "reason": reason}
        )

class ProviderUnavailableException(APIException):
    def __init__(self, provider: str, reason: str):
        super().__init__(
            f"Search provider {provider} unavailable: {reason}",
            {"provider": provider, "reason": reason}
        )

class JudgeException(APIException):
    def __init__(self, reason: str):
        super().__init__(
            f"Judge failed: {reason}",
            {"reason": reason}
        )

class LLMException(APIException):
    def __init__(self, reason: str, recoverable: bool = True, status_code: Optional[int] = None):
        super().__init__(
            f"LLM service error: {reason}",
            {"reason": reason, "recoverable": recoverable, "status_code": status_code}
        )
        self.status_code = status_code

class UpstreamContractException(LLMException):
    """The language model answered, but not with the agreed JSON contract."""
    def __init__(self, reason: str):
        super().__init__(f"contract violation: {reason}", recoverable=False)
