from .claims import VerificationRequest
from .search import SearchResult
from .verdicts import (
    VerdictType,
    LIKELY_TRUE,
    LIKELY_FALSE,
    UNSURE,
    Evidence,
    VerificationResponse,
)
from .llm import LlmEvidencePayload, LlmVerdictPayload

__all__ = [
    "VerificationRequest",

    "SearchResult",

    "VerdictType",
    "LIKELY_TRUE",
    "LIKELY_FALSE",
    "UNSURE",
    "Evidence",
    "VerificationResponse",

    "LlmEvidencePayload",
    "LlmVerdictPayload",
]
