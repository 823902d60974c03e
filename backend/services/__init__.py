from .llm import call_openai_chat, extract_message_content
from .judge import LlmJudge, OpenAiJudge, build_judge
from .llm_verifier import OpenAiVerifier
from .search_aggregator import SearchAggregator, fallback_candidates, merge_results
from .verification_service import VerificationService, build_verification_service, normalize_input

__all__ = [
    "call_openai_chat",
    "extract_message_content",
    "LlmJudge",
    "OpenAiJudge",
    "build_judge",
    "OpenAiVerifier",
    "SearchAggregator",
    "fallback_candidates",
    "merge_results",
    "VerificationService",
    "build_verification_service",
    "normalize_input",
]
