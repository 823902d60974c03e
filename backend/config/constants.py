from dataclasses import dataclass

@dataclass(frozen=True)
class TextConfig:
    MAX_NORMALIZED_LENGTH: int = 1200
    MAX_QUERY_LENGTH: int = 120
    MAX_QUERY_CANDIDATES: int = 24
    FALLBACK_SNIPPET_LENGTH: int = 60
    FALLBACK_MIN_TEXT_LENGTH: int = 10

@dataclass(frozen=True)
class KeywordConfig:
    BOOSTED_LIMIT: int = 12
    GENERIC_FLOOR: int = 12
    MERGE_DISTANCE: int = 1

@dataclass(frozen=True)
class CacheConfig:
    TTL_SECONDS: float = 15 * 60.0
    MAX_ENTRIES: int = 2000

@dataclass(frozen=True)
class SearchConfig:
    RESULT_LIMIT: int = 8
    ADAPTER_TIMEOUT: float = 8.0
    MAX_PROVIDER_PAGE: int = 10
    MAX_FALLBACK_QUERIES: int = 40

@dataclass(frozen=True)
class VerdictConfig:
    SIMILARITY_WEIGHT: float = 0.7
    PRIOR_WEIGHT: float = 0.2
    JUDGE_WEIGHT: float = 0.3

    TRUE_THRESHOLD: int = 70
    FALSE_THRESHOLD: int = 40

    AVERAGE_TOP_K: int = 3
    MAX_EVIDENCES: int = 6

    NO_EVIDENCE_CONFIDENCE: int = 30
    LLM_ZERO_CONFIDENCE: int = 35
    DEFAULT_PRIOR: float = 0.5

@dataclass(frozen=True)
class LLMConfig:
    REQUEST_TIMEOUT: float = 60.0
    JUDGE_TIMEOUT: float = 20.0
    VERIFIER_TEMPERATURE: float = 0.1
    JUDGE_TEMPERATURE: float = 0.0

@dataclass(frozen=True)
class APITimeouts:
    """Timeout configurations for external search calls."""
    NAVER: float = 10.0
    GOOGLE_CSE: float = 10.0
    BING: float = 10.0

TEXT_CONFIG = TextConfig()
KEYWORD_CONFIG = KeywordConfig()
CACHE_CONFIG = CacheConfig()
SEARCH_CONFIG = SearchConfig()
VERDICT_CONFIG = VerdictConfig()
LLM_CONFIG = LLMConfig()
API_TIMEOUTS = APITimeouts()
