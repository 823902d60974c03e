import logging

from .settings import Settings

settings = Settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("cleannews")

from .constants import (
    TEXT_CONFIG,
    KEYWORD_CONFIG,
    CACHE_CONFIG,
    SEARCH_CONFIG,
    VERDICT_CONFIG,
    LLM_CONFIG,
    API_TIMEOUTS,
)

PROVIDER_KEYS = {
    "naver": ["NAVER_CLIENT_ID", "NAVER_CLIENT_SECRET"],
    "google_cse": ["GOOGLE_API_KEY", "GOOGLE_CX"],
    "bing": ["BING_API_KEY"],
}

def check_api_keys_on_startup(current: Settings = None) -> list:
    """Log which providers are missing credentials; returns the missing key names."""
    current = current or settings
    missing_keys = []
    for provider, keys in PROVIDER_KEYS.items():
        absent = [k for k in keys if not getattr(current, k, "")]
        if absent:
            logger.warning(f"Search provider '{provider}' disabled, missing: {', '.join(absent)}")
            missing_keys.extend(absent)

    if (current.is_llm_mode or current.AI_PROVIDER.lower() == "openai") and not current.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY missing; LLM calls will degrade to UNSURE responses.")
        missing_keys.append("OPENAI_API_KEY")

    if not missing_keys:
        logger.info("All provider API keys are configured.")
    logger.info("Verification mode: %s", "llm" if current.is_llm_mode else "hybrid")
    return missing_keys

__all__ = [
    "logger",
    "settings",
    "Settings",
    "check_api_keys_on_startup",
    "TEXT_CONFIG",
    "KEYWORD_CONFIG",
    "CACHE_CONFIG",
    "SEARCH_CONFIG",
    "VERDICT_CONFIG",
    "LLM_CONFIG",
    "API_TIMEOUTS",
]
