from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Loads all environment variables into a single, accessible object."""
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    CLEANNEWS_MODE: str = "hybrid"
    AI_PROVIDER: str = "none"

    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_BASE_URL: str = "https://api.openai.com"

    NAVER_CLIENT_ID: str = ""
    NAVER_CLIENT_SECRET: str = ""
    NAVER_ENDPOINT: str = "https://openapi.naver.com/v1/search/news.json"

    GOOGLE_API_KEY: str = ""
    GOOGLE_CX: str = ""
    GOOGLE_ENDPOINT: str = "https://www.googleapis.com/customsearch/v1"

    BING_API_KEY: str = ""
    BING_ENDPOINT: str = "https://api.bing.microsoft.com/v7.0/news/search"

    SEARCH_CACHE_TTL_SECONDS: float = 900.0
    SEARCH_CACHE_MAX_ENTRIES: int = 2000
    ADAPTER_TIMEOUT_SECONDS: float = 8.0

    LOG_LEVEL: str = "INFO"

    @property
    def OPENAI_CHAT_ENDPOINT(self) -> str:
        return f"{self.OPENAI_BASE_URL.rstrip('/')}/v1/chat/completions"

    @property
    def is_llm_mode(self) -> bool:
        return self.CLEANNEWS_MODE.strip().lower() == "llm"

    @property
    def judge_enabled(self) -> bool:
        return self.AI_PROVIDER.strip().lower() == "openai" and bool(self.OPENAI_API_KEY)
