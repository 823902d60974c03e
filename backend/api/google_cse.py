from typing import List

import httpx

from config import settings
from config.constants import API_TIMEOUTS, SEARCH_CONFIG
from models.search import SearchResult
from .base import SearchAdapter, as_text, items_of


class GoogleCseAdapter(SearchAdapter):
    """Google Programmable Search (custom search engine), restricted to Korean results."""

    name = "google_cse"
    timeout = API_TIMEOUTS.GOOGLE_CSE

    def __init__(self, api_key: str = "", cx: str = "", endpoint: str = ""):
        self.api_key = api_key or settings.GOOGLE_API_KEY
        self.cx = cx or settings.GOOGLE_CX
        self.endpoint = endpoint or settings.GOOGLE_ENDPOINT

    @property
    def configured(self) -> bool:
        return bool(self.api_key.strip() and self.cx.strip())

    async def _fetch(self, client: httpx.AsyncClient, query: str, limit: int) -> List[SearchResult]:
        params = {
            "key": self.api_key,
            "cx": self.cx,
            "q": query,
            "num": min(limit, SEARCH_CONFIG.MAX_PROVIDER_PAGE),
            "gl": "kr",
            "lr": "lang_ko",
            "hl": "ko",
            "safe": "off",
        }
        r = await client.get(self.endpoint, params=params)
        r.raise_for_status()

        return [
            SearchResult(
                source=self.name,
                title=as_text(item.get("title")),
                url=as_text(item.get("link")),
                snippet=as_text(item.get("snippet")),
            )
            for item in items_of(r.json(), "items")
        ]
