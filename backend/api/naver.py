import re
from typing import List

import httpx

from config import settings
from config.constants import API_TIMEOUTS, SEARCH_CONFIG
from models.search import SearchResult
from utils.parsing import parse_timestamp
from .base import SearchAdapter, as_text, items_of

TAG = re.compile(r"<[^>]*>")


def strip_tags(s: str) -> str:
    return TAG.sub("", s or "")


class NaverNewsAdapter(SearchAdapter):
    """Naver news search API. Titles and descriptions arrive with <b> highlight tags."""

    name = "naver"
    timeout = API_TIMEOUTS.NAVER

    def __init__(self, client_id: str = "", client_secret: str = "", endpoint: str = ""):
        self.client_id = client_id or settings.NAVER_CLIENT_ID
        self.client_secret = client_secret or settings.NAVER_CLIENT_SECRET
        self.endpoint = endpoint or settings.NAVER_ENDPOINT

    @property
    def configured(self) -> bool:
        return bool(self.client_id.strip() and self.client_secret.strip())

    async def _fetch(self, client: httpx.AsyncClient, query: str, limit: int) -> List[SearchResult]:
        params = {"query": query, "display": min(limit, SEARCH_CONFIG.MAX_PROVIDER_PAGE), "sort": "sim"}
        headers = {
            "X-Naver-Client-Id": self.client_id,
            "X-Naver-Client-Secret": self.client_secret,
        }
        r = await client.get(self.endpoint, params=params, headers=headers)
        r.raise_for_status()

        return [
            SearchResult(
                source=self.name,
                title=strip_tags(as_text(item.get("title"))),
                url=as_text(item.get("link")),
                snippet=strip_tags(as_text(item.get("description"))),
                published_at=parse_timestamp(item.get("pubDate")),
            )
            for item in items_of(r.json(), "items")
        ]
