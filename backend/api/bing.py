from typing import List

import httpx

from config import settings
from config.constants import API_TIMEOUTS
from models.search import SearchResult
from utils.parsing import parse_timestamp
from .base import SearchAdapter, as_text, items_of


class BingNewsAdapter(SearchAdapter):
    name = "bing"
    timeout = API_TIMEOUTS.BING

    def __init__(self, api_key: str = "", endpoint: str = ""):
        self.api_key = api_key or settings.BING_API_KEY
        self.endpoint = endpoint or settings.BING_ENDPOINT

    @property
    def configured(self) -> bool:
        return bool(self.api_key.strip())

    async def _fetch(self, client: httpx.AsyncClient, query: str, limit: int) -> List[SearchResult]:
        r = await client.get(
            self.endpoint,
            params={"q": query, "count": limit},
            headers={"Ocp-Apim-Subscription-Key": self.api_key},
        )
        r.raise_for_status()

        return [
            SearchResult(
                source=self.name,
                title=as_text(item.get("name")),
                url=as_text(item.get("url")),
                snippet=as_text(item.get("description")),
                published_at=parse_timestamp(item.get("datePublished")),
            )
            for item in items_of(r.json(), "value")
        ]
