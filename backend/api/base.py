from typing import Any, Dict, List

import httpx

from config import logger
from exceptions import ProviderUnavailableException
from models.search import SearchResult


class SearchAdapter:
    """
    Base class for web/news search providers.

    Subclasses implement `configured` and `_fetch`. `search` never raises:
    missing credentials, HTTP failures and malformed payloads all come back
    as an empty list.
    """

    name = "base"
    timeout: float = 10.0

    @property
    def configured(self) -> bool:
        raise NotImplementedError

    async def _fetch(self, client: httpx.AsyncClient, query: str, limit: int) -> List[SearchResult]:
        raise NotImplementedError

    async def search(self, query: str, limit: int) -> List[SearchResult]:
        if not query or not query.strip() or limit <= 0:
            return []
        try:
            if not self.configured:
                raise ProviderUnavailableException(self.name, "missing credentials")
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await self._fetch(client, query, limit)
        except ProviderUnavailableException as e:
            logger.debug(e.message)
            return []
        except httpx.HTTPStatusError as e:
            logger.error(f"{self.name} HTTP error {e.response.status_code}: {e.response.text[:200]}")
            return []
        except httpx.RequestError as e:
            logger.error(f"{self.name} request error: {e}")
            return []
        except Exception as e:
            logger.exception(f"Error processing {self.name} results: {e}")
            return []


def as_text(value: Any) -> str:
    return "" if value is None else str(value)


def items_of(payload: Any, key: str) -> List[Dict[str, Any]]:
    if not isinstance(payload, dict):
        return []
    items = payload.get(key)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]
