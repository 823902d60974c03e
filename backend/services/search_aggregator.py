import asyncio
import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple
from urllib.parse import urlsplit

from api.base import SearchAdapter
from config import logger
from config.constants import SEARCH_CONFIG, TEXT_CONFIG
from models.search import SearchResult
from utils.ttl_cache import TTLCache

FALLBACK_TRIGGERS = ("이벤트", "프로모션", "공지", "공식", "모집", "무료", "당첨", "체험단")
LATIN_RUN = re.compile(r"[a-z0-9_.]{2,}")
HANGUL_RUN = re.compile(r"[가-힣]{2,}")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _sort_key(result: SearchResult):
    # newest first, undated last, then shorter titles first
    published = result.published_at
    if published is not None and published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    return (
        published is None,
        -(published - _EPOCH).total_seconds() if published is not None else 0.0,
        len(result.title or ""),
    )


def merge_results(batches: Iterable[Sequence[SearchResult]], limit: int) -> List[SearchResult]:
    """Merge adapter batches in order, keep the first hit per URL, then sort and truncate."""
    seen = {}
    for batch in batches:
        for result in batch:
            key = result.url or ""
            if key not in seen:
                seen[key] = result
    return sorted(seen.values(), key=_sort_key)[:limit]


def _host_of(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        return urlsplit(url.strip()).hostname
    except ValueError:
        return None


def fallback_candidates(
    title: Optional[str],
    text: Optional[str],
    source_url: Optional[str],
    keywords: Sequence[str],
    extra: Iterable[str] = (),
) -> List[str]:
    """Re-search queries, tried in order when the primary query finds nothing."""
    candidates: List[str] = []

    def add(query: str) -> None:
        if query and query.strip() and query not in candidates:
            candidates.append(query)

    if title and title.strip():
        add(f'"{title.strip()}"')

    stripped = (text or "").strip()
    if len(stripped) >= TEXT_CONFIG.FALLBACK_MIN_TEXT_LENGTH:
        add(f'"{stripped[:TEXT_CONFIG.FALLBACK_SNIPPET_LENGTH]}"')

    for keyword in keywords:
        if LATIN_RUN.fullmatch(keyword) or HANGUL_RUN.fullmatch(keyword):
            for trigger in FALLBACK_TRIGGERS:
                add(f"{keyword} {trigger}")

    host = _host_of(source_url)
    if host:
        add(f"site:{host} 공지")
        add(f"site:{host} 이벤트")

    if len(keywords) >= 2:
        add(f"{keywords[0]} {keywords[1]}")
    if len(keywords) >= 3:
        add(f"{keywords[0]} {keywords[2]}")

    for query in extra:
        add(query)
    return candidates


class SearchAggregator:
    """
    Fans a query out to every adapter concurrently and merges the results.

    Results for each exact query string are cached; concurrent identical
    queries share one computation. An adapter that fails or exceeds its
    timeout contributes nothing.
    """

    def __init__(
        self,
        adapters: Sequence[SearchAdapter],
        cache: Optional[TTLCache] = None,
        adapter_timeout: float = SEARCH_CONFIG.ADAPTER_TIMEOUT,
    ):
        self.adapters = list(adapters)
        self.cache = cache if cache is not None else TTLCache()
        self.adapter_timeout = adapter_timeout

    async def _call_adapter(self, adapter: SearchAdapter, query: str, limit: int) -> List[SearchResult]:
        try:
            return list(await asyncio.wait_for(adapter.search(query, limit), timeout=self.adapter_timeout))
        except asyncio.TimeoutError:
            logger.warning(f"Adapter {adapter.name} timed out after {self.adapter_timeout}s for query {query!r}")
            return []
        except Exception as e:
            logger.error(f"Adapter {adapter.name} failed for query {query!r}: {e}")
            return []

    async def _run_search(self, query: str, limit: int) -> Tuple[SearchResult, ...]:
        batches = await asyncio.gather(*(self._call_adapter(a, query, limit) for a in self.adapters))
        return tuple(merge_results(batches, limit))

    async def search(self, query: Optional[str], limit: int = SEARCH_CONFIG.RESULT_LIMIT) -> List[SearchResult]:
        if not query or not query.strip():
            return []
        hits = await self.cache.get_or_compute(query, lambda: self._run_search(query, limit))
        logger.info(f"query={query!r} hits={len(hits)}")
        return list(hits)

    async def resolve(
        self,
        primary_query: Optional[str],
        candidates: Iterable[str],
        limit: int = SEARCH_CONFIG.RESULT_LIMIT,
        max_fallbacks: int = SEARCH_CONFIG.MAX_FALLBACK_QUERIES,
    ) -> List[SearchResult]:
        """
        Primary query first; otherwise the first fallback candidate with any hits.
        At most max_fallbacks candidates are tried, in order.
        """
        hits = await self.search(primary_query, limit)
        if hits:
            return hits
        candidates = list(candidates)
        if len(candidates) > max_fallbacks:
            logger.warning(
                f"Fallback cascade capped at {max_fallbacks} of {len(candidates)} candidate queries"
            )
            candidates = candidates[:max_fallbacks]
        for candidate in candidates:
            more = await self.search(candidate, limit)
            logger.info(f"fallback query={candidate!r} hits={len(more)}")
            if more:
                return more
        return []
