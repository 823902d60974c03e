from typing import List, Optional

from config import Settings, settings
from .base import SearchAdapter
from .naver import NaverNewsAdapter
from .google_cse import GoogleCseAdapter
from .bing import BingNewsAdapter


def default_adapters(current: Optional[Settings] = None) -> List[SearchAdapter]:
    """Adapters in registration order; results are merged in this order."""
    current = current or settings
    return [
        NaverNewsAdapter(current.NAVER_CLIENT_ID, current.NAVER_CLIENT_SECRET, current.NAVER_ENDPOINT),
        GoogleCseAdapter(current.GOOGLE_API_KEY, current.GOOGLE_CX, current.GOOGLE_ENDPOINT),
        BingNewsAdapter(current.BING_API_KEY, current.BING_ENDPOINT),
    ]


__all__ = [
    "SearchAdapter",
    "NaverNewsAdapter",
    "GoogleCseAdapter",
    "BingNewsAdapter",
    "default_adapters",
]
