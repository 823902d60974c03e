from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SearchResult:
    """A single hit returned by a search adapter. Identity for dedup is the url."""
    source: str
    title: str
    url: str
    snippet: str
    published_at: Optional[datetime] = None
