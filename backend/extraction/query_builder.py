import re
import unicodedata
from typing import Dict, List, Optional

from config.constants import TEXT_CONFIG
from .facts import ExtractedFacts

SPLIT = re.compile(r"[^\w#@.]+")
WHITESPACE = re.compile(r"\s+")
ALNUM = re.compile(r"[^\W_]")

STOP_KO = frozenset({
    "그리고", "그러나", "하지만", "또는", "및", "또", "등", "은", "는", "이", "가", "을", "를", "에", "의",
    "도", "만", "로", "으로", "에서", "에게", "했다", "합니다", "오늘", "이번", "해당", "관련", "제", "좀",
    "더", "수", "있는", "없는", "입니다", "대한", "때문", "중", "동안", "예정", "가능", "공지", "안내",
})

STOP_EN = frozenset({
    "the", "a", "an", "and", "or", "but", "to", "of", "in", "on", "for", "with", "at", "by", "as", "is", "are",
    "this", "that", "these", "those", "be", "been", "was", "were", "it", "its", "from", "about", "we", "you",
    "they", "i", "he", "she", "them", "our", "your", "their", "will", "can", "may", "more", "most", "over",
})

TICKET_KO = ("예매", "티켓", "티켓오픈", "공지", "안내", "라인업", "공식", "콘서트", "공연", "일정", "좌석", "가격")
TICKET_EN = (
    "ticket", "tickets", "ticketing", "on sale", "lineup", "official", "concert", "show",
    "notice", "announcement", "schedule", "venue", "seating", "price", "booking",
)
TICKETING_TRIGGERS = ("예매", "티켓", "티켓오픈", "공연", "콘서트", "라인업", "NOL", "인터파크", "멜론티켓", "예스24")
ANCHOR_SUFFIXES = ("예매", "티켓", "공지", "라인업", "concert", "ticket")

# (site, fallback term when no event name is known)
TICKETING_SITES = (
    ("tickets.interpark.com", "콘서트"),
    ("ticket.interpark.com", "콘서트"),
    ("interpark.com", "콘서트"),
    ("interpark.com", "concert"),
    ("naver.com", "concert"),
)


def _spaces(s: Optional[str]) -> str:
    return WHITESPACE.sub(" ", s or "").strip()


def _sanitize(s: Optional[str]) -> str:
    if not s:
        return ""
    s = unicodedata.normalize("NFKC", s)
    s = s.replace("“", '"').replace("”", '"').replace("‘", "'").replace("’", "'")
    return _spaces(s)


def quote(s: Optional[str]) -> str:
    if not s or not s.strip():
        return ""
    return '"' + s.replace('"', " ").strip() + '"'


def _quote_or(prefer: Optional[str], fallback: str) -> str:
    return quote(prefer) if prefer and prefer.strip() else fallback


def generic_keywords(text: str, limit: int) -> List[str]:
    """Frequency-ranked tokens; numeric-only tokens are skipped unless they are #tags or @handles."""
    if not text or not text.strip():
        return []
    freq: Dict[str, int] = {}
    for token in SPLIT.split(text.lower()):
        token = token.strip()
        if len(token) <= 1 or token in STOP_KO or token in STOP_EN:
            continue
        if not token.startswith(("#", "@")):
            has_letter = any(c.isalpha() for c in token)
            if not has_letter and any(c.isdigit() for c in token):
                continue
        freq[token] = freq.get(token, 0) + 1
    ranked = sorted(freq.items(), key=lambda kv: kv[1], reverse=True)
    return [token for token, _ in ranked[:limit]]


def collect_anchors(facts: Optional[ExtractedFacts]) -> List[str]:
    if facts is None:
        return []
    anchors: List[str] = []

    def add(value: Optional[str]) -> None:
        if value and value.strip() and value not in anchors:
            anchors.append(value)

    for brand in facts.brand_names:
        add(brand)
    for handle in facts.handles:
        add(handle[1:] if handle.startswith("@") else handle)
    for tag in facts.hashtags:
        if tag.startswith("#"):
            add(tag)
    add(facts.venue)
    add(facts.city)
    return anchors


def _clean(queries: List[str]) -> List[str]:
    out: List[str] = []
    for q in queries:
        q = _spaces(q).replace("''", "'").replace('""', '"')
        q = q[:TEXT_CONFIG.MAX_QUERY_LENGTH]
        if not ALNUM.search(q) or q in out:
            continue
        out.append(q)
        if len(out) >= TEXT_CONFIG.MAX_QUERY_CANDIDATES:
            break
    return out


def _fallback(title: str, body: str, facts: Optional[ExtractedFacts]) -> List[str]:
    event = facts.event_name if facts else None
    if event and event.strip():
        return [quote(event), quote(event) + " 예매", quote(event) + " ticket"]
    keywords = generic_keywords(f"{title} {body}", 5)
    return [" ".join(keywords)] if keywords else []


def build_queries(norm_title: Optional[str], norm_body: Optional[str], facts: Optional[ExtractedFacts]) -> List[str]:
    """
    Build search queries from event name, anchors (brands, handles, hashtags,
    venue, city), dates and ticketing context.

    Returns at most 24 unique queries of at most 120 characters each. The
    strings are not URL-encoded.
    """
    title = _sanitize(norm_title)
    body = _sanitize(norm_body)
    combined = f"{title} {body}"

    anchors = collect_anchors(facts)
    generic = generic_keywords(combined, 10)
    event = facts.event_name if facts and facts.event_name and facts.event_name.strip() else None

    queries: List[str] = []

    if event:
        ev = quote(event)
        queries.append(ev)
        queries.extend(f"{ev} {kw}" for kw in TICKET_KO)
        queries.extend(f"{ev} {kw}" for kw in TICKET_EN)

        for anchor in anchors:
            queries.append(f"{anchor} {ev}")
            queries.append(f"{ev} {anchor}")

        place = facts.venue or facts.city
        if place:
            queries.append(f"{ev} {place}")
            queries.append(f"{ev} {place} 일정")
            queries.append(f"{ev} {place} schedule")
        if facts.date_text:
            queries.append(f"{ev} {facts.date_text}")
            queries.append(f"{ev} {facts.date_text} 예매")

    if facts is not None:
        queries.extend(f"{tag} 콘서트" for tag in facts.hashtags if tag.startswith("#"))
        for handle in facts.handles:
            if handle.startswith("@"):
                bare = handle[1:]
                queries.append(f"{bare} 공식 공지")
                queries.append(f"site:instagram.com {bare}")

    lowered = combined.lower()
    if event or any(t.lower() in lowered for t in TICKETING_TRIGGERS):
        for site, term in TICKETING_SITES:
            queries.append(f"{_quote_or(event, term)} site:{site}")

    if event and generic:
        queries.append(f"{quote(event)} {' '.join(generic[:5])}")

    if not event:
        for anchor in anchors:
            queries.extend(f"{anchor} {suffix}" for suffix in ANCHOR_SUFFIXES)

    cleaned = _clean(queries)
    if not cleaned:
        cleaned = _clean(_fallback(title, body, facts))
    return cleaned
