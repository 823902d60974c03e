import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

DATE_PATTERN = re.compile(
    r"(?<!\d)(?:"
    r"(20\d{2})\s*[./-]\s*(1[0-2]|0?[1-9])\s*[./-]\s*(3[01]|[12]\d|0?[1-9])"  # YYYY.MM.DD
    r"|(1[0-2]|0?[1-9])\s*월\s*(3[01]|[12]\d|0?[1-9])\s*일"                    # MM월 DD일
    r"|(1[0-2]|0?[1-9])[./-](3[01]|[12]\d|0?[1-9])"                             # MM/DD
    r")(?!\d)"
)

HANDLE = re.compile(r"@[A-Za-z0-9_.]*[A-Za-z0-9_]")
HASHTAG = re.compile(r"#[A-Za-z0-9_가-힣]+")
EVENT_QUOTE = re.compile(r"‘([^’]+)’|“([^”]+)”|\"([^\"]+)\"|「([^」]+)」")

# scanned in order, first hit wins
VENUE_HINTS = (
    "잠실실내체육관", "잠실 체육관", "잠실실내", "체육관", "올림픽공원", "KSPO DOME", "고척돔", "고척 스카이돔",
    "사직실내체육관", "수원실내체육관", "대구실내체육관", "핸드볼경기장", "올림픽홀", "경기장", "아레나", "돔", "센터",
)

CITY_HINTS = (
    "서울", "부산", "대구", "인천", "광주", "대전", "울산", "세종", "수원", "고양", "제주",
    "seoul", "busan", "daegu", "incheon", "gwangju", "daejeon", "ulsan", "jeju",
)


@dataclass(frozen=True)
class ExtractedFacts:
    """Structured facts pulled out of one post. Dates keep first-seen order and are unique."""
    dates: Tuple[date, ...] = ()
    venue: Optional[str] = None
    event_name: Optional[str] = None
    city: Optional[str] = None
    hashtags: Tuple[str, ...] = ()
    handles: Tuple[str, ...] = ()
    brand_names: Tuple[str, ...] = ()

    @property
    def date_set(self) -> frozenset:
        return frozenset(self.dates)

    @property
    def date_text(self) -> Optional[str]:
        return self.dates[0].isoformat() if self.dates else None

    def _venue_matches(self, other: "ExtractedFacts") -> bool:
        return bool(self.venue and other.venue and self.venue.lower() == other.venue.lower())

    def match_score(self, other: Optional["ExtractedFacts"]) -> float:
        if other is None:
            return 0.0
        score = 0.0
        if self.date_set & other.date_set:
            score += 0.7
        if self._venue_matches(other):
            score += 0.3
        return min(1.0, score)

    def fact_hit_explain(self, other: Optional["ExtractedFacts"]) -> Optional[str]:
        if other is None:
            return None
        date_hit = bool(self.date_set & other.date_set)
        venue_hit = self._venue_matches(other)
        if not (date_hit or venue_hit):
            return None
        return f"date match: {'Y' if date_hit else 'N'} / venue match: {'Y' if venue_hit else 'N'}"


def parse_dates(text: Optional[str], today: Optional[date] = None) -> Tuple[date, ...]:
    if not text:
        return ()
    year = (today or date.today()).year
    found: List[date] = []
    for m in DATE_PATTERN.finditer(text):
        try:
            if m.group(1):
                d = date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
            elif m.group(4):
                d = date(year, int(m.group(4)), int(m.group(5)))
            else:
                d = date(year, int(m.group(6)), int(m.group(7)))
        except ValueError:
            # e.g. 02/31
            continue
        if d not in found:
            found.append(d)
    return tuple(found)


def find_hint(text: Optional[str], hints: Tuple[str, ...]) -> Optional[str]:
    if not text:
        return None
    lowered = text.lower()
    for hint in hints:
        if hint.lower() in lowered:
            return hint
    return None


def parse_facts(text: Optional[str], today: Optional[date] = None) -> ExtractedFacts:
    """Dates and venue only; the minimal fact set used for matching two texts."""
    return ExtractedFacts(dates=parse_dates(text, today), venue=find_hint(text, VENUE_HINTS))


def _first_quoted(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    for m in EVENT_QUOTE.finditer(text):
        phrase = next((g for g in m.groups() if g), "").strip()
        if len(phrase) >= 2:
            return phrase
    return None


def _unique_matches(pattern: re.Pattern, text: str) -> Tuple[str, ...]:
    out: List[str] = []
    for m in pattern.finditer(text):
        if m.group() not in out:
            out.append(m.group())
    return tuple(out)


def extract_facts(title: Optional[str], text: Optional[str], today: Optional[date] = None) -> ExtractedFacts:
    """Full fact set for query building: dates, venue, city, hashtags, handles and the event name."""
    combined = f"{title or ''} {text or ''}".strip()
    return ExtractedFacts(
        dates=parse_dates(combined, today),
        venue=find_hint(combined, VENUE_HINTS),
        event_name=_first_quoted(title) or _first_quoted(text),
        city=find_hint(combined, CITY_HINTS),
        hashtags=_unique_matches(HASHTAG, combined),
        handles=_unique_matches(HANDLE, combined),
    )
