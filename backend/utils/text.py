import re
import unicodedata
from typing import Optional

from config.constants import TEXT_CONFIG

URL_PATTERN = re.compile(r"https?://\S+", re.IGNORECASE)
MULTI_SPACE = re.compile(r"\s+")

# So: emoji and other symbols, Cn: unassigned, the rest: control/format/private/surrogate
_NOISE_CATEGORIES = frozenset({"So", "Cn", "Cc", "Cf", "Co", "Cs"})

STOPWORDS = frozenset({
    "은", "는", "이", "가", "을", "를", "에", "에서", "으로", "로", "와", "과", "도", "만", "의", "하다",
    "the", "a", "an", "to", "of", "and", "or", "is", "are", "in", "on", "for", "with", "by", "at", "as", "that",
})


def _strip_noise(text: str) -> str:
    return "".join(
        " " if unicodedata.category(ch) in _NOISE_CATEGORIES else ch
        for ch in text
    )


def normalize(text: Optional[str], max_length: int = TEXT_CONFIG.MAX_NORMALIZED_LENGTH) -> str:
    """
    Normalize free text for comparison and keyword extraction.
    Removes URLs and emoji/control characters, collapses whitespace,
    lower-cases and truncates. Idempotent.
    """
    if not text:
        return ""
    t = text.strip()
    t = URL_PATTERN.sub(" ", t)
    t = _strip_noise(t)
    t = MULTI_SPACE.sub(" ", t).lower()
    if len(t) > max_length:
        t = t[:max_length]
    return t.strip()


def within_edit_distance(a: str, b: str, max_distance: int = 1) -> bool:
    """Bounded Levenshtein check; bails out as soon as a row exceeds the bound."""
    if a == b:
        return True
    if abs(len(a) - len(b)) > max_distance:
        return False

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        if min(current) > max_distance:
            return False
        previous = current
    return previous[-1] <= max_distance
