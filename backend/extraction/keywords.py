import re
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlsplit

from config.constants import KEYWORD_CONFIG
from utils.text import STOPWORDS, normalize, within_edit_distance

HANDLE = re.compile(r"@[A-Za-z0-9_.]+")
HASHTAG = re.compile(r"#[A-Za-z0-9_가-힣]+")
QUOTED = re.compile(r"‘([^’]+)’|\"([^\"]+)\"|\(([^)]+)\)")
TOKEN = re.compile(r"[A-Za-z0-9가-힣]{2,}")
NON_WORD = re.compile(r"[^A-Za-z0-9가-힣]")
DIGITS_ONLY = re.compile(r"\d+")

GENERIC_HOST_LABELS = frozenset({"com", "co", "kr"})

# action/announcement words only, never brand names
TRIGGER_WORDS = (
    "이벤트", "프로모션", "공지", "공식", "모집", "무료", "당첨", "체험단",
    "event", "promotion", "notice", "official", "recruit", "free", "winner", "giveaway",
)


def normalize_token(token: Optional[str]) -> str:
    if not token:
        return ""
    return NON_WORD.sub("", token).lower()


def host_tokens(url: Optional[str]) -> List[str]:
    """instagram.com -> ['instagram']; generic labels such as com/co/kr are dropped."""
    if not url or not url.strip():
        return []
    try:
        host = urlsplit(url.strip()).hostname
    except ValueError:
        return []
    if not host:
        return []
    tokens: List[str] = []
    for label in host.split("."):
        label = label.lower()
        if label in GENERIC_HOST_LABELS or len(label) < 2:
            continue
        if label not in tokens:
            tokens.append(label)
    return tokens


def _unique(tokens: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for t in tokens:
        if t not in seen:
            seen[t] = None
    return list(seen)


class KeywordExtractor:
    """Builds search keywords from a post without relying on any hard-coded brand list."""

    def __init__(self, stopwords: Iterable[str] = STOPWORDS, merge_distance: int = KEYWORD_CONFIG.MERGE_DISTANCE):
        self.stopwords = frozenset(stopwords)
        self.merge_distance = merge_distance

    def extract_entities(self, raw: Optional[str], source_url: Optional[str] = None) -> List[str]:
        """Handles, hashtags, quoted/bracketed phrases, URL host labels and trigger words, in that order."""
        raw = raw or ""
        found: List[str] = []

        found.extend(m.group()[1:] for m in HANDLE.finditer(raw))
        found.extend(m.group()[1:] for m in HASHTAG.finditer(raw))

        for m in QUOTED.finditer(raw):
            for group in m.groups():
                if group is not None and len(group.strip()) >= 2:
                    found.append(group.strip())

        found.extend(host_tokens(source_url))

        lowered = raw.lower()
        found.extend(t for t in TRIGGER_WORDS if t in lowered)

        return _unique(t for t in map(normalize_token, found) if len(t) >= 2)

    def top_keywords(self, normalized: Optional[str], limit: int) -> List[str]:
        """Most frequent non-stopword tokens, with near-duplicates folded into the first-seen spelling."""
        if not normalized or not normalized.strip() or limit <= 0:
            return []

        tf: Dict[str, int] = {}
        for m in TOKEN.finditer(normalized):
            token = m.group().lower()
            if token in self.stopwords:
                continue
            tf[token] = tf.get(token, 0) + 1

        merged: Dict[str, int] = {}
        for token, count in tf.items():
            rep = next(
                (k for k in merged if within_edit_distance(k, token, self.merge_distance)),
                token,
            )
            merged[rep] = merged.get(rep, 0) + count

        ranked = sorted(merged.items(), key=lambda kv: kv[1], reverse=True)
        return [token for token, _ in ranked[:limit]]

    def boosted_keywords(
        self,
        title: Optional[str],
        text: Optional[str],
        source_url: Optional[str],
        limit: int = KEYWORD_CONFIG.BOOSTED_LIMIT,
    ) -> List[str]:
        """Entity tokens first, then generic tokens; numeric-only tokens removed."""
        mix = f"{title or ''} {text or ''}"
        candidates = self.extract_entities(mix, source_url)
        candidates += self.top_keywords(normalize(mix), max(limit, KEYWORD_CONFIG.GENERIC_FLOOR))

        out = _unique(
            t for t in map(normalize_token, candidates)
            if len(t) >= 2 and not DIGITS_ONLY.fullmatch(t)
        )
        return out[:limit]

    @staticmethod
    def build_query(keywords: List[str]) -> str:
        return " ".join(keywords)
