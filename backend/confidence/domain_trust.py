from typing import Dict, Iterable, Optional, Tuple
from urllib.parse import urlsplit

DEFAULT_PRIOR = 0.50

COMMON_PREFIXES = ("www.", "m.", "mobile.", "amp.")

# Trust bands:
#   0.90+      official / institutional notices
#   0.80-0.89  trusted press, official ticketing partners
#   0.60-0.79  first-party social accounts, general portal services
#   0.50       unknown
#   0.30-0.49  personal blogs, community boards
EXACT_CATALOG: Tuple[Tuple[str, float], ...] = (
    # ticketing
    ("tickets.interpark.com", 0.88),
    ("ticket.interpark.com", 0.88),
    ("ticket.yes24.com", 0.86),
    ("ticket.melon.com", 0.86),
    ("ticketlink.co.kr", 0.84),
    # official
    ("www.airpremia.com", 0.90),
    # portal news
    ("news.naver.com", 0.86),
    ("n.news.naver.com", 0.86),
    ("news.kakao.com", 0.82),
    ("media.daum.net", 0.82),
    # wire services and international outlets
    ("reuters.com", 0.90),
    ("apnews.com", 0.90),
    ("bbc.com", 0.88),
    ("bbc.co.uk", 0.88),
    ("nytimes.com", 0.88),
)

SUFFIX_CATALOG: Tuple[Tuple[str, float], ...] = (
    (".interpark.com", 0.80),
    (".yes24.com", 0.78),
    (".melon.com", 0.76),
    (".airpremia.com", 0.88),
    # portals
    (".naver.com", 0.70),
    (".daum.net", 0.80),
    # domestic press
    (".yna.co.kr", 0.85),
    (".yonhapnews.co.kr", 0.85),
    (".joongang.co.kr", 0.82),
    (".chosun.com", 0.82),
    (".donga.com", 0.82),
    (".hani.co.kr", 0.82),
    (".khan.co.kr", 0.82),
    (".kbs.co.kr", 0.84),
    (".mbc.co.kr", 0.84),
    (".sbs.co.kr", 0.84),
    # social: first-party but unverified
    (".instagram.com", 0.68),
    (".x.com", 0.66),
    (".twitter.com", 0.66),
    (".facebook.com", 0.66),
    (".youtube.com", 0.66),
    (".tiktok.com", 0.64),
    # blogs and community
    (".blog.naver.com", 0.45),
    (".cafe.naver.com", 0.42),
    (".tistory.com", 0.45),
    (".medium.com", 0.48),
    (".brunch.co.kr", 0.48),
    (".notion.site", 0.40),
    (".github.io", 0.50),
    # search/cache links
    (".google.com", 0.50),
    (".googleusercontent.com", 0.50),
)

NEWS_HOSTS = (
    "news.naver.com", "news.kakao.com", "media.daum.net",
    "yna.co.kr", "yonhapnews.co.kr", "joongang.co.kr", "chosun.com", "donga.com",
    "hani.co.kr", "khan.co.kr", "reuters.com", "apnews.com", "bbc.com", "bbc.co.uk", "nytimes.com",
)

SOCIAL_HOSTS = ("instagram.com", "x.com", "twitter.com", "facebook.com", "youtube.com", "tiktok.com")


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def strip_common_prefix(host: str) -> str:
    for prefix in COMMON_PREFIXES:
        if host.startswith(prefix):
            return host[len(prefix):]
    return host


def _host_matches(host: str, suffix: str) -> bool:
    bare = suffix[1:]
    return host == bare or host.endswith(suffix)


class DomainTrustPolicy:
    """
    Static trust priors for source domains.

    Exact host matches win; otherwise the longest registered suffix applies,
    so ".blog.naver.com" outranks ".naver.com". Hosts nobody registered get
    DEFAULT_PRIOR. Tables are filled once and only read afterwards.
    """

    def __init__(
        self,
        exact: Iterable[Tuple[str, float]] = EXACT_CATALOG,
        suffixes: Iterable[Tuple[str, float]] = SUFFIX_CATALOG,
        news_hosts: Iterable[str] = NEWS_HOSTS,
        social_hosts: Iterable[str] = SOCIAL_HOSTS,
    ):
        self._exact: Dict[str, float] = {}
        self._suffixes: Dict[str, float] = {}
        for host, score in exact:
            self._exact[strip_common_prefix(host.lower())] = clamp(score)
        for suffix, score in suffixes:
            sfx = suffix.lower()
            if not sfx.startswith("."):
                sfx = "." + sfx
            self._suffixes[sfx] = clamp(score)
        self._news = tuple("." + h.lower().lstrip(".") for h in news_hosts)
        self._social = tuple("." + h.lower().lstrip(".") for h in social_hosts)

    @staticmethod
    def normalize_host(url_or_host: Optional[str]) -> Optional[str]:
        """Accept a URL, a host/path string or a bare host and return the lowercase host."""
        if not url_or_host or not url_or_host.strip():
            return None
        raw = url_or_host.strip().lower()

        host = raw
        try:
            if "://" in raw:
                host = urlsplit(raw).hostname or raw
            elif "/" in raw:
                host = urlsplit("https://" + raw).hostname or raw
        except ValueError:
            host = raw

        return strip_common_prefix(host)

    def get_trust_prior(self, url_or_host: Optional[str]) -> float:
        host = self.normalize_host(url_or_host)
        if not host:
            return DEFAULT_PRIOR

        exact = self._exact.get(host)
        if exact is not None:
            return exact

        best_len = -1
        best: Optional[float] = None
        for sfx, score in self._suffixes.items():
            if _host_matches(host, sfx) and len(sfx) > best_len:
                best_len = len(sfx)
                best = score
        return best if best is not None else DEFAULT_PRIOR

    def is_news_domain(self, url_or_host: Optional[str]) -> bool:
        host = self.normalize_host(url_or_host)
        if not host:
            return False
        if any(_host_matches(host, sfx) for sfx in self._news):
            return True
        return "news." in host or host.startswith("news-") or "-news." in host

    def is_social_domain(self, url_or_host: Optional[str]) -> bool:
        host = self.normalize_host(url_or_host)
        if not host:
            return False
        return any(_host_matches(host, sfx) for sfx in self._social)

    @staticmethod
    def blend_with_signals(prior: float, fact_matched: bool, page_authority: float) -> float:
        """Domain prior 60%, fact match 25%, page authority 15%."""
        fact = 1.0 if fact_matched else 0.0
        return clamp(prior * 0.60 + fact * 0.25 + clamp(page_authority) * 0.15)


DEFAULT_TRUST_POLICY = DomainTrustPolicy()
