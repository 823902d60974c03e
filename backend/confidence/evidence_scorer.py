from typing import Iterable, List, Optional
from urllib.parse import urlsplit

from config.constants import VERDICT_CONFIG
from models.search import SearchResult
from models.verdicts import Evidence
from utils.similarity import cosine_similarity
from .domain_trust import DEFAULT_TRUST_POLICY, DomainTrustPolicy, clamp


def extract_domain(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


class EvidenceScorer:
    """Turns raw search results into Evidence ranked by similarity to the normalized post."""

    def __init__(self, trust_policy: DomainTrustPolicy = DEFAULT_TRUST_POLICY, max_evidences: int = VERDICT_CONFIG.MAX_EVIDENCES):
        self.trust_policy = trust_policy
        self.max_evidences = max_evidences

    def to_evidence(self, normalized: str, result: SearchResult) -> Evidence:
        compared = f"{result.title or ''} {result.snippet or ''}".lower()
        domain = extract_domain(result.url)
        return Evidence(
            source=result.source,
            domain=domain,
            title=result.title or "",
            url=result.url or "",
            snippet=result.snippet or "",
            published_at=result.published_at,
            # float error can push an identical pair a hair above 1.0
            similarity=clamp(cosine_similarity(normalized, compared)),
            trust_prior=self.trust_policy.get_trust_prior(domain),
        )

    def score(self, normalized: str, results: Iterable[SearchResult]) -> List[Evidence]:
        evidences = [self.to_evidence(normalized, r) for r in results]
        evidences.sort(key=lambda e: e.similarity, reverse=True)
        return evidences[:self.max_evidences]
