import asyncio
from typing import List, Optional, Sequence

from api import default_adapters
from config import Settings, logger, settings
from config.constants import KEYWORD_CONFIG, SEARCH_CONFIG
from confidence.evidence_scorer import EvidenceScorer
from confidence.verdict_engine import VerdictEngine
from exceptions import JudgeException
from extraction.facts import extract_facts
from extraction.keywords import KeywordExtractor
from extraction.query_builder import build_queries
from middleware.context import get_request_id
from models.claims import VerificationRequest
from models.verdicts import Evidence, VerificationResponse
from utils.text import normalize
from utils.ttl_cache import TTLCache
from .judge import LlmJudge, build_judge
from .llm_verifier import OpenAiVerifier
from .search_aggregator import SearchAggregator, fallback_candidates


def normalize_input(req: VerificationRequest) -> str:
    """Normalized body text, or title + source URL when the body is blank."""
    first = normalize(req.text or "")
    if first.strip():
        return first
    return normalize(f"{req.title + ' ' if req.title else ''}{req.source_url or ''}")


def merge_evidence(evidences: Sequence[Evidence]) -> str:
    return "\n".join(f"- {e.title} :: {e.snippet}" for e in evidences)


class VerificationService:
    """
    Entry point for one verification request.

    In hybrid mode: keywords -> primary query -> search with fallback cascade
    -> evidence scoring -> optional judge -> verdict. In llm mode the whole
    job goes to the LLM-only verifier and the search stack is not touched.
    """

    def __init__(
        self,
        aggregator: SearchAggregator,
        keyword_extractor: Optional[KeywordExtractor] = None,
        evidence_scorer: Optional[EvidenceScorer] = None,
        verdict_engine: Optional[VerdictEngine] = None,
        judge: Optional[LlmJudge] = None,
        llm_verifier: Optional[OpenAiVerifier] = None,
        mode: str = "hybrid",
    ):
        self.aggregator = aggregator
        self.keyword_extractor = keyword_extractor or KeywordExtractor()
        self.evidence_scorer = evidence_scorer or EvidenceScorer()
        self.verdict_engine = verdict_engine or VerdictEngine()
        self.judge = judge
        self.llm_verifier = llm_verifier
        self.mode = (mode or "hybrid").strip().lower()

    async def verify(self, req: VerificationRequest) -> VerificationResponse:
        start_time = asyncio.get_running_loop().time()
        request_id = get_request_id()

        if self.mode == "llm":
            verifier = self.llm_verifier or OpenAiVerifier()
            response = await verifier.verify(req)
        else:
            response = await self._verify_hybrid(req)

        duration = round(asyncio.get_running_loop().time() - start_time, 2)
        logger.info(
            f"[{request_id}] Verification ({self.mode}) finished: "
            f"{response.verdict} ({response.confidence}) in {duration} seconds."
        )
        return response

    async def _verify_hybrid(self, req: VerificationRequest) -> VerificationResponse:
        normalized = normalize_input(req)

        keywords = self.keyword_extractor.boosted_keywords(
            req.title, req.text, req.source_url, KEYWORD_CONFIG.BOOSTED_LIMIT
        )
        query = self.keyword_extractor.build_query(keywords)

        facts = extract_facts(req.title, req.text)
        built = build_queries(normalize(req.title or ""), normalize(req.text or ""), facts)
        candidates = fallback_candidates(req.title, req.text, req.source_url, keywords, extra=built)

        hits = await self.aggregator.resolve(query, candidates, SEARCH_CONFIG.RESULT_LIMIT)
        evidences = self.evidence_scorer.score(normalized, hits)

        judge_score = await self._run_judge(normalized, evidences) if evidences else None
        return self.verdict_engine.evaluate(normalized, keywords, evidences, judge_score)

    async def _run_judge(self, normalized: str, evidences: List[Evidence]) -> Optional[float]:
        if self.judge is None:
            return None
        try:
            return await self.judge.judge(normalized, merge_evidence(evidences))
        except JudgeException as e:
            logger.warning(f"LLM judge error, continuing without it: {e.message}")
        except Exception as e:
            logger.exception(f"Unexpected LLM judge error: {e}")
        return None


def build_verification_service(current: Optional[Settings] = None) -> VerificationService:
    """Wire the service from settings: adapters, shared search cache, judge and LLM verifier."""
    current = current or settings
    cache = TTLCache(
        ttl_seconds=current.SEARCH_CACHE_TTL_SECONDS,
        max_entries=current.SEARCH_CACHE_MAX_ENTRIES,
    )
    aggregator = SearchAggregator(
        default_adapters(current),
        cache=cache,
        adapter_timeout=current.ADAPTER_TIMEOUT_SECONDS,
    )
    return VerificationService(
        aggregator,
        judge=build_judge(current),
        llm_verifier=OpenAiVerifier(current),
        mode="llm" if current.is_llm_mode else "hybrid",
    )
