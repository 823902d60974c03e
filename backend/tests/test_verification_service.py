import pytest
from unittest.mock import AsyncMock, MagicMock
from exceptions import JudgeException
from models.claims import VerificationRequest
from models.verdicts import VerificationResponse
from services.search_aggregator import SearchAggregator
from services.verification_service import (
    VerificationService,
    build_verification_service,
    merge_evidence,
    normalize_input,
)

TITLE = "서울 재즈 페스티벌 10.18 공식 예매"


@pytest.fixture
def festival_request():
    return VerificationRequest(
        platform="instagram",
        source_url="https://www.instagram.com/p/abc123/",
        language="ko",
        title=TITLE,
        text="",
    )


@pytest.fixture
def festival_aggregator(fake_adapter, make_result):
    naver = fake_adapter("naver", [make_result("https://news.naver.com/article/1", title=TITLE, source="naver")])
    return SearchAggregator([naver])


class TestNormalizeInput:
    def test_prefers_text(self):
        req = VerificationRequest(platform="x", source_url="https://a.example", title="T", text="Body TEXT")
        assert normalize_input(req) == "body text"

    def test_falls_back_to_title_and_url(self, festival_request):
        assert normalize_input(festival_request) == TITLE


@pytest.mark.asyncio
class TestHybridVerification:
    """Tests for the search-backed verification path."""

    async def test_seoul_jazz_festival(self, festival_request, festival_aggregator):
        service = VerificationService(festival_aggregator)
        response = await service.verify(festival_request)

        assert response.verdict == "LIKELY_TRUE"
        assert response.confidence == 87
        assert response.normalized_text == TITLE
        assert len(response.evidences) == 1
        assert response.evidences[0].trust_prior == pytest.approx(0.86)
        assert response.consensus_summary == f"Top sources: {TITLE}"

    async def test_no_results(self, festival_request, fake_adapter):
        service = VerificationService(SearchAggregator([fake_adapter("naver", [])]))
        response = await service.verify(festival_request)

        assert response.verdict == "UNSURE"
        assert response.confidence == 30
        assert response.evidences == ()

    async def test_fallback_cascade_used(self, festival_request, fake_adapter, make_result):
        hit = make_result("https://news.naver.com/article/1", title=TITLE)

        async def search(query, limit):
            return [hit] if query == f'"{TITLE}"' else []

        adapter = fake_adapter("naver")
        adapter.search = AsyncMock(side_effect=search)
        response = await VerificationService(SearchAggregator([adapter])).verify(festival_request)

        assert response.verdict == "LIKELY_TRUE"
        queries = [c.args[0] for c in adapter.search.await_args_list]
        assert queries[-1] == f'"{TITLE}"'
        assert len(queries) == 2

    async def test_judge_score_applied(self, festival_request, festival_aggregator):
        judge = MagicMock()
        judge.judge = AsyncMock(return_value=-1.0)
        service = VerificationService(festival_aggregator, judge=judge)

        response = await service.verify(festival_request)

        # 1.0*0.7 + 0.86*0.2 + 0
        assert response.confidence == 87
        assert "LLM adjustment used: yes" in response.rationale
        claim, merged = judge.judge.await_args.args
        assert claim == TITLE
        assert merged == f"- {TITLE} :: "

    async def test_failing_judge_treated_as_absent(self, festival_request, festival_aggregator):
        judge = MagicMock()
        judge.judge = AsyncMock(side_effect=JudgeException("HTTP 500"))
        service = VerificationService(festival_aggregator, judge=judge)

        response = await service.verify(festival_request)

        assert response.confidence == 87
        assert "LLM adjustment used: no" in response.rationale

    async def test_judge_not_called_without_evidence(self, festival_request, fake_adapter):
        judge = MagicMock()
        judge.judge = AsyncMock(return_value=1.0)
        service = VerificationService(SearchAggregator([fake_adapter("naver", [])]), judge=judge)
        await service.verify(festival_request)
        judge.judge.assert_not_awaited()


@pytest.mark.asyncio
class TestLlmMode:
    async def test_delegates_to_llm_verifier(self, festival_request, fake_adapter):
        expected = VerificationResponse(
            verdict="UNSURE", confidence=50, rationale="r", consensus_summary="c", normalized_text="n"
        )
        verifier = MagicMock()
        verifier.verify = AsyncMock(return_value=expected)
        adapter = fake_adapter("naver", [])
        service = VerificationService(SearchAggregator([adapter]), llm_verifier=verifier, mode="LLM")

        assert await service.verify(festival_request) is expected
        adapter.search.assert_not_awaited()


class TestBuildVerificationService:
    def test_hybrid_wiring(self, test_settings):
        service = build_verification_service(test_settings)
        assert service.mode == "hybrid"
        assert service.judge is None
        assert [a.name for a in service.aggregator.adapters] == ["naver", "google_cse", "bing"]
        assert service.aggregator.cache.max_entries == 2000

    def test_llm_mode_and_judge(self, test_settings):
        current = test_settings.model_copy(update={"CLEANNEWS_MODE": "llm", "AI_PROVIDER": "openai"})
        service = build_verification_service(current)
        assert service.mode == "llm"
        assert service.judge is not None


def test_merge_evidence_format():
    evidence = MagicMock(title="A", snippet="b")
    assert merge_evidence([evidence, evidence]) == "- A :: b\n- A :: b"
