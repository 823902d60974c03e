import pytest
import sys
from datetime import datetime, timezone
from pathlib import Path
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def test_settings():
    """Settings with every provider configured and the judge disabled."""
    from config.settings import Settings

    return Settings(
        _env_file=None,
        CLEANNEWS_MODE="hybrid",
        AI_PROVIDER="none",
        OPENAI_API_KEY="test_openai_key",
        NAVER_CLIENT_ID="test_naver_id",
        NAVER_CLIENT_SECRET="test_naver_secret",
        GOOGLE_API_KEY="test_google_key",
        GOOGLE_CX="test_cx",
        BING_API_KEY="test_bing_key",
    )


@pytest.fixture
def make_result():
    """Factory for SearchResult objects."""
    from models.search import SearchResult

    def _make(url, title="title", snippet="", source="fake", published_at=None):
        return SearchResult(source=source, title=title, url=url, snippet=snippet, published_at=published_at)

    return _make


@pytest.fixture
def fake_adapter():
    """Factory for adapters whose search is an AsyncMock."""

    def _make(name, results=None, side_effect=None):
        adapter = MagicMock()
        adapter.name = name
        adapter.search = AsyncMock(return_value=list(results or []), side_effect=side_effect)
        return adapter

    return _make


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.AsyncClient used as an async context manager."""

    def _make(json_data=None, status_code=200, method="get", side_effect=None):
        mock_client = MagicMock()
        mock_response = MagicMock()
        mock_response.status_code = status_code
        mock_response.json.return_value = json_data
        mock_response.raise_for_status = MagicMock()
        setattr(mock_client, method, AsyncMock(return_value=mock_response, side_effect=side_effect))
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)
        return mock_client

    return _make


@pytest.fixture
def sample_naver_response():
    return {
        "items": [
            {
                "title": "<b>서울 재즈 페스티벌</b> 10.18 공식 예매",
                "originallink": "https://www.yna.co.kr/view/AKR001",
                "link": "https://n.news.naver.com/article/001/0001",
                "description": "올림픽공원에서 열리는 <b>서울 재즈 페스티벌</b> 예매 안내",
                "pubDate": "Mon, 13 Oct 2025 09:30:00 +0900",
            }
        ]
    }


@pytest.fixture
def sample_google_response():
    return {
        "items": [
            {
                "title": "Seoul Jazz Festival 2025",
                "link": "https://tickets.interpark.com/goods/123",
                "snippet": "Official ticketing page",
            }
        ]
    }


@pytest.fixture
def sample_bing_response():
    return {
        "value": [
            {
                "name": "Seoul Jazz Festival announces lineup",
                "url": "https://www.koreaherald.com/view.php?ud=1",
                "description": "The festival returns to Olympic Park.",
                "datePublished": "2025-10-12T08:00:00.0000000Z",
            }
        ]
    }


@pytest.fixture
def sample_openai_verdict():
    return {
        "verdict": "LIKELY_TRUE",
        "confidence": 82,
        "rationale": "Ticketing page and two news articles confirm date and venue.",
        "consensusSummary": "Interpark / Yonhap / Naver News",
        "normalizedText": "서울 재즈 페스티벌 10.18 공식 예매",
        "evidences": [
            {
                "source": "ticketing",
                "domain": "made-up.example",
                "title": "서울 재즈 페스티벌",
                "url": "https://tickets.interpark.com/goods/123",
                "snippet": "예매 안내",
                "publishedAt": "2025-10-01T10:00:00Z",
            },
            {
                "source": "media",
                "title": "Festival returns",
                "url": "https://www.reuters.com/world/abc",
                "snippet": "The festival returns.",
                "publishedAt": "last week",
            },
        ],
    }


@pytest.fixture
def utc():
    def _make(*args):
        return datetime(*args, tzinfo=timezone.utc)

    return _make


@pytest.fixture
def test_client():
    """TestClient whose verification service is replaced by an AsyncMock."""
    import main

    service = MagicMock()
    service.verify = AsyncMock()
    main.app.dependency_overrides[main.get_verification_service] = lambda: service
    client = TestClient(main.app, raise_server_exceptions=False)
    client.service = service
    yield client
    main.app.dependency_overrides.clear()
