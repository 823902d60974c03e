import pytest
from datetime import date
from extraction.facts import ExtractedFacts, extract_facts
from extraction.query_builder import build_queries, generic_keywords, quote

TODAY = date(2025, 1, 1)


@pytest.fixture
def festival_facts():
    return extract_facts(
        "‘서울 재즈 페스티벌’ 10.18 공식 예매",
        "올림픽공원에서 만나요! #서울재즈 @seouljazz",
        TODAY,
    )


class TestBuildQueries:
    """Tests for build_queries."""

    def test_event_name_first(self, festival_facts):
        queries = build_queries("서울 재즈 페스티벌 10.18 공식 예매", "올림픽공원에서 만나요", festival_facts)
        assert queries[0] == '"서울 재즈 페스티벌"'
        assert queries[1] == '"서울 재즈 페스티벌" 예매'

    def test_limits(self, festival_facts):
        queries = build_queries("서울 재즈 페스티벌 10.18 공식 예매", "올림픽공원에서 만나요", festival_facts)
        assert 0 < len(queries) <= 24
        assert all(len(q) <= 120 for q in queries)
        assert len(set(queries)) == len(queries)

    def test_long_event_name_truncated(self):
        facts = ExtractedFacts(event_name="x" * 200)
        queries = build_queries("", "", facts)
        assert all(len(q) <= 120 for q in queries)

    def test_anchor_combinations_without_event(self):
        facts = ExtractedFacts(handles=("@seouljazz",), venue="올림픽공원")
        queries = build_queries("공연 안내", "", facts)
        assert "seouljazz 공식 공지" in queries
        assert "site:instagram.com seouljazz" in queries
        assert "seouljazz 예매" in queries
        assert "올림픽공원 ticket" in queries

    def test_ticketing_site_filters(self):
        queries = build_queries("콘서트 예매 오픈", "", ExtractedFacts())
        assert "콘서트 site:tickets.interpark.com" in queries
        assert "concert site:naver.com" in queries

    def test_event_templates_fill_the_cap(self):
        queries = build_queries("", "", ExtractedFacts(event_name="Blue Night"))
        assert len(queries) == 24
        assert queries[-1] == '"Blue Night" schedule'

    def test_truncated_duplicates_collapse(self):
        queries = build_queries("", "", ExtractedFacts(event_name="x" * 200))
        assert queries == ['"' + "x" * 119]

    def test_hashtag_query(self):
        queries = build_queries("", "", ExtractedFacts(hashtags=("#서울재즈",)))
        assert "#서울재즈 콘서트" in queries

    def test_place_templates_without_event(self):
        facts = ExtractedFacts(city="서울")
        queries = build_queries("", "", facts)
        assert queries == ["서울 예매", "서울 티켓", "서울 공지", "서울 라인업", "서울 concert", "서울 ticket"]

    def test_fallback_to_generic_keywords(self):
        queries = build_queries("jazz night jazz", "", None)
        assert queries == ["jazz night"]

    def test_nothing_to_search(self):
        assert build_queries("", None, None) == []


class TestHelpers:
    def test_quote_replaces_inner_quotes(self):
        assert quote('Say "hi"') == '"Say  hi"'

    def test_quote_blank(self):
        assert quote("  ") == ""

    def test_generic_keywords_skip_numbers(self):
        assert generic_keywords("2025 10.18 #2025 jazz", 5) == ["#2025", "jazz"]
