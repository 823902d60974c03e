import pytest
from utils.similarity import cosine_similarity, term_frequencies


class TestCosineSimilarity:
    """Tests for cosine_similarity over term frequencies."""

    def test_identical_texts(self):
        text = "서울 재즈 페스티벌 공식 예매"
        assert cosine_similarity(text, text) == pytest.approx(1.0)

    def test_disjoint_texts(self):
        assert cosine_similarity("concert ticket", "weather forecast") == pytest.approx(0.0)

    def test_symmetric(self):
        a = "jazz festival seoul jazz"
        b = "seoul jazz lineup"
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_partial_overlap(self):
        result = cosine_similarity("jazz festival", "jazz concert")
        assert result == pytest.approx(0.5)

    @pytest.mark.parametrize("a,b", [("", "text"), ("text", ""), (None, "text"), ("   ", "text")])
    def test_blank_input(self, a, b):
        assert cosine_similarity(a, b) == 0.0

    def test_only_short_tokens(self):
        assert cosine_similarity("a b c", "a b c") == 0.0


class TestTermFrequencies:
    def test_drops_single_characters(self):
        assert term_frequencies("a bb bb c") == {"bb": 2}
