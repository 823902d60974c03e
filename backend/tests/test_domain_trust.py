import pytest
from confidence.domain_trust import DEFAULT_PRIOR, DEFAULT_TRUST_POLICY, DomainTrustPolicy


class TestTrustPrior:
    """Tests for DomainTrustPolicy.get_trust_prior."""

    def test_exact_ticketing_host(self):
        assert DEFAULT_TRUST_POLICY.get_trust_prior("tickets.interpark.com") == pytest.approx(0.88)

    def test_exact_from_full_url(self):
        assert DEFAULT_TRUST_POLICY.get_trust_prior("https://tickets.interpark.com/goods/1?x=y") == pytest.approx(0.88)

    def test_suffix_match(self):
        assert DEFAULT_TRUST_POLICY.get_trust_prior("foo.bar.naver.com") == pytest.approx(0.70)

    def test_bare_suffix_host(self):
        assert DEFAULT_TRUST_POLICY.get_trust_prior("naver.com") == pytest.approx(0.70)

    def test_exact_beats_suffix(self):
        assert DEFAULT_TRUST_POLICY.get_trust_prior("news.naver.com") == pytest.approx(0.86)

    def test_longest_suffix_wins(self):
        assert DEFAULT_TRUST_POLICY.get_trust_prior("https://blog.naver.com/someone/1") == pytest.approx(0.45)

    def test_common_prefix_stripped(self):
        assert DEFAULT_TRUST_POLICY.get_trust_prior("https://www.reuters.com/world") == pytest.approx(0.90)
        assert DEFAULT_TRUST_POLICY.get_trust_prior("m.bbc.com/news") == pytest.approx(0.88)

    def test_suffix_requires_label_boundary(self):
        assert DEFAULT_TRUST_POLICY.get_trust_prior("evilnaver.com") == DEFAULT_PRIOR

    @pytest.mark.parametrize("value", [None, "", "   ", "unknown-site.example"])
    def test_default_prior(self, value):
        assert DEFAULT_TRUST_POLICY.get_trust_prior(value) == DEFAULT_PRIOR

    def test_scores_clamped(self):
        policy = DomainTrustPolicy(exact=[("too-high.example", 1.7)], suffixes=[("neg.example", -0.2)])
        assert policy.get_trust_prior("too-high.example") == 1.0
        assert policy.get_trust_prior("a.neg.example") == 0.0


class TestDomainClassification:
    @pytest.mark.parametrize("host", [
        "news.naver.com",
        "https://www.yna.co.kr/view/1",
        "daily-news.example",
        "news-today.example",
        "local.news.example",
    ])
    def test_news_domains(self, host):
        assert DEFAULT_TRUST_POLICY.is_news_domain(host)

    @pytest.mark.parametrize("host", ["instagram.com", "tickets.interpark.com", None])
    def test_not_news(self, host):
        assert not DEFAULT_TRUST_POLICY.is_news_domain(host)

    def test_social(self):
        assert DEFAULT_TRUST_POLICY.is_social_domain("https://www.instagram.com/p/abc")
        assert not DEFAULT_TRUST_POLICY.is_social_domain("reuters.com")


class TestBlendWithSignals:
    def test_weights(self):
        assert DomainTrustPolicy.blend_with_signals(0.5, True, 1.0) == pytest.approx(0.70)

    def test_no_signals(self):
        assert DomainTrustPolicy.blend_with_signals(0.8, False, 0.0) == pytest.approx(0.48)

    def test_clamped(self):
        assert DomainTrustPolicy.blend_with_signals(1.0, True, 5.0) == pytest.approx(1.0)
