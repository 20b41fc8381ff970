"""
Skill Router Tests
==================

Lexical domain scoring, stable ranking and per-user context fallback.
"""

import pytest

from kiacha.cognition import DOMAIN_PATTERNS, DomainClassifier, SkillRouter
from kiacha.config import KiachaConfig


@pytest.fixture
def router():
    return DomainClassifier()


class TestScoring:

    def test_debug_function_routes_to_code(self, router):
        result = router.route_query("Can you help me debug this function?")
        assert result.primary_domain == "code"
        assert result.confidence > 0
        # "function" also matches mathematics
        assert "mathematics" in result.alternative_domains

    def test_confidence_saturates_at_three_matches(self, router):
        result = router.route_query("debug debug debug")
        top = result.matches[0]
        assert top.score == 3
        assert top.confidence == 1.0
        assert not result.is_multi_domain

    def test_case_insensitive(self, router):
        assert router.route_query("ENCRYPTION please").primary_domain == "security"

    def test_single_match_confidence(self, router):
        result = router.route_query("tell me about gravity")
        assert result.primary_domain == "physics"
        assert result.confidence == pytest.approx(1 / 3)

    def test_ties_keep_table_order(self, router):
        result = router.route_query("force equation")
        assert [m.domain for m in result.matches] == ["mathematics", "physics"]
        assert result.is_multi_domain

    def test_reasoning_names_domain(self, router):
        result = router.route_query("stock market crash")
        assert result.primary_domain == "economics"
        assert result.reasoning == "Detected economics domain - financial"


class TestFallback:

    def test_empty_text_is_general(self, router):
        result = router.route_query("")
        assert result.primary_domain == "general"
        assert result.confidence == 0
        assert result.matches == []

    def test_context_fallback_reuses_last_domain(self, router):
        first = router.route_query("debug this code", user_id="ana")
        second = router.route_query("hello there", user_id="ana")

        assert second.primary_domain == first.primary_domain == "code"
        assert second.confidence == 0.5
        assert second.matches[0].context_inferred

    def test_no_fallback_without_user(self, router):
        router.route_query("debug this code", user_id="ana")
        assert router.route_query("hello there").primary_domain == "general"

    def test_no_fallback_for_other_users(self, router):
        router.route_query("debug this code", user_id="ana")
        assert router.route_query("hello there", user_id="bo").primary_domain == "general"


class TestUserContext:

    def test_context_ring_evicts_oldest(self):
        router = DomainClassifier(context_size=3)
        for text in ("gravity", "algebra", "debug", "contract", "market"):
            router.route_query(text, user_id="ana")

        assert router.get_user_context("ana") == ["code", "law", "economics"]

    def test_clear_user_context(self, router):
        router.route_query("debug", user_id="ana")
        router.clear_user_context("ana")
        assert router.get_user_context("ana") == []
        assert router.route_query("hello", user_id="ana").primary_domain == "general"

    def test_stats(self, router):
        router.route_query("debug", user_id="ana")
        stats = router.get_routing_stats()
        assert stats["total_domains"] == len(DOMAIN_PATTERNS) == 10
        assert stats["total_users"] == 1
        assert stats["context_sizes"] == {"ana": 1}


class TestHelpers:

    @pytest.mark.parametrize("confidence,level", [(0.9, "high"), (0.8, "high"), (0.5, "medium"), (0.2, "low")])
    def test_confidence_level(self, confidence, level):
        assert DomainClassifier.get_confidence_level(confidence) == level

    def test_explain_unknown_domain(self, router):
        assert router.explain_match("astrology") == "Detected astrology domain - domain expertise"

    def test_alias(self):
        assert SkillRouter is DomainClassifier

    def test_from_config(self):
        config = KiachaConfig()
        config.routing.context_confidence = 0.4
        router = DomainClassifier.from_config(config)
        router.route_query("debug", user_id="ana")
        assert router.route_query("hello", user_id="ana").confidence == 0.4
