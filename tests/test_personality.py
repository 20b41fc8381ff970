"""
Personality Catalog Tests
=========================

Lookup, switching (with the always-resolving balanced profile) and
comparison.
"""

import random

import pytest

from kiacha.heartcore import BALANCED, PREDEFINED_PROFILES, PersonalityCatalog


class TestLookup:

    def test_list_all_in_registration_order(self, catalog):
        ids = [p.id for p in catalog.list_all()]
        assert ids == ["sweet", "bold", "intelligent", "mysterious", "chaotic"]

    def test_balanced_always_resolves(self, catalog):
        assert "balanced" not in catalog.ids()
        assert catalog.get("balanced") is BALANCED
        assert "balanced" in catalog

    def test_unknown_id(self, catalog):
        assert catalog.get("grumpy") is None
        assert catalog.get_baseline("grumpy") is None
        assert catalog.get_communication_style("grumpy") is None
        assert catalog.get_response_pattern("grumpy") == ""

    def test_baseline_state(self, catalog):
        assert catalog.get_baseline("intelligent").curiosity == 0.98

    def test_response_pattern_comes_from_profile(self, catalog):
        pattern = catalog.get_response_pattern("sweet", rng=random.Random(3))
        assert pattern in catalog.get("sweet").response_patterns

    def test_strength_area(self, catalog):
        assert catalog.is_strength_area("bold", "security")
        assert not catalog.is_strength_area("sweet", "security")

    def test_profiles_are_immutable(self):
        with pytest.raises(AttributeError):
            PREDEFINED_PROFILES[0].name = "Sour Kiacha"


class TestSwitching:

    def test_default_is_balanced(self, catalog):
        assert catalog.active_id == "balanced"
        assert catalog.get_active() is BALANCED

    def test_switch_to_known(self, catalog):
        assert catalog.set_active("bold") is True
        assert catalog.active_id == "bold"
        assert catalog.get_active().name == "Bold Kiacha"

    def test_switch_to_unknown_leaves_state_unchanged(self, catalog):
        catalog.set_active("sweet")
        assert catalog.set_active("grumpy") is False
        assert catalog.active_id == "sweet"

    def test_unknown_initial_active_falls_back(self):
        assert PersonalityCatalog(active="grumpy").active_id == "balanced"

    def test_suggest(self, catalog):
        assert catalog.suggest("bol") == "bold"
        assert catalog.suggest("zzzzzzzz") is None


class TestCompare:

    def test_shared_strengths(self, catalog):
        result = catalog.compare("sweet", "mysterious")
        assert result["personality1"] == "Sweet Kiacha"
        assert result["personality2"] == "Mysterious Kiacha"
        assert result["shared_strengths"] == ["psychology", "creativity"]
        assert "Common strengths: psychology, creativity" in result["similarities"]

    def test_exclusive_traits(self, catalog):
        result = catalog.compare("sweet", "bold")
        assert result["shared_traits"] == []
        assert result["exclusive_traits"]["sweet"] == list(catalog.get("sweet").traits)
        assert result["exclusive_traits"]["bold"] == list(catalog.get("bold").traits)

    def test_self_comparison_shares_everything(self, catalog):
        result = catalog.compare("chaotic", "chaotic")
        assert result["shared_traits"] == list(catalog.get("chaotic").traits)

    def test_unknown_returns_none(self, catalog):
        assert catalog.compare("sweet", "grumpy") is None


def test_export(catalog):
    export = catalog.export()
    assert export["current_personality"] == "balanced"
    assert export["total_personalities"] == 5
