"""
Cognition Engine Tests
======================

The end-to-end query pipeline: emotion event, routing, expert answer,
affect embellishments, history and the fused turn.
"""

import pytest

from kiacha.cognition import CognitionEngine
from kiacha.config import KiachaConfig
from kiacha.schemas import SupremeQuery

CLARIFY_TAIL = (
    "I can help with: Mathematics, Physics, Code, Medicine, Psychology, "
    "Law, Security, Creativity, Economics, or History."
)


class TestProcessQuery:

    def test_code_query(self, make_cognition):
        engine = make_cognition()
        response = engine.process_query("Can you help me debug this function?")

        assert response.domain == "code"
        assert response.confidence == 1.0
        assert response.reasoning == "[Code Expert] Applying logical deduction..."
        assert "[Code Expert] Applying logical deduction...\nDebugging approach:" in response.text
        assert response.text.startswith(response.emotional_tone)
        assert response.routing.primary_domain == "code"

    def test_no_domain_asks_for_clarification(self, make_cognition):
        response = make_cognition().process_query("hello there")

        assert response.domain == "general"
        assert response.confidence == 0.3
        assert response.reasoning == "No specific domain matched"
        assert response.text.endswith(CLARIFY_TAIL)

    def test_sends_deep_conversation_event(self, make_cognition):
        engine = make_cognition()
        engine.process_query("debug", user_id="ana")

        assert len(engine.emotion.get_history()) == 1
        assert engine.emotion.get_emotional_state().curiosity == pytest.approx(0.7)
        profile = engine.emotion.get_user_profile("ana")
        assert profile.event_counts == {"deep_conversation": 1}

    def test_context_fallback_through_engine(self, make_cognition):
        engine = make_cognition()
        engine.process_query("debug this code", user_id="ana")
        response = engine.process_query("and then?", user_id="ana")

        assert response.domain == "code"
        assert response.confidence == 0.5

    def test_warnings_and_follow_up_carried(self, make_cognition):
        response = make_cognition().process_query("what treatment for this disease")
        assert response.domain == "medicine"
        assert len(response.warnings) == 2
        assert response.follow_up == ["What specific symptoms?", "Medical history relevant?", "Current medications?"]

    def test_entities(self, make_cognition):
        response = make_cognition().process_query("Can Python debug Linux?")
        assert response.entities == ["Can", "Python", "Linux"]

    def test_accepts_supreme_query(self, make_cognition):
        engine = make_cognition()
        query = SupremeQuery(text="encrypt my disk", user_id="bo", priority="high")
        response = engine.process_query(query)

        assert response.domain == "security"
        assert engine.get_query_history() == [query]


class TestEmbellishments:
    """Affect-dependent text changes (states are before the query's own event)."""

    def test_empathy_in_psychology(self, make_cognition):
        response = make_cognition(empathy=0.8).process_query("I have anxiety and stress")
        assert response.domain == "psychology"
        assert "💭 I truly understand the weight of this. " in response.text

    def test_excitement_in_creativity(self, make_cognition):
        response = make_cognition(excitement=0.8).process_query("brainstorm an idea")
        assert "✨ This is fascinating! " in response.text

    def test_determination_in_security(self, make_cognition):
        response = make_cognition(determination=0.9).process_query("stop this attack")
        assert "🔒 We'll secure this. " in response.text

    def test_curiosity_suffix(self, make_cognition):
        response = make_cognition(curiosity=0.75).process_query("debug")
        assert response.text.endswith(" I'm curious to explore more angles with you.")

    def test_frustration_prefix_and_tone(self, make_cognition):
        response = make_cognition(frustration=0.7).process_query("debug")
        assert "😤 *Let me try that again.* " in response.emotional_tone
        assert "Let me approach this differently. " in response.text

    def test_quiet_state_adds_nothing(self, make_cognition):
        response = make_cognition(empathy=0.3).process_query("debug")
        assert response.emotional_tone == ""
        assert response.text.startswith("[Code Expert]")


class TestHistoryAndObservers:

    def test_query_history_ring(self, make_cognition):
        engine = make_cognition(history_size=3)
        for text in ("a", "b", "c", "d", "e"):
            engine.process_query(text)
        assert [q.text for q in engine.get_query_history()] == ["c", "d", "e"]

    def test_observers(self, make_cognition):
        engine = make_cognition()
        seen = []

        def broken(query, response):
            raise RuntimeError("observer down")

        engine.on_query_processed(broken)
        engine.on_query_processed(lambda q, r: seen.append((q.text, r.domain)))
        engine.process_query("debug")

        assert seen == [("debug", "code")]


class TestRespond:

    def test_turn_result(self, make_cognition):
        engine = make_cognition()
        turn = engine.respond("debug this code", user_id="ana")

        assert turn.response.domain == "code"
        assert turn.fused.original == turn.response.text
        assert turn.personality == "balanced"
        assert turn.mood == engine.emotion.get_current_mood()
        assert len(engine.fusion.get_fusion_history()) == 1

    def test_personality_strength_shows_in_turn(self, make_cognition):
        engine = make_cognition(empathy=0.3)
        assert engine.switch_personality("intelligent")
        turn = engine.respond("debug this code")

        assert "personality_strength_match" in turn.fused.emotional_adjustments
        assert turn.fused.personality_impact == "Intelligent Kiacha"


class TestPersonalityAndIntrospection:

    def test_switch_unknown_personality(self, make_cognition):
        engine = make_cognition()
        engine.switch_personality("sweet")
        assert engine.switch_personality("sweeet") is False
        assert engine.get_current_personality() == "sweet"

    def test_compare(self, make_cognition):
        result = make_cognition().compare_personalities("bold", "intelligent")
        assert result["shared_strengths"] == ["security"]

    def test_system_summary(self, make_cognition):
        engine = make_cognition()
        engine.process_query("debug")
        summary = engine.get_system_summary()
        assert summary["total_experts"] == 10
        assert summary["total_queries"] == 1

    def test_status(self, make_cognition):
        engine = make_cognition()
        engine.respond("debug", user_id="ana")
        status = engine.status()

        assert status["personality"]["id"] == "balanced"
        assert status["routing"]["total_domains"] == 10
        assert status["fusion"]["total_fusions"] == 1
        assert set(status["state"]) >= {"joy", "empathy"}


class TestFactories:

    def test_create(self):
        engine = CognitionEngine.create("bold")
        assert engine.get_current_personality() == "bold"
        assert engine.emotion.get_emotional_state().determination == 0.95

    def test_from_config(self):
        config = KiachaConfig()
        config.cognition.history_size = 1
        engine = CognitionEngine.from_config(config)
        engine.process_query("a")
        engine.process_query("b")
        assert [q.text for q in engine.get_query_history()] == ["b"]
