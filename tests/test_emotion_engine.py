"""
Emotion Engine Tests
====================

Event deltas, decay, mood and tone rules, user profiles, history ring and
observers.
"""

import random

import pytest

from kiacha.config import KiachaConfig
from kiacha.heartcore import AffectState, EmotionEngine, EventKind, mood_for, tone_for
from kiacha.heartcore.affect import DIMENSIONS
from kiacha.schemas import InteractionEvent


def event(kind, user_id=None, **data):
    return InteractionEvent(kind=kind, user_id=user_id, data=data)


# =============================================================================
# Tests: State Evolution
# =============================================================================

class TestBounds:
    """Every dimension stays in [0, 1]."""

    def test_random_event_sequences_stay_in_range(self):
        rng = random.Random(7)
        engine = EmotionEngine()
        kinds = list(EventKind)

        for _ in range(300):
            engine.process_event(event(rng.choice(kinds)))
            for name, value in engine.get_emotional_state().to_dict().items():
                assert 0.0 <= value <= 1.0, f"{name} = {value} after event"

            engine.emotional_decay()
            for name, value in engine.get_emotional_state().to_dict().items():
                assert 0.0 <= value <= 1.0, f"{name} = {value} after decay"

    def test_positive_interaction_delta(self, make_emotion):
        engine = make_emotion()
        engine.process_event(event(EventKind.POSITIVE_INTERACTION))
        state = engine.get_emotional_state()

        assert state.joy == pytest.approx(0.6)
        assert state.trust == pytest.approx(0.55)
        assert state.frustration == 0.0

    def test_repeated_praise_saturates(self, make_emotion):
        engine = make_emotion()
        for _ in range(10):
            engine.process_event(event("user_praise"))
        assert engine.get_emotional_state().joy == 1.0


class TestDecay:

    def test_decay_moves_monotonically_toward_neutral(self, make_emotion):
        engine = make_emotion(joy=1.0, fear=0.0, frustration=0.9, boredom=0.05)
        previous = {n: abs(v - 0.5) for n, v in engine.get_emotional_state().to_dict().items()}

        for _ in range(500):
            engine.emotional_decay()
            current = {n: abs(v - 0.5) for n, v in engine.get_emotional_state().to_dict().items()}
            for name in DIMENSIONS:
                assert current[name] <= previous[name] + 1e-12, name
            previous = current

        for name, distance in previous.items():
            assert distance < 1e-3, f"{name} still {distance} from neutral"

    def test_single_tick_closes_two_percent(self, make_emotion):
        engine = make_emotion(joy=1.0)
        engine.emotional_decay()
        assert engine.get_emotional_state().joy == pytest.approx(0.99)

    def test_decay_does_not_touch_history(self, make_emotion):
        engine = make_emotion()
        engine.emotional_decay()
        assert engine.get_history() == []


class TestUnknownEvents:

    def test_unknown_kind_is_a_no_op(self, make_emotion):
        engine = make_emotion()
        seen = []
        engine.subscribe(seen.append)
        before = engine.get_emotional_state()

        engine.process_event(event("teleportation", user_id="ana"))

        assert engine.get_emotional_state() == before
        assert engine.get_history() == []
        assert engine.get_user_profile("ana") is None
        assert seen == []


# =============================================================================
# Tests: Mood and Tone
# =============================================================================

class TestMood:

    def test_priority_order_wins_over_magnitude(self):
        state = AffectState(joy=0.8, frustration=0.8)
        assert mood_for(state) == "joyful"

    def test_frustration_before_excitement(self):
        assert mood_for(AffectState(frustration=0.75, excitement=0.95)) == "frustrated"

    def test_equal_states_equal_moods(self):
        assert mood_for(AffectState(fear=0.7)) == mood_for(AffectState(fear=0.7)) == "worried"

    def test_default_state_is_neutral(self, make_emotion):
        assert make_emotion().get_current_mood() == "neutral"

    def test_threshold_is_strict(self):
        assert mood_for(AffectState(joy=0.7)) == "neutral"

    def test_describe_mood_has_emoji(self, make_emotion):
        assert make_emotion(joy=0.9).describe_mood() == "😊 Joyful"


class TestTone:

    def test_no_tone_by_default(self, make_emotion):
        assert make_emotion().get_emotional_tone() == ""

    def test_fragments_concatenate_in_check_order(self):
        state = AffectState(empathy=0.8, determination=0.9, frustration=0.7)
        assert tone_for(state) == (
            "💬 *I understand how you feel.* "
            "😤 *Let me try that again.* "
            "💪 *I'll solve this.* "
        )


# =============================================================================
# Tests: History and Profiles
# =============================================================================

class TestHistory:

    def test_history_ring_evicts_oldest(self, make_emotion):
        engine = make_emotion(history_size=3)
        for _ in range(5):
            engine.process_event(event("positive_interaction"))

        history = engine.get_history()
        assert len(history) == 3
        assert [s.joy for s in history] == pytest.approx([0.8, 0.9, 1.0])

    def test_average_emotion(self, make_emotion):
        engine = make_emotion()
        assert engine.average_emotion("joy") == 0.0
        engine.process_event(event("positive_interaction"))
        engine.process_event(event("positive_interaction"))
        assert engine.average_emotion("joy") == pytest.approx(0.65)

    def test_export_contains_statistics(self, make_emotion):
        engine = make_emotion()
        engine.process_event(event("learning", user_id="ana"))
        export = engine.export_emotional_history()

        assert export["statistics"]["total_history_entries"] == 1
        assert export["statistics"]["unique_users"] == 1
        assert export["user_profiles"][0]["user_id"] == "ana"


class TestUserProfiles:

    def test_profile_created_and_updated(self, make_emotion):
        engine = make_emotion()
        engine.process_event(event("positive_interaction", user_id="ana", topic="math"))
        engine.process_event(event("learning", user_id="ana", topic="math", name="Ana"))

        profile = engine.get_user_profile("ana")
        assert profile.interaction_count == 2
        assert profile.attachment_level == pytest.approx(0.34)
        assert profile.preferred_topics == ["math"]
        assert profile.preferred_name == "Ana"
        assert profile.total_joy_shared == pytest.approx(0.6 + 0.7)

    def test_attachment_caps_at_one(self, make_emotion):
        engine = make_emotion()
        for _ in range(60):
            engine.process_event(event("routine_interaction", user_id="bo"))
        assert engine.get_user_profile("bo").attachment_level == 1.0

    def test_frustration_triggers(self, make_emotion):
        engine = make_emotion()
        engine.process_event(event("error_encountered", user_id="ana", topic="deploy"))
        engine.process_event(event("learning", user_id="ana", topic="rust"))

        profile = engine.get_user_profile("ana")
        assert profile.frustration_triggers == ["deploy"]
        assert profile.preferred_topics == ["deploy", "rust"]

    def test_style_and_tone_follow_event_mix(self, make_emotion):
        engine = make_emotion()
        for _ in range(3):
            engine.process_event(event("creative_task", user_id="ana"))

        profile = engine.get_user_profile("ana")
        assert profile.communication_style == "creative"
        assert profile.emotional_tone == "positive"

    def test_returned_profile_is_a_copy(self, make_emotion):
        engine = make_emotion()
        engine.process_event(event("learning", user_id="ana"))
        engine.get_user_profile("ana").preferred_topics.append("tampered")
        assert engine.get_user_profile("ana").preferred_topics == []

    def test_anonymous_events_create_no_profile(self, make_emotion):
        engine = make_emotion()
        engine.process_event(event("learning"))
        assert engine.get_all_user_profiles() == []
        assert engine.get_user_profile(None) is None


# =============================================================================
# Tests: Observers and Introspection
# =============================================================================

class TestObservers:

    def test_observer_gets_post_clamp_copy(self, make_emotion):
        engine = make_emotion(joy=0.95)
        seen = []
        engine.subscribe(seen.append)
        engine.process_event(event("user_praise"))

        assert len(seen) == 1
        assert seen[0].joy == 1.0
        seen[0].joy = 0.0
        assert engine.get_emotional_state().joy == 1.0

    def test_failing_observer_does_not_block_others(self, make_emotion):
        engine = make_emotion()
        seen = []

        def broken(state):
            raise RuntimeError("observer down")

        engine.subscribe(broken)
        engine.subscribe(seen.append)
        engine.process_event(event("learning"))

        assert len(seen) == 1
        assert engine.get_emotional_state().curiosity == pytest.approx(0.8)

    def test_unsubscribe(self, make_emotion):
        engine = make_emotion()
        seen = []
        engine.subscribe(seen.append)
        engine.unsubscribe(seen.append)
        engine.emotional_decay()
        assert seen == []

    def test_decay_and_restore_notify(self, make_emotion):
        engine = make_emotion()
        seen = []
        engine.subscribe(seen.append)
        engine.emotional_decay()
        engine.restore_state(AffectState(joy=0.9))

        assert len(seen) == 2
        assert engine.get_emotional_state().joy == 0.9


class TestIntrospection:

    def test_dominant_emotions_keep_dimension_order_on_ties(self, make_emotion):
        assert make_emotion().get_dominant_emotions() == ["empathy", "curiosity", "determination"]

    def test_summary(self, make_emotion):
        summary = make_emotion().get_emotional_summary()
        assert summary["mood"] == "neutral"
        assert summary["user_count"] == 0
        assert summary["personality_type"] == "balanced"

    def test_personality_sets_baseline(self):
        assert EmotionEngine("sweet").get_emotional_state().empathy == 0.95

    def test_from_config(self):
        config = KiachaConfig()
        config.emotion.history_size = 2
        config.emotion.personality = "bold"
        engine = EmotionEngine.from_config(config)

        for _ in range(4):
            engine.process_event(event("learning"))
        assert len(engine.get_history()) == 2
        assert engine.personality == "bold"
