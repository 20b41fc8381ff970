"""Kiacha HeartCore - emotional state and personality.

Components:
- affect: AffectState vector, event kinds and their delta table
- emotion_engine: EmotionEngine (event deltas, decay, user profiles, observers)
- personality: PersonalityProfile definitions and the PersonalityCatalog
"""

from .affect import (
    DIMENSIONS,
    EVENT_DELTAS,
    NEUTRAL_TARGET,
    PERSONALITY_BASELINES,
    AffectState,
    EventKind,
    baseline_for,
    clamp,
)

from .emotion_engine import (
    MOOD_EMOJI,
    EmotionEngine,
    mood_for,
    tone_for,
)

from .personality import (
    BALANCED,
    DEFAULT_PERSONALITY_ID,
    PREDEFINED_PROFILES,
    CommunicationStyle,
    PersonalityCatalog,
    PersonalityProfile,
)

__all__ = [
    "DIMENSIONS",
    "EVENT_DELTAS",
    "NEUTRAL_TARGET",
    "PERSONALITY_BASELINES",
    "AffectState",
    "EventKind",
    "baseline_for",
    "clamp",
    "MOOD_EMOJI",
    "EmotionEngine",
    "mood_for",
    "tone_for",
    "BALANCED",
    "DEFAULT_PERSONALITY_ID",
    "PREDEFINED_PROFILES",
    "CommunicationStyle",
    "PersonalityCatalog",
    "PersonalityProfile",
]
