"""
HeartCore Emotion Engine
========================

Owns Kiacha's affect state and evolves it with fixed rules:

    event  ──► additive delta ──► clamp ──► history ring ──► observers
    decay  ──► move 2% toward 0.5 ──► clamp ──► observers

Also keeps one relationship profile per user id.

Affect is advisory, so nothing here raises for well-typed input:
unknown event kinds are logged and ignored, observer failures are logged
and swallowed after the state change has committed.

Usage:
    from kiacha.heartcore import EmotionEngine, EventKind
    from kiacha.schemas import InteractionEvent

    engine = EmotionEngine("sweet")
    engine.subscribe(lambda state: print(state.joy))
    engine.process_event(InteractionEvent(kind=EventKind.USER_PRAISE, user_id="ana"))
    print(engine.get_current_mood())
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from datetime import datetime
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

import numpy as np

from kiacha.heartcore.affect import (
    DIMENSIONS,
    EVENT_DELTAS,
    NEUTRAL_TARGET,
    AffectState,
    EventKind,
    baseline_for,
    delta_vector,
)
from kiacha.schemas import InteractionEvent, UserProfile

logger = logging.getLogger("kiacha.heartcore.emotion")

StateObserver = Callable[[AffectState], None]

# Ordered mood checks: first match wins.
MOOD_RULES: Tuple[Tuple[str, float, str], ...] = (
    ("joy", 0.7, "joyful"),
    ("frustration", 0.7, "frustrated"),
    ("excitement", 0.7, "excited"),
    ("curiosity", 0.8, "curious"),
    ("fear", 0.6, "worried"),
    ("boredom", 0.7, "bored"),
    ("empathy", 0.8, "empathetic"),
    ("determination", 0.8, "determined"),
)
NEUTRAL_MOOD = "neutral"

MOOD_EMOJI: Dict[str, str] = {
    "joyful": "😊",
    "frustrated": "😤",
    "excited": "🤩",
    "curious": "🤔",
    "worried": "😰",
    "bored": "😑",
    "empathetic": "💕",
    "determined": "💪",
    NEUTRAL_MOOD: "😐",
}

# Independent tone fragments, concatenated in this order.
TONE_RULES: Tuple[Tuple[str, float, str], ...] = (
    ("empathy", 0.75, "💬 *I understand how you feel.* "),
    ("frustration", 0.6, "😤 *Let me try that again.* "),
    ("excitement", 0.7, "✨ *How interesting!* "),
    ("determination", 0.8, "💪 *I'll solve this.* "),
)

# Event kinds grouped for deriving a user's communication style / tone
_STYLE_GROUPS: Dict[str, Tuple[str, ...]] = {
    "technical": (
        EventKind.LEARNING.value,
        EventKind.SUCCESSFUL_TASK.value,
        EventKind.ERROR_ENCOUNTERED.value,
        EventKind.SECURITY_ALERT.value,
    ),
    "creative": (EventKind.CREATIVE_TASK.value,),
    "casual": (
        EventKind.POSITIVE_INTERACTION.value,
        EventKind.USER_PRAISE.value,
        EventKind.ROUTINE_INTERACTION.value,
    ),
}
_POSITIVE_KINDS = (
    EventKind.POSITIVE_INTERACTION.value,
    EventKind.SUCCESSFUL_TASK.value,
    EventKind.USER_PRAISE.value,
    EventKind.LEARNING.value,
    EventKind.CREATIVE_TASK.value,
)
_NEGATIVE_KINDS = (
    EventKind.ERROR_ENCOUNTERED.value,
    EventKind.SECURITY_ALERT.value,
    EventKind.USER_CRITICISM.value,
    EventKind.BORING_TASK.value,
)
_TRIGGER_KINDS = (EventKind.ERROR_ENCOUNTERED.value, EventKind.USER_CRITICISM.value)


def mood_for(state: AffectState) -> str:
    """Mood label for a state (pure function of the state)."""
    for dimension, threshold, label in MOOD_RULES:
        if getattr(state, dimension) > threshold:
            return label
    return NEUTRAL_MOOD


def tone_for(state: AffectState) -> str:
    """Emotional tone prefix for a state; '' if nothing fires."""
    return "".join(
        phrase
        for dimension, threshold, phrase in TONE_RULES
        if getattr(state, dimension) > threshold
    )


class EmotionEngine:
    """Continuous emotional state plus per-user relationship tracking."""

    def __init__(
        self,
        personality: str = "balanced",
        baseline: Optional[AffectState] = None,
        history_size: int = 1000,
        decay_rate: float = 0.02,
        decay_target: float = NEUTRAL_TARGET,
        attachment_increment: float = 0.02,
        initial_attachment: float = 0.3,
    ):
        """
        Args:
            personality: Personality id, used for the baseline when none is given
            baseline: Explicit starting state (copied)
            history_size: Capacity of the post-event state history ring
            decay_rate: Fraction of the distance to the target closed per decay tick
            decay_target: Neutral point decay moves toward
            attachment_increment: Per-interaction attachment bump for user profiles
            initial_attachment: Attachment level of a new user profile
        """
        self.personality = personality
        self.decay_rate = decay_rate
        self.decay_target = decay_target
        self.attachment_increment = attachment_increment
        self.initial_attachment = initial_attachment

        self._state = baseline.copy() if baseline else baseline_for(personality)
        self._history: Deque[AffectState] = deque(maxlen=history_size)
        self._profiles: Dict[str, UserProfile] = {}
        self._observers: List[StateObserver] = []
        self._lock = threading.Lock()

        logger.info(f"HeartCore initialized with personality: {personality}")

    @classmethod
    def from_config(cls, config, baseline: Optional[AffectState] = None) -> "EmotionEngine":
        """Build from a KiachaConfig (or its ``emotion`` section)."""
        section = getattr(config, "emotion", config)
        return cls(
            personality=section.personality,
            baseline=baseline,
            history_size=section.history_size,
            decay_rate=section.decay_rate,
            decay_target=section.decay_target,
            attachment_increment=section.attachment_increment,
            initial_attachment=section.initial_attachment,
        )

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, callback: StateObserver) -> None:
        """Get called with a state copy after every state change."""
        self._observers.append(callback)

    def unsubscribe(self, callback: StateObserver) -> None:
        """Stop receiving state changes."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, state: AffectState) -> None:
        for callback in list(self._observers):
            try:
                callback(state.copy())
            except Exception:
                logger.exception("Emotion observer failed")

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def process_event(self, event: InteractionEvent) -> None:
        """Apply an interaction event. Unknown kinds are no-ops."""
        if event.kind not in EVENT_DELTAS:
            logger.warning(f"Ignoring unknown event kind: {event.kind}")
            return

        logger.debug(f"Event: {event.kind}")

        with self._lock:
            values = np.clip(self._state.as_array() + delta_vector(event.kind), 0.0, 1.0)
            self._state = AffectState.from_array(values)
            snapshot = self._state.copy()
            self._history.append(snapshot)

            if event.user_id:
                self._update_user_profile(event, snapshot)

        self._notify(snapshot)

    def emotional_decay(self) -> None:
        """Move every dimension a fixed fraction of the way to the neutral target."""
        with self._lock:
            values = self._state.as_array()
            values = np.clip(values + (self.decay_target - values) * self.decay_rate, 0.0, 1.0)
            self._state = AffectState.from_array(values)
            snapshot = self._state.copy()

        self._notify(snapshot)

    def restore_state(self, state: AffectState) -> None:
        """Replace the current state (e.g. from a caller-persisted snapshot)."""
        with self._lock:
            self._state = state.copy().clamp()
            snapshot = self._state.copy()

        self._notify(snapshot)

    def _update_user_profile(self, event: InteractionEvent, state: AffectState) -> None:
        """Create-or-update the profile for event.user_id. Caller holds the lock."""
        now = datetime.now()
        profile = self._profiles.get(event.user_id)
        if profile is None:
            profile = UserProfile(
                user_id=event.user_id,
                first_interaction_at=now,
                last_interaction_at=now,
                attachment_level=self.initial_attachment,
            )
            self._profiles[event.user_id] = profile

        profile.interaction_count += 1
        profile.last_interaction_at = now
        profile.total_joy_shared += state.joy
        profile.attachment_level = min(1.0, profile.attachment_level + self.attachment_increment)
        profile.event_counts[event.kind] = profile.event_counts.get(event.kind, 0) + 1

        data = event.data or {}
        topic = data.get("topic")
        if topic:
            topic = str(topic)
            if topic not in profile.preferred_topics:
                profile.preferred_topics.append(topic)
            if event.kind in _TRIGGER_KINDS and topic not in profile.frustration_triggers:
                profile.frustration_triggers.append(topic)

        name = data.get("preferred_name") or data.get("name")
        if name:
            profile.preferred_name = str(name)

        profile.communication_style = self._derive_style(profile.event_counts)
        profile.emotional_tone = self._derive_tone(profile.event_counts)

    @staticmethod
    def _derive_style(counts: Dict[str, int]) -> str:
        totals = {
            style: sum(counts.get(kind, 0) for kind in kinds)
            for style, kinds in _STYLE_GROUPS.items()
        }
        best = max(totals.values())
        leaders = [style for style, total in totals.items() if total == best]
        if best == 0 or len(leaders) > 1:
            return "formal"
        return leaders[0]

    @staticmethod
    def _derive_tone(counts: Dict[str, int]) -> str:
        positive = sum(counts.get(kind, 0) for kind in _POSITIVE_KINDS)
        negative = sum(counts.get(kind, 0) for kind in _NEGATIVE_KINDS)
        if positive + negative == 0:
            return "neutral"
        ratio = positive / (positive + negative)
        if ratio >= 0.7:
            return "positive"
        if ratio <= 0.3:
            return "negative"
        return "mixed"

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_emotional_state(self) -> AffectState:
        """Copy of the current state."""
        with self._lock:
            return self._state.copy()

    def get_history(self) -> List[AffectState]:
        with self._lock:
            return [s.copy() for s in self._history]

    def get_current_mood(self) -> str:
        return mood_for(self.get_emotional_state())

    def describe_mood(self) -> str:
        """Mood label with its emoji, for display."""
        mood = self.get_current_mood()
        return f"{MOOD_EMOJI[mood]} {mood.capitalize()}"

    def get_emotional_tone(self) -> str:
        return tone_for(self.get_emotional_state())

    def get_user_profile(self, user_id: Optional[str]) -> Optional[UserProfile]:
        if not user_id:
            return None
        with self._lock:
            profile = self._profiles.get(user_id)
            return profile.model_copy(deep=True) if profile else None

    def get_all_user_profiles(self) -> List[UserProfile]:
        with self._lock:
            return [p.model_copy(deep=True) for p in self._profiles.values()]

    def get_dominant_emotions(self, count: int = 3) -> List[str]:
        """Strongest dimensions, ties kept in dimension order."""
        state = self.get_emotional_state().to_dict()
        ranked = sorted(DIMENSIONS, key=lambda name: state[name], reverse=True)
        return ranked[:count]

    def get_emotional_summary(self) -> Dict[str, Any]:
        """Snapshot for logging / introspection."""
        state = self.get_emotional_state()
        with self._lock:
            user_count = len(self._profiles)
        return {
            "timestamp": datetime.now(),
            "mood": mood_for(state),
            "state": state.to_dict(),
            "dominant_emotions": self.get_dominant_emotions(3),
            "user_count": user_count,
            "personality_type": self.personality,
        }

    def average_emotion(self, dimension: str) -> float:
        """Mean of one dimension across the history (0 when empty)."""
        with self._lock:
            if not self._history or dimension not in DIMENSIONS:
                return 0.0
            values = np.array([getattr(s, dimension) for s in self._history])
        return float(np.mean(values))

    def export_emotional_history(self) -> Dict[str, Any]:
        """Full dump of state, history, profiles and simple statistics."""
        history = self.get_history()
        profiles = self.get_all_user_profiles()
        return {
            "personality": self.personality,
            "current_state": self.get_emotional_state().to_dict(),
            "history": [s.to_dict() for s in history],
            "user_profiles": [p.model_dump() for p in profiles],
            "statistics": {
                "total_history_entries": len(history),
                "unique_users": len(profiles),
                "average_joy": self.average_emotion("joy"),
                "average_frustration": self.average_emotion("frustration"),
                "average_empathy": self.average_emotion("empathy"),
            },
        }
