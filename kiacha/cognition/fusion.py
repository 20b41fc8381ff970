"""
Emotional Fusion
================

Blends a raw expert answer with the current affect state and the active
personality.

Rules run in a fixed order and are non-exclusive; each one that fires
rewrites the accumulating text and records its label:

    high_empathy_mode          empathy > 0.8, psychology / medicine
    excitement_amplification   excitement > 0.7, creativity
    determination_confidence   determination > 0.8, security / law
    frustration_acknowledgment frustration > 0.6
    curiosity_exploration      curiosity > 0.8
    boredom_mitigation         boredom > 0.6
    personalization            attachment > 0.6 and a known user
    personality_strength_match domain is one of the personality's strengths

An opening line picked from a separate priority list is prepended last.
"""

from __future__ import annotations

import logging
import re
import threading
from collections import Counter, deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

from kiacha.heartcore.affect import AffectState
from kiacha.heartcore.emotion_engine import EmotionEngine
from kiacha.heartcore.personality import PersonalityCatalog, PersonalityProfile
from kiacha.schemas import FusedResponse, FusionContext, FusionRecord, UserProfile

logger = logging.getLogger("kiacha.cognition.fusion")

EXCITEMENT_WORDS: Tuple[Tuple[str, str], ...] = (
    ("important", "✨ **incredibly important**"),
    ("interesting", "🔥 **fascinating**"),
    ("cool", "⚡ **amazing**"),
    ("good", "👍 **wonderful**"),
)

EXPLORATORY_QUESTIONS: Tuple[str, ...] = (
    "What aspects interest you most?",
    "Would you like to dive deeper?",
    "Should we explore other angles?",
    "Any specific concerns?",
    "How does this connect to your situation?",
)

ENGAGEMENT_EXAMPLE = "\n\n💡 **Here's a practical example:**\nConsider a scenario where..."

# ((dimension, threshold), ...) all exceeded -> opening line. First match wins.
OPENING_LINES: Tuple[Tuple[Tuple[Tuple[str, float], ...], str], ...] = (
    ((("joy", 0.7),), "😊 *Happy to help with this!*"),
    ((("empathy", 0.8), ("trust", 0.7)), "💙 *I understand this matters to you.*"),
    ((("excitement", 0.7),), "🤩 *This is fascinating!*"),
    ((("determination", 0.8),), "💪 *Let's tackle this together.*"),
    ((("curiosity", 0.8),), "🤔 *Let me explore this with you.*"),
)

TONE_PRIORITY: Tuple[Tuple[str, float, str], ...] = (
    ("joy", 0.7, "joyful"),
    ("empathy", 0.8, "empathetic"),
    ("excitement", 0.7, "excited"),
    ("determination", 0.8, "determined"),
    ("frustration", 0.6, "focused_resilient"),
    ("boredom", 0.6, "engaging"),
)
BALANCED_TONE = "balanced"


@dataclass
class _Draft:
    """Accumulating text plus the inputs the rules look at."""

    text: str
    state: AffectState
    domain: str
    profile: Optional[UserProfile]
    personality: PersonalityProfile


@dataclass(frozen=True)
class FusionRule:
    label: str
    marker: str
    applies: Callable[[_Draft], bool]
    apply: Callable[[_Draft], str]


def _amplify(text: str) -> str:
    for word, replacement in EXCITEMENT_WORDS:
        text = re.sub(rf"\b{word}\b", replacement, text, flags=re.IGNORECASE)
    return text


def _personalize(draft: _Draft) -> str:
    name = draft.profile.preferred_name if draft.profile else None
    if not name:
        return draft.text
    return f"{name}, {draft.text}"


def opening_line(state: AffectState) -> str:
    """Opening line for a state ('' when nothing fires)."""
    for conditions, line in OPENING_LINES:
        if all(getattr(state, dim) > threshold for dim, threshold in conditions):
            return line
    return ""


def tone_label(state: AffectState) -> str:
    for dimension, threshold, label in TONE_PRIORITY:
        if getattr(state, dimension) > threshold:
            return label
    return BALANCED_TONE


class FusionEngine:
    """Applies emotional and personality styling to raw answers."""

    def __init__(
        self,
        emotion: EmotionEngine,
        personalities: Optional[PersonalityCatalog],
        history_size: int = 500,
        exploratory_questions: int = 2,
    ):
        self.emotion = emotion
        self.personalities = personalities
        self.exploratory_questions = exploratory_questions

        self._history: Deque[FusionRecord] = deque(maxlen=history_size)
        self._lock = threading.Lock()
        self.rules = self._build_rules()

        logger.info("Emotional fusion engine initialized")

    @classmethod
    def from_config(
        cls,
        config,
        emotion: EmotionEngine,
        personalities: Optional[PersonalityCatalog],
    ) -> "FusionEngine":
        """Build from a KiachaConfig (or its ``fusion`` section)."""
        section = getattr(config, "fusion", config)
        return cls(
            emotion,
            personalities,
            history_size=section.history_size,
            exploratory_questions=section.exploratory_questions,
        )

    def _build_rules(self) -> List[FusionRule]:
        questions = "".join(
            f"\n\n**Question:** {q}"
            for q in EXPLORATORY_QUESTIONS[: self.exploratory_questions]
        )
        return [
            FusionRule(
                "high_empathy_mode", "🧡 *with compassion*",
                lambda d: d.state.empathy > 0.8 and d.domain in ("psychology", "medicine"),
                lambda d: "I truly understand how this feels. " + d.text,
            ),
            FusionRule(
                "excitement_amplification", "✨ *with excitement*",
                lambda d: d.state.excitement > 0.7 and d.domain == "creativity",
                lambda d: _amplify(d.text),
            ),
            FusionRule(
                "determination_confidence", "💪 *with confidence*",
                lambda d: d.state.determination > 0.8 and d.domain in ("security", "law"),
                lambda d: "✅ **Absolutely.** " + d.text,
            ),
            FusionRule(
                "frustration_acknowledgment", "😤 *acknowledging the challenge*",
                lambda d: d.state.frustration > 0.6,
                lambda d: "I get it, this is frustrating. But here's the path forward:\n\n" + d.text,
            ),
            FusionRule(
                "curiosity_exploration", "🤔 *inviting exploration*",
                lambda d: d.state.curiosity > 0.8,
                lambda d: d.text + questions,
            ),
            FusionRule(
                "boredom_mitigation", "🎯 *making it engaging*",
                lambda d: d.state.boredom > 0.6,
                lambda d: d.text + ENGAGEMENT_EXAMPLE,
            ),
            FusionRule(
                "personalization", "👤 *personalizing for you*",
                lambda d: d.state.attachment > 0.6 and d.profile is not None,
                _personalize,
            ),
            FusionRule(
                "personality_strength_match", "{emoji} *{name}'s expertise*",
                lambda d: d.domain in d.personality.strength_areas
                and bool(d.personality.response_patterns),
                lambda d: f"{d.personality.response_patterns[0]}\n\n{d.text}",
            ),
        ]

    def fuse_response(self, context: FusionContext) -> FusedResponse:
        """Style ``context.raw_answer`` with the current affect and personality."""
        personality = self.personalities.get_active() if self.personalities else None
        if personality is None:
            return FusedResponse(original=context.raw_answer, fused=context.raw_answer)

        state = self.emotion.get_emotional_state()
        draft = _Draft(
            text=context.raw_answer,
            state=state,
            domain=context.domain,
            profile=context.user_profile,
            personality=personality,
        )

        adjustments: List[str] = []
        parts: List[str] = []
        for rule in self.rules:
            if not rule.applies(draft):
                continue
            draft.text = rule.apply(draft)
            adjustments.append(rule.label)
            parts.append(rule.marker.format(emoji=personality.emoji, name=personality.name))

        opening = opening_line(state)
        fused = f"{opening}\n\n{draft.text}" if opening else draft.text

        logger.debug(f"Fused {context.domain} answer with {adjustments}")

        record = FusionRecord(
            original_response=context.raw_answer,
            fused_response=fused,
            emotional_state=state.to_dict(),
            personality_used=personality.id,
            domain=context.domain,
            adjustments_applied=list(adjustments),
        )
        with self._lock:
            self._history.append(record)

        return FusedResponse(
            original=context.raw_answer,
            fused=fused,
            emotional_adjustments=adjustments,
            personality_impact=personality.name,
            tone=tone_label(state),
            emotional_parts=parts,
        )

    def get_fusion_history(self) -> List[FusionRecord]:
        with self._lock:
            return list(self._history)

    def get_fusion_stats(self) -> Dict[str, Any]:
        """Number of fusions and how often each rule fired."""
        with self._lock:
            records = list(self._history)
        frequency = Counter(label for r in records for label in r.adjustments_applied)
        return {
            "total_fusions": len(records),
            "adjustment_frequency": dict(frequency),
            "timestamp": datetime.now(),
        }
