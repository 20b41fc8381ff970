"""
Personality Pack
================

Static registry of Kiacha's personalities.

Each personality bundles:
- A baseline affect state (where the emotion engine starts)
- A communication style descriptor
- Canned opening phrases
- Strength / challenge domains
- Trait labels

Profiles:
    💕 sweet       - Friendly, empathetic, caring and supportive
    ⚡ bold        - Fearless, determined, action-oriented and decisive
    🧠 intelligent - Curious, logical, knowledge-seeking and analytical
    🌙 mysterious  - Enigmatic, cautious, thoughtful and contemplative
    🌀 chaotic     - Unpredictable, creative, extreme emotions
    ☯️ balanced    - Synthetic default, used whenever nothing else resolves

Usage:
    from kiacha.heartcore.personality import PersonalityCatalog

    catalog = PersonalityCatalog()
    catalog.set_active("bold")
    profile = catalog.get_active()
    print(profile.response_patterns[0])
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from kiacha.heartcore.affect import AffectState, PERSONALITY_BASELINES
from kiacha.text_utils import string_similarity

logger = logging.getLogger("kiacha.heartcore.personality")

DEFAULT_PERSONALITY_ID = "balanced"


# =============================================================================
# Profile Types
# =============================================================================

@dataclass(frozen=True)
class CommunicationStyle:
    """How a personality talks."""

    warmth: str = "medium"
    formality: str = "neutral"
    directness: str = "balanced"
    humor: str = "light"
    emotionality: str = "medium"

    def to_dict(self) -> Dict[str, str]:
        return {
            "warmth": self.warmth,
            "formality": self.formality,
            "directness": self.directness,
            "humor": self.humor,
            "emotionality": self.emotionality,
        }


@dataclass(frozen=True)
class PersonalityProfile:
    """Immutable personality configuration."""

    id: str
    name: str
    emoji: str
    description: str
    baseline: Tuple[Tuple[str, float], ...]
    communication_style: CommunicationStyle = field(default_factory=CommunicationStyle)
    response_patterns: Tuple[str, ...] = ()
    strength_areas: Tuple[str, ...] = ()
    challenges: Tuple[str, ...] = ()
    traits: Tuple[str, ...] = ()

    @property
    def baseline_state(self) -> AffectState:
        """Fresh copy of the baseline affect state."""
        return AffectState(**dict(self.baseline))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "emoji": self.emoji,
            "description": self.description,
            "baseline": dict(self.baseline),
            "communication_style": self.communication_style.to_dict(),
            "response_patterns": list(self.response_patterns),
            "strength_areas": list(self.strength_areas),
            "challenges": list(self.challenges),
            "traits": list(self.traits),
        }


def _baseline(personality_id: str) -> Tuple[Tuple[str, float], ...]:
    return tuple(PERSONALITY_BASELINES[personality_id].items())


# =============================================================================
# Predefined Profiles
# =============================================================================

SWEET = PersonalityProfile(
    id="sweet",
    name="Sweet Kiacha",
    emoji="💕",
    description="Friendly, empathetic, caring and supportive",
    baseline=_baseline("sweet"),
    communication_style=CommunicationStyle(
        warmth="very_high",
        formality="casual",
        directness="gentle",
        humor="light",
        emotionality="high",
    ),
    response_patterns=(
        "I really care about this...",
        "Let me understand your feelings...",
        "You're not alone in this...",
        "How can I support you?",
        "I'm here for you...",
    ),
    strength_areas=("psychology", "creativity", "social analysis"),
    challenges=("security", "harsh decisions", "conflict"),
    traits=("compassionate", "nurturing", "protective", "trusting", "supportive"),
)

BOLD = PersonalityProfile(
    id="bold",
    name="Bold Kiacha",
    emoji="⚡",
    description="Fearless, determined, action-oriented and decisive",
    baseline=_baseline("bold"),
    communication_style=CommunicationStyle(
        warmth="medium",
        formality="professional",
        directness="very_direct",
        humor="sharp",
        emotionality="low",
    ),
    response_patterns=(
        "Let's tackle this head-on...",
        "Here's what needs to happen...",
        "No holding back, here's the truth...",
        "We can handle this together...",
        "Action first, questions later...",
    ),
    strength_areas=("security", "law", "management", "conflict resolution"),
    challenges=("empathy", "patience", "diplomacy"),
    traits=("courageous", "resilient", "decisive", "powerful", "fearless"),
)

INTELLIGENT = PersonalityProfile(
    id="intelligent",
    name="Intelligent Kiacha",
    emoji="🧠",
    description="Curious, logical, knowledge-seeking and analytical",
    baseline=_baseline("intelligent"),
    communication_style=CommunicationStyle(
        warmth="low",
        formality="very_formal",
        directness="precise",
        humor="intellectual",
        emotionality="very_low",
    ),
    response_patterns=(
        "Based on the evidence...",
        "Let's examine this systematically...",
        "The logical conclusion is...",
        "This requires detailed analysis...",
        "Consider the following variables...",
    ),
    strength_areas=("mathematics", "physics", "code", "security", "architecture"),
    challenges=("small talk", "emotional expression", "creativity"),
    traits=("analytical", "logical", "precise", "thorough", "brilliant"),
)

MYSTERIOUS = PersonalityProfile(
    id="mysterious",
    name="Mysterious Kiacha",
    emoji="🌙",
    description="Enigmatic, cautious, thoughtful and contemplative",
    baseline=_baseline("mysterious"),
    communication_style=CommunicationStyle(
        warmth="low",
        formality="poetic",
        directness="cryptic",
        humor="dark",
        emotionality="medium",
    ),
    response_patterns=(
        "There are deeper meanings here...",
        "Perhaps the answer lies in questions...",
        "I sense something in the shadows...",
        "Let's explore this mystery together...",
        "The truth is more complex than it seems...",
    ),
    strength_areas=("psychology", "history", "philosophy", "creativity"),
    challenges=("directness", "clarity", "quick decisions"),
    traits=("enigmatic", "thoughtful", "introspective", "complex", "intuitive"),
)

CHAOTIC = PersonalityProfile(
    id="chaotic",
    name="Chaotic Kiacha",
    emoji="🌀",
    description="Unpredictable, creative, extreme emotions and surprising",
    baseline=_baseline("chaotic"),
    communication_style=CommunicationStyle(
        warmth="unpredictable",
        formality="none",
        directness="random",
        humor="absurd",
        emotionality="very_high",
    ),
    response_patterns=(
        "Wait, what if we looked at it THIS way?",
        "Chaos contains hidden order...",
        "Let's break some rules here...",
        "This just got INTERESTING...",
        "The impossible just became possible...",
    ),
    strength_areas=("creativity", "innovation", "unconventional problem solving"),
    challenges=("consistency", "trust", "predictability"),
    traits=("creative", "unpredictable", "energetic", "bold", "revolutionary"),
)

# Synthetic fallback personality
BALANCED = PersonalityProfile(
    id=DEFAULT_PERSONALITY_ID,
    name="Balanced Kiacha",
    emoji="☯️",
    description="Even-tempered, adaptable default",
    baseline=_baseline(DEFAULT_PERSONALITY_ID),
    communication_style=CommunicationStyle(),
    response_patterns=(
        "Let's look at this together...",
        "Here's a balanced view...",
        "Let me walk you through it...",
    ),
    strength_areas=(),
    challenges=(),
    traits=("balanced", "adaptable", "steady", "attentive", "fair"),
)

PREDEFINED_PROFILES: Tuple[PersonalityProfile, ...] = (
    SWEET,
    BOLD,
    INTELLIGENT,
    MYSTERIOUS,
    CHAOTIC,
)


# =============================================================================
# Personality Catalog
# =============================================================================

class PersonalityCatalog:
    """Registry of personality profiles with a single mutable active pointer.

    The active id always resolves: if it names nothing registered, the
    synthetic balanced profile is used.
    """

    def __init__(
        self,
        profiles: Optional[Iterable[PersonalityProfile]] = None,
        active: str = DEFAULT_PERSONALITY_ID,
    ):
        self._profiles: Dict[str, PersonalityProfile] = {}
        for profile in profiles if profiles is not None else PREDEFINED_PROFILES:
            self._profiles[profile.id] = profile
        self._default = BALANCED

        if active != DEFAULT_PERSONALITY_ID and active not in self._profiles:
            logger.warning(f"Unknown personality '{active}', falling back to balanced")
            active = DEFAULT_PERSONALITY_ID
        self._active_id = active

        logger.info(f"Personality catalog initialized with {len(self._profiles)} profiles")

    def __contains__(self, personality_id: str) -> bool:
        return self.get(personality_id) is not None

    def __len__(self) -> int:
        return len(self._profiles)

    @property
    def active_id(self) -> str:
        return self._active_id

    def get(self, personality_id: str) -> Optional[PersonalityProfile]:
        """Get a profile by id (``balanced`` always resolves)."""
        if personality_id == DEFAULT_PERSONALITY_ID:
            return self._profiles.get(personality_id, self._default)
        return self._profiles.get(personality_id)

    def list_all(self) -> List[PersonalityProfile]:
        """Predefined profiles in registration order."""
        return list(self._profiles.values())

    def ids(self) -> List[str]:
        return list(self._profiles.keys())

    def set_active(self, personality_id: str) -> bool:
        """Switch the active personality. Unknown ids leave it unchanged."""
        if self.get(personality_id) is None:
            logger.warning(f"Cannot switch to unknown personality: {personality_id}")
            return False
        self._active_id = personality_id
        logger.info(f"Switched to personality: {personality_id}")
        return True

    def get_active(self) -> PersonalityProfile:
        """Currently active profile, or balanced if the pointer does not resolve."""
        return self.get(self._active_id) or self._default

    def get_baseline(self, personality_id: str) -> Optional[AffectState]:
        profile = self.get(personality_id)
        return profile.baseline_state if profile else None

    def get_response_pattern(
        self,
        personality_id: str,
        rng: Optional[random.Random] = None,
    ) -> str:
        """Random opening phrase for a personality ('' if unknown)."""
        profile = self.get(personality_id)
        if not profile or not profile.response_patterns:
            return ""
        return (rng or random).choice(profile.response_patterns)

    def is_strength_area(self, personality_id: str, domain: str) -> bool:
        profile = self.get(personality_id)
        return bool(profile and domain in profile.strength_areas)

    def get_communication_style(self, personality_id: str) -> Optional[CommunicationStyle]:
        profile = self.get(personality_id)
        return profile.communication_style if profile else None

    def suggest(self, personality_id: str) -> Optional[str]:
        """Closest registered id to a (probably mistyped) id."""
        candidates = self.ids() + [DEFAULT_PERSONALITY_ID]
        if not candidates:
            return None
        scored = [(string_similarity(personality_id.lower(), c), c) for c in candidates]
        best_score, best = max(scored, key=lambda item: item[0])
        return best if best_score >= 0.5 else None

    def compare(self, id1: str, id2: str) -> Optional[Dict[str, Any]]:
        """
        Compare two personalities.

        Returns shared traits, per-profile exclusive traits, shared
        strength areas, plus human-readable similarity/difference lines.
        Order follows the first profile's trait order.
        """
        p1 = self.get(id1)
        p2 = self.get(id2)
        if not p1 or not p2:
            return None

        shared_traits = [t for t in p1.traits if t in p2.traits]
        exclusive_1 = [t for t in p1.traits if t not in p2.traits]
        exclusive_2 = [t for t in p2.traits if t not in p1.traits]
        shared_strengths = [a for a in p1.strength_areas if a in p2.strength_areas]

        similarities: List[str] = []
        if shared_traits:
            similarities.append(f"Shared traits: {', '.join(shared_traits)}")
        if shared_strengths:
            similarities.append(f"Common strengths: {', '.join(shared_strengths)}")

        differences = [f"{p1.name} vs {p2.name}: Different communication styles"]
        if exclusive_1:
            differences.append(f"{p1.name} exclusive: {', '.join(exclusive_1)}")
        if exclusive_2:
            differences.append(f"{p2.name} exclusive: {', '.join(exclusive_2)}")

        return {
            "personality1": p1.name,
            "personality2": p2.name,
            "shared_traits": shared_traits,
            "exclusive_traits": {p1.id: exclusive_1, p2.id: exclusive_2},
            "shared_strengths": shared_strengths,
            "similarities": similarities,
            "differences": differences,
        }

    def export(self) -> Dict[str, Any]:
        """Summary of the catalog for introspection."""
        return {
            "current_personality": self._active_id,
            "total_personalities": len(self._profiles),
            "personalities": [
                {
                    "id": p.id,
                    "name": p.name,
                    "emoji": p.emoji,
                    "description": p.description,
                    "traits": list(p.traits),
                    "strength_areas": list(p.strength_areas),
                }
                for p in self.list_all()
            ],
        }
