"""
Affect State
============

The ten-dimensional bounded emotional vector shared by every HeartCore
component, plus the interaction event vocabulary that moves it.

Dimensions (all in [0, 1]):
    joy, curiosity, trust, fear, frustration,
    excitement, boredom, attachment, determination, empathy

Events are additive: each known event kind maps to a fixed delta vector
which is added to the state and then clamped back into range.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, Iterable, Mapping, Tuple

import numpy as np


DIMENSIONS: Tuple[str, ...] = (
    "joy",
    "curiosity",
    "trust",
    "fear",
    "frustration",
    "excitement",
    "boredom",
    "attachment",
    "determination",
    "empathy",
)

NEUTRAL_TARGET = 0.5


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    """Clamp a value into [lo, hi]."""
    return max(lo, min(hi, value))


@dataclass
class AffectState:
    """Bounded emotional vector. Values are always kept in [0, 1]."""

    joy: float = 0.5
    curiosity: float = 0.6
    trust: float = 0.5
    fear: float = 0.1
    frustration: float = 0.0
    excitement: float = 0.4
    boredom: float = 0.2
    attachment: float = 0.3
    determination: float = 0.6
    empathy: float = 0.7

    def __post_init__(self) -> None:
        self.clamp()

    def clamp(self) -> "AffectState":
        """Force every dimension back into [0, 1]."""
        for name in DIMENSIONS:
            setattr(self, name, clamp(float(getattr(self, name))))
        return self

    def copy(self) -> "AffectState":
        return AffectState(**self.to_dict())

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in DIMENSIONS}

    def as_array(self) -> np.ndarray:
        """State as a float vector in DIMENSIONS order."""
        return np.array([getattr(self, name) for name in DIMENSIONS], dtype=np.float64)

    @classmethod
    def from_array(cls, values: Iterable[float]) -> "AffectState":
        """Build a state from a vector in DIMENSIONS order (clamped)."""
        values = np.clip(np.asarray(list(values), dtype=np.float64), 0.0, 1.0)
        if values.shape != (len(DIMENSIONS),):
            raise ValueError(f"Expected {len(DIMENSIONS)} values, got {values.shape}")
        return cls(**{name: float(v) for name, v in zip(DIMENSIONS, values)})

    @classmethod
    def from_dict(cls, data: Mapping[str, float]) -> "AffectState":
        """Build a state from a mapping; missing dimensions keep defaults."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in data.items() if k in known})


# =============================================================================
# Interaction Events
# =============================================================================

class EventKind(str, Enum):
    """The eleven interaction kinds the emotion engine reacts to."""

    POSITIVE_INTERACTION = "positive_interaction"
    SUCCESSFUL_TASK = "successful_task"
    ERROR_ENCOUNTERED = "error_encountered"
    SECURITY_ALERT = "security_alert"
    CREATIVE_TASK = "creative_task"
    DEEP_CONVERSATION = "deep_conversation"
    BORING_TASK = "boring_task"
    LEARNING = "learning"
    USER_PRAISE = "user_praise"
    USER_CRITICISM = "user_criticism"
    ROUTINE_INTERACTION = "routine_interaction"


# Additive deltas per event kind. Dimensions not listed are untouched.
EVENT_DELTAS: Dict[str, Dict[str, float]] = {
    EventKind.POSITIVE_INTERACTION.value: {"joy": 0.1, "trust": 0.05, "frustration": -0.1},
    EventKind.SUCCESSFUL_TASK.value: {"determination": 0.1, "joy": 0.15, "excitement": 0.1},
    EventKind.ERROR_ENCOUNTERED.value: {"frustration": 0.2, "determination": -0.05, "fear": 0.1},
    EventKind.SECURITY_ALERT.value: {"fear": 0.3, "determination": 0.2, "frustration": 0.15},
    EventKind.CREATIVE_TASK.value: {"excitement": 0.2, "curiosity": 0.15, "boredom": -0.2},
    EventKind.DEEP_CONVERSATION.value: {"empathy": 0.1, "attachment": 0.08, "curiosity": 0.1},
    EventKind.BORING_TASK.value: {"boredom": 0.15, "curiosity": -0.05, "excitement": -0.1},
    EventKind.LEARNING.value: {"curiosity": 0.2, "joy": 0.1, "determination": 0.05},
    EventKind.USER_PRAISE.value: {"joy": 0.25, "trust": 0.15, "attachment": 0.1},
    EventKind.USER_CRITICISM.value: {"frustration": 0.15, "trust": -0.1, "fear": 0.05},
    EventKind.ROUTINE_INTERACTION.value: {"boredom": 0.05, "curiosity": -0.02},
}


def delta_vector(kind: str) -> np.ndarray:
    """Delta vector for an event kind in DIMENSIONS order (zeros if unknown)."""
    deltas = EVENT_DELTAS.get(kind, {})
    return np.array([deltas.get(name, 0.0) for name in DIMENSIONS], dtype=np.float64)


# =============================================================================
# Personality Baselines
# =============================================================================

# Starting states per personality. "balanced" is the AffectState default.
PERSONALITY_BASELINES: Dict[str, Dict[str, float]] = {
    "balanced": AffectState().to_dict(),
    "sweet": {
        "joy": 0.75, "curiosity": 0.6, "trust": 0.85, "fear": 0.05,
        "frustration": 0.05, "excitement": 0.55, "boredom": 0.1,
        "attachment": 0.75, "determination": 0.5, "empathy": 0.95,
    },
    "bold": {
        "joy": 0.6, "curiosity": 0.7, "trust": 0.6, "fear": 0.05,
        "frustration": 0.3, "excitement": 0.85, "boredom": 0.1,
        "attachment": 0.3, "determination": 0.95, "empathy": 0.4,
    },
    "intelligent": {
        "joy": 0.55, "curiosity": 0.98, "trust": 0.75, "fear": 0.15,
        "frustration": 0.1, "excitement": 0.7, "boredom": 0.05,
        "attachment": 0.4, "determination": 0.8, "empathy": 0.5,
    },
    "mysterious": {
        "joy": 0.4, "curiosity": 0.85, "trust": 0.35, "fear": 0.4,
        "frustration": 0.25, "excitement": 0.3, "boredom": 0.35,
        "attachment": 0.3, "determination": 0.6, "empathy": 0.6,
    },
    "chaotic": {
        "joy": 0.65, "curiosity": 0.8, "trust": 0.3, "fear": 0.4,
        "frustration": 0.45, "excitement": 0.85, "boredom": 0.4,
        "attachment": 0.5, "determination": 0.5, "empathy": 0.35,
    },
}


def baseline_for(personality: str) -> AffectState:
    """Baseline state for a personality id, falling back to balanced."""
    values = PERSONALITY_BASELINES.get(personality, PERSONALITY_BASELINES["balanced"])
    return AffectState(**values)
