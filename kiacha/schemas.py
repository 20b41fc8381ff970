"""Data schemas for Kiacha's HeartCore and Supreme Cognition layers.

Pydantic models for every record that crosses a component boundary:
events going into the emotion engine, queries and responses flowing
through cognition, routing decisions, and fusion output/history.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# HeartCore
# =============================================================================

class InteractionEvent(BaseModel):
    """Something that happened which the emotion engine should react to.

    ``kind`` is a free string: unknown kinds are accepted
    and treated as no-ops by the engine.
    """

    kind: str
    user_id: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=datetime.now)

    @field_validator("kind", mode="before")
    @classmethod
    def _enum_to_value(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value


class UserProfile(BaseModel):
    """Relationship profile kept per user id."""

    user_id: str
    interaction_count: int = 0
    first_interaction_at: datetime = Field(default_factory=datetime.now)
    last_interaction_at: datetime = Field(default_factory=datetime.now)
    total_joy_shared: float = 0.0
    attachment_level: float = 0.3
    communication_style: Literal["formal", "casual", "technical", "creative"] = "formal"
    emotional_tone: Literal["positive", "neutral", "negative", "mixed"] = "neutral"
    preferred_topics: List[str] = Field(default_factory=list)
    frustration_triggers: List[str] = Field(default_factory=list)
    preferred_name: Optional[str] = None
    event_counts: Dict[str, int] = Field(default_factory=dict)


# =============================================================================
# Routing
# =============================================================================

class DomainMatch(BaseModel):
    """One candidate domain for a query."""

    domain: str
    score: int = 0
    confidence: float = 0.0
    reasoning: str = ""
    context_inferred: bool = False


class RoutingResult(BaseModel):
    """Ranked routing decision for one query."""

    primary_domain: str = "general"
    confidence: float = 0.0
    matches: List[DomainMatch] = Field(default_factory=list)
    alternative_domains: List[str] = Field(default_factory=list)
    is_multi_domain: bool = False
    reasoning: str = "No specific domain detected"
    timestamp: datetime = Field(default_factory=datetime.now)


# =============================================================================
# Cognition
# =============================================================================

class SupremeQuery(BaseModel):
    """A question put to the cognition engine."""

    text: str
    user_id: Optional[str] = None
    context: Optional[str] = None
    priority: Literal["low", "normal", "high"] = "normal"
    timestamp: datetime = Field(default_factory=datetime.now)


class ExpertAnswer(BaseModel):
    """Canned answer produced by a domain expert."""

    answer: str
    confidence: float
    reasoning: str
    sources: List[str] = Field(default_factory=list)
    follow_up: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class SupremeResponse(BaseModel):
    """Raw (pre-fusion) response from the cognition engine."""

    text: str
    domain: str
    confidence: float
    reasoning: str
    emotional_tone: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)
    follow_up: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    entities: List[str] = Field(default_factory=list)
    routing: Optional[RoutingResult] = None


# =============================================================================
# Fusion
# =============================================================================

class FusionContext(BaseModel):
    """Input bundle for the fusion engine."""

    raw_answer: str
    domain: str = "general"
    user_profile: Optional[UserProfile] = None
    context: Optional[str] = None


class FusedResponse(BaseModel):
    """Final, stylistically adjusted response."""

    original: str
    fused: str
    emotional_adjustments: List[str] = Field(default_factory=list)
    personality_impact: str = "default"
    tone: str = "neutral"
    emotional_parts: List[str] = Field(default_factory=list)


class FusionRecord(BaseModel):
    """History entry for one fusion."""

    timestamp: datetime = Field(default_factory=datetime.now)
    original_response: str
    fused_response: str
    emotional_state: Dict[str, float]
    personality_used: str
    domain: str
    adjustments_applied: List[str] = Field(default_factory=list)


class TurnResult(BaseModel):
    """Everything a request layer needs from one query/response turn."""

    response: SupremeResponse
    fused: FusedResponse
    mood: str
    personality: str
