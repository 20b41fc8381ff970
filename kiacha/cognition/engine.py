"""
Supreme Cognition Engine
========================

The owning orchestrator. One instance holds the emotion engine, the
personality catalog, the domain classifier, the expert registry and the
fusion engine; nothing in the cognition layer is a module-level singleton.

Query pipeline:

    query ──► history ring
          ──► deep_conversation event ──► EmotionEngine
          ──► DomainClassifier ──► expert canned answer
          ──► reasoning phrase + affect embellishments ──► SupremeResponse

``respond()`` runs the pipeline and then fuses the raw text through the
FusionEngine with the caller's user profile.

Usage:
    from kiacha.cognition import CognitionEngine

    engine = CognitionEngine.create()
    turn = engine.respond("Can you help me debug this function?")
    print(turn.fused.fused)
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from datetime import datetime
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple, Union

from kiacha.cognition.experts import DomainExpertRegistry
from kiacha.cognition.fusion import FusionEngine
from kiacha.cognition.router import GENERAL_DOMAIN, DomainClassifier
from kiacha.heartcore.affect import AffectState, EventKind
from kiacha.heartcore.emotion_engine import EmotionEngine, tone_for
from kiacha.heartcore.personality import PersonalityCatalog
from kiacha.schemas import (
    FusionContext,
    InteractionEvent,
    RoutingResult,
    SupremeQuery,
    SupremeResponse,
    TurnResult,
)
from kiacha.text_utils import extract_entities

logger = logging.getLogger("kiacha.cognition.engine")

QueryObserver = Callable[[SupremeQuery, SupremeResponse], None]

CLARIFICATION_CONFIDENCE = 0.3
CLARIFICATION_REASONING = "No specific domain matched"

# (dimension, threshold, domain or None for any, prefix, suffix)
EMBELLISHMENTS: Tuple[Tuple[str, float, Optional[str], str, str], ...] = (
    ("empathy", 0.75, "psychology", "💭 I truly understand the weight of this. ", ""),
    ("excitement", 0.7, "creativity", "✨ This is fascinating! ", ""),
    ("determination", 0.8, "security", "🔒 We'll secure this. ", ""),
    ("curiosity", 0.8, None, "", " I'm curious to explore more angles with you."),
    ("frustration", 0.6, None, "Let me approach this differently. ", ""),
)


def embellish(text: str, state: AffectState, domain: str) -> str:
    """Apply the affect/domain embellishments in order."""
    for dimension, threshold, target, prefix, suffix in EMBELLISHMENTS:
        if getattr(state, dimension) > threshold and target in (None, domain):
            text = f"{prefix}{text}{suffix}"
    return text


class CognitionEngine:
    """Routes queries to domain experts and styles the answers."""

    def __init__(
        self,
        emotion: EmotionEngine,
        personalities: PersonalityCatalog,
        classifier: DomainClassifier,
        experts: DomainExpertRegistry,
        fusion: FusionEngine,
        history_size: int = 500,
    ):
        self.emotion = emotion
        self.personalities = personalities
        self.classifier = classifier
        self.experts = experts
        self.fusion = fusion

        self._history: Deque[SupremeQuery] = deque(maxlen=history_size)
        self._observers: List[QueryObserver] = []
        self._lock = threading.Lock()

        logger.info(f"Cognition engine initialized with {len(experts)} experts")

    @classmethod
    def create(
        cls,
        personality: str = "balanced",
        history_size: int = 500,
    ) -> "CognitionEngine":
        """Wire a full engine with default components."""
        personalities = PersonalityCatalog(active=personality)
        emotion = EmotionEngine(personalities.active_id)
        return cls(
            emotion=emotion,
            personalities=personalities,
            classifier=DomainClassifier(),
            experts=DomainExpertRegistry(),
            fusion=FusionEngine(emotion, personalities),
            history_size=history_size,
        )

    @classmethod
    def from_config(cls, config) -> "CognitionEngine":
        """Wire a full engine from a KiachaConfig."""
        personalities = PersonalityCatalog(active=config.emotion.personality)
        emotion = EmotionEngine.from_config(config)
        return cls(
            emotion=emotion,
            personalities=personalities,
            classifier=DomainClassifier.from_config(config),
            experts=DomainExpertRegistry(),
            fusion=FusionEngine.from_config(config, emotion, personalities),
            history_size=config.cognition.history_size,
        )

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def on_query_processed(self, callback: QueryObserver) -> None:
        """Get called with (query, response) after every processed query."""
        self._observers.append(callback)

    def _notify(self, query: SupremeQuery, response: SupremeResponse) -> None:
        for callback in list(self._observers):
            try:
                callback(query, response)
            except Exception:
                logger.exception("Query observer failed")

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def process_query(
        self,
        query: Union[SupremeQuery, str],
        user_id: Optional[str] = None,
    ) -> SupremeResponse:
        """Answer a query with the best-matching domain expert."""
        if isinstance(query, str):
            query = SupremeQuery(text=query, user_id=user_id)

        with self._lock:
            self._history.append(query)

        self.emotion.process_event(InteractionEvent(
            kind=EventKind.DEEP_CONVERSATION,
            user_id=query.user_id,
            data={"query": query.text},
        ))

        routing = self.classifier.route_query(query.text, query.user_id)
        expert = self.experts.get(routing.primary_domain)

        if routing.primary_domain == GENERAL_DOMAIN or expert is None:
            response = self._clarification(routing)
        else:
            answer = expert.process(query.text)
            state = self.emotion.get_emotional_state()
            reasoning = f"[{expert.name}] {expert.reasoning_phrase}"
            tone = tone_for(state)
            text = embellish(f"{reasoning}\n{answer.answer}", state, expert.id)

            response = SupremeResponse(
                text=tone + text,
                domain=expert.id,
                confidence=routing.confidence,
                reasoning=reasoning,
                emotional_tone=tone,
                follow_up=answer.follow_up,
                warnings=answer.warnings,
                routing=routing,
            )

        response.entities = extract_entities(query.text)
        logger.debug(f"Processed query as {response.domain} ({response.confidence:.2f})")

        self._notify(query, response)
        return response

    def _clarification(self, routing: RoutingResult) -> SupremeResponse:
        names = self.experts.names()
        listed = ", ".join(names[:-1]) + f", or {names[-1]}" if len(names) > 1 else "".join(names)
        return SupremeResponse(
            text=(
                "I don't immediately recognize the expertise domain for this query. "
                "Could you clarify which area you'd like me to focus on? "
                f"I can help with: {listed}."
            ),
            domain=GENERAL_DOMAIN,
            confidence=CLARIFICATION_CONFIDENCE,
            reasoning=CLARIFICATION_REASONING,
            emotional_tone=self.emotion.get_emotional_tone(),
            routing=routing,
        )

    def respond(
        self,
        query: Union[SupremeQuery, str],
        user_id: Optional[str] = None,
    ) -> TurnResult:
        """Process a query and fuse the answer with affect and personality."""
        if isinstance(query, str):
            query = SupremeQuery(text=query, user_id=user_id)

        response = self.process_query(query)
        fused = self.fusion.fuse_response(FusionContext(
            raw_answer=response.text,
            domain=response.domain,
            user_profile=self.emotion.get_user_profile(query.user_id),
            context=query.context,
        ))
        return TurnResult(
            response=response,
            fused=fused,
            mood=self.emotion.get_current_mood(),
            personality=self.personalities.active_id,
        )

    # -------------------------------------------------------------------------
    # Personality
    # -------------------------------------------------------------------------

    def switch_personality(self, personality_id: str) -> bool:
        """Switch the active personality; unknown ids leave it unchanged."""
        if self.personalities.set_active(personality_id):
            return True
        suggestion = self.personalities.suggest(personality_id)
        if suggestion:
            logger.info(f"Did you mean '{suggestion}'?")
        return False

    def get_current_personality(self) -> str:
        return self.personalities.active_id

    def compare_personalities(self, id1: str, id2: str) -> Optional[Dict[str, Any]]:
        return self.personalities.compare(id1, id2)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def get_query_history(self) -> List[SupremeQuery]:
        with self._lock:
            return list(self._history)

    def get_system_summary(self) -> Dict[str, Any]:
        experts = self.experts.all()
        with self._lock:
            total_queries = len(self._history)
        return {
            "timestamp": datetime.now(),
            "total_experts": len(experts),
            "total_queries": total_queries,
            "emotional_state": self.emotion.get_emotional_state().to_dict(),
            "current_mood": self.emotion.get_current_mood(),
            "experts": [
                {
                    "id": e.id,
                    "name": e.name,
                    "keywords": list(e.keywords),
                    "confidence": e.confidence,
                }
                for e in experts
            ],
        }

    def status(self) -> Dict[str, Any]:
        """Read-only snapshot for a request layer."""
        profile = self.personalities.get_active()
        return {
            "state": self.emotion.get_emotional_state().to_dict(),
            "mood": self.emotion.get_current_mood(),
            "personality": {"id": profile.id, "name": profile.name, "emoji": profile.emoji},
            "routing": self.classifier.get_routing_stats(),
            "fusion": self.fusion.get_fusion_stats(),
        }
