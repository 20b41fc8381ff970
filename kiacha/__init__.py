"""Kiacha - an affect-driven response fusion core.

Free text goes in, a styled answer comes out:

1. HeartCore keeps a bounded ten-dimensional emotional state and a
   relationship profile per user
2. The skill router classifies the text into one of ten knowledge domains
3. A domain expert supplies a canned answer
4. The fusion engine restyles that answer from the current emotional state
   and the active personality

Subpackages:
- heartcore: AffectState, EmotionEngine, PersonalityCatalog
- cognition: DomainClassifier, DomainExpertRegistry, FusionEngine, CognitionEngine

Supporting modules:
- schemas: Pydantic models for every record crossing a component boundary
- config: YAML configuration loading and management
- text_utils: entity extraction and string similarity
- cli: the ``kiacha`` command
"""

from .schemas import (
    InteractionEvent,
    UserProfile,
    DomainMatch,
    RoutingResult,
    SupremeQuery,
    ExpertAnswer,
    SupremeResponse,
    FusionContext,
    FusedResponse,
    FusionRecord,
    TurnResult,
)

from .config import (
    KiachaConfig,
    get_config,
    load_config,
    save_config,
)

from .heartcore import (
    AffectState,
    EmotionEngine,
    EventKind,
    PersonalityCatalog,
    PersonalityProfile,
)

from .cognition import (
    CognitionEngine,
    DomainClassifier,
    DomainExpertRegistry,
    FusionEngine,
    SkillRouter,
)

__version__ = "0.1.0"

__all__ = [
    "InteractionEvent",
    "UserProfile",
    "DomainMatch",
    "RoutingResult",
    "SupremeQuery",
    "ExpertAnswer",
    "SupremeResponse",
    "FusionContext",
    "FusedResponse",
    "FusionRecord",
    "TurnResult",
    "KiachaConfig",
    "get_config",
    "load_config",
    "save_config",
    "AffectState",
    "EmotionEngine",
    "EventKind",
    "PersonalityCatalog",
    "PersonalityProfile",
    "CognitionEngine",
    "DomainClassifier",
    "DomainExpertRegistry",
    "FusionEngine",
    "SkillRouter",
]
