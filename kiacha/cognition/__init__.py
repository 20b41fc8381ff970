"""Kiacha Supreme Cognition - domain routing, expert answers and fusion.

Components:
- router: DomainClassifier (SkillRouter) with per-user routing context
- experts: the ten core domain experts and their registry
- fusion: FusionEngine, affect/personality styling of raw answers
- engine: CognitionEngine, the orchestrator that owns all of the above
"""

from .router import (
    DOMAIN_PATTERNS,
    GENERAL_DOMAIN,
    DomainClassifier,
    DomainPattern,
    SkillRouter,
)

from .experts import (
    REASONING_PHRASES,
    AnswerRule,
    DomainExpert,
    DomainExpertRegistry,
)

from .fusion import (
    FusionEngine,
    FusionRule,
    opening_line,
    tone_label,
)

from .engine import (
    CognitionEngine,
    embellish,
)

__all__ = [
    "DOMAIN_PATTERNS",
    "GENERAL_DOMAIN",
    "DomainClassifier",
    "DomainPattern",
    "SkillRouter",
    "REASONING_PHRASES",
    "AnswerRule",
    "DomainExpert",
    "DomainExpertRegistry",
    "FusionEngine",
    "FusionRule",
    "opening_line",
    "tone_label",
    "CognitionEngine",
    "embellish",
]
