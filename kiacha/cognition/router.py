"""
Skill Router
============

Lexical domain classifier with short per-user conversational memory.

Each domain owns a few case-insensitive pattern groups. A query's score
for a domain is the number of non-overlapping matches summed over its
groups; confidence is ``min(1, score / 3)``. Domains are ranked with a
stable sort, so equal confidences keep table order.

When nothing matches and the user has routed before, the last domain for
that user is reused at a fixed 0.5 confidence.
"""

from __future__ import annotations

import logging
import re
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional, Pattern, Tuple

from kiacha.schemas import DomainMatch, RoutingResult

logger = logging.getLogger("kiacha.cognition.router")

GENERAL_DOMAIN = "general"


@dataclass(frozen=True)
class DomainPattern:
    """A domain id and the pattern groups that vote for it."""

    domain: str
    patterns: Tuple[Pattern[str], ...]

    @classmethod
    def compile(cls, domain: str, *groups: str) -> "DomainPattern":
        return cls(domain, tuple(re.compile(g, re.IGNORECASE) for g in groups))

    def score(self, text: str) -> int:
        return sum(len(p.findall(text)) for p in self.patterns)


DOMAIN_PATTERNS: Tuple[DomainPattern, ...] = (
    DomainPattern.compile(
        "mathematics",
        r"\b(math|algebra|geometry|calculus|equation|formula|theorem|proof|derivative|integral|matrix|vector)\b",
        r"\b(solve|calculate|compute|simplify|expand|factor|transpose|determinant)\b",
        r"\b(number|polynomial|function|variable|coefficient|exponent|radical)\b",
    ),
    DomainPattern.compile(
        "physics",
        r"\b(physics|force|energy|momentum|velocity|acceleration|quantum|relativity|gravity)\b",
        r"\b(newton|einstein|photon|electron|wave|particle|thermodynamic|pressure|temperature)\b",
        r"\b(motion|collision|friction|resistance|field|charge|magnetic|electric)\b",
    ),
    DomainPattern.compile(
        "code",
        r"\b(code|program|function|variable|loop|condition|array|object|class|interface)\b",
        r"\b(javascript|typescript|python|java|rust|cpp|csharp|golang|ruby|php)\b",
        r"\b(debug|bug|error|exception|compile|runtime|syntax|logic|algorithm)\b",
        r"\b(function|method|parameter|return|scope|closure|promise|async|callback)\b",
    ),
    DomainPattern.compile(
        "medicine",
        r"\b(medicine|medical|health|disease|treatment|drug|medication|symptom|diagnosis)\b",
        r"\b(patient|doctor|hospital|surgery|therapy|vaccine|virus|bacteria|infection)\b",
        r"\b(pain|fever|cough|dizziness|nausea|therapy|prescription|dosage)\b",
    ),
    DomainPattern.compile(
        "psychology",
        r"\b(psychology|psycholog|behavior|emotion|mind|mental|trauma|therapy|counseling)\b",
        r"\b(anxiety|depression|stress|personality|cognition|perception|memory|learning)\b",
        r"\b(relationship|attachment|motivation|psyche|unconscious|conscious|subconscious)\b",
    ),
    DomainPattern.compile(
        "law",
        r"\b(law|legal|court|judge|attorney|lawyer|contract|lawsuit|trial)\b",
        r"\b(right|liability|statute|regulation|jurisdiction|precedent|defendant|plaintiff)\b",
        r"\b(agreement|clause|copyright|patent|intellectual property|license)\b",
    ),
    DomainPattern.compile(
        "security",
        r"\b(security|hack|breach|encrypt|encryption|decrypt|exploit|vulnerability|attack)\b",
        r"\b(malware|virus|ransomware|phishing|botnet|trojan|worm|backdoor)\b",
        r"\b(firewall|password|authentication|authorization|ssl|certificate|protocol)\b",
    ),
    DomainPattern.compile(
        "creativity",
        r"\b(creative|create|design|art|artistic|music|story|writing|brainstorm|idea)\b",
        r"\b(imagine|inspiration|vision|concept|innovate|novel|unique|original)\b",
        r"\b(compose|paint|draw|write|perform|express|emotion|feeling)\b",
    ),
    DomainPattern.compile(
        "economics",
        r"\b(econom|market|finance|investment|trade|commerce|business|profit|loss)\b",
        r"\b(stock|bond|currency|exchange|inflation|deflation|gdp|revenue|expense)\b",
        r"\b(supply|demand|price|value|capital|labor|competition|monopoly)\b",
    ),
    DomainPattern.compile(
        "history",
        r"\b(history|historical|past|era|period|century|war|battle|revolution)\b",
        r"\b(ancient|medieval|modern|contemporary|civilization|empire|dynasty)\b",
        r"\b(event|date|year|king|queen|leader|conquest|discovery|explorer)\b",
    ),
)

# First entry is used for the match rationale.
DOMAIN_EXPLANATIONS: Dict[str, Tuple[str, ...]] = {
    "mathematics": ("mathematical", "numerical", "equation-based"),
    "physics": ("physical", "force-related", "energy-related"),
    "code": ("programming", "software", "technical code"),
    "medicine": ("health-related", "medical", "clinical"),
    "psychology": ("behavioral", "mental", "emotional"),
    "law": ("legal", "contractual", "jurisdictional"),
    "security": ("security-focused", "cybersecurity", "protection"),
    "creativity": ("artistic", "imaginative", "creative"),
    "economics": ("financial", "market-based", "economic"),
    "history": ("historical", "temporal", "chronological"),
}

CONTEXT_REASONING = "Inferred from conversation context"


class DomainClassifier:
    """Routes free text to knowledge domains."""

    def __init__(
        self,
        patterns: Tuple[DomainPattern, ...] = DOMAIN_PATTERNS,
        context_size: int = 100,
        confidence_divisor: float = 3.0,
        multi_domain_ceiling: float = 0.9,
        context_confidence: float = 0.5,
    ):
        self.patterns = patterns
        self.context_size = context_size
        self.confidence_divisor = confidence_divisor
        self.multi_domain_ceiling = multi_domain_ceiling
        self.context_confidence = context_confidence

        self._context: Dict[str, Deque[str]] = {}
        self._lock = threading.Lock()

        logger.info(f"Initialized {len(self.patterns)} domain patterns")

    @classmethod
    def from_config(cls, config) -> "DomainClassifier":
        """Build from a KiachaConfig (or its ``routing`` section)."""
        section = getattr(config, "routing", config)
        return cls(
            context_size=section.context_size,
            confidence_divisor=section.confidence_divisor,
            multi_domain_ceiling=section.multi_domain_ceiling,
            context_confidence=section.context_confidence,
        )

    @property
    def domains(self) -> List[str]:
        return [p.domain for p in self.patterns]

    def route_query(self, text: str, user_id: Optional[str] = None) -> RoutingResult:
        """Rank domains for ``text``; fall back to the user's last domain."""
        logger.debug(f"Analyzing query: {text[:50]!r}")

        matches: List[DomainMatch] = []
        for pattern in self.patterns:
            score = pattern.score(text)
            if score > 0:
                matches.append(DomainMatch(
                    domain=pattern.domain,
                    score=score,
                    confidence=min(1.0, score / self.confidence_divisor),
                    reasoning=self.explain_match(pattern.domain),
                ))

        # sorted() is stable, equal confidences keep table order
        matches = sorted(matches, key=lambda m: m.confidence, reverse=True)
        is_multi_domain = len(matches) > 1 and matches[0].confidence < self.multi_domain_ceiling

        with self._lock:
            if not matches and user_id:
                context = self._context.get(user_id)
                if context:
                    matches.append(DomainMatch(
                        domain=context[-1],
                        score=1,
                        confidence=self.context_confidence,
                        reasoning=CONTEXT_REASONING,
                        context_inferred=True,
                    ))

            if user_id and matches:
                context = self._context.setdefault(user_id, deque(maxlen=self.context_size))
                context.append(matches[0].domain)

        if not matches:
            return RoutingResult()

        top = matches[0]
        logger.debug(f"Routed to {top.domain} ({top.confidence:.2f})")
        return RoutingResult(
            primary_domain=top.domain,
            confidence=top.confidence,
            matches=matches,
            alternative_domains=[m.domain for m in matches[1:]],
            is_multi_domain=is_multi_domain,
            reasoning=top.reasoning,
        )

    def explain_match(self, domain: str) -> str:
        """Why a domain was detected."""
        explanations = DOMAIN_EXPLANATIONS.get(domain)
        detail = explanations[0] if explanations else "domain expertise"
        return f"Detected {domain} domain - {detail}"

    @staticmethod
    def get_confidence_level(confidence: float) -> str:
        if confidence >= 0.8:
            return "high"
        if confidence >= 0.5:
            return "medium"
        return "low"

    def get_user_context(self, user_id: str) -> List[str]:
        with self._lock:
            return list(self._context.get(user_id, ()))

    def clear_user_context(self, user_id: str) -> None:
        with self._lock:
            self._context.pop(user_id, None)

    def get_routing_stats(self) -> Dict[str, Any]:
        with self._lock:
            context_sizes = {user: len(ctx) for user, ctx in self._context.items()}
        return {
            "total_domains": len(self.patterns),
            "domains": self.domains,
            "total_users": len(context_sizes),
            "context_sizes": context_sizes,
            "timestamp": datetime.now(),
        }


# Alias used by the request layer
SkillRouter = DomainClassifier
