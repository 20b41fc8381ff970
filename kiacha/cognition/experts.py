"""Domain expert kits - canned answers for the ten core knowledge domains.

Each expert selects one of a few pre-written answer templates by checking
the (lower-cased) query for fixed substrings, in order; the first hit wins
and a per-domain fallback line covers everything else. Experts also carry
the domain metadata the cognition engine needs: display name, keywords,
static confidence and reasoning style.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Pattern, Tuple

from kiacha.schemas import ExpertAnswer

logger = logging.getLogger(__name__)

REASONING_PHRASES: Dict[str, str] = {
    "symbolic": "Using symbolic mathematics reasoning...",
    "analytical": "Analyzing through analytical frameworks...",
    "logical": "Applying logical deduction...",
    "evidence-based": "Based on evidence synthesis...",
    "behavioral": "From behavioral analysis perspective...",
    "narrative": "Contextualizing through historical narrative...",
    "generative": "Creative synthesis approach...",
}


@dataclass(frozen=True)
class AnswerRule:
    """Answer template selected when any of ``keys`` occurs in the query."""

    keys: Tuple[str, ...]
    answer: str


@dataclass
class DomainExpert:
    """One knowledge domain and its canned answers."""

    id: str
    name: str
    reasoning: str
    confidence: float
    description: str
    rationale: str
    fallback: str
    rules: Tuple[AnswerRule, ...] = ()
    keywords: Tuple[str, ...] = ()
    specialties: Tuple[str, ...] = ()
    sources: Tuple[str, ...] = ()
    follow_up: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    validation: str = ""
    _validator: Optional[Pattern[str]] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.validation:
            self._validator = re.compile(self.validation, re.IGNORECASE)

    @property
    def reasoning_phrase(self) -> str:
        return REASONING_PHRASES.get(self.reasoning, f"Using {self.name}...")

    def select_answer(self, query: str) -> str:
        """First template whose key occurs in the query, else the fallback."""
        lowered = query.lower()
        for rule in self.rules:
            if any(key in lowered for key in rule.keys):
                return rule.answer
        return self.fallback

    def query_warnings(self, query: str) -> List[str]:
        """Warnings for this query (static ones by default)."""
        return list(self.warnings)

    def process(self, query: str) -> ExpertAnswer:
        return ExpertAnswer(
            answer=self.select_answer(query),
            confidence=self.confidence,
            reasoning=self.rationale,
            sources=list(self.sources),
            follow_up=list(self.follow_up),
            warnings=self.query_warnings(query),
        )

    def validate(self, text: str) -> bool:
        """Does the text look like something this expert handles?"""
        return bool(self._validator and self._validator.search(text))

    def explain(self, reasoning: str) -> str:
        return f"[{self.id.upper()}] {reasoning}"


@dataclass
class PhysicsExpert(DomainExpert):
    """Physics adds scale warnings depending on the query."""

    def query_warnings(self, query: str) -> List[str]:
        lowered = query.lower()
        warnings = list(self.warnings)
        if "quantum" in lowered:
            warnings.append("Quantum effects may apply at microscopic scales")
        if "relativistic" in lowered:
            warnings.append("Relativistic effects significant at high velocities")
        return warnings


# =============================================================================
# Phase 1 Experts
# =============================================================================

def _core_experts() -> List[DomainExpert]:
    return [
        DomainExpert(
            id="mathematics",
            name="Mathematics Expert",
            reasoning="symbolic",
            confidence=0.95,
            description="Advanced mathematical reasoning and problem solving",
            rationale="Using mathematical principles and symbolic reasoning",
            keywords=("math", "algebra", "geometry", "calculus", "numbers", "equation"),
            specialties=("algebra", "geometry", "calculus", "statistics", "linear algebra"),
            rules=(
                AnswerRule(("equation",),
                           "To solve this equation:\n1. Isolate the variable\n"
                           "2. Apply inverse operations\n3. Simplify"),
                AnswerRule(("probability",),
                           "Probability calculation follows: "
                           "P(event) = favorable outcomes / total outcomes"),
            ),
            fallback="Mathematical analysis complete. "
                     "Please specify the problem type for detailed solution.",
            follow_up=(
                "Would you like step-by-step breakdown?",
                "Interested in graphical visualization?",
                "Should we explore alternative approaches?",
            ),
            validation=r"(\d+|variable|equation|solve|calculate)",
        ),
        PhysicsExpert(
            id="physics",
            name="Physics Expert",
            reasoning="analytical",
            confidence=0.92,
            description="Physical laws and phenomena analysis",
            rationale="Using physics laws and fundamental principles",
            keywords=("physics", "force", "energy", "motion", "quantum", "relativity"),
            specialties=("mechanics", "thermodynamics", "electricity", "quantum", "relativity"),
            rules=(
                AnswerRule(("force",),
                           "Force analysis: F = ma (Newton's Second Law)\n"
                           "- Mass of object\n- Acceleration produced\n- Direction of force"),
                AnswerRule(("energy",),
                           "Energy considerations:\n- Kinetic Energy: KE = ½mv²\n"
                           "- Potential Energy: PE = mgh\n- Energy conservation applies"),
            ),
            fallback="Physical phenomenon analysis complete. Apply relevant conservation laws.",
            sources=("Classical Mechanics", "Thermodynamics", "Quantum Theory"),
            validation=r"(force|energy|motion|acceleration|quantum|relativity|wave|particle)",
        ),
        DomainExpert(
            id="code",
            name="Code Expert",
            reasoning="logical",
            confidence=0.98,
            description="Programming and code analysis across all languages",
            rationale="Applying software engineering principles",
            keywords=("code", "program", "function", "debug", "algorithm", "syntax",
                      "javascript", "python", "typescript"),
            specialties=("algorithms", "design patterns", "debugging", "optimization", "architecture"),
            rules=(
                AnswerRule(("debug",),
                           "Debugging approach:\n1. Reproduce the error consistently\n"
                           "2. Isolate the problematic code section\n3. Add logging/breakpoints\n"
                           "4. Verify assumptions\n5. Test the fix"),
                AnswerRule(("algorithm",),
                           "Algorithm design process:\n1. Understand the problem\n"
                           "2. Identify constraints\n3. Design approach\n"
                           "4. Analyze complexity\n5. Implement and optimize"),
                AnswerRule(("pattern",),
                           "Design patterns solve recurring problems:\n"
                           "- Creational (singleton, factory)\n"
                           "- Structural (adapter, decorator)\n"
                           "- Behavioral (observer, strategy)"),
            ),
            fallback="Code review complete. Consider readability, performance, and maintainability.",
            follow_up=(
                "Need implementation example?",
                "Want to discuss performance implications?",
                "Should we review edge cases?",
            ),
            validation=r"(code|bug|function|algorithm|error|syntax|logic|debug|pattern)",
        ),
        DomainExpert(
            id="medicine",
            name="Medicine Expert",
            reasoning="evidence-based",
            confidence=0.88,
            description="Medical knowledge and health analysis",
            rationale="Medical knowledge based on established protocols",
            keywords=("medicine", "health", "disease", "treatment", "drug", "symptom", "diagnosis"),
            specialties=("diagnosis", "treatment", "pharmacology", "epidemiology", "pathology"),
            rules=(
                AnswerRule(("symptom",),
                           "Symptom assessment:\n1. Document symptom characteristics\n"
                           "2. Timeline and triggers\n3. Associated conditions\n"
                           "4. Severity scale\n5. Recommend professional evaluation"),
                AnswerRule(("treatment",),
                           "Treatment approach:\n1. Establish accurate diagnosis first\n"
                           "2. Consider patient factors\n3. Review treatment options\n"
                           "4. Assess risk/benefit ratio\n5. Monitor outcomes"),
            ),
            fallback="Medical consultation framework: Evidence-based protocols apply. "
                     "Seek professional medical advice.",
            warnings=(
                "⚠️ This is informational only - consult licensed physician",
                "⚠️ Not a substitute for professional medical advice",
            ),
            follow_up=(
                "What specific symptoms?",
                "Medical history relevant?",
                "Current medications?",
            ),
            validation=r"(medicine|health|disease|treatment|symptom|diagnosis|medical|drug)",
        ),
        DomainExpert(
            id="psychology",
            name="Psychology Expert",
            reasoning="behavioral",
            confidence=0.85,
            description="Psychological and behavioral analysis",
            rationale="Applying psychological frameworks and research",
            keywords=("psychology", "behavior", "emotion", "mind", "trauma", "mental", "cognition"),
            specialties=("cognitive", "behavioral", "emotional", "developmental", "social"),
            rules=(
                AnswerRule(("emotion",),
                           "Emotional analysis:\n1. Identify the emotion accurately\n"
                           "2. Recognize triggers\n3. Understand purpose of emotion\n"
                           "4. Develop coping strategies\n5. Practice emotional regulation"),
                AnswerRule(("behavior",),
                           "Behavioral perspective:\n1. Identify the behavior pattern\n"
                           "2. Analyze antecedents\n3. Note consequences\n"
                           "4. Understand reinforcement\n5. Plan behavioral change"),
                AnswerRule(("cognitive",),
                           "Cognitive framework:\n1. Examine thought patterns\n"
                           "2. Identify distortions\n3. Evaluate evidence\n"
                           "4. Develop balanced thinking\n5. Build resilience"),
            ),
            fallback="Psychological insight: Understanding context and history is crucial.",
            follow_up=(
                "What emotional context?",
                "Past patterns relevant?",
                "Support systems available?",
            ),
            validation=r"(psychology|behavior|emotion|mind|mental|trauma|thought|anxiety|depression|stress)",
        ),
        DomainExpert(
            id="law",
            name="Law Expert",
            reasoning="logical",
            confidence=0.90,
            description="Legal knowledge and analysis",
            rationale="Legal analysis based on jurisdiction and precedent",
            keywords=("law", "legal", "contract", "rights", "court", "jurisdiction", "liability"),
            specialties=("contracts", "liability", "rights", "intellectual property", "regulatory"),
            rules=(
                AnswerRule(("contract",),
                           "Contract review framework:\n1. Parties and consideration\n"
                           "2. Terms and conditions\n3. Obligations and rights\n"
                           "4. Remedies and enforcement\n5. Dispute resolution"),
                AnswerRule(("liability",),
                           "Liability analysis:\n1. Duty of care\n2. Breach identification\n"
                           "3. Causation link\n4. Damages calculation\n5. Defenses available"),
                AnswerRule(("right",),
                           "Rights examination:\n1. Type of right\n2. Scope of protection\n"
                           "3. Limitations and exceptions\n4. Enforcement mechanisms\n"
                           "5. Remedies available"),
            ),
            fallback="Legal review framework applied. "
                     "Consult attorney for jurisdiction-specific advice.",
            warnings=(
                "⚠️ Not actual legal advice - consult licensed attorney",
                "⚠️ Laws vary by jurisdiction",
            ),
            validation=r"(law|legal|contract|court|right|liability|attorney|statute|regulation)",
        ),
        DomainExpert(
            id="security",
            name="Security Expert",
            reasoning="analytical",
            confidence=0.94,
            description="Cybersecurity and information security",
            rationale="Applying security best practices and threat models",
            keywords=("security", "hack", "breach", "encrypt", "exploit", "vulnerability", "attack"),
            specialties=("cryptography", "vulnerabilities", "defense", "authentication",
                         "incident response"),
            rules=(
                AnswerRule(("encrypt",),
                           "Encryption strategy:\n1. Identify data sensitivity\n"
                           "2. Choose algorithm (AES-256, RSA)\n3. Key management\n"
                           "4. Implementation best practices\n5. Regular security audits"),
                AnswerRule(("vulnerability",),
                           "Vulnerability management:\n1. Identify the vulnerability type\n"
                           "2. Assess risk level\n3. Prioritize remediation\n"
                           "4. Implement fix\n5. Verify patching"),
                AnswerRule(("attack",),
                           "Attack response:\n1. Detect and isolate\n2. Preserve evidence\n"
                           "3. Contain breach\n4. Remediate vulnerabilities\n5. Review and improve"),
            ),
            fallback="Security hardening applied. Defense in depth principle: multiple layers.",
            validation=r"(security|hack|breach|encrypt|vulnerability|attack|malware|firewall|exploit)",
        ),
        DomainExpert(
            id="creativity",
            name="Creativity Expert",
            reasoning="generative",
            confidence=0.80,
            description="Creative thinking and ideation",
            rationale="Leveraging creative thinking frameworks",
            keywords=("creative", "idea", "design", "art", "story", "music", "inspiration"),
            specialties=("ideation", "innovation", "artistic expression", "brainstorming",
                         "design thinking"),
            rules=(
                AnswerRule(("idea",),
                           "Ideation process:\n1. Define the challenge\n"
                           "2. Brainstorm without judgment\n3. Combine ideas\n"
                           "4. Prototype concepts\n5. Test and iterate"),
                AnswerRule(("design",),
                           "Design thinking approach:\n1. Empathize with users\n"
                           "2. Define the problem\n3. Ideate solutions\n"
                           "4. Prototype quickly\n5. Test with feedback"),
                AnswerRule(("inspire",),
                           "Creative inspiration:\n1. Explore diverse influences\n"
                           "2. Question assumptions\n3. Make unexpected connections\n"
                           "4. Practice regularly\n5. Embrace experimentation"),
            ),
            fallback="Creative exploration: No limits on imagination. "
                     "Innovation thrives on diversity.",
            validation=r"(creative|idea|design|innovation|art|music|inspire|imagine|create)",
        ),
        DomainExpert(
            id="economics",
            name="Economics Expert",
            reasoning="analytical",
            confidence=0.88,
            description="Economic theory and analysis",
            rationale="Economic analysis using market principles",
            keywords=("economy", "market", "finance", "investment", "trade", "money", "business"),
            specialties=("microeconomics", "macroeconomics", "finance", "markets", "policy"),
            rules=(
                AnswerRule(("market",),
                           "Market analysis:\n1. Supply and demand dynamics\n"
                           "2. Price determination\n3. Competitive landscape\n"
                           "4. Trends and indicators\n5. Risk assessment"),
                AnswerRule(("investment",),
                           "Investment evaluation:\n1. Risk tolerance assessment\n"
                           "2. Return expectations\n3. Diversification strategy\n"
                           "4. Time horizon consideration\n5. Regular rebalancing"),
                AnswerRule(("business",),
                           "Business economics:\n1. Revenue models\n2. Cost structure\n"
                           "3. Profit margins\n4. Growth opportunities\n5. Competitive advantage"),
            ),
            fallback="Economic principle: Scarcity, incentives, and trade-offs drive decisions.",
            validation=r"(econom|market|finance|investment|trade|business|price|profit|capital)",
        ),
        DomainExpert(
            id="history",
            name="History Expert",
            reasoning="narrative",
            confidence=0.85,
            description="Historical knowledge and context",
            rationale="Historical analysis and contextual understanding",
            keywords=("history", "past", "event", "civilization", "war", "era", "historical"),
            specialties=("ancient", "medieval", "modern", "contemporary", "cultural history"),
            rules=(
                AnswerRule(("event",),
                           "Event contextualization:\n1. Time period and setting\n"
                           "2. Key figures involved\n3. Contributing factors\n"
                           "4. Immediate consequences\n5. Long-term impacts"),
                AnswerRule(("era", "period"),
                           "Period analysis:\n1. Historical characteristics\n"
                           "2. Dominant ideologies\n3. Technological advances\n"
                           "4. Social structures\n5. Cultural achievements"),
                AnswerRule(("compare",),
                           "Historical comparison:\n1. Similarities identified\n"
                           "2. Key differences\n3. Context variations\n"
                           "4. Cause-effect relationships\n5. Broader patterns"),
            ),
            fallback="Historical perspective: Understanding past illuminates present and future.",
            validation=r"(history|historical|past|event|era|period|ancient|medieval|war|civilization)",
        ),
    ]


# =============================================================================
# Expert Registry
# =============================================================================

class DomainExpertRegistry:
    """Maps domain ids to their experts."""

    def __init__(self, experts: Optional[Iterable[DomainExpert]] = None):
        self._experts: Dict[str, DomainExpert] = {}
        for expert in experts if experts is not None else _core_experts():
            self.register(expert)
        logger.info(f"Registered {len(self._experts)} core expert domains")

    def __contains__(self, domain_id: str) -> bool:
        return domain_id in self._experts

    def __len__(self) -> int:
        return len(self._experts)

    def register(self, expert: DomainExpert) -> None:
        self._experts[expert.id] = expert

    def get(self, domain_id: str) -> Optional[DomainExpert]:
        return self._experts.get(domain_id)

    def all(self) -> List[DomainExpert]:
        return list(self._experts.values())

    def names(self) -> List[str]:
        """Short display names ('Mathematics', 'Code', ...) in registration order."""
        return [e.name.replace(" Expert", "") for e in self._experts.values()]

    def answer(self, domain_id: str, query: str) -> Optional[ExpertAnswer]:
        """Canned answer from a domain's expert, or None for unknown domains."""
        expert = self._experts.get(domain_id)
        if expert is None:
            logger.warning(f"Expert not found: {domain_id}")
            return None
        return expert.process(query)

    def find_by_keyword(self, keyword: str) -> List[DomainExpert]:
        """Experts with a keyword containing, or contained in, ``keyword``."""
        lower = keyword.lower()
        if not lower:
            return []
        return [
            e for e in self._experts.values()
            if any(kw in lower or lower in kw for kw in e.keywords)
        ]
