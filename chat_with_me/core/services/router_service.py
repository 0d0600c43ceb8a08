"""Router service - classifies a message into an intent."""

import json
import logging
import re
from pathlib import Path

from ..exceptions import ConfigurationError
from ..models.intent import GenerationCaps, Intent, IntentProfile
from ..strategies.facts import FAVORITE_WORD_RE, ORIGIN_RE, TRAVEL_RE

logger = logging.getLogger(__name__)

Rule = tuple[Intent, list[re.Pattern]]

# Order matters: the first matching rule wins.
DEFAULT_RULES: list[Rule] = [
    (
        Intent.HIRING,
        [
            re.compile(
                r"\b(hire|hiring|recruit|recruiter|open role|opening|join our"
                r"|availability|available|contract|rates?)\b"
            )
        ],
    ),
    (
        Intent.PROFILE_SPECIFIC,
        [
            FAVORITE_WORD_RE,
            re.compile(r"\b(dog|color|colour|band|music|team|sport|song|food|meal)\b"),
            ORIGIN_RE,
            TRAVEL_RE,
        ],
    ),
    (
        Intent.PROFILE_BASIC,
        [
            re.compile(
                r"\b(who are you|what do you do|introduce|about yourself|tell me about you)\b"
            )
        ],
    ),
    (
        Intent.DEEP_TECH,
        [
            re.compile(
                r"\b(graphql|postgres|postgresql|sql|react|angular|svelte|node|nestjs|docker"
                r"|kubernetes|k8s|ingress|nginx|qdrant|upstash|rag|embedding|vector|ollama"
                r"|mistral|ci/cd|github actions|aws|digitalocean)\b"
            )
        ],
    ),
]

INTENT_PROFILES: dict[Intent, IntentProfile] = {
    Intent.SMALL_TALK: IntentProfile(GenerationCaps(max_tokens=120, temperature=0.4), top_k=0),
    Intent.PROFILE_BASIC: IntentProfile(GenerationCaps(max_tokens=160, temperature=0.3), top_k=0),
    Intent.PROFILE_SPECIFIC: IntentProfile(GenerationCaps(max_tokens=200, temperature=0.3), top_k=8),
    Intent.DEEP_TECH: IntentProfile(GenerationCaps(max_tokens=600, temperature=0.2), top_k=10),
    Intent.HIRING: IntentProfile(GenerationCaps(max_tokens=220, temperature=0.3), top_k=4),
}

STYLE_GUIDANCE: dict[Intent, str] = {
    Intent.SMALL_TALK: "Be concise and personable. Prefer one or two sentences.",
    Intent.PROFILE_BASIC: (
        "Keep it to 2-3 sentences, warm and professional, first-person, no markdown lists."
    ),
    Intent.PROFILE_SPECIFIC: " ".join(
        [
            "Answer crisply and factually from the provided context.",
            "If the question asks for a single favorite (dog, color, band, etc.), reply with one "
            "short sentence that states ONLY that fact (e.g., 'Black and Tan Shiba.').",
            "Do not list unrelated favorites. If the fact is missing, respond exactly with I don't know.",
        ]
    ),
    Intent.DEEP_TECH: (
        "Answer step-by-step with precise, implementation-level details when available. "
        "If unknown, respond exactly with I don't know."
    ),
    Intent.HIRING: (
        "Be friendly and concise. Offer next steps (share portfolio, scheduling) "
        "without disclosing private contact details."
    ),
}

_RETRIEVAL_INTENTS = {Intent.PROFILE_SPECIFIC, Intent.DEEP_TECH, Intent.HIRING}
_SHORT_ANSWER_INTENTS = {Intent.SMALL_TALK, Intent.PROFILE_BASIC}
_FACT_SEEKING_INTENTS = {Intent.PROFILE_SPECIFIC, Intent.DEEP_TECH}


def retrieval_enabled(intent: Intent) -> bool:
    return intent in _RETRIEVAL_INTENTS


def is_short_answer(intent: Intent) -> bool:
    return intent in _SHORT_ANSWER_INTENTS


def is_fact_seeking(intent: Intent) -> bool:
    """Intents that must answer "I don't know" without grounding."""
    return intent in _FACT_SEEKING_INTENTS


def intent_profile(intent: Intent) -> IntentProfile:
    return INTENT_PROFILES[intent]


def generation_caps(intent: Intent) -> GenerationCaps:
    return INTENT_PROFILES[intent].caps


def style_guidance(intent: Intent) -> str:
    return STYLE_GUIDANCE[intent]


class RouterService:
    """Ordered rule table: hiring → profile_specific → profile_basic → deep_tech."""

    def __init__(self, config_path: str | None = None):
        """Initialize router.

        Args:
            config_path: Optional JSON file replacing the rule table.
        """
        self._debug = False
        self._rules: list[Rule] = DEFAULT_RULES
        if config_path:
            self._load_config(config_path)

    def _load_config(self, path: str) -> None:
        """Load rule table from JSON."""
        config_file = Path(path)
        if not config_file.exists():
            logger.warning(f"Router config {path} not found, using defaults")
            return

        with open(config_file, "r", encoding="utf-8") as f:
            config = json.load(f)

        self._debug = bool(config.get("debug", False))
        rules = config.get("rules")
        if rules:
            self._rules = [self._parse_rule(rule) for rule in rules]
        self._log(f"Config loaded from {path} ({len(self._rules)} rules)")

    @staticmethod
    def _parse_rule(rule: dict) -> Rule:
        try:
            intent = Intent(rule["intent"])
        except (KeyError, ValueError) as e:
            raise ConfigurationError(f"Invalid router rule {rule!r}") from e
        patterns = [re.compile(p, re.IGNORECASE) for p in rule.get("patterns", [])]
        return intent, patterns

    def _log(self, message: str) -> None:
        """Log debug message."""
        if self._debug:
            logger.info(f"[router] {message}")

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def route(self, message: str) -> Intent:
        """Classify message; always returns an intent.

        Args:
            message: Raw user message.

        Returns:
            First matching rule's intent, else small_talk.
        """
        text = (message or "").lower().strip()

        for intent, patterns in self._rules:
            for pattern in patterns:
                if pattern.search(text):
                    self._log(f"{intent.value}: matched /{pattern.pattern[:40]}/")
                    return intent

        self._log("Fallback: small_talk")
        return Intent.SMALL_TALK
