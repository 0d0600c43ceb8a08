"""Intent domain models."""
from dataclasses import dataclass
from enum import Enum


class Intent(str, Enum):
    """Coarse classification of a user message."""
    SMALL_TALK = "small_talk"              # greetings, banter
    PROFILE_BASIC = "profile_basic"        # "who are you" / "what do you do"
    PROFILE_SPECIFIC = "profile_specific"  # favorites, bio facts
    DEEP_TECH = "deep_tech"                # stack / infra questions
    HIRING = "hiring"                      # recruiting, availability, rates


@dataclass(frozen=True)
class GenerationCaps:
    """Per-request generation limits."""
    max_tokens: int
    temperature: float


@dataclass(frozen=True)
class IntentProfile:
    """Generation caps and retrieval depth for an intent."""
    caps: GenerationCaps
    top_k: int

    @property
    def max_tokens(self) -> int:
        return self.caps.max_tokens

    @property
    def temperature(self) -> float:
        return self.caps.temperature
