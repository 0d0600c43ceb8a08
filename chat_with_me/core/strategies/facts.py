"""Personal-fact patterns and favorite-line extraction."""

import re
from typing import Iterable

FAVORITE_WORD_RE = re.compile(r"\b(favo(u)?rite|fav)\b")
ORIGIN_RE = re.compile(
    r"\b(where (are you|were you) from|where did you grow up|grew up|born|age)\b"
)
TRAVEL_RE = re.compile(r"\b(travel|visited|places|country|countries)\b")

PERSONAL_NOUNS = (
    "dog",
    "color",
    "colour",
    "band",
    "music",
    "team",
    "teams",
    "sport",
    "song",
    "food",
    "meal",
)

_FAVORITE_LINE_RE = re.compile(r"\bfavo(u)?rite\b", re.IGNORECASE)
_NOISE_RES = (
    re.compile(r"\bFavorite\s+(band|dog|music|color|teams?)\b", re.IGNORECASE),
    re.compile(r"\bHas visited:", re.IGNORECASE),
    re.compile(r"\bPersonal Interests\b", re.IGNORECASE),
)


def wants_personal_facts(message: str) -> bool:
    """True when the message asks for a favorite, origin or travel fact."""
    m = (message or "").lower()
    return bool(FAVORITE_WORD_RE.search(m) or ORIGIN_RE.search(m) or TRAVEL_RE.search(m))


def derive_personal_keywords(message: str) -> list[str]:
    """Personal nouns appearing in the message, in vocabulary order."""
    m = (message or "").lower()
    return [noun for noun in PERSONAL_NOUNS if noun in m]


def extract_favorite_lines(text: str, keywords: list[str]) -> list[str]:
    """Lines mentioning a favorite (and one of the keywords, when any)."""
    hits = []
    for line in re.split(r"\r?\n", text):
        line = line.strip()
        if not line or not _FAVORITE_LINE_RE.search(line):
            continue
        lowered = line.lower()
        if not keywords or any(k in lowered for k in keywords):
            hits.append(line)
    return hits


def is_personal_noise_line(line: str) -> bool:
    """Personal trivia that should not leak into non-personal answers."""
    return any(pattern.search(line) for pattern in _NOISE_RES)


def uniq(items: Iterable[str]) -> list[str]:
    """Deduplicate preserving first-seen order."""
    seen: set[str] = set()
    out = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out
