"""Output policy: label stripping, sentence clamp, unknown-answer handling."""

import json
import re
from typing import Any, Optional

UNKNOWN_ANSWER = "I don't know."

# A line may start with any run of dataset labels and bullet markers.
_LABEL_PREFIX_RE = re.compile(
    r"^[^\S\n]*(?:(?:\*{0,2}[^\S\n]*(?:Prompt|Question|Target|Answer|Q|A|Follow[- \t]?up)"
    r"[^\S\n]*\*{0,2}[^\S\n]*[:：]\*{0,2}|[-•])[^\S\n]*)+",
    re.IGNORECASE | re.MULTILINE,
)
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s")
_UNKNOWN_RE = re.compile(r"^\s*i\s+don['’]?t\s+know\.?\s*$", re.IGNORECASE)
_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def sanitize_output(text: str) -> str:
    """Remove dataset labels and bullet markers the model may echo."""
    return _LABEL_PREFIX_RE.sub("", text or "").strip()


def first_n_sentences(text: str, n: int) -> str:
    """Keep at most n sentences, collapsing whitespace."""
    parts = _SENTENCE_SPLIT_RE.split(re.sub(r"\s+", " ", text or ""))
    return " ".join(parts[:n]).strip()


def is_unknown_answer(text: str) -> bool:
    return bool(_UNKNOWN_RE.match(text or ""))


def extract_first_json(text: str) -> Optional[Any]:
    """Parse the first JSON object embedded in text, tolerating extra prose."""
    match = _JSON_OBJECT_RE.search(text or "")
    if not match:
        return None
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
