"""Heuristic rerank signals."""
import logging
import re
from abc import ABC, abstractmethod

from ..models.document import RetrievalHit

logger = logging.getLogger(__name__)


class ScoringStrategy(ABC):
    """Base class for rerank signals."""

    @abstractmethod
    def score(self, query: str, hit: RetrievalHit) -> int:
        """Return the boost this signal gives the hit."""
        ...


class QuestionMatchStrategy(ScoringStrategy):
    """Boost hits whose stored question appears in the message."""

    def __init__(self, boost: int = 2, prefix_chars: int = 48):
        """Initialize strategy.

        Args:
            boost: Score added on match.
            prefix_chars: Leading question characters compared.
        """
        self._boost = boost
        self._prefix_chars = prefix_chars

    def score(self, query: str, hit: RetrievalHit) -> int:
        if not hit.question:
            return 0
        short_q = hit.question.lower()[: self._prefix_chars]
        return self._boost if short_q and short_q in query.lower() else 0


class SectionLabelStrategy(ScoringStrategy):
    """Boost hits from a Q&A section when the message reads like a question."""

    DEFAULT_QUESTION_RE = re.compile(r"how|when|describe|what", re.IGNORECASE)
    DEFAULT_SECTION_RE = re.compile(r"Recruiter Q&A", re.IGNORECASE)

    def __init__(
        self,
        boost: int = 1,
        question_re: re.Pattern | None = None,
        section_re: re.Pattern | None = None,
    ):
        self._boost = boost
        self._question_re = question_re or self.DEFAULT_QUESTION_RE
        self._section_re = section_re or self.DEFAULT_SECTION_RE

    def score(self, query: str, hit: RetrievalHit) -> int:
        if self._question_re.search(query) and self._section_re.search(hit.section):
            return self._boost
        return 0


def rerank(
    query: str, hits: list[RetrievalHit], strategies: list[ScoringStrategy]
) -> list[RetrievalHit]:
    """Score hits and sort descending; ties keep vector-store order."""
    for hit in hits:
        hit.score = sum(strategy.score(query, hit) for strategy in strategies)

    ranked = sorted(hits, key=lambda h: h.score, reverse=True)

    if logger.isEnabledFor(logging.DEBUG):
        top_scores = ", ".join(str(h.score) for h in ranked[:3])
        logger.debug(f"Rerank top-3 scores: [{top_scores}]")

    return ranked
