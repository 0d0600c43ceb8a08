"""Scoring, extraction and output strategies."""
from .scoring import QuestionMatchStrategy, ScoringStrategy, SectionLabelStrategy, rerank

__all__ = [
    "ScoringStrategy",
    "QuestionMatchStrategy",
    "SectionLabelStrategy",
    "rerank",
]
