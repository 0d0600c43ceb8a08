"""Document domain models."""
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Chunk:
    """Bounded unit of source text produced by the chunker."""
    text: str
    section: str
    question: Optional[str]
    order: int


@dataclass
class IndexedPoint:
    """Point written to the vector store."""
    id: str
    vector: list[float]
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"id": self.id, "vector": self.vector, "payload": self.payload}


@dataclass
class SearchHit:
    """Raw ranked hit returned by the vector store."""
    id: str
    score: float
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return str(self.payload.get("text") or "")


@dataclass
class RetrievalHit:
    """Hit mapped for reranking; score is the heuristic rerank score."""
    text: str
    section: str
    question: str
    score: int = 0

    @classmethod
    def from_search_hit(cls, hit: SearchHit) -> "RetrievalHit":
        payload = hit.payload
        return cls(
            text=str(payload.get("text") or ""),
            section=str(payload.get("section") or ""),
            question=str(payload.get("question") or ""),
        )
