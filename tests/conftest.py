"""
Shared test fixtures.

Provides: in-memory embedder and vector store fakes, search hit factory
Dependencies: pytest
"""

from typing import Callable

import pytest

from chat_with_me.core.models.document import IndexedPoint, SearchHit

DIMENSION = 4


class FakeEmbedder:
    """Embedder whose vector encodes which text it was asked for."""

    def __init__(self, dimension: int = DIMENSION):
        self._dimension = dimension
        self.texts: list[str] = []

    @property
    def dimension(self) -> int:
        return self._dimension

    def warmup(self) -> None:
        pass

    def embed(self, text: str) -> list[float]:
        self.texts.append(text)
        return [float(len(self.texts) - 1)] + [0.0] * (self._dimension - 1)

    def text_for(self, vector: list[float]) -> str:
        return self.texts[int(vector[0])]


class FakeVectorStore:
    """In-memory store that answers searches per query text."""

    def __init__(self, embedder: FakeEmbedder, collection_name: str = "test_collection"):
        self._embedder = embedder
        self._collection_name = collection_name
        self.hits_by_query: dict[str, list[SearchHit]] = {}
        self.searches: list[tuple[str, int]] = []
        self.upserts: list[list[IndexedPoint]] = []
        self.ensure_calls = 0

    @property
    def collection_name(self) -> str:
        return self._collection_name

    def ensure_collection(self) -> None:
        self.ensure_calls += 1

    def upsert(self, points: list[IndexedPoint]) -> None:
        self.upserts.append(list(points))

    def search(self, vector: list[float], limit: int) -> list[SearchHit]:
        query = self._embedder.text_for(vector)
        self.searches.append((query, limit))
        return self.hits_by_query.get(query, [])[:limit]

    def count(self) -> int:
        return sum(len(batch) for batch in self.upserts)

    @property
    def points(self) -> dict[str, IndexedPoint]:
        """Latest point per id, as an upserting store would keep them."""
        stored = {}
        for batch in self.upserts:
            for point in batch:
                stored[point.id] = point
        return stored


@pytest.fixture
def embedder() -> FakeEmbedder:
    """Provide deterministic fake embedder."""
    return FakeEmbedder()


@pytest.fixture
def vector_store(embedder: FakeEmbedder) -> FakeVectorStore:
    """Provide in-memory vector store bound to the fake embedder."""
    return FakeVectorStore(embedder)


@pytest.fixture
def make_hit() -> Callable[..., SearchHit]:
    """Provide factory for vector store hits."""

    def _make(
        hit_id: str,
        text: str,
        section: str = "Intro",
        question: str | None = None,
        score: float = 0.5,
    ) -> SearchHit:
        return SearchHit(
            id=hit_id,
            score=score,
            payload={"text": text, "section": section, "question": question},
        )

    return _make
