"""Vector store protocol for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.document import IndexedPoint, SearchHit


@runtime_checkable
class VectorStoreProtocol(Protocol):
    """Protocol for vector storage."""

    @property
    def collection_name(self) -> str:
        """Target collection."""
        ...

    def ensure_collection(self) -> None:
        """Create the collection with cosine distance if it is absent."""
        ...

    def upsert(self, points: list[IndexedPoint]) -> None:
        """Insert or replace points, returning once they are durable.

        Args:
            points: Points keyed by their deterministic ids.
        """
        ...

    def search(self, vector: list[float], limit: int) -> list[SearchHit]:
        """Search by vector.

        Args:
            vector: Query vector.
            limit: Number of hits to return.

        Returns:
            Hits ranked by cosine similarity, with payload.
        """
        ...

    def count(self) -> int:
        """Get point count."""
        ...
