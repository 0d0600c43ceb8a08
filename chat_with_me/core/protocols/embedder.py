"""Embedder protocol for dependency injection."""
from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbedderProtocol(Protocol):
    """Protocol for embedding service."""

    @property
    def dimension(self) -> int:
        """Configured vector dimension D."""
        ...

    def embed(self, text: str) -> list[float]:
        """Embed a single text.

        Args:
            text: Text to embed.

        Returns:
            Vector of exactly `dimension` floats.

        Raises:
            EmbeddingServiceError: The service call failed.
            EmbeddingDimensionError: The vector length differs from `dimension`.
        """
        ...

    def warmup(self) -> None:
        """Pre-load the model for faster inference."""
        ...
