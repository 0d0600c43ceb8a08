"""Domain exceptions."""


class ChatWithMeError(Exception):
    """Base class for pipeline errors."""


class ConfigurationError(ChatWithMeError):
    """Raised when connection parameters are missing or invalid."""


class UpstreamServiceError(ChatWithMeError):
    """Raised when an external service fails or answers with non-2xx."""

    service = "upstream"

    def __init__(self, detail: str, status_code: int | None = None):
        self.detail = detail
        self.status_code = status_code
        status = f" HTTP {status_code}" if status_code is not None else ""
        super().__init__(f"{self.service} failed{status}: {detail}")


class EmbeddingServiceError(UpstreamServiceError):
    service = "embedding"


class VectorStoreError(UpstreamServiceError):
    service = "vector store"


class GenerationError(UpstreamServiceError):
    service = "generation"


class EmbeddingShapeError(ChatWithMeError):
    """Raised when the embedding payload is not a numeric array."""


class EmbeddingDimensionError(EmbeddingShapeError):
    """Raised when the embedding length differs from the configured dimension."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Embedding dim mismatch {actual} != {expected}")
