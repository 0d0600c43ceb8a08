from numbers import Real
from typing import Any

from chat_with_me.core.exceptions import EmbeddingDimensionError, EmbeddingShapeError


def validate_vector(vector: Any, dimension: int) -> list[float]:
    """Check the embedding is a numeric list of exactly `dimension` values."""
    if not isinstance(vector, (list, tuple)):
        raise EmbeddingShapeError("Embedding: bad shape")
    if not all(isinstance(v, Real) and not isinstance(v, bool) for v in vector):
        raise EmbeddingShapeError("Embedding: non-numeric values")
    if len(vector) != dimension:
        raise EmbeddingDimensionError(expected=dimension, actual=len(vector))
    return [float(v) for v in vector]
