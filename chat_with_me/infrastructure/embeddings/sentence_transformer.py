import logging
from functools import cached_property

import numpy as np
from sentence_transformers import SentenceTransformer

from chat_with_me.core.exceptions import ConfigurationError

from .validation import validate_vector

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedder:
    def __init__(self, model_name: str = "nomic-ai/nomic-embed-text-v1.5", dimension: int = 768):
        if not model_name or dimension <= 0:
            raise ConfigurationError("Embedding configuration missing. Set EMBEDDING_MODEL, EMBEDDING_DIM")
        self._model_name = model_name
        self._dimension = dimension

    @cached_property
    def model(self) -> SentenceTransformer:
        logger.info(f"Loading embedding model: {self._model_name}")
        return SentenceTransformer(self._model_name, trust_remote_code=True)

    @property
    def dimension(self) -> int:
        return self._dimension

    def warmup(self) -> None:
        _ = self.model
        logger.info("Embedding model warmed up")

    def embed(self, text: str) -> list[float]:
        vector = np.asarray(self.model.encode(text, convert_to_numpy=True), dtype=np.float32)
        return validate_vector(vector.ravel().tolist(), self._dimension)
