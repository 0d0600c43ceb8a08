import logging

import requests

from chat_with_me.core.exceptions import ConfigurationError, EmbeddingServiceError

from .validation import validate_vector

logger = logging.getLogger(__name__)


class OllamaEmbedder:
    """Embedder using the Ollama /api/embeddings endpoint."""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:11434",
        model: str = "nomic-embed-text",
        dimension: int = 768,
        timeout: float = 30.0,
    ):
        """Initialize embedder.

        Args:
            base_url: Ollama server URL.
            model: Embedding model name.
            dimension: Expected vector dimension.
            timeout: Request timeout in seconds.
        """
        if not base_url or not model or dimension <= 0:
            raise ConfigurationError(
                "Embedding configuration missing. Set OLLAMA_URL, EMBEDDING_MODEL, EMBEDDING_DIM"
            )
        self._url = f"{base_url.rstrip('/')}/api/embeddings"
        self._model = model
        self._dimension = dimension
        self._timeout = timeout

    @property
    def dimension(self) -> int:
        return self._dimension

    def warmup(self) -> None:
        self.embed("warmup")
        logger.info(f"Embedding model {self._model} warmed up")

    def embed(self, text: str) -> list[float]:
        try:
            resp = requests.post(
                self._url,
                json={"model": self._model, "prompt": text},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise EmbeddingServiceError(str(e)) from e

        if not resp.ok:
            raise EmbeddingServiceError(resp.text[:200], status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise EmbeddingServiceError(f"invalid JSON: {e}", status_code=resp.status_code) from e

        return validate_vector(data.get("embedding") if isinstance(data, dict) else None, self._dimension)
