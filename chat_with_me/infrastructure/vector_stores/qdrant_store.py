import logging
from typing import Optional

import requests

from chat_with_me.core.exceptions import ConfigurationError, VectorStoreError
from chat_with_me.core.models.document import IndexedPoint, SearchHit

logger = logging.getLogger(__name__)


class QdrantVectorStore:
    """Vector store using the Qdrant HTTP API."""

    def __init__(
        self,
        url: str,
        collection_name: str = "chat_with_me",
        dimension: int = 768,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
    ):
        """Initialize Qdrant client.

        Args:
            url: Qdrant base URL.
            collection_name: Collection name.
            dimension: Vector dimension used when creating the collection.
            api_key: Optional API key.
            timeout: Request timeout in seconds.
        """
        if not url:
            raise ConfigurationError("Qdrant configuration missing. Set QDRANT_URL")
        if not collection_name:
            raise ConfigurationError("Qdrant configuration missing. Set QDRANT_COLLECTION")
        self._base_url = url.rstrip("/")
        self._collection_name = collection_name
        self._dimension = dimension
        self._timeout = timeout
        self._headers = {"api-key": api_key} if api_key else {}

    @property
    def collection_name(self) -> str:
        return self._collection_name

    @property
    def _collection_url(self) -> str:
        return f"{self._base_url}/collections/{self._collection_name}"

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            return requests.request(
                method, url, headers=self._headers, timeout=self._timeout, **kwargs
            )
        except requests.RequestException as e:
            raise VectorStoreError(str(e)) from e

    @staticmethod
    def _check(resp: requests.Response) -> dict:
        if not resp.ok:
            raise VectorStoreError(resp.text[:200], status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise VectorStoreError(f"invalid JSON: {e}", status_code=resp.status_code) from e

    def ensure_collection(self) -> None:
        """Create collection with cosine distance unless it exists."""
        resp = self._request("GET", self._collection_url)
        if resp.status_code == 200:
            return

        resp = self._request(
            "PUT",
            self._collection_url,
            json={
                "vectors": {"size": self._dimension, "distance": "Cosine"},
                "optimizers_config": {"default_segment_number": 2},
            },
        )
        if resp.status_code == 409 or "already exists" in resp.text:
            return
        self._check(resp)
        logger.info(f"Created collection: {self._collection_name}")

    def upsert(self, points: list[IndexedPoint]) -> None:
        """Upsert points and wait until they are persisted."""
        if not points:
            return
        resp = self._request(
            "PUT",
            f"{self._collection_url}/points",
            params={"wait": "true"},
            json={"points": [p.to_dict() for p in points]},
        )
        self._check(resp)

    def search(self, vector: list[float], limit: int) -> list[SearchHit]:
        """Search by vector."""
        resp = self._request(
            "POST",
            f"{self._collection_url}/points/search",
            json={
                "vector": vector,
                "limit": max(1, limit),
                "with_payload": True,
                "with_vector": False,
            },
        )
        data = self._check(resp)

        results = []
        for item in data.get("result") or []:
            results.append(
                SearchHit(
                    id=str(item.get("id", "")),
                    score=float(item.get("score", 0.0)),
                    payload=item.get("payload") or {},
                )
            )
        return results

    def count(self) -> int:
        """Get point count."""
        resp = self._request(
            "POST", f"{self._collection_url}/points/count", json={"exact": True}
        )
        data = self._check(resp)
        return int((data.get("result") or {}).get("count", 0))
