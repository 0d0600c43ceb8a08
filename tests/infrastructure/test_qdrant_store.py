"""
Test suite for QdrantVectorStore.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from chat_with_me.core.exceptions import ConfigurationError, VectorStoreError
from chat_with_me.core.models.document import IndexedPoint
from chat_with_me.infrastructure.vector_stores import QdrantVectorStore

REQUEST = "chat_with_me.infrastructure.vector_stores.qdrant_store.requests.request"
COLLECTION_URL = "http://qdrant:6333/collections/profile"


def _response(status: int = 200, payload=None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.text = text
    resp.json.return_value = payload if payload is not None else {}
    return resp


@pytest.fixture
def store() -> QdrantVectorStore:
    return QdrantVectorStore(
        url="http://qdrant:6333/", collection_name="profile", dimension=4, api_key="secret"
    )


class TestEnsureCollection:
    """Collection creation."""

    def test_existing_collection_should_not_be_recreated(self, store) -> None:
        with patch(REQUEST, return_value=_response(200)) as request:
            store.ensure_collection()

        request.assert_called_once()
        assert request.call_args.args == ("GET", COLLECTION_URL)
        assert request.call_args.kwargs["headers"] == {"api-key": "secret"}

    def test_missing_collection_should_be_created_with_cosine(self, store) -> None:
        # Arrange
        responses = [_response(404, text="Not found"), _response(200, {"result": True})]

        # Act
        with patch(REQUEST, side_effect=responses) as request:
            store.ensure_collection()

        # Assert
        method, url = request.call_args.args
        assert (method, url) == ("PUT", COLLECTION_URL)
        body = request.call_args.kwargs["json"]
        assert body["vectors"] == {"size": 4, "distance": "Cosine"}

    def test_create_conflict_should_be_tolerated(self, store) -> None:
        responses = [_response(404), _response(409, text="Collection already exists")]

        with patch(REQUEST, side_effect=responses):
            store.ensure_collection()

    def test_create_failure_should_raise(self, store) -> None:
        responses = [_response(404), _response(500, text="disk full")]

        with patch(REQUEST, side_effect=responses):
            with pytest.raises(VectorStoreError) as exc_info:
                store.ensure_collection()

        assert exc_info.value.status_code == 500


class TestPoints:
    """Upsert, search and count."""

    def test_upsert_should_wait_for_persistence(self, store) -> None:
        point = IndexedPoint(id="p1", vector=[0.1, 0.2, 0.3, 0.4], payload={"text": "hi"})

        with patch(REQUEST, return_value=_response(200, {"status": "ok"})) as request:
            store.upsert([point])

        assert request.call_args.args == ("PUT", f"{COLLECTION_URL}/points")
        assert request.call_args.kwargs["params"] == {"wait": "true"}
        assert request.call_args.kwargs["json"] == {"points": [point.to_dict()]}

    def test_upsert_of_nothing_should_skip_request(self, store) -> None:
        with patch(REQUEST) as request:
            store.upsert([])

        request.assert_not_called()

    def test_upsert_failure_should_raise(self, store) -> None:
        point = IndexedPoint(id="p1", vector=[0.1], payload={})

        with patch(REQUEST, return_value=_response(400, text="wrong vector size")):
            with pytest.raises(VectorStoreError):
                store.upsert([point])

    def test_search_should_map_hits(self, store) -> None:
        # Arrange
        payload = {
            "result": [
                {"id": "a", "score": 0.9, "payload": {"text": "Docker"}},
                {"id": 7, "score": 0.5, "payload": None},
            ]
        }

        # Act
        with patch(REQUEST, return_value=_response(200, payload)) as request:
            hits = store.search([0.1, 0.2, 0.3, 0.4], limit=0)

        # Assert
        body = request.call_args.kwargs["json"]
        assert body["limit"] == 1
        assert body["with_payload"] is True
        assert body["with_vector"] is False
        assert [(h.id, h.score, h.text) for h in hits] == [("a", 0.9, "Docker"), ("7", 0.5, "")]

    def test_empty_search_result_should_be_valid(self, store) -> None:
        with patch(REQUEST, return_value=_response(200, {"result": []})):
            assert store.search([0.0] * 4, limit=5) == []

    def test_search_failure_should_raise(self, store) -> None:
        with patch(REQUEST, return_value=_response(404, text="Collection not found")):
            with pytest.raises(VectorStoreError):
                store.search([0.0] * 4, limit=5)

    def test_unreachable_store_should_raise(self, store) -> None:
        with patch(REQUEST, side_effect=requests.ConnectionError("refused")):
            with pytest.raises(VectorStoreError):
                store.count()

    def test_count_should_read_result(self, store) -> None:
        with patch(REQUEST, return_value=_response(200, {"result": {"count": 12}})):
            assert store.count() == 12


class TestConfiguration:
    """Connection parameters."""

    def test_missing_url_should_raise(self) -> None:
        with pytest.raises(ConfigurationError):
            QdrantVectorStore(url="")

    def test_headers_should_be_empty_without_api_key(self) -> None:
        store = QdrantVectorStore(url="http://qdrant:6333", collection_name="profile")

        with patch(REQUEST, return_value=_response(200)) as request:
            store.ensure_collection()

        assert request.call_args.kwargs["headers"] == {}
