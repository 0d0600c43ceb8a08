"""Ingest service - document indexing."""

import hashlib
import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..models.document import Chunk, IndexedPoint
from ..protocols.embedder import EmbedderProtocol
from ..protocols.vector_store import VectorStoreProtocol
from .chunker import MarkdownChunker

logger = logging.getLogger(__name__)

POINT_NAMESPACE = uuid.UUID("6ba7b810-9dad-11d1-80b4-00c04fd430c8")


def content_hash(text: str) -> str:
    """Compute sha256 content digest."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def point_id(doc_id: str, chunk: Chunk) -> str:
    """Deterministic point id for a chunk of a document."""
    seed = f"{doc_id}:{chunk.section}:{chunk.order}:{content_hash(chunk.text)}"
    return str(uuid.uuid5(POINT_NAMESPACE, seed))


def marker_id(doc_id: str) -> str:
    """Deterministic id of the document marker point."""
    return str(uuid.uuid5(POINT_NAMESPACE, f"docMarker:{doc_id}"))


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class IngestService:
    """Service for indexing documents into vector store."""

    def __init__(
        self,
        embedder: EmbedderProtocol,
        vector_store: VectorStoreProtocol,
        chunker: Optional[MarkdownChunker] = None,
        docs_path: str = "./data",
        concurrency: int = 6,
        batch_size: int = 48,
    ):
        """Initialize ingest service.

        Args:
            embedder: Embedding service.
            vector_store: Vector store.
            chunker: Document chunker.
            docs_path: Path to documents folder.
            concurrency: Max in-flight embedding requests.
            batch_size: Points per upsert call.
        """
        self._embedder = embedder
        self._vector_store = vector_store
        self._chunker = chunker or MarkdownChunker()
        self._docs_path = Path(docs_path)
        self._concurrency = max(1, concurrency)
        self._batch_size = max(1, batch_size)

        self._loader: Optional["MarkdownLoader"] = None

    @property
    def loader(self):
        """Lazy load document loader."""
        if self._loader is None:
            from chat_with_me.infrastructure.document_loaders import MarkdownLoader

            self._loader = MarkdownLoader()
        return self._loader

    def _embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed texts with a bounded worker pool, preserving order.

        The first failure cancels pending requests and propagates.
        """
        workers = min(self._concurrency, len(texts))
        if workers == 0:
            return []

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self._embedder.embed, text) for text in texts]
            try:
                return [future.result() for future in futures]
            except Exception:
                for future in futures:
                    future.cancel()
                raise

    def _build_points(
        self, doc_id: str, chunks: list[Chunk], vectors: list[list[float]]
    ) -> list[IndexedPoint]:
        now = _now()
        points = []
        for chunk, vector in zip(chunks, vectors):
            digest = content_hash(chunk.text)
            points.append(
                IndexedPoint(
                    id=point_id(doc_id, chunk),
                    vector=vector,
                    payload={
                        "docId": doc_id,
                        "text": chunk.text,
                        "section": chunk.section,
                        "question": chunk.question,
                        "order": chunk.order,
                        "source": doc_id,
                        "hash": digest,
                        "updatedAt": now,
                    },
                )
            )
        return points

    def _write_marker(self, doc_id: str) -> None:
        marker = IndexedPoint(
            id=marker_id(doc_id),
            vector=[0.0] * self._embedder.dimension,
            payload={"type": "docMarker", "docId": doc_id, "updatedAt": _now()},
        )
        self._vector_store.upsert([marker])

    def ingest(self, document: str, doc_id: str) -> int:
        """Chunk, embed and upsert a document.

        Re-running with the same content writes the same point ids.

        Args:
            document: Markdown text.
            doc_id: Document identifier.

        Returns:
            Number of chunks upserted.
        """
        self._vector_store.ensure_collection()
        self._write_marker(doc_id)

        chunks = self._chunker.split(document)
        total = len(chunks)

        for i in range(0, total, self._batch_size):
            batch = chunks[i : i + self._batch_size]
            vectors = self._embed_batch([c.text for c in batch])
            self._vector_store.upsert(self._build_points(doc_id, batch, vectors))
            logger.info(f"upserted {min(i + self._batch_size, total)}/{total}")

        logger.info(f"ingest complete for {doc_id}")
        return total

    def ingest_file(self, path: str | Path, doc_id: Optional[str] = None) -> int:
        """Ingest a single markdown/text file.

        Args:
            path: File path.
            doc_id: Document identifier; defaults to the path.

        Returns:
            Number of chunks upserted.
        """
        file_path = Path(path)
        document = self.loader.load(file_path)
        return self.ingest(document, doc_id or str(path))

    def run(self, docs_path: str | Path | None = None) -> int:
        """Index every supported file of the docs folder.

        Args:
            docs_path: Override docs folder.

        Returns:
            Number of chunks upserted.
        """
        root = Path(docs_path) if docs_path else self._docs_path
        if not root.exists():
            logger.error(f"Docs path not found: {root}")
            return 0

        total_indexed = 0
        files = 0
        for file_path in sorted(root.iterdir()):
            if not self.loader.supports(file_path):
                logger.debug(f"Skip unsupported: {file_path.name}")
                continue
            total_indexed += self.ingest_file(file_path, doc_id=file_path.name)
            files += 1

        logger.info(f"Indexing complete: {total_indexed} chunks from {files} files")
        return total_indexed
