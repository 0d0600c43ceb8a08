"""Vector store implementations."""
from .qdrant_store import QdrantVectorStore

__all__ = ["QdrantVectorStore"]
