"""Embedding implementations."""
from .ollama_embedder import OllamaEmbedder
from .validation import validate_vector

__all__ = ["OllamaEmbedder", "validate_vector"]
