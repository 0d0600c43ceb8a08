"""Core business services."""
from .chunker import MarkdownChunker
from .context_service import ContextService
from .chat_service import ChatService
from .router_service import RouterService
from .ingest_service import IngestService

__all__ = [
    "MarkdownChunker",
    "ContextService",
    "ChatService",
    "RouterService",
    "IngestService",
]
