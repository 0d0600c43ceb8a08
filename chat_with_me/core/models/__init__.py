"""Domain models."""
from .document import Chunk, IndexedPoint, RetrievalHit, SearchHit
from .chat import ChatMessage, ChatReply, IntroAnswer
from .intent import GenerationCaps, Intent, IntentProfile

__all__ = [
    "Chunk",
    "IndexedPoint",
    "RetrievalHit",
    "SearchHit",
    "ChatMessage",
    "ChatReply",
    "IntroAnswer",
    "GenerationCaps",
    "Intent",
    "IntentProfile",
]
