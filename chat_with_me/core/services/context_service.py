"""Context service - retrieval, rerank and personal-fact extraction."""

import logging

from ..models.document import RetrievalHit, SearchHit
from ..protocols.embedder import EmbedderProtocol
from ..protocols.vector_store import VectorStoreProtocol
from ..strategies.facts import (
    derive_personal_keywords,
    extract_favorite_lines,
    is_personal_noise_line,
    uniq,
    wants_personal_facts,
)
from ..strategies.scoring import (
    QuestionMatchStrategy,
    ScoringStrategy,
    SectionLabelStrategy,
    rerank,
)

logger = logging.getLogger(__name__)

MAX_FAVORITE_LINES = 4
SNIPPET_MAX_CHARS = 800


def merge_hits(*passes: list[SearchHit]) -> list[SearchHit]:
    """Merge retrieval passes by hit id; first occurrence wins."""
    seen: set[str] = set()
    merged = []
    for hits in passes:
        for hit in hits:
            if hit.id in seen:
                continue
            seen.add(hit.id)
            merged.append(hit)
    return merged


def fallback_queries(keywords: list[str]) -> list[str]:
    """Synonym queries for the favorite-fact second pass."""
    if not keywords:
        return ["favorite", "favourite"]
    queries = []
    for k in keywords:
        queries.extend([f"favorite {k}", f"{k} favorite", f"favourite {k}"])
    return queries


class ContextService:
    """Builds the grounding context handed to generation."""

    def __init__(
        self,
        embedder: EmbedderProtocol,
        vector_store: VectorStoreProtocol,
        strategies: list[ScoringStrategy] | None = None,
    ):
        """Initialize context service.

        Args:
            embedder: Embedding service.
            vector_store: Vector store.
            strategies: Custom rerank signals.
        """
        self._embedder = embedder
        self._vector_store = vector_store
        self._strategies = strategies or [
            QuestionMatchStrategy(),
            SectionLabelStrategy(),
        ]

    def search(self, query: str, top_k: int) -> list[SearchHit]:
        """Semantic search for a single query."""
        vector = self._embedder.embed(query)
        hits = self._vector_store.search(vector, limit=max(1, top_k))
        logger.info(f"Search: returned {len(hits)}/{top_k} hits for '{query[:50]}'")
        return hits

    def search_many(self, queries: list[str], top_k: int) -> list[SearchHit]:
        """Run queries sequentially and merge hits by id."""
        return merge_hits(*(self.search(q, top_k) for q in queries))

    def build_context(self, message: str, top_k: int) -> str:
        """Assemble context text for a message.

        Args:
            message: User message.
            top_k: Retrieval depth; 0 disables retrieval.

        Returns:
            Favorite-fact lines, trimmed snippets, or "" when nothing grounds the message.
        """
        if top_k <= 0:
            return ""

        personal = wants_personal_facts(message)
        keywords = derive_personal_keywords(message)

        # Pass 1: the raw message
        primary_hits = self.search(message, top_k)
        hits = [RetrievalHit.from_search_hit(h) for h in primary_hits]
        ranked = rerank(message, [h for h in hits if h.text], self._strategies)
        texts = [h.text for h in ranked]

        favorites = uniq(line for t in texts for line in extract_favorite_lines(t, keywords))

        # Pass 2: favorite synonyms when a personal fact is asked but not found
        extra_hits: list[SearchHit] = []
        if personal and not favorites:
            extra_hits = self.search_many(fallback_queries(keywords), max(2, top_k // 2))
            more_texts = [h.text for h in extra_hits if h.text]
            favorites = uniq(
                line for t in more_texts for line in extract_favorite_lines(t, keywords)
            )

        if not primary_hits and not extra_hits:
            logger.warning(
                f"Vector search returned no hits for \"{message}\" in collection "
                f"\"{self._vector_store.collection_name}\""
            )

        if personal and favorites:
            return "\n".join(favorites[:MAX_FAVORITE_LINES])

        snippets = []
        for text in texts:
            if not personal:
                text = "\n".join(
                    line for line in text.split("\n") if not is_personal_noise_line(line)
                ).strip()
            if text:
                snippets.append(text[:SNIPPET_MAX_CHARS])

        return "\n\n".join(snippets)
