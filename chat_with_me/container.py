import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Container:
    _factories: dict[type, Callable[[], Any]] = field(default_factory=dict)
    _singletons: dict[type, Any] = field(default_factory=dict)
    _singleton_flags: set[type] = field(default_factory=set)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        self._factories[interface] = factory
        if singleton:
            self._singleton_flags.add(interface)

    def resolve(self, interface: type[T]) -> T:
        if interface in self._singletons:
            return self._singletons[interface]

        if interface not in self._factories:
            raise KeyError(f"No factory registered for {interface}")

        instance = self._factories[interface]()

        if interface in self._singleton_flags:
            self._singletons[interface] = instance

        return instance

    def reset(self) -> None:
        """Reset singletons (for testing)."""
        self._singletons.clear()


container = Container()


def _build_embedder(settings: Settings):
    from .core.exceptions import ConfigurationError

    backend = settings.embedding_backend.lower()
    if backend == "ollama":
        from .infrastructure.embeddings.ollama_embedder import OllamaEmbedder

        return OllamaEmbedder(
            base_url=settings.ollama_url,
            model=settings.embedding_model,
            dimension=settings.embedding_dim,
            timeout=settings.embedding_timeout,
        )
    if backend == "sentence_transformers":
        from .infrastructure.embeddings.sentence_transformer import (
            SentenceTransformerEmbedder,
        )

        return SentenceTransformerEmbedder(settings.embedding_model, settings.embedding_dim)
    raise ConfigurationError(f"Unknown embedding backend: {settings.embedding_backend}")


def configure_container(settings: Settings) -> Container:
    """Configure container with all dependencies.

    Args:
        settings: Application settings.

    Returns:
        Configured container.
    """
    from .core.prompts import load_system_content
    from .core.protocols.embedder import EmbedderProtocol
    from .core.protocols.llm import LLMProtocol
    from .core.protocols.vector_store import VectorStoreProtocol
    from .core.services.chat_service import ChatService
    from .core.services.chunker import MarkdownChunker
    from .core.services.context_service import ContextService
    from .core.services.ingest_service import IngestService
    from .core.services.router_service import RouterService
    from .infrastructure.llm.ollama_client import OllamaClient
    from .infrastructure.vector_stores.qdrant_store import QdrantVectorStore

    container.register(
        EmbedderProtocol,
        lambda: _build_embedder(settings),
        singleton=True,
    )

    container.register(
        VectorStoreProtocol,
        lambda: QdrantVectorStore(
            url=settings.qdrant_url,
            collection_name=settings.qdrant_collection,
            dimension=settings.embedding_dim,
            api_key=settings.qdrant_api_key,
            timeout=settings.qdrant_timeout,
        ),
        singleton=True,
    )

    container.register(
        LLMProtocol,
        lambda: OllamaClient(
            base_url=settings.llm_base_url,
            model=settings.llm_model,
        ),
        singleton=True,
    )

    container.register(
        ContextService,
        lambda: ContextService(
            embedder=container.resolve(EmbedderProtocol),
            vector_store=container.resolve(VectorStoreProtocol),
        ),
        singleton=True,
    )

    container.register(
        RouterService,
        lambda: RouterService(config_path=settings.router_config_path),
        singleton=True,
    )

    container.register(
        ChatService,
        lambda: ChatService(
            llm=container.resolve(LLMProtocol),
            context_service=container.resolve(ContextService),
            router=container.resolve(RouterService),
            system_content=load_system_content(
                settings.system_prompt_path,
                settings.answer_policies_path,
                settings.append_policies,
            ),
        ),
        singleton=True,
    )

    container.register(
        IngestService,
        lambda: IngestService(
            embedder=container.resolve(EmbedderProtocol),
            vector_store=container.resolve(VectorStoreProtocol),
            chunker=MarkdownChunker(settings.chunk_max_chars, settings.chunk_overlap),
            docs_path=settings.docs_path,
            concurrency=settings.embed_concurrency,
            batch_size=settings.upsert_batch_size,
        ),
        singleton=True,
    )

    logger.info("Container configured")
    return container
