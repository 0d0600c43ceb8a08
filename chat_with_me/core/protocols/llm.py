"""LLM protocol for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.intent import GenerationCaps


@runtime_checkable
class LLMProtocol(Protocol):
    """Protocol for LLM client."""

    async def complete(self, messages: list[dict], caps: GenerationCaps) -> str:
        """Generate a full reply.

        Args:
            messages: Ordered list of {role, content} dicts.
            caps: Token and temperature caps.

        Returns:
            Reply text.
        """
        ...
