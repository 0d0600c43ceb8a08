
import logging

from openai import AsyncOpenAI, OpenAIError

from chat_with_me.core.exceptions import GenerationError
from chat_with_me.core.models.intent import GenerationCaps

logger = logging.getLogger(__name__)


class OllamaClient:
    """LLM client for Ollama (OpenAI-compatible API)."""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:11434/v1",
        model: str = "mistral:7b-instruct-q4_K_M",
        client: AsyncOpenAI | None = None,
    ):
        """Initialize Ollama client.

        Args:
            base_url: Ollama API URL.
            model: Model name.
            client: Preconfigured OpenAI client (tests).
        """
        self._client = client or AsyncOpenAI(base_url=base_url, api_key="ollama")
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, messages: list[dict], caps: GenerationCaps) -> str:
        """Generate the whole reply.

        Args:
            messages: OpenAI-style messages (system/user/assistant).
            caps: Controls temperature and length.

        Returns:
            Trimmed reply text.
        """
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                max_tokens=max(1, int(caps.max_tokens)),
                temperature=caps.temperature,
            )
        except OpenAIError as e:
            status = getattr(e, "status_code", None)
            raise GenerationError(str(e), status_code=status) from e

        if not response.choices:
            logger.warning(f"[llm] Empty choices from {self._model}")
            return ""
        return (response.choices[0].message.content or "").strip()
