"""Chat service - coordinates routing, retrieval and generation."""

import logging

from pydantic import ValidationError

from ..models.chat import ChatMessage, ChatReply, IntroAnswer
from ..models.intent import GenerationCaps, Intent
from ..prompts import (
    FORCED_UNKNOWN_PROMPT,
    INTRO_SYSTEM_PROMPT,
    INTRO_USER_PROMPT,
    POLICY_TEMPLATE,
    PROMPT_WITH_CONTEXT,
)
from ..protocols.llm import LLMProtocol
from ..strategies.output import (
    UNKNOWN_ANSWER,
    extract_first_json,
    first_n_sentences,
    is_unknown_answer,
    sanitize_output,
)
from .context_service import ContextService
from .router_service import (
    RouterService,
    intent_profile,
    is_fact_seeking,
    is_short_answer,
    retrieval_enabled,
    style_guidance,
)

logger = logging.getLogger(__name__)

MAX_SHORT_SENTENCES = 3


class ChatService:
    """Chat service: route → context → generation → output policy."""

    def __init__(
        self,
        llm: LLMProtocol,
        context_service: ContextService,
        router: RouterService,
        system_content: str,
    ):
        """Initialize chat service.

        Args:
            llm: LLM client.
            context_service: Context builder.
            router: Intent router.
            system_content: Base system prompt plus answer policies.
        """
        self._llm = llm
        self._context = context_service
        self._router = router
        self._system_content = system_content

    def _system_prompt(self, intent: Intent, context: str) -> str:
        system = self._system_content + POLICY_TEMPLATE.format(style=style_guidance(intent))
        if not context and is_fact_seeking(intent):
            system += FORCED_UNKNOWN_PROMPT
        return system

    def _postprocess(self, raw: str, intent: Intent) -> str:
        text = sanitize_output(raw)
        if is_short_answer(intent):
            text = first_n_sentences(text, MAX_SHORT_SENTENCES)
        if is_unknown_answer(text):
            return UNKNOWN_ANSWER
        return text

    async def _intro_answer(self, message: str, system: str, caps: GenerationCaps) -> str:
        """Structured intro reply: JSON answer + follow-up, raw text on parse failure."""
        messages = [
            ChatMessage(role="system", content=INTRO_SYSTEM_PROMPT.format(policy=system)),
            ChatMessage(role="user", content=INTRO_USER_PROMPT.format(user=message)),
        ]
        raw = await self._llm.complete([m.to_dict() for m in messages], caps)

        data = extract_first_json(raw)
        if isinstance(data, dict):
            try:
                parsed = IntroAnswer.model_validate(data)
            except ValidationError as e:
                logger.info(f"Intro answer failed validation, using raw text: {e.error_count()} errors")
            else:
                answer = first_n_sentences(sanitize_output(parsed.answer), MAX_SHORT_SENTENCES)
                follow_up = " ".join(sanitize_output(parsed.follow_up).split())
                return f"{answer} {follow_up}".strip() if follow_up else answer

        return first_n_sentences(sanitize_output(raw), MAX_SHORT_SENTENCES)

    async def reply(self, message: str) -> ChatReply:
        """Answer a single message.

        Args:
            message: User's message.

        Returns:
            Reply; text falls back to "I don't know." on empty output or failure.
        """
        intent = self._router.route(message)
        profile = intent_profile(intent)
        context = ""
        text = ""

        try:
            if retrieval_enabled(intent):
                context = self._context.build_context(message, profile.top_k)

            system = self._system_prompt(intent, context)

            if intent == Intent.PROFILE_BASIC:
                text = await self._intro_answer(message, system, profile.caps)
                if is_unknown_answer(text):
                    text = UNKNOWN_ANSWER
            else:
                user_content = (
                    PROMPT_WITH_CONTEXT.format(context=context, question=message)
                    if context
                    else message
                )
                messages = [
                    ChatMessage(role="system", content=system),
                    ChatMessage(role="user", content=user_content),
                ]
                raw = await self._llm.complete([m.to_dict() for m in messages], profile.caps)
                text = self._postprocess(raw, intent)
        except Exception:
            logger.exception(f"Reply failed for '{message[:50]}' (intent={intent.value})")
            text = ""

        logger.info(
            f"Reply: intent={intent.value} context={'yes' if context else 'no'} "
            f"chars={len(text)}"
        )
        return ChatReply(text=text or UNKNOWN_ANSWER, intent=intent, context_used=bool(context))
