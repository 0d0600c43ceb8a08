"""
Test suite for ChatService.

Covers routing-driven retrieval, system prompt policy, output post-processing,
structured intro answers and failure fallbacks.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from chat_with_me.core.exceptions import GenerationError, VectorStoreError
from chat_with_me.core.models.intent import Intent
from chat_with_me.core.services.chat_service import ChatService
from chat_with_me.core.services.router_service import RouterService, generation_caps


@pytest.fixture
def mock_llm() -> AsyncMock:
    llm = AsyncMock()
    llm.complete.return_value = "Hello."
    return llm


@pytest.fixture
def mock_context() -> MagicMock:
    context = MagicMock()
    context.build_context.return_value = ""
    return context


@pytest.fixture
def chat_service(mock_llm, mock_context) -> ChatService:
    return ChatService(
        llm=mock_llm,
        context_service=mock_context,
        router=RouterService(),
        system_content="SYSTEM",
    )


def _sent_messages(llm: AsyncMock) -> list[dict]:
    return llm.complete.await_args.args[0]


class TestReplyRouting:
    """Retrieval and caps follow the routed intent."""

    @pytest.mark.asyncio
    async def test_small_talk_should_skip_retrieval(
        self, chat_service, mock_llm, mock_context
    ) -> None:
        # Arrange
        mock_llm.complete.return_value = "Hello! Nice to meet you. How are you? I am great."

        # Act
        reply = await chat_service.reply("hey there")

        # Assert
        assert reply.intent == Intent.SMALL_TALK
        assert reply.text == "Hello! Nice to meet you. How are you?"
        assert reply.context_used is False
        mock_context.build_context.assert_not_called()
        assert mock_llm.complete.await_args.args[1] == generation_caps(Intent.SMALL_TALK)

    @pytest.mark.asyncio
    async def test_deep_tech_with_context_should_ground_prompt(
        self, chat_service, mock_llm, mock_context
    ) -> None:
        # Arrange
        mock_context.build_context.return_value = "K8s via k3s."
        mock_llm.complete.return_value = "Answer: We run k3s.\n- Ingress via nginx."

        # Act
        reply = await chat_service.reply("tell me about kubernetes")

        # Assert
        mock_context.build_context.assert_called_once_with("tell me about kubernetes", 10)
        system, user = _sent_messages(mock_llm)
        assert system["role"] == "system"
        assert "CRITICAL" not in system["content"]
        assert "Context:\nK8s via k3s." in user["content"]
        assert "Question:\ntell me about kubernetes" in user["content"]
        assert reply.text == "We run k3s.\nIngress via nginx."
        assert reply.context_used is True

    @pytest.mark.asyncio
    async def test_profile_specific_should_use_depth_eight(
        self, chat_service, mock_llm, mock_context
    ) -> None:
        mock_context.build_context.return_value = "Favorite dog: Shiba Inu"
        mock_llm.complete.return_value = "Shiba Inu."

        reply = await chat_service.reply("what's your favorite dog?")

        mock_context.build_context.assert_called_once_with("what's your favorite dog?", 8)
        assert reply.text == "Shiba Inu."
        assert reply.intent == Intent.PROFILE_SPECIFIC


class TestSystemPrompt:
    """Policy and forced-unknown instructions."""

    @pytest.mark.asyncio
    async def test_fact_seeking_without_context_should_force_unknown(
        self, chat_service, mock_llm
    ) -> None:
        # Arrange
        mock_llm.complete.return_value = "I don’t know"

        # Act
        reply = await chat_service.reply("tell me about kubernetes")

        # Assert
        system, user = _sent_messages(mock_llm)
        assert system["content"].startswith("SYSTEM\n\nPolicy: ")
        assert "CRITICAL" in system["content"]
        assert user["content"] == "tell me about kubernetes"
        assert reply.text == "I don't know."
        assert "CRITICAL" not in reply.text

    @pytest.mark.asyncio
    async def test_hiring_without_context_should_not_force_unknown(
        self, chat_service, mock_llm
    ) -> None:
        mock_llm.complete.return_value = "Sure, happy to talk."

        reply = await chat_service.reply("are you available for a contract?")

        system, _ = _sent_messages(mock_llm)
        assert "CRITICAL" not in system["content"]
        assert reply.intent == Intent.HIRING
        assert reply.text == "Sure, happy to talk."


class TestIntroAnswer:
    """Structured JSON replies for profile_basic."""

    @pytest.mark.asyncio
    async def test_valid_json_should_join_answer_and_follow_up(
        self, chat_service, mock_llm, mock_context
    ) -> None:
        # Arrange
        payload = {
            "answer": "I am Alex. I build RAG systems.",
            "follow_up": "Want to hear about my stack?",
        }
        mock_llm.complete.return_value = "Sure! " + json.dumps(payload)

        # Act
        reply = await chat_service.reply("who are you")

        # Assert
        assert reply.intent == Intent.PROFILE_BASIC
        assert reply.text == "I am Alex. I build RAG systems. Want to hear about my stack?"
        mock_context.build_context.assert_not_called()
        system, user = _sent_messages(mock_llm)
        assert system["content"].startswith("SYSTEM")
        assert '{"answer":"...","follow_up":"..."}' in system["content"]
        assert "who are you" in user["content"]

    @pytest.mark.asyncio
    async def test_invalid_json_should_fall_back_to_clamped_text(
        self, chat_service, mock_llm
    ) -> None:
        mock_llm.complete.return_value = "Prompt: Hi there. I'm Alex. I code. I also hike."

        reply = await chat_service.reply("who are you")

        assert reply.text == "Hi there. I'm Alex. I code."

    @pytest.mark.asyncio
    async def test_oversized_answer_should_fall_back_to_raw_text(
        self, chat_service, mock_llm
    ) -> None:
        raw = json.dumps({"answer": "x" * 700})
        mock_llm.complete.return_value = raw

        reply = await chat_service.reply("who are you")

        assert reply.text == raw

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw",
        [
            '{"answer": "I don’t know", "follow_up": ""}',
            "I don’t know",
        ],
    )
    async def test_unknown_intro_should_be_canonicalized(
        self, chat_service, mock_llm, raw: str
    ) -> None:
        mock_llm.complete.return_value = raw

        reply = await chat_service.reply("who are you")

        assert reply.intent == Intent.PROFILE_BASIC
        assert reply.text == "I don't know."


class TestFailureFallback:
    """Any failure yields the canonical unknown answer."""

    @pytest.mark.asyncio
    async def test_generation_error_should_reply_unknown(self, chat_service, mock_llm) -> None:
        mock_llm.complete.side_effect = GenerationError("down", status_code=503)

        reply = await chat_service.reply("hey there")

        assert reply.text == "I don't know."
        assert reply.intent == Intent.SMALL_TALK

    @pytest.mark.asyncio
    async def test_retrieval_error_should_reply_unknown(
        self, chat_service, mock_llm, mock_context
    ) -> None:
        mock_context.build_context.side_effect = VectorStoreError("unreachable")

        reply = await chat_service.reply("tell me about kubernetes")

        assert reply.text == "I don't know."
        assert reply.context_used is False
        mock_llm.complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_output_should_reply_unknown(self, chat_service, mock_llm) -> None:
        mock_llm.complete.return_value = "   "

        reply = await chat_service.reply("hey there")

        assert reply.text == "I don't know."
