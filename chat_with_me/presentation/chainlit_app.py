import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import chainlit as cl

from chat_with_me.config.settings import settings
from chat_with_me.container import configure_container, container
from chat_with_me.core.protocols.embedder import EmbedderProtocol
from chat_with_me.core.services.chat_service import ChatService

logger = logging.getLogger(__name__)

configure_container(settings)

GREETING = "Hi! Ask me about my work, my stack, or how to get in touch about a role."


@cl.on_chat_start
async def start():
    embedder = container.resolve(EmbedderProtocol)
    try:
        embedder.warmup()
    except Exception as e:
        logger.warning(f"Embedder warmup failed: {e}")

    await cl.Message(content=GREETING).send()


@cl.on_message
async def main(message: cl.Message):
    chat_service = container.resolve(ChatService)

    async with cl.Step(name="Routing") as step:
        step.input = message.content
        reply = await chat_service.reply(message.content.strip())
        step.output = (
            f"Intent: {reply.intent.value}\n"
            f"Context: {'found' if reply.context_used else 'none'}"
        )

    await cl.Message(content=reply.text).send()


@cl.on_stop
async def stop():
    await cl.Message(content="Generation stopped").send()
