import asyncio
import logging
import subprocess
import sys
import time
from pathlib import Path

import httpx

from chat_with_me.config.settings import settings
from chat_with_me.container import configure_container, container
from chat_with_me.core.services.chat_service import ChatService
from chat_with_me.core.services.ingest_service import IngestService
from chat_with_me.core.services.router_service import RouterService

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

USAGE = """Usage: python -m chat_with_me.presentation.cli <command>
Commands:
  ingest [path] [doc_id]   index a file or the docs folder
  chat <message>           answer one message
  route <message>          print the intent of a message
  startup                  wait for Ollama, index docs, run Chainlit"""


def _pull_model(base_url: str, model: str) -> bool:
    logger.info(f"Pulling model {model}...")
    try:
        pull_resp = httpx.post(
            f"{base_url}/api/pull",
            json={"name": model},
            timeout=600,
        )
    except httpx.HTTPError as e:
        logger.error(f"Failed to pull model {model}: {e}")
        return False

    if pull_resp.status_code != 200:
        logger.error(f"Failed to pull model: {pull_resp.text}")
        return False
    logger.info(f"Model {model} pulled successfully")
    return True


def ensure_ollama_models() -> bool:
    """Ensure chat and embedding models are available in Ollama.

    Returns:
        True if models ready, False otherwise.
    """
    base_url = settings.ollama_url.rstrip("/")
    wanted = [settings.llm_model]
    if settings.embedding_backend == "ollama":
        wanted.append(settings.embedding_model)

    logger.info(f"Checking Ollama models: {', '.join(wanted)}")

    for attempt in range(30):
        try:
            resp = httpx.get(f"{base_url}/api/tags", timeout=5)
        except httpx.HTTPError:
            logger.info(f"Waiting for Ollama... ({attempt + 1}/30)")
            time.sleep(2)
            continue

        if resp.status_code != 200:
            time.sleep(2)
            continue

        present = [m["name"] for m in resp.json().get("models", [])]
        missing = [w for w in wanted if not any(w in name for name in present)]
        if not missing:
            logger.info("Ollama models are ready")
            return True

        if all(_pull_model(base_url, model) for model in missing):
            return True
        time.sleep(2)

    logger.error("Ollama not available")
    return False


def cmd_ingest(args: list[str]) -> None:
    """Ingest command - index a file or the docs folder."""
    configure_container(settings)
    ingest_service = container.resolve(IngestService)

    target = Path(args[0]) if args else Path(settings.docs_path)
    if target.is_file():
        count = ingest_service.ingest_file(target, args[1] if len(args) > 1 else None)
    else:
        count = ingest_service.run(target)
    logger.info(f"Indexed {count} chunks")


def cmd_chat(args: list[str]) -> None:
    """Chat command - answer a single message."""
    configure_container(settings)
    chat_service = container.resolve(ChatService)
    reply = asyncio.run(chat_service.reply(" ".join(args)))
    print(reply.text)


def cmd_route(args: list[str]) -> None:
    router = RouterService(config_path=settings.router_config_path)
    print(router.route(" ".join(args)).value)


def cmd_startup() -> None:
    """Startup command - models, index, run."""
    logger.info("Starting chat-with-me...")

    if not ensure_ollama_models():
        sys.exit(1)

    configure_container(settings)
    container.resolve(IngestService).run()

    logger.info("Starting Chainlit...")
    subprocess.run(
        [
            sys.executable,
            "-m",
            "chainlit",
            "run",
            str(Path(__file__).with_name("chainlit_app.py")),
            "--host",
            "0.0.0.0",
            "--port",
            "8000",
        ]
    )


def main() -> None:
    """CLI entry point."""
    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)

    command, args = sys.argv[1], sys.argv[2:]

    if command == "ingest":
        cmd_ingest(args)
    elif command in ("chat", "route"):
        if not args:
            print(USAGE)
            sys.exit(1)
        if command == "chat":
            cmd_chat(args)
        else:
            cmd_route(args)
    elif command == "startup":
        cmd_startup()
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
