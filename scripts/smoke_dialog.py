#!/usr/bin/env python3
"""
Smoke test of the chat pipeline against live Ollama + Qdrant.

Run (after `python -m chat_with_me.presentation.cli ingest`):
  python scripts/smoke_dialog.py

Options:
  --print-answers    Print full answers
  --route-only       Check intents only (no network)
"""

import argparse
import asyncio
import sys

from chat_with_me.config.settings import settings
from chat_with_me.container import configure_container, container
from chat_with_me.core.services.chat_service import ChatService
from chat_with_me.core.services.router_service import RouterService

TESTS = [
    {
        "q": "What's your favorite dog?",
        "intent": "profile_specific",
        "expect_any": ["shiba"],
    },
    {
        "q": "How do you deploy with Docker and GitHub Actions?",
        "intent": "deep_tech",
        "expect_none": ["Favorite dog", "Has visited"],
    },
    {
        "q": "Are you available for a contract role?",
        "intent": "hiring",
        "expect_none": ["Prompt:", "Answer:"],
    },
    {
        "q": "Who are you?",
        "intent": "profile_basic",
        "max_sentences": 4,
    },
    {
        "q": "hey, how's it going",
        "intent": "small_talk",
        "max_sentences": 3,
    },
    {
        "q": "What's your favorite volcano?",
        "intent": "profile_specific",
        "expect_any": ["I don't know"],
    },
]


def normalize(text: str) -> str:
    return (text or "").lower()


def check_expectations(answer: str, test: dict) -> list[str]:
    errors = []
    ans = normalize(answer)

    expect_any = test.get("expect_any") or []
    expect_none = test.get("expect_none") or []

    if expect_any:
        if not any(normalize(x) in ans for x in expect_any):
            errors.append(f"missing any of: {expect_any}")

    for token in expect_none:
        if normalize(token) in ans:
            errors.append(f"should not contain: {token}")

    max_sentences = test.get("max_sentences")
    if max_sentences:
        count = sum(answer.count(p) for p in ".!?")
        if count > max_sentences:
            errors.append(f"too long: {count} sentences")

    return errors


async def run(print_answers: bool, route_only: bool) -> int:
    router = RouterService(config_path=settings.router_config_path)
    chat_service = None if route_only else container.resolve(ChatService)

    failures = 0
    for idx, test in enumerate(TESTS, start=1):
        q = test["q"]
        print(f"\nQ{idx}: {q}")

        errors = []
        intent = router.route(q).value
        if intent != test["intent"]:
            errors.append(f"intent {intent} != {test['intent']}")

        if chat_service is not None:
            reply = await chat_service.reply(q)
            if print_answers:
                print("A:", reply.text)
            errors.extend(check_expectations(reply.text, test))

        if errors:
            failures += 1
            print("FAIL:", "; ".join(errors))
        else:
            print("OK")

    return failures


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--print-answers", action="store_true")
    parser.add_argument("--route-only", action="store_true")
    args = parser.parse_args()

    if not args.route_only:
        configure_container(settings)

    failures = asyncio.run(run(args.print_answers, args.route_only))
    if failures:
        print(f"\nFAILED: {failures} test(s) failed")
        sys.exit(1)
    print("\nALL OK")
    return 0


if __name__ == "__main__":
    main()
