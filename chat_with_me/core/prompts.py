"""Prompt fragments and system-content loading."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

FALLBACK_SYSTEM_PROMPT = (
    "You are a helpful assistant. If the answer is not in the provided context, "
    "reply with I don't know."
)

POLICY_TEMPLATE = "\n\nPolicy: {style}"

FORCED_UNKNOWN_PROMPT = (
    "\n\nCRITICAL: If the answer is not in the provided context, "
    "reply strictly with: I don't know."
)

PROMPT_WITH_CONTEXT = """Use only the context to answer. If it is not in the context, say I don't know.

Context:
{context}

Question:
{question}"""

INTRO_SYSTEM_PROMPT = """{policy}

You are crafting a concise INTRO answer. Constraints:
- 2-3 sentences total.
- No lists, no markdown headers, no dataset labels such as 'Prompt:', 'Target:', 'Q:', 'A:', or 'Follow-up:'.
- Friendly and professional; keep it conversational and first-person.

Return ONLY a minified JSON object exactly like this:
{{"answer":"...","follow_up":"..."}}
Do not add markdown fences or any extra text."""

INTRO_USER_PROMPT = """User: {user}

Write the answer in your own voice."""


def _read(path: str) -> str:
    file_path = Path(path)
    if not file_path.exists():
        return ""
    return file_path.read_text(encoding="utf-8").strip()


def load_system_content(
    system_prompt_path: str,
    answer_policies_path: str | None = None,
    append_policies: bool = True,
) -> str:
    """Load the base system prompt and append answer policies if present.

    Args:
        system_prompt_path: Markdown file with the base prompt.
        answer_policies_path: Optional markdown file with answer policies.
        append_policies: Whether policies are appended.

    Returns:
        Combined system content.
    """
    base = _read(system_prompt_path)
    if not base:
        logger.warning(f"System prompt {system_prompt_path} not found, using fallback")
        base = FALLBACK_SYSTEM_PROMPT

    policies = _read(answer_policies_path) if answer_policies_path else ""
    if policies and append_policies:
        return f"{base}\n\n---\n\n{policies}"
    return base
