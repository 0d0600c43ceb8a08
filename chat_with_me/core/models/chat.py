"""Chat domain models."""
from dataclasses import dataclass

from pydantic import BaseModel, Field

from .intent import Intent


@dataclass
class ChatMessage:
    """Chat message."""
    role: str  # "user" | "assistant" | "system"
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass
class ChatReply:
    """Final reply handed to the presentation layer."""
    text: str
    intent: Intent
    context_used: bool = False


class IntroAnswer(BaseModel):
    """Structured reply expected from the model for intro questions."""
    answer: str = Field(max_length=600)
    follow_up: str = Field(default="", max_length=200)
