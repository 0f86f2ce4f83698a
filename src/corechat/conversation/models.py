"""Data models for conversations.

Messages are immutable values: streaming updates build a new Message and
replace the old one at its index instead of mutating it in place.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from ..config import CONTEXT_WINDOW_SIZE, DEFAULT_CONVERSATION_TITLE


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Sender(str, Enum):
    """Author of a message."""

    USER = "user"
    ASSISTANT = "assistant"

    @property
    def label(self) -> str:
        """Label used when rendering the message into a prompt."""
        return "User" if self is Sender.USER else "Assistant"


class Message(BaseModel):
    """A single chat message."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    content: str = Field(default="", description="Message text")
    sender: Sender = Field(description="Who wrote the message")
    timestamp: datetime = Field(default_factory=utc_now)
    is_streaming: bool = Field(
        default=False,
        description="True while content is still being appended"
    )

    @property
    def is_from_user(self) -> bool:
        return self.sender is Sender.USER

    def with_content(self, content: str) -> "Message":
        """Return a copy with new content and everything else preserved."""
        return self.model_copy(update={"content": content})

    def finalized(self) -> "Message":
        """Return a copy with the streaming flag cleared."""
        return self.model_copy(update={"is_streaming": False})


class Conversation(BaseModel):
    """An ordered log of messages.

    Insertion order is conversation order and is never changed.
    """

    id: UUID = Field(default_factory=uuid4)
    messages: list[Message] = Field(default_factory=list)
    title: str = Field(default=DEFAULT_CONVERSATION_TITLE)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def last_message(self) -> Message | None:
        return self.messages[-1] if self.messages else None

    def to_context_string(self, limit: int = CONTEXT_WINDOW_SIZE) -> str:
        """Render the last ``limit`` messages as a backend prompt.

        Each message becomes a "User: ..." or "Assistant: ..." line. Every
        message present is included, so an empty streaming placeholder
        renders as a trailing "Assistant: " line.

        Args:
            limit: Maximum number of recent messages to include

        Returns:
            Newline-joined prompt text
        """
        if limit <= 0:
            return ""
        return "\n".join(
            f"{message.sender.label}: {message.content}"
            for message in self.messages[-limit:]
        )
