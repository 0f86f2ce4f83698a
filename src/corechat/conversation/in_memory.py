"""In-memory conversation store.

Simple list-based storage for session-only conversations.
Data is lost when the application exits.
"""

import logging
import threading

from .base import ConversationStore
from .models import Conversation, Message, utc_now

logger = logging.getLogger(__name__)


class InMemoryConversationStore(ConversationStore):
    """In-memory conversation store (session-only).

    Mutations replace messages at their index; readers receive snapshots
    and may read from any thread at any time.
    """

    def __init__(self, conversation: Conversation | None = None):
        super().__init__()
        self._conversation = conversation or Conversation()
        self._lock = threading.RLock()

    def _touch(self) -> None:
        # Never move backwards, even if the wall clock does
        now = utc_now()
        if now > self._conversation.updated_at:
            self._conversation.updated_at = now

    def append(self, message: Message) -> None:
        """Append a message.

        A message that is still streaming is finalized before another
        message is appended after it.
        """
        with self._lock:
            messages = self._conversation.messages
            if messages and messages[-1].is_streaming:
                logger.debug("Finalizing streaming message %s before append", messages[-1].id)
                messages[-1] = messages[-1].finalized()
            messages.append(message)
            self._touch()
        self._notify()

    def update_last_content(self, content: str) -> None:
        """Replace the last message's content.

        No-op when the conversation is empty or the last message has
        already been finalized.
        """
        with self._lock:
            messages = self._conversation.messages
            if not messages:
                return
            last = messages[-1]
            if not last.is_streaming:
                logger.debug("Ignoring content update for finalized message %s", last.id)
                return
            messages[-1] = last.with_content(content)
            self._touch()
        self._notify()

    def finalize_last(self) -> None:
        with self._lock:
            messages = self._conversation.messages
            if not messages or not messages[-1].is_streaming:
                return
            messages[-1] = messages[-1].finalized()
            self._touch()
        self._notify()

    def remove_last(self) -> Message | None:
        with self._lock:
            messages = self._conversation.messages
            if not messages:
                return None
            removed = messages.pop()
            self._touch()
        self._notify()
        return removed

    def clear(self) -> None:
        with self._lock:
            self._conversation = Conversation()
        self._notify()

    @property
    def conversation(self) -> Conversation:
        with self._lock:
            return self._conversation.model_copy(
                update={"messages": list(self._conversation.messages)}
            )

    @property
    def backend_type(self) -> str:
        return "memory"
