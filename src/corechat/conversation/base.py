"""Abstract base class for conversation stores.

This module defines the interface for the message log owned by a chat
session. The abstraction hides:
- Where messages live (in memory today)
- How snapshots are produced for readers
- How observers are notified of changes

All operations are synchronous and never raise. Operations that need a
non-empty log are no-ops on an empty one.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from .models import Conversation, Message

ConversationObserver = Callable[[Conversation], None]

logger = logging.getLogger(__name__)


class ConversationStore(ABC):
    """Abstract conversation store.

    Mutations are limited to appending, replacing the content of the last
    message, finalizing the last message and removing the last message.
    Messages are never reordered.
    """

    def __init__(self) -> None:
        self._observers: list[ConversationObserver] = []

    @abstractmethod
    def append(self, message: Message) -> None:
        """Add a message to the end of the conversation."""

    @abstractmethod
    def update_last_content(self, content: str) -> None:
        """Replace the content of the last message while it is streaming."""

    @abstractmethod
    def finalize_last(self) -> None:
        """Clear the streaming flag on the last message."""

    @abstractmethod
    def remove_last(self) -> Message | None:
        """Remove and return the last message."""

    @abstractmethod
    def clear(self) -> None:
        """Reset to an empty conversation with a new identity."""

    @property
    @abstractmethod
    def conversation(self) -> Conversation:
        """Snapshot of the current conversation."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    @property
    def messages(self) -> list[Message]:
        return self.conversation.messages

    @property
    def last_message(self) -> Message | None:
        return self.conversation.last_message

    def __len__(self) -> int:
        return len(self.conversation.messages)

    def subscribe(self, observer: ConversationObserver) -> Callable[[], None]:
        """Register a callback invoked with a snapshot after every mutation.

        Args:
            observer: Callable receiving the updated conversation

        Returns:
            A callable that removes the observer
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        if not self._observers:
            return
        snapshot = self.conversation
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.exception("Conversation observer %r failed", observer)
