"""Conversation module for corechat.

Owns the ordered message log and its mutation invariants.
"""

from .base import ConversationObserver, ConversationStore
from .factory import create_conversation_store
from .in_memory import InMemoryConversationStore
from .models import Conversation, Message, Sender

__all__ = [
    "Conversation",
    "ConversationObserver",
    "ConversationStore",
    "InMemoryConversationStore",
    "Message",
    "Sender",
    "create_conversation_store",
]
