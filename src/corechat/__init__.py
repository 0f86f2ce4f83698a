"""
CoreChat: a local chat engine with streaming responses.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .conversation import (
    Conversation,
    ConversationStore,
    Message,
    Sender,
    create_conversation_store,
)
from .errors import (
    AlreadyGeneratingError,
    BackendUnavailableError,
    CoreChatError,
    EmptyInputError,
    InferenceError,
    ProducerError,
)
from .producers import ContentProducer, SimulatedProducer, create_content_producer
from .session import GenerationSession
from .settings import ModelSettings

__all__ = [
    "AlreadyGeneratingError",
    "BackendUnavailableError",
    "ContentProducer",
    "Conversation",
    "ConversationStore",
    "CoreChatError",
    "EmptyInputError",
    "GenerationSession",
    "InferenceError",
    "Message",
    "ModelSettings",
    "ProducerError",
    "Sender",
    "SimulatedProducer",
    "create_content_producer",
    "create_conversation_store",
]
