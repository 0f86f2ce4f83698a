"""Content producers for corechat.

A content producer turns a conversation prompt into assistant text, either
simulated or from the local model.
"""

from .base import ContentProducer
from .factory import create_content_producer, producer_for_settings
from .local_model import LocalModelProducer
from .simulated import SIMULATED_RESPONSES, SimulatedProducer

__all__ = [
    "SIMULATED_RESPONSES",
    "ContentProducer",
    "LocalModelProducer",
    "SimulatedProducer",
    "create_content_producer",
    "producer_for_settings",
]
