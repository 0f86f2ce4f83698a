"""Generation session module for corechat.

Drives request/response turns over a conversation store.
"""

from .generation import GenerationSession

__all__ = ["GenerationSession"]
