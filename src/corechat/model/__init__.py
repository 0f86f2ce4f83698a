"""Local model module for corechat."""

from .manager import PLACEHOLDER_RESPONSE, ModelManager

__all__ = ["PLACEHOLDER_RESPONSE", "ModelManager"]
