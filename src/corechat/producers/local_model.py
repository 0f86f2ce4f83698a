"""Content producer backed by the local model."""

import logging

from ..errors import InferenceError, ProducerError
from ..model import ModelManager
from .base import ContentProducer

logger = logging.getLogger(__name__)


class LocalModelProducer(ContentProducer):
    """Produces complete responses from a ModelManager.

    Hidden design decisions:
    - Whether the model is loaded lazily on first use
    - How unexpected model failures map onto ProducerError
    """

    def __init__(self, model_manager: ModelManager | None = None, auto_load: bool = False):
        """Initialize the local model producer.

        Args:
            model_manager: Model manager to use (a new one by default)
            auto_load: Load the model on first use instead of failing
        """
        self._manager = model_manager or ModelManager()
        self._auto_load = auto_load

    @property
    def model_manager(self) -> ModelManager:
        return self._manager

    async def produce(self, prompt: str, max_tokens: int, temperature: float) -> str:
        if self._auto_load and not self._manager.is_loaded:
            await self._manager.load_model()

        try:
            response = await self._manager.generate(
                prompt=prompt,
                max_tokens=max_tokens,
                temperature=temperature
            )
        except ProducerError:
            raise
        except Exception as e:
            logger.exception("Local model raised an unexpected error")
            raise InferenceError(str(e) or type(e).__name__) from e

        if not response:
            raise InferenceError("model returned an empty response")
        return response

    async def close(self) -> None:
        self._manager.unload_model()

    @property
    def producer_type(self) -> str:
        return "local"
