"""Local model management and inference.

There is no inference engine yet: loading only simulates the time it takes
and generation returns a fixed placeholder response. The interface is the
one a real on-device model will fill in.
"""

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

from ..config import MODEL_LOAD_DELAY_SECONDS
from ..errors import ModelNotFoundError, ModelNotLoadedError

logger = logging.getLogger(__name__)

PLACEHOLDER_RESPONSE = (
    "This is a placeholder response. Real on-device inference will happen "
    "here once the model is integrated."
)


class ModelManager:
    """Owns the local model and runs inference against it."""

    def __init__(
        self,
        model_path: str | Path | None = None,
        load_delay: float = MODEL_LOAD_DELAY_SECONDS,
    ) -> None:
        """Initialize the manager.

        Args:
            model_path: Optional model file; checked for existence on load
            load_delay: Seconds spent simulating the model load
        """
        self._model_path = Path(model_path) if model_path else None
        self._load_delay = load_delay
        self._is_loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._is_loaded

    @property
    def model_path(self) -> Path | None:
        return self._model_path

    async def load_model(self) -> None:
        """Load the model.

        Raises:
            ModelNotFoundError: If a model path was given and does not exist
        """
        if self._model_path is not None and not self._model_path.exists():
            raise ModelNotFoundError(str(self._model_path))

        logger.info("Loading local model")
        await asyncio.sleep(self._load_delay)
        self._is_loaded = True
        logger.info("Local model ready")

    def unload_model(self) -> None:
        self._is_loaded = False

    async def generate(self, prompt: str, max_tokens: int, temperature: float) -> str:
        """Generate a complete response for a prompt.

        Args:
            prompt: Formatted conversation context
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature

        Returns:
            Generated text

        Raises:
            ModelNotLoadedError: If load_model() has not completed
        """
        if not self._is_loaded:
            raise ModelNotLoadedError()

        logger.debug(
            "Generating (prompt_chars=%d, max_tokens=%d, temperature=%.2f)",
            len(prompt), max_tokens, temperature
        )
        return PLACEHOLDER_RESPONSE

    async def generate_streaming(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float,
        on_token: Callable[[str], None],
    ) -> None:
        """Generate a response token by token.

        Token streaming needs a stateful decoder, which the local model does
        not have yet, so this always reports the model as unavailable.
        """
        raise ModelNotLoadedError()

    @property
    def model_info(self) -> str:
        if self._is_loaded:
            return "Model loaded (simulated mode)"
        return "No model loaded"

    def estimated_memory_usage(self) -> int:
        """Estimated resident size of the loaded model, in bytes."""
        return 0
