"""Simulated content producer.

Picks one canned reply and reveals it one character at a time, imitating
token streaming from a language model. Lets the chat flow be exercised
without any model present.
"""

import asyncio
import logging
import random
from collections.abc import AsyncIterator, Sequence

from ..config import TYPING_DELAY_SECONDS
from .base import ContentProducer

logger = logging.getLogger(__name__)

SIMULATED_RESPONSES: tuple[str, ...] = (
    "I'm a simulated AI response running on your machine! The real local model will go here once you add it.",
    "This is pretty cool! I can chat with you in the terminal while we wait for the actual language model to be integrated.",
    "Once the local model is added, I'll run entirely on your own hardware - no internet required!",
    "The interface is fully functional. Try asking me different questions to see how the chat flows!",
    "Privacy first! When the real model is added, all your conversations will stay on your device.",
    "The typing animation you're seeing? That's simulating real token streaming from a language model.",
    "Pretty responsive, right? That's asyncio streaming each character as soon as it is ready.",
)


class SimulatedProducer(ContentProducer):
    """Streams a randomly chosen canned reply character by character.

    Prompt, max_tokens and temperature are accepted but ignored. A stream
    cannot be cancelled once started.
    """

    incremental = True

    def __init__(
        self,
        responses: Sequence[str] = SIMULATED_RESPONSES,
        delay: float = TYPING_DELAY_SECONDS,
        rng: random.Random | None = None,
    ):
        """Initialize the simulated producer.

        Args:
            responses: Replies to choose from (must not be empty)
            delay: Seconds to wait after each emitted character
            rng: Random source used to pick a reply
        """
        if not responses:
            raise ValueError("SimulatedProducer requires at least one response")
        self._responses = tuple(responses)
        self._delay = delay
        self._rng = rng or random.Random()

    @property
    def responses(self) -> tuple[str, ...]:
        return self._responses

    @property
    def delay(self) -> float:
        return self._delay

    def choose_response(self) -> str:
        return self._rng.choice(self._responses)

    async def produce(self, prompt: str, max_tokens: int, temperature: float) -> str:
        return self.choose_response()

    async def stream(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float
    ) -> AsyncIterator[str]:
        response = self.choose_response()
        logger.debug("Simulating %d-character response", len(response))
        for char in response:
            yield char
            await asyncio.sleep(self._delay)

    @property
    def producer_type(self) -> str:
        return "simulated"
