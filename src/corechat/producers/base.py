from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any


class ContentProducer(ABC):
    """Abstract base class for content producers.

    This module hides the design decision of where assistant text comes
    from. Implementations must handle:
    - Turning a formatted prompt into response text
    - Reporting failures as ProducerError subclasses
    - Deciding whether text is revealed incrementally

    Incremental producers are consumed through stream(), one increment at
    a time. Other producers are awaited once through produce().

    Supports async context manager protocol for proper resource cleanup:
        async with producer:
            text = await producer.produce(prompt, max_tokens=150, temperature=0.7)
    """

    #: True when stream() reveals text gradually rather than all at once
    incremental: bool = False

    @abstractmethod
    async def produce(self, prompt: str, max_tokens: int, temperature: float) -> str:
        """Produce a complete response.

        Args:
            prompt: Conversation context as "User:"/"Assistant:" lines
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature (0.0 to 2.0)

        Returns:
            The complete response text

        Raises:
            ProducerError: If no response could be produced
        """

    async def stream(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float
    ) -> AsyncIterator[str]:
        """Yield response text as successive increments.

        The default yields the complete produce() result once.
        """
        yield await self.produce(prompt, max_tokens, temperature)

    @property
    @abstractmethod
    def producer_type(self) -> str:
        """Get the producer type identifier."""

    async def close(self) -> None:
        """Release any resources held by the producer."""

    async def __aenter__(self) -> "ContentProducer":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
