"""Pytest configuration and shared fixtures."""
import asyncio
import random

import pytest

from corechat.conversation import create_conversation_store
from corechat.errors import InferenceError
from corechat.producers import ContentProducer, SimulatedProducer
from corechat.session import GenerationSession
from corechat.settings import ModelSettings


class StaticProducer(ContentProducer):
    """Non-incremental producer returning a fixed reply and recording prompts."""

    def __init__(self, reply: str = "Static reply"):
        self.reply = reply
        self.calls: list[tuple[str, int, float]] = []

    async def produce(self, prompt: str, max_tokens: int, temperature: float) -> str:
        self.calls.append((prompt, max_tokens, temperature))
        return self.reply

    @property
    def producer_type(self) -> str:
        return "static"


class FailingProducer(ContentProducer):
    """Producer that always raises the given error."""

    def __init__(self, error: Exception | None = None):
        self.error = error or InferenceError("timeout")

    async def produce(self, prompt: str, max_tokens: int, temperature: float) -> str:
        raise self.error

    @property
    def producer_type(self) -> str:
        return "failing"


class BlockingProducer(ContentProducer):
    """Producer that waits until released, to hold a turn in flight."""

    def __init__(self, reply: str = "Released"):
        self.reply = reply
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def produce(self, prompt: str, max_tokens: int, temperature: float) -> str:
        self.started.set()
        await self.release.wait()
        return self.reply

    @property
    def producer_type(self) -> str:
        return "blocking"


@pytest.fixture
def store():
    """Return an empty in-memory conversation store."""
    return create_conversation_store("memory")


@pytest.fixture
def fast_simulated():
    """Return a simulated producer with no typing delay and a fixed seed."""
    return SimulatedProducer(delay=0.0, rng=random.Random(7))


@pytest.fixture
def static_producer():
    return StaticProducer()


@pytest.fixture
def make_session(store):
    """Return a factory building sessions over the shared store."""
    def _make(producer: ContentProducer, **settings_kwargs) -> GenerationSession:
        return GenerationSession(
            store=store,
            settings=ModelSettings(**settings_kwargs),
            producer=producer,
        )
    return _make
