"""Unit tests for content producers and the local model stub."""
import random

import pytest
from hypothesis import given
from hypothesis import strategies as st

from corechat.errors import InferenceError, ModelNotFoundError, ModelNotLoadedError
from corechat.model import PLACEHOLDER_RESPONSE, ModelManager
from corechat.producers import (
    SIMULATED_RESPONSES,
    ContentProducer,
    LocalModelProducer,
    SimulatedProducer,
    create_content_producer,
    producer_for_settings,
)
from corechat.settings import ModelSettings


class TestContentProducerInterface:
    """Tests for the abstract ContentProducer interface."""

    def test_producer_is_abstract(self):
        """Test that ContentProducer cannot be instantiated directly."""
        with pytest.raises(TypeError):
            ContentProducer()  # type: ignore

    @pytest.mark.asyncio
    async def test_default_stream_yields_complete_response_once(self, static_producer):
        chunks = [chunk async for chunk in static_producer.stream("p", 10, 0.5)]
        assert chunks == ["Static reply"]
        assert static_producer.calls == [("p", 10, 0.5)]


class TestSimulatedProducer:
    """Tests for SimulatedProducer."""

    def test_corpus_has_seven_replies(self):
        assert len(SIMULATED_RESPONSES) == 7
        assert all(SIMULATED_RESPONSES)

    def test_defaults(self):
        producer = SimulatedProducer()
        assert producer.delay == 0.02
        assert producer.incremental is True
        assert producer.producer_type == "simulated"

    def test_requires_responses(self):
        with pytest.raises(ValueError):
            SimulatedProducer(responses=())

    @pytest.mark.asyncio
    async def test_stream_emits_one_character_at_a_time(self):
        producer = SimulatedProducer(responses=("Hey!",), delay=0.0)
        chunks = [chunk async for chunk in producer.stream("ignored", 150, 0.7)]
        assert chunks == ["H", "e", "y", "!"]

    @pytest.mark.asyncio
    async def test_produce_returns_reply_from_corpus(self, fast_simulated):
        reply = await fast_simulated.produce("ignored", 150, 0.7)
        assert reply in SIMULATED_RESPONSES

    @given(st.integers(min_value=0, max_value=2**32 - 1))
    def test_choice_is_always_from_corpus(self, seed: int):
        """Property test: any seed picks one of the fixed replies."""
        producer = SimulatedProducer(delay=0.0, rng=random.Random(seed))
        assert producer.choose_response() in SIMULATED_RESPONSES


class TestModelManager:
    """Tests for the local model stub."""

    @pytest.mark.asyncio
    async def test_generate_requires_loaded_model(self):
        manager = ModelManager(load_delay=0.0)
        with pytest.raises(ModelNotLoadedError, match="has not been loaded"):
            await manager.generate("User: hi", 150, 0.7)

    @pytest.mark.asyncio
    async def test_load_then_generate(self):
        manager = ModelManager(load_delay=0.0)
        assert manager.model_info == "No model loaded"

        await manager.load_model()

        assert manager.is_loaded
        assert manager.model_info == "Model loaded (simulated mode)"
        assert await manager.generate("User: hi", 150, 0.7) == PLACEHOLDER_RESPONSE

    @pytest.mark.asyncio
    async def test_missing_model_file(self, tmp_path):
        manager = ModelManager(model_path=tmp_path / "missing.bin", load_delay=0.0)
        with pytest.raises(ModelNotFoundError, match="not found"):
            await manager.load_model()
        assert not manager.is_loaded

    @pytest.mark.asyncio
    async def test_existing_model_file_loads(self, tmp_path):
        model_file = tmp_path / "model.bin"
        model_file.write_bytes(b"\x00")
        manager = ModelManager(model_path=model_file, load_delay=0.0)

        await manager.load_model()

        assert manager.is_loaded

    @pytest.mark.asyncio
    async def test_streaming_generation_not_available(self):
        manager = ModelManager(load_delay=0.0)
        await manager.load_model()
        with pytest.raises(ModelNotLoadedError):
            await manager.generate_streaming("p", 10, 0.5, on_token=lambda token: None)

    def test_memory_usage_placeholder(self):
        assert ModelManager().estimated_memory_usage() == 0


class TestLocalModelProducer:
    """Tests for LocalModelProducer."""

    @pytest.mark.asyncio
    async def test_unloaded_model_raises_backend_error(self):
        producer = LocalModelProducer(ModelManager(load_delay=0.0))
        assert producer.incremental is False
        with pytest.raises(ModelNotLoadedError):
            await producer.produce("User: hi", 150, 0.7)

    @pytest.mark.asyncio
    async def test_auto_load(self):
        manager = ModelManager(load_delay=0.0)
        producer = LocalModelProducer(manager, auto_load=True)

        assert await producer.produce("User: hi", 150, 0.7) == PLACEHOLDER_RESPONSE
        assert manager.is_loaded

    @pytest.mark.asyncio
    async def test_unexpected_errors_become_inference_errors(self):
        class BrokenManager(ModelManager):
            async def generate(self, prompt, max_tokens, temperature):
                raise RuntimeError("device lost")

        producer = LocalModelProducer(BrokenManager(load_delay=0.0))
        with pytest.raises(InferenceError, match="device lost"):
            await producer.produce("User: hi", 150, 0.7)

    @pytest.mark.asyncio
    async def test_close_unloads_model(self):
        manager = ModelManager(load_delay=0.0)
        await manager.load_model()

        async with LocalModelProducer(manager):
            pass

        assert not manager.is_loaded


class TestProducerFactory:
    """Tests for producer factory functions."""

    def test_create_simulated(self):
        producer = create_content_producer("simulated", delay=0.0)
        assert isinstance(producer, SimulatedProducer)

    def test_create_local(self):
        manager = ModelManager()
        producer = create_content_producer("local", model_manager=manager)
        assert isinstance(producer, LocalModelProducer)
        assert producer.model_manager is manager

    def test_unknown_producer(self):
        with pytest.raises(ValueError, match="Unsupported producer"):
            create_content_producer("cloud")

    def test_producer_for_settings(self):
        assert isinstance(producer_for_settings(ModelSettings()), SimulatedProducer)
        local = producer_for_settings(ModelSettings(use_simulated_responses=False))
        assert isinstance(local, LocalModelProducer)
