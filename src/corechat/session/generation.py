"""Generation session: drives request/response turns over a conversation.

A turn appends the user's message, appends an empty streaming assistant
placeholder, fills the placeholder from a content producer and finalizes
it. When the producer fails the placeholder is removed again and a single
human-readable error is recorded.

Only one turn may be in flight. The in-flight slot is a lock acquired
without blocking, so a second caller (from any thread) is turned away
rather than queued.
"""

import asyncio
import logging
import threading
from collections.abc import Coroutine
from typing import Any

from ..config import CONTEXT_WINDOW_SIZE, GENERATION_ERROR_PREFIX
from ..conversation import ConversationStore, Message, Sender, create_conversation_store
from ..errors import (
    AlreadyGeneratingError,
    EmptyInputError,
    InferenceError,
    ProducerError,
    TurnRejectedError,
)
from ..model import ModelManager
from ..producers import ContentProducer, producer_for_settings
from ..settings import ModelSettings

logger = logging.getLogger(__name__)


class GenerationSession:
    """Owns a conversation and runs generation turns against it.

    Usage:
        session = GenerationSession(producer=SimulatedProducer(delay=0))
        await session.send_message("Hello")
        print(session.store.last_message.content)
    """

    def __init__(
        self,
        store: ConversationStore | None = None,
        settings: ModelSettings | None = None,
        producer: ContentProducer | None = None,
        model_manager: ModelManager | None = None,
        context_window: int = CONTEXT_WINDOW_SIZE,
    ):
        """Initialize the session.

        Args:
            store: Conversation store (a new in-memory store by default)
            settings: Generation settings
            producer: Content producer; when omitted one is chosen from
                settings.use_simulated_responses at the start of each turn
            model_manager: Local model used when no producer is injected
            context_window: Number of recent messages sent as the prompt
        """
        self._store = store or create_conversation_store()
        self._settings = settings or ModelSettings()
        self._producer = producer
        self._model_manager = model_manager or ModelManager()
        self._context_window = context_window
        self._turn_slot = threading.Lock()
        self._error_message: str | None = None
        self._task: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def settings(self) -> ModelSettings:
        return self._settings

    @settings.setter
    def settings(self, settings: ModelSettings) -> None:
        # Takes effect from the next turn
        self._settings = settings

    @property
    def model_manager(self) -> ModelManager:
        return self._model_manager

    @property
    def producer(self) -> ContentProducer:
        """Producer the next turn will use."""
        if self._producer is not None:
            return self._producer
        return producer_for_settings(self._settings, self._model_manager)

    @producer.setter
    def producer(self, producer: ContentProducer | None) -> None:
        # None goes back to choosing from settings; takes effect next turn
        self._producer = producer

    @property
    def is_generating(self) -> bool:
        return self._turn_slot.locked()

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def current_task(self) -> "asyncio.Task[None] | None":
        """Task handle of the turn started by submit(), if any."""
        return self._task

    def dismiss_error(self) -> None:
        self._error_message = None

    def build_context(self) -> str:
        """Render the recent conversation as the backend prompt."""
        return self._store.conversation.to_context_string(self._context_window)

    # ------------------------------------------------------------------
    # Turn initiators
    # ------------------------------------------------------------------

    async def send_message(self, content: str) -> bool:
        """Submit user text and run a full turn.

        Args:
            content: Raw user input; surrounding whitespace is trimmed

        Returns:
            True if a turn ran, False if it was rejected (empty input or a
            turn already in flight). A failed turn still returns True and
            records error_message.
        """
        text = content.strip()
        if not text:
            self._reject(EmptyInputError())
            return False
        if not self._acquire_turn():
            return False
        await self._run_held(self._user_turn(text))
        return True

    async def regenerate_last_response(self) -> bool:
        """Replace the last assistant reply with a freshly generated one.

        The last message is removed only if it came from the assistant; the
        turn then runs against the messages already in the log without
        adding a new user message.

        Returns:
            True if a turn ran, False if it was rejected
        """
        if not self._can_regenerate():
            return False
        if not self._acquire_turn():
            return False
        await self._run_held(self._regenerate_turn())
        return True

    def submit(self, content: str) -> "asyncio.Task[None] | None":
        """Start a turn in the background on the running event loop.

        Returns:
            The task running the turn, or None if the turn was rejected
        """
        text = content.strip()
        if not text:
            self._reject(EmptyInputError())
            return None
        if not self._acquire_turn():
            return None
        return self._spawn(self._user_turn(text))

    def submit_regenerate(self) -> "asyncio.Task[None] | None":
        """Start a regeneration turn in the background."""
        if not self._can_regenerate():
            return None
        if not self._acquire_turn():
            return None
        return self._spawn(self._regenerate_turn())

    async def wait_until_idle(self) -> None:
        """Wait for a turn started by submit() to finish."""
        task = self._task
        if task is not None and not task.done():
            await task

    def clear_conversation(self) -> bool:
        """Start over with an empty conversation.

        Ignored while a turn is in flight, since the turn still owns the
        placeholder at the end of the log.

        Returns:
            True if the conversation was cleared
        """
        if self.is_generating:
            logger.info("Ignoring clear while a response is being generated")
            return False
        self._store.clear()
        self._error_message = None
        return True

    # ------------------------------------------------------------------
    # Turn plumbing
    # ------------------------------------------------------------------

    def _reject(self, reason: TurnRejectedError) -> None:
        logger.debug("Turn rejected: %s", reason)

    def _acquire_turn(self) -> bool:
        if not self._turn_slot.acquire(blocking=False):
            self._reject(AlreadyGeneratingError())
            return False
        self._error_message = None
        return True

    def _can_regenerate(self) -> bool:
        if not any(message.is_from_user for message in self._store.messages):
            logger.debug("Nothing to regenerate: no user message in conversation")
            return False
        return True

    async def _run_held(self, turn: Coroutine[Any, Any, None]) -> None:
        try:
            await turn
        finally:
            self._turn_slot.release()

    def _spawn(self, turn: Coroutine[Any, Any, None]) -> "asyncio.Task[None]":
        runner = self._run_held(turn)
        try:
            task = asyncio.get_running_loop().create_task(runner)
        except RuntimeError:
            runner.close()
            turn.close()
            self._turn_slot.release()
            raise
        self._task = task
        return task

    async def _user_turn(self, text: str) -> None:
        self._store.append(Message(content=text, sender=Sender.USER))
        await self._generate_response()

    async def _regenerate_turn(self) -> None:
        last = self._store.last_message
        if last is not None and last.sender is Sender.ASSISTANT:
            self._store.remove_last()
        await self._generate_response()

    async def _generate_response(self) -> None:
        settings = self._settings
        producer = self.producer

        self._store.append(Message(content="", sender=Sender.ASSISTANT, is_streaming=True))
        # Computed after the placeholder is appended, so the prompt ends
        # with an empty "Assistant: " line
        prompt = self.build_context()

        logger.info(
            "Generating response with %s producer (%d prompt chars)",
            producer.producer_type, len(prompt)
        )

        try:
            if producer.incremental:
                await self._stream_response(producer, prompt, settings)
            else:
                response = await self._complete_response(producer, prompt, settings)
                self._store.update_last_content(response)
        except ProducerError as e:
            self._fail(e)
            return
        except asyncio.CancelledError:
            self._store.remove_last()
            raise
        except Exception as e:
            logger.exception("Content producer raised an unexpected error")
            self._fail(e)
            return

        self._store.finalize_last()
        logger.info("Response complete")

    async def _stream_response(
        self,
        producer: ContentProducer,
        prompt: str,
        settings: ModelSettings,
    ) -> None:
        content = ""
        async for increment in producer.stream(prompt, settings.max_tokens, settings.temperature):
            content += increment
            # Observers see each increment before the producer resumes
            self._store.update_last_content(content)

    async def _complete_response(
        self,
        producer: ContentProducer,
        prompt: str,
        settings: ModelSettings,
    ) -> str:
        call = producer.produce(prompt, settings.max_tokens, settings.temperature)
        if settings.backend_timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=settings.backend_timeout)
        except asyncio.TimeoutError as e:
            raise InferenceError(
                f"no response within {settings.backend_timeout:g}s"
            ) from e

    def _fail(self, error: Exception) -> None:
        self._store.remove_last()
        description = str(error) or type(error).__name__
        self._error_message = f"{GENERATION_ERROR_PREFIX}: {description}"
        logger.warning("%s", self._error_message)
