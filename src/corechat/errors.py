"""Exception hierarchy for corechat.

Rejected turns (empty input, a turn already in flight) are described by
exceptions so they can be logged and reasoned about, but the session never
raises them to callers. Producer failures are caught by the session and
surfaced as a single user-visible error message.
"""


class CoreChatError(Exception):
    """Base class for all corechat errors."""


class TurnRejectedError(CoreChatError):
    """A turn was not started."""


class EmptyInputError(TurnRejectedError):
    """The submitted text was empty after trimming."""

    def __init__(self) -> None:
        super().__init__("Message is empty")


class AlreadyGeneratingError(TurnRejectedError):
    """A generation turn is already in flight."""

    def __init__(self) -> None:
        super().__init__("A response is already being generated")


class ProducerError(CoreChatError):
    """A content producer failed to produce a response."""


class BackendUnavailableError(ProducerError):
    """The inference backend cannot serve requests."""


class ModelNotLoadedError(BackendUnavailableError):
    def __init__(self) -> None:
        super().__init__("Model has not been loaded yet")


class ModelNotFoundError(BackendUnavailableError):
    def __init__(self, path: str | None = None) -> None:
        message = "Model file not found"
        if path:
            message = f"{message}: {path}"
        super().__init__(message)
        self.path = path


class InferenceError(ProducerError):
    """Inference ran but did not yield a response."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Inference failed: {message}")
        self.reason = message
