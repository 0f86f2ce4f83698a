"""Session factory functions for CLI.

Centralizes creation of settings, sessions and logging from environment
variables. Hides configuration details from command implementations.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from ..config import ENV_LOG_LEVEL, ENV_MODEL_PATH, log_level_from_string
from ..conversation import create_conversation_store
from ..model import ModelManager
from ..session import GenerationSession
from ..settings import ModelSettings

# Default console for output
_console = Console()


def configure_logging(level: str | None = None, console: Console | None = None) -> int:
    """Route corechat logging through Rich.

    Args:
        level: Level name; falls back to CORECHAT_LOG_LEVEL, then WARNING
        console: Console the handler writes to

    Returns:
        The numeric level applied
    """
    numeric = log_level_from_string(level or os.getenv(ENV_LOG_LEVEL, "warning"))
    logging.basicConfig(
        level=numeric,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or _console, show_path=False)],
        force=True,
    )
    return numeric


def get_settings(
    simulated: bool | None = None,
    temperature: float | None = None,
    max_tokens: int | None = None,
    top_p: float | None = None,
) -> ModelSettings:
    """Create settings from environment variables and CLI overrides.

    Environment variables:
        CORECHAT_TEMPERATURE, CORECHAT_MAX_TOKENS, CORECHAT_TOP_P,
        CORECHAT_SIMULATED, CORECHAT_BACKEND_TIMEOUT
    """
    return ModelSettings.from_env(
        use_simulated_responses=simulated,
        temperature=temperature,
        max_tokens=max_tokens,
        top_p=top_p,
    )


def get_model_manager() -> ModelManager:
    """Create the local model manager.

    Environment variables:
        CORECHAT_MODEL_PATH: Optional model file checked when loading
    """
    return ModelManager(model_path=os.getenv(ENV_MODEL_PATH) or None)


def get_session(settings: ModelSettings) -> GenerationSession:
    """Create a generation session with a fresh in-memory conversation."""
    return GenerationSession(
        store=create_conversation_store("memory"),
        settings=settings,
        model_manager=get_model_manager(),
    )
