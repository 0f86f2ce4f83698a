"""Configuration constants.

Centralizes magic numbers and configuration values for corechat.
"""

import logging

# Level names accepted by --log-level and CORECHAT_LOG_LEVEL
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def log_level_from_string(level_str: str) -> int:
    """Convert a level name to a logging level. Returns WARNING if unknown."""
    return LOG_LEVELS.get(level_str.strip().lower(), logging.WARNING)


# Conversation configuration
DEFAULT_CONVERSATION_TITLE = "New Chat"
CONTEXT_WINDOW_SIZE = 10  # Messages included in the backend prompt

# Simulated streaming
TYPING_DELAY_SECONDS = 0.02  # Delay between emitted characters

# Local model stub
MODEL_LOAD_DELAY_SECONDS = 0.5
DEFAULT_BACKEND_TIMEOUT_SECONDS = 60.0

# Error surfaced to the user when a turn fails
GENERATION_ERROR_PREFIX = "Failed to generate response"

# Environment variable names
ENV_TEMPERATURE = "CORECHAT_TEMPERATURE"
ENV_MAX_TOKENS = "CORECHAT_MAX_TOKENS"
ENV_TOP_P = "CORECHAT_TOP_P"
ENV_SIMULATED = "CORECHAT_SIMULATED"
ENV_BACKEND_TIMEOUT = "CORECHAT_BACKEND_TIMEOUT"
ENV_LOG_LEVEL = "CORECHAT_LOG_LEVEL"
ENV_MODEL_PATH = "CORECHAT_MODEL_PATH"
