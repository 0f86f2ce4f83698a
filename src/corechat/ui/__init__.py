"""Terminal rendering helpers for corechat."""

from .formatting import (
    relative_date_string,
    render_conversation,
    render_message,
    settings_table,
    time_string,
)

__all__ = [
    "relative_date_string",
    "render_conversation",
    "render_message",
    "settings_table",
    "time_string",
]
