"""Text formatting utilities for the terminal chat.

Hides the details of how messages, timestamps and settings are rendered
with Rich.
"""

from datetime import datetime

from rich.console import Group
from rich.table import Table
from rich.text import Text

from ..conversation import Conversation, Message
from ..settings import ModelSettings

STREAMING_CURSOR = "▌"

USER_STYLE = "bold yellow"
ASSISTANT_STYLE = "bold green"


def time_string(moment: datetime) -> str:
    """Short local time, e.g. "14:05"."""
    return moment.astimezone().strftime("%H:%M")


def relative_date_string(moment: datetime, now: datetime | None = None) -> str:
    """Describe a date relative to today.

    Returns "Today", "Yesterday", the weekday name for dates within the
    last week, and a short date otherwise.
    """
    local = moment.astimezone()
    reference = (now or datetime.now(local.tzinfo)).astimezone(local.tzinfo)
    day_difference = (reference.date() - local.date()).days

    if day_difference == 0:
        return "Today"
    if day_difference == 1:
        return "Yesterday"
    if 1 < day_difference < 7:
        return local.strftime("%A")
    return local.strftime("%m/%d/%y")


def render_message(message: Message, show_time: bool = False) -> Text:
    """Render one message with its sender label.

    A streaming message ends with a cursor block.
    """
    label = "You" if message.is_from_user else "Assistant"
    style = USER_STYLE if message.is_from_user else ASSISTANT_STYLE

    result = Text(overflow="fold")
    result.append(f"{label}:", style=style)
    if show_time:
        result.append(f" [{time_string(message.timestamp)}]", style="dim")
    result.append(" ")
    result.append(message.content)
    if message.is_streaming:
        result.append(STREAMING_CURSOR, style="dim")
    return result


def render_conversation(
    conversation: Conversation,
    limit: int | None = None,
    show_time: bool = False,
) -> Group:
    """Render the conversation (or its last ``limit`` messages).

    With ``show_time`` each message carries its time and the conversation
    is headed by its title and relative start date.
    """
    messages = conversation.messages if limit is None else conversation.messages[-limit:]
    if not messages:
        return Group(Text("Start a conversation", style="dim italic"))
    lines = [render_message(message, show_time=show_time) for message in messages]
    if show_time:
        started = relative_date_string(conversation.created_at)
        lines.insert(0, Text(f"{conversation.title} ({started})", style="bold cyan"))
    return Group(*lines)


def settings_table(settings: ModelSettings, model_status: str) -> Table:
    """Build a table describing generation settings and model state."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Model mode", settings.mode_label)
    table.add_row("Temperature", f"{settings.temperature:.2f}")
    table.add_row("Max tokens", str(settings.max_tokens))
    table.add_row("Top P", f"{settings.top_p:.2f}")
    timeout = "none" if settings.backend_timeout is None else f"{settings.backend_timeout:g}s"
    table.add_row("Backend timeout", timeout)
    table.add_row("Model status", model_status)
    return table
