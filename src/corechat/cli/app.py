"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.live import Live
from rich.text import Text

from ..conversation import Conversation
from ..errors import BackendUnavailableError
from ..session import GenerationSession
from ..ui import render_conversation, render_message, settings_table
from .providers import configure_logging, get_session, get_settings

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="corechat",
    help="Local chat with simulated or on-device responses",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

EXIT_WORDS = ("exit", "quit", "q", "/quit")

HELP_TEXT = (
    "[dim]Commands: /regen regenerate last reply, /clear start over, "
    "/history show the conversation, /settings show settings, /quit leave[/dim]"
)


async def _prepare_backend(session: GenerationSession) -> None:
    """Load the local model when the session will use it."""
    if session.settings.use_simulated_responses:
        return
    try:
        with console.status("[dim]Loading local model...[/dim]"):
            await session.model_manager.load_model()
    except BackendUnavailableError as e:
        console.print(f"[yellow]Warning: {e}[/yellow]")


async def _run_turn(session: GenerationSession, regenerate: bool = False, text: str = "") -> bool:
    """Run one turn, rendering the assistant reply live as it streams."""
    with Live(console=console, auto_refresh=False, transient=False) as live:

        def on_change(conversation: Conversation) -> None:
            last = conversation.last_message
            if last is not None and not last.is_from_user:
                live.update(render_message(last), refresh=True)
            else:
                # Placeholder rolled back (or not yet appended)
                live.update(Text(""), refresh=True)

        unsubscribe = session.store.subscribe(on_change)
        try:
            if regenerate:
                started = await session.regenerate_last_response()
            else:
                started = await session.send_message(text)
        finally:
            unsubscribe()

    if session.error_message:
        console.print(f"[red]Error: {session.error_message}[/red]")
        session.dismiss_error()
    return started


@app.command()
def chat(
    simulated: bool | None = typer.Option(
        None,
        "--simulated/--backend",
        help="Use simulated responses or the local model (default: CORECHAT_SIMULATED or simulated)"
    ),
    temperature: float | None = typer.Option(
        None,
        "--temperature",
        "-t",
        help="Sampling temperature, clamped to 0-2"
    ),
    max_tokens: int | None = typer.Option(
        None,
        "--max-tokens",
        "-m",
        help="Maximum tokens to generate, clamped to 10-2048"
    ),
    top_p: float | None = typer.Option(
        None,
        "--top-p",
        help="Top-p, clamped to 0-1"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, error"
    ),
):
    """Interactive chat session."""
    configure_logging(log_level, console)

    async def _chat():
        settings = get_settings(simulated, temperature, max_tokens, top_p)
        session = get_session(settings)
        await _prepare_backend(session)

        console.print("[bold cyan]CoreChat[/bold cyan]")
        console.print(f"[dim]Mode: {settings.mode_label}[/dim]")
        console.print(HELP_TEXT + "\n")

        while True:
            try:
                user_input = console.input("[bold yellow]You:[/bold yellow] ")
            except (KeyboardInterrupt, EOFError):
                console.print("\n[dim]Goodbye![/dim]")
                break

            command = user_input.strip()
            if not command:
                continue

            if command.lower() in EXIT_WORDS:
                console.print("[dim]Goodbye![/dim]")
                break

            if command == "/regen":
                if not await _run_turn(session, regenerate=True):
                    console.print("[dim]Nothing to regenerate.[/dim]")
                continue

            if command == "/clear":
                session.clear_conversation()
                console.print("[dim]Conversation cleared.[/dim]")
                continue

            if command == "/history":
                console.print(render_conversation(session.store.conversation, show_time=True))
                continue

            if command == "/settings":
                console.print(settings_table(session.settings, session.model_manager.model_info))
                continue

            await _run_turn(session, text=user_input)
            console.print()

    asyncio.run(_chat())


@app.command()
def ask(
    text: str = typer.Argument(..., help="Message to send"),
    simulated: bool | None = typer.Option(
        None,
        "--simulated/--backend",
        help="Use simulated responses or the local model"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, error"
    ),
):
    """Send a single message and print the reply."""
    configure_logging(log_level, console)

    async def _ask():
        session = get_session(get_settings(simulated))
        await _prepare_backend(session)

        if not await session.send_message(text):
            console.print("[red]Error: message is empty[/red]")
            raise typer.Exit(code=1)

        if session.error_message:
            console.print(f"[red]Error: {session.error_message}[/red]")
            raise typer.Exit(code=1)

        reply = session.store.last_message
        console.print(reply.content if reply else "")

    asyncio.run(_ask())


@app.command()
def settings(
    simulated: bool | None = typer.Option(
        None,
        "--simulated/--backend",
        help="Show settings for simulated responses or the local model"
    ),
):
    """Show the resolved generation settings."""
    resolved = get_settings(simulated)
    session = get_session(resolved)
    console.print(settings_table(resolved, session.model_manager.model_info))


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
