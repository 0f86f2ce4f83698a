"""Tests for the Typer CLI."""
import logging
import re

import pytest
from typer.testing import CliRunner

from corechat.cli import providers
from corechat.cli.app import app
from corechat.model import PLACEHOLDER_RESPONSE, ModelManager

runner = CliRunner()


@pytest.fixture(autouse=True)
def fast_model(monkeypatch):
    """Skip the simulated model load time."""
    monkeypatch.setattr(providers, "get_model_manager", lambda: ModelManager(load_delay=0.0))
    for name in ("CORECHAT_SIMULATED", "CORECHAT_TEMPERATURE", "CORECHAT_MAX_TOKENS"):
        monkeypatch.delenv(name, raising=False)


def test_settings_command():
    result = runner.invoke(app, ["settings"])

    assert result.exit_code == 0
    assert "Simulated" in result.output
    assert "No model loaded" in result.output


def test_settings_command_reads_environment(monkeypatch):
    monkeypatch.setenv("CORECHAT_MAX_TOKENS", "99999")

    result = runner.invoke(app, ["settings", "--backend"])

    assert result.exit_code == 0
    assert "Local model" in result.output
    assert "2048" in result.output


def test_ask_with_local_model():
    result = runner.invoke(app, ["ask", "Hello", "--backend"])

    assert result.exit_code == 0
    assert PLACEHOLDER_RESPONSE.split()[0] in result.output


def test_ask_rejects_empty_message():
    result = runner.invoke(app, ["ask", "   ", "--backend"])

    assert result.exit_code == 1
    assert "empty" in result.output


def test_ask_reports_missing_model(monkeypatch, tmp_path):
    monkeypatch.setattr(
        providers,
        "get_model_manager",
        lambda: ModelManager(model_path=tmp_path / "missing.bin", load_delay=0.0),
    )

    result = runner.invoke(app, ["ask", "Hello", "--backend"])

    assert result.exit_code == 1
    assert "Failed to generate response" in result.output


def test_chat_regenerate_and_quit():
    result = runner.invoke(app, ["chat", "--backend"], input="Hello\n/regen\n/settings\n/clear\n/quit\n")

    assert result.exit_code == 0
    assert "Conversation cleared" in result.output
    assert "Goodbye" in result.output


def test_chat_shows_streamed_reply():
    result = runner.invoke(app, ["chat", "--backend"], input="Hello\n/quit\n")

    assert result.exit_code == 0
    assert "Assistant: This is a placeholder response" in result.output
    assert "▌" not in result.output


def test_chat_failed_turn_leaves_no_placeholder(monkeypatch, tmp_path):
    monkeypatch.setattr(
        providers,
        "get_model_manager",
        lambda: ModelManager(model_path=tmp_path / "missing.bin", load_delay=0.0),
    )

    result = runner.invoke(app, ["chat", "--backend"], input="Hello\n/quit\n")

    assert result.exit_code == 0
    assert "Failed to generate response: Model has not been loaded yet" in result.output
    assert "Assistant:" not in result.output
    assert "▌" not in result.output


def test_chat_history_shows_timestamps():
    result = runner.invoke(app, ["chat", "--backend"], input="Hello\n/history\n/quit\n")

    assert result.exit_code == 0
    assert "New Chat (Today)" in result.output
    assert re.search(r"You: \[\d\d:\d\d\] Hello", result.output)


@pytest.mark.parametrize(
    "name,expected",
    [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        (" error ", logging.ERROR),
        ("verbose", logging.WARNING),
    ],
)
def test_configure_logging_levels(name, expected):
    assert providers.configure_logging(name) == expected
    assert logging.getLogger().level == expected
