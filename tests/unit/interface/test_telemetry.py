"""Unit tests for ProjectTelemetry."""
from io import StringIO
from unittest.mock import MagicMock

from rich.console import Console

from next_a11y.interface.telemetry import ProjectTelemetry


def _telemetry() -> tuple[ProjectTelemetry, StringIO]:
    buffer = StringIO()
    console = Console(file=buffer, force_terminal=False, width=120)
    return ProjectTelemetry("next-a11y", "cyan", "accessibility scan", console=console), buffer


def test_handshake_prints_banner():
    tel = ProjectTelemetry("Test", "blue", "Hello")
    tel.console = MagicMock()
    tel.handshake()
    tel.console.print.assert_called_once()


def test_step_prints_message():
    tel, buffer = _telemetry()
    tel.step("Scanning 3 files")
    assert "Scanning 3 files" in buffer.getvalue()


def test_warning_keeps_brackets_literal():
    tel, buffer = _telemetry()
    tel.warning("Skipped app/[slug]/page.tsx")
    assert "app/[slug]/page.tsx" in buffer.getvalue()


def test_error_prints_message():
    tel, buffer = _telemetry()
    tel.error("Failed [bold]badly[/bold]")
    assert "Failed [bold]badly[/bold]" in buffer.getvalue()


def test_default_console_writes_to_stderr():
    tel = ProjectTelemetry("Test")
    assert tel.console.stderr is True
