"""Console telemetry - Interface implementation of TelemetryPort."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from next_a11y.domain.protocols import TelemetryPort


class ProjectTelemetry(TelemetryPort):
    """
    Progress, warnings and errors on stderr via ``rich``.

    Stdout stays reserved for reports so ``--format json`` output can be piped.
    """

    def __init__(
        self,
        project_name: str,
        color: str = "cyan",
        welcome_msg: str = "",
        console: Optional[Console] = None,
    ) -> None:
        self.project_name = project_name
        self.color = color
        self.welcome_msg = welcome_msg
        self.console = console or Console(stderr=True)

    def handshake(self) -> None:
        message = f" {self.welcome_msg}" if self.welcome_msg else ""
        self.console.print(f"[bold {self.color}]{self.project_name}[/]{escape(message)}")

    def step(self, message: str) -> None:
        self.console.print(f"[{self.color}]›[/] {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {escape(message)}[/]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]✖ {escape(message)}[/]")
