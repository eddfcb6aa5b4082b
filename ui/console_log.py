"""Line-per-request console logger for headless runs."""

from datetime import datetime

from rich.console import Console
from rich.markup import escape

from ui.log_utils import write_cli_log


class ConsoleLogger:
    """Print forwarded requests and errors without a live layout."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def log_forward(self, route: str, method: str, url: str) -> None:
        self.console.print(f"[dim]{_now()}[/dim] [blue]{route}[/blue] {method} {escape(url)}")
        write_cli_log("FORWARD", url, route=route, method=method)

    def log_response(self, route: str, status: int) -> None:
        self.console.print(f"[dim]{_now()}[/dim] [blue]{route}[/blue] [green]{status}[/green]")

    def log_error(self, route: str, status: int, message: str) -> None:
        self.console.print(f"[dim]{_now()}[/dim] [red]{route} {status}:[/red] {escape(message[:200])}")
        write_cli_log("ERROR", message[:200], route=route, status=status)


def _now() -> str:
    return datetime.now().strftime("%H:%M:%S")
