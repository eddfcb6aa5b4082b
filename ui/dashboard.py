"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from core.router import ROUTES
from ui.log_utils import write_cli_log

console = Console()


class RequestInfo:
    """Info about a single forwarded request."""

    def __init__(self, route: str, method: str, url: str, timestamp: datetime):
        self.route = route
        self.method = method
        self.url = url[:80] + "..." if len(url) > 80 else url
        self.status: int | None = None
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing per-route traffic and recent errors."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 10
        self._request_count = {route.name: 0 for route in ROUTES}
        self._request_count["proxy"] = 0
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_forward(self, route: str, method: str, url: str) -> None:
        """Log a request forwarded upstream."""
        with self._lock:
            self._request_count[route] = self._request_count.get(route, 0) + 1
            self._recent.insert(0, RequestInfo(route, method, url, datetime.now()))
            self._recent = self._recent[: self._max_recent]
            write_cli_log("FORWARD", url, route=route, method=method)
            self._refresh()

    def log_response(self, route: str, status: int) -> None:
        """Record the upstream status of the latest request on a route."""
        with self._lock:
            self._set_status(route, status)
            self._refresh()

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._set_status(route, status)
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            write_cli_log("ERROR", message[:200], route=route, status=status)
            self._refresh()

    def _set_status(self, route: str, status: int) -> None:
        for info in self._recent:
            if info.route == route and info.status is None:
                info.status = status
                return

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with per-route counts."""
        stats = Text()
        stats.append("FTO Scout API Proxy", style="bold cyan")
        for name, count in self._request_count.items():
            stats.append("  |  ")
            stats.append(f"{name}: {count}", style="blue")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Route", width=14)
            table.add_column("Method", width=7)
            table.add_column("Status", width=6)
            table.add_column("Upstream URL", ratio=1)

            for info in self._recent:
                if info.status is None:
                    status = "[dim]...[/dim]"
                elif info.status < 400:
                    status = f"[green]{info.status}[/green]"
                else:
                    status = f"[red]{info.status}[/red]"

                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.route,
                    info.method,
                    status,
                    escape(info.url),
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent Requests[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"Point the front-end at http://{self.config.proxy.host}:{self.config.proxy.port}",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
