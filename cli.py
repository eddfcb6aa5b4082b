"""CLI entry point for fto-scout-proxy."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import CONFIG_FILE, load_config
from ui.console_log import ConsoleLogger
from ui.dashboard import Dashboard
from ui.log_utils import CLI_LOG_FILE, clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()
    headless = False

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            console.print(f"[bold]Log:[/bold] {CLI_LOG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        if arg == "--headless":
            headless = True
        else:
            console.print(f"[red][ERROR][/red] Unknown option: {arg}")
            _print_help()
            sys.exit(2)

    if "*" in config.cors.allowed_origins:
        console.print(
            "[yellow]Warning:[/yellow] CORS accepts any origin "
            f"(set cors.allowed_origins in {CONFIG_FILE})"
        )

    clear_logs()
    dashboard = None if headless else Dashboard(config)
    logger = ConsoleLogger(console) if dashboard is None else dashboard

    import uvicorn

    app = create_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
        timeout_keep_alive=config.limits.keep_alive_timeout,
    )
    server = uvicorn.Server(uvicorn_config)

    if dashboard:
        dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", host=config.proxy.host, port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        if dashboard:
            dashboard.stop()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]FTO Scout API Proxy[/bold cyan]

Relays browser calls to PatentsView, arXiv, Lens.org and Semantic Scholar
with CORS headers attached.

[bold]Usage:[/bold]
    fto-scout-proxy                Start with live dashboard
    fto-scout-proxy --headless     Start with one log line per request
    fto-scout-proxy --config       Show config and log locations
    fto-scout-proxy --help         Show this help

[bold]Routes:[/bold]
    /uspto/*  /uspto-search/*  /arxiv/*  /lens/*  /scholar/*  /proxy?url=...
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
