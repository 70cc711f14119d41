"""CLI entry point for dns-fanout-proxy."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import ENV_FIELDS, load_config
from core.exceptions import ConfigurationError
from ui.console import ConsoleLogger
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    args = sys.argv[1:]

    if "--help" in args or "-h" in args:
        _print_help()
        return

    # TARGET is required; nothing is served without it.
    try:
        config = load_config()
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        console.print("[dim]Set TARGET=host or TARGET=host:port[/dim]")
        sys.exit(1)

    if "--config" in args:
        console.print(f"[bold]Target:[/bold] {config.target_descriptor}")
        console.print_json(config.model_dump_json())
        return

    import uvicorn

    clear_logs()
    if "--plain" in args:
        logger = ConsoleLogger(console)
        dashboard = None
    else:
        dashboard = Dashboard(config)
        logger = dashboard

    app = create_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    if dashboard:
        dashboard.start()
    else:
        console.print(f"Listening on port {config.proxy.port}, fanning out to {config.target_descriptor}")
    start_time = datetime.now()
    write_cli_log(
        "STARTUP",
        "Proxy started",
        port=config.proxy.port,
        target=config.target_descriptor,
        version=config.version,
    )
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        if dashboard:
            dashboard.stop()


def _print_help():
    """Print help message."""
    variables = "\n".join(f"    {name}" for name in ENV_FIELDS)
    help_text = f"""
[bold cyan]DNS Fan-out Proxy[/bold cyan]

Forwards every request to all IPv4 addresses of the TARGET hostname.

[bold]Usage:[/bold]
    dns-fanout-proxy              Start with live dashboard
    dns-fanout-proxy --plain      Start with line-by-line console logging
    dns-fanout-proxy --config     Show effective configuration
    dns-fanout-proxy --help       Show this help

[bold]Environment:[/bold]
{variables}
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
