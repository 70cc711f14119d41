"""Line-oriented request logger for non-interactive runs."""

from threading import Lock

from rich.console import Console
from rich.markup import escape

from core.request_types import ForwardOutcome
from ui.log_utils import write_cli_log


class ConsoleLogger:
    """Print each proxy event as one console line."""

    def __init__(self, console: Console | None = None):
        self._console = console or Console()
        self._lock = Lock()

    def log_forward(self, method: str, url: str) -> None:
        with self._lock:
            self._console.print(f"[cyan]{method}[/cyan] Forwarding request to {escape(url)}")
            write_cli_log("FORWARD", f"Forwarding request to {url}", method=method)

    def log_retry(self, url: str, attempt: int, error: str, delay: float) -> None:
        with self._lock:
            self._console.print(
                f"[yellow]Retry {attempt}[/yellow] {escape(url)} in {delay:.2f}s: {escape(error)}"
            )
            write_cli_log("RETRY", error[:200], url=url, attempt=attempt, delay=f"{delay:.2f}s")

    def log_outcome(
        self,
        method: str,
        path: str,
        outcomes: list[ForwardOutcome],
        status: int,
    ) -> None:
        reached = sum(1 for o in outcomes if o.success)
        with self._lock:
            color = "green" if status < 400 else "red"
            self._console.print(
                f"[{color}]{status}[/{color}] {method} {escape(path)} "
                f"reached {reached}/{len(outcomes)}"
            )
            write_cli_log(
                "FANOUT",
                f"{method} {path[:200]}",
                status=status,
                reached=f"{reached}/{len(outcomes)}",
            )

    def log_warning(self, route: str, message: str) -> None:
        with self._lock:
            self._console.print(f"[yellow][WARNING][/yellow] {escape(route)}: {escape(message)}")
            write_cli_log("WARNING", message[:500], route=route)

    def log_error(self, route: str, status: int, message: str) -> None:
        with self._lock:
            self._console.print(f"[red][ERROR][/red] {escape(route)} {status}: {escape(message)}")
            write_cli_log("ERROR", message[:500], route=route, status=status)
