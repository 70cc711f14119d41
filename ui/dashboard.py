"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from core.request_types import ForwardOutcome
from ui.log_utils import write_cli_log

console = Console()


class FanoutInfo:
    """Info about a single fanned-out request."""

    def __init__(
        self,
        method: str,
        path: str,
        reached: int,
        total: int,
        status: int,
        timestamp: datetime,
    ):
        self.method = method
        self.path = path[:60] + "..." if len(path) > 60 else path
        self.reached = reached
        self.total = total
        self.status = status
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing recent fan-outs and failures."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[FanoutInfo] = []
        self._max_recent = 10
        self._counts = {"requests": 0, "forwards": 0, "retries": 0, "failed": 0}
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

    def log_forward(self, method: str, url: str) -> None:
        """Log one outbound copy of a request."""
        with self._lock:
            self._counts["forwards"] += 1
            write_cli_log("FORWARD", f"Forwarding request to {url}", method=method)

    def log_retry(self, url: str, attempt: int, error: str, delay: float) -> None:
        """Log a retry before its backoff delay."""
        with self._lock:
            self._counts["retries"] += 1
            write_cli_log("RETRY", error[:200], url=url, attempt=attempt, delay=f"{delay:.2f}s")

    def log_outcome(
        self,
        method: str,
        path: str,
        outcomes: list[ForwardOutcome],
        status: int,
    ) -> None:
        """Log the aggregate result of one inbound request."""
        with self._lock:
            reached = sum(1 for o in outcomes if o.success)
            self._counts["requests"] += 1
            self._counts["failed"] += len(outcomes) - reached
            info = FanoutInfo(
                method=method,
                path=path,
                reached=reached,
                total=len(outcomes),
                status=status,
                timestamp=datetime.now(),
            )
            self._recent.insert(0, info)
            self._recent = self._recent[: self._max_recent]

            write_cli_log(
                "FANOUT",
                f"{method} {path[:200]}",
                status=status,
                reached=f"{reached}/{len(outcomes)}",
            )
            self._refresh()

    def log_warning(self, route: str, message: str) -> None:
        """Log a partial failure."""
        with self._lock:
            self._push_error(f"{route}: {message}")
            write_cli_log("WARNING", message[:500], route=route)

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._push_error(f"{route} {status}: {message}")
            write_cli_log("ERROR", message[:500], route=route, status=status)

    def _push_error(self, message: str) -> None:
        truncated = message[:80] + "..." if len(message) > 80 else message
        self._errors.insert(0, truncated)
        self._errors = self._errors[:3]
        self._refresh()

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
        layout["body"].update(self._build_recent_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("DNS Fan-out Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Target: {self.config.target}", style="blue")
        stats.append("  |  ")
        stats.append(f"Requests: {self._counts['requests']}")
        stats.append("  |  ")
        stats.append(f"Forwards: {self._counts['forwards']}", style="green")
        stats.append("  |  ")
        stats.append(f"Retries: {self._counts['retries']}", style="yellow")
        stats.append("  |  ")
        stats.append(f"Failed: {self._counts['failed']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_recent_panel(self) -> Panel:
        """Build the recent fan-outs panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=8)
            table.add_column("Path", ratio=2)
            table.add_column("Reached", width=8)
            table.add_column("Status", width=6)

            for info in self._recent:
                style = "green" if info.status < 400 else "red"
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.method,
                    Text(info.path),
                    f"{info.reached}/{info.total}",
                    Text(str(info.status), style=style),
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent fan-outs[/blue]", border_style="blue")

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
                f"Send requests to http://localhost:{self.config.proxy.port} to fan out",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
