"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock
from urllib.parse import urlsplit

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import redact_url, write_cli_log, write_error_log

console = Console()

CONTENT_LABELS = {
    "application/json": "JSON",
    "application/xml": "XML",
    "application/vnd.apple.mpegurl": "M3U",
    "text/plain": "TEXT",
}


class RequestInfo:
    """Info about a single proxied request."""

    def __init__(self, method: str, url: str, kind: str, elapsed: float, timestamp: datetime):
        self.method = method
        self.host = urlsplit(url).netloc or url
        self.url = url[:80] + "..." if len(url) > 80 else url
        self.kind = kind
        self.elapsed = elapsed
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing recent proxied requests and errors."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._requests: list[RequestInfo] = []
        self._max_requests = 10
        self._counts = {"ok": 0, "error": 0}
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

    def log_request(
        self,
        method: str,
        url: str,
        status: int,
        content_type: str,
        *,
        elapsed: float,
    ) -> None:
        """Log a successfully relayed request."""
        safe_url = redact_url(url)
        kind = CONTENT_LABELS.get(content_type.split(";")[0], content_type)
        with self._lock:
            self._counts["ok"] += 1
            self._requests.insert(
                0, RequestInfo(method, safe_url, kind, elapsed, datetime.now())
            )
            self._requests = self._requests[: self._max_requests]
            self._refresh()
            write_cli_log(
                "PROXY", safe_url, method=method, status=status, type=kind, elapsed=f"{elapsed:.2f}s"
            )

    def log_error(self, url: str, status: int, message: str) -> None:
        """Log an error."""
        safe_url = redact_url(url)
        with self._lock:
            self._counts["error"] += 1
            truncated = message[:60] + "..." if len(message) > 60 else message
            self._errors.insert(0, f"{status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_error_log(url, status, message)
            write_cli_log("ERROR", message[:200], url=safe_url, status=status)

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
        """Build header with stats."""
        stats = Text()
        stats.append("StreamVault Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"OK: {self._counts['ok']}", style="green")
        stats.append("  |  ")
        stats.append(f"Errors: {self._counts['error']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._requests:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=6)
            table.add_column("Host", width=24)
            table.add_column("Type", width=5)
            table.add_column("Took", width=7, justify="right")
            table.add_column("URL", ratio=1)

            for req in self._requests:
                table.add_row(
                    req.timestamp.strftime("%H:%M:%S"),
                    req.method,
                    req.host[:24],
                    req.kind,
                    f"{req.elapsed:.2f}s",
                    req.url,
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
                f"Proxy: http://{self.config.proxy.host}:{self.config.proxy.port}"
                f"{self.config.proxy.path}?url=<encoded url>",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
