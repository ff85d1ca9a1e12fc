"""portkill - Textual front end."""

import argparse
from collections.abc import Sequence

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Footer, Input, Static

from portkill.config import SIGNAL_BACKENDS, Settings
from portkill.engine import ProcessEngine
from portkill.log import close_log_stream, configure_logging
from portkill.models import ProcessDetail, ProcessRecord
from portkill.validation import is_port


def format_detail(detail: ProcessDetail) -> str:
    """Format a process detail for the detail panel."""
    rows = [
        ("PID", detail.pid),
        ("Name", detail.name),
        ("Port", detail.port),
        ("User", detail.user),
        ("CPU", detail.cpu_usage),
        ("Memory", detail.memory_usage),
        ("Started", detail.start_time),
        ("Command", detail.command),
    ]
    return "\n".join(f"{label:<8} {value if value is not None else '-'}" for label, value in rows)


class ResultTable(Container):
    """Container for the query result table."""

    DEFAULT_CSS = """
    ResultTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize ResultTable."""
        super().__init__(*args, **kwargs)
        self._records: list[ProcessRecord] = []

    @property
    def records(self) -> list[ProcessRecord]:
        return list(self._records)

    def compose(self) -> ComposeResult:
        """Compose the result table."""
        yield DataTable(id="result-table")

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        table = self.query_one("#result-table", DataTable)
        table.cursor_type = "row"
        table.add_column("PID", key="pid", width=10)
        table.add_column("NAME", key="name", width=24)
        table.add_column("PORT", key="port")

    def show(self, records: Sequence[ProcessRecord]) -> None:
        """Replace the table contents."""
        table = self.query_one("#result-table", DataTable)
        table.clear()
        self._records = list(records)
        for record in self._records:
            table.add_row(record.pid, record.name, record.port)

    def selected(self) -> ProcessRecord | None:
        """Return the record under the cursor, if any."""
        if not self._records:
            return None
        table = self.query_one("#result-table", DataTable)
        row = table.cursor_row
        if 0 <= row < len(self._records):
            return self._records[row]
        return None


class PortKillApp(App):
    """Main portkill application."""

    TITLE = "portkill"
    SUB_TITLE = "Find and stop processes by port or name"

    CSS = """
    Screen {
        layout: vertical;
    }

    #query-input {
        dock: top;
    }

    #detail-panel {
        height: auto;
        min-height: 3;
        padding: 0 1;
        background: $surface;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("d", "details", "Details"),
        ("t", "terminate", "Terminate"),
        ("k", "force_kill", "Force kill"),
    ]

    def __init__(self, engine: ProcessEngine | None = None, initial_query: str = "") -> None:
        """Initialize the PortKillApp."""
        super().__init__()
        self._engine = engine or ProcessEngine()
        self._initial_query = initial_query
        self._last_query = ""

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Input(placeholder="Port number or process name", id="query-input")
        yield ResultTable()
        yield Static("", id="detail-panel")
        yield Footer()

    def on_mount(self) -> None:
        if self._initial_query:
            self.call_after_refresh(self.run_query, self._initial_query)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.run_query(event.value)
        self.query_one("#result-table", DataTable).focus()

    def run_query(self, text: str) -> None:
        """Query by port when text is a port number, by name otherwise."""
        text = text.strip()
        self._last_query = text
        self.query_one("#detail-panel", Static).update("")

        if is_port(text):
            port_result = self._engine.check_port(text)
            records, error = port_result.processes, port_result.error
            if error is None and not port_result.is_occupied:
                self.notify(f"Port {text} is free")
        else:
            name_result = self._engine.find_by_name(text)
            records, error = name_result.processes, name_result.error
            if error is None and not records:
                self.notify(f"No process matches {text!r}")

        self.query_one(ResultTable).show(records)
        if error is not None:
            self.notify(error, severity="error")

    def action_details(self) -> None:
        """Show details of the selected process."""
        record = self.query_one(ResultTable).selected()
        if record is None:
            return
        result = self._engine.get_detail(record.pid)
        if result.detail is None:
            self.notify(result.error or "No details available", severity="error")
            return
        self.query_one("#detail-panel", Static).update(format_detail(result.detail))

    def action_terminate(self) -> None:
        """Send SIGTERM to the selected process."""
        self._stop_selected(forceful=False)

    def action_force_kill(self) -> None:
        """Send SIGKILL to the selected process."""
        self._stop_selected(forceful=True)

    def _stop_selected(self, forceful: bool) -> None:
        record = self.query_one(ResultTable).selected()
        if record is None:
            return
        outcome = self._engine.terminate(record.pid, forceful=forceful)
        self.notify(outcome.message, severity="information" if outcome.succeeded else "error")
        if outcome.succeeded and self._last_query:
            self.run_query(self._last_query)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portkill",
        description="Find and stop the processes holding a TCP port.",
    )
    parser.add_argument("query", nargs="?", default="", help="port number or process name")
    parser.add_argument("--timeout", type=float, help="timeout for each external tool (seconds)")
    parser.add_argument("--signal-backend", choices=SIGNAL_BACKENDS, help="how signals are sent")
    parser.add_argument("--log-level", help="debug, info, warning or error")
    parser.add_argument("--log-file", help="append logs to this file")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for portkill application."""
    args = build_parser().parse_args(argv)
    settings = Settings.from_env().with_overrides(
        command_timeout=args.timeout,
        signal_backend=args.signal_backend,
        log_level=args.log_level,
        log_file=args.log_file,
    )
    configure_logging(settings.log_level, settings.log_file)
    app = PortKillApp(ProcessEngine(settings), initial_query=args.query)
    try:
        app.run()
    finally:
        close_log_stream()


if __name__ == "__main__":
    main()
