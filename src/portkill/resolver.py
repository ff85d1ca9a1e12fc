"""Resolution of processes by listening port or by name."""

import structlog

from portkill.config import Settings
from portkill.errors import ToolExecutionError, ToolInvocationError, ValidationError
from portkill.models import NameQueryResult, PortQueryResult
from portkill.parsers import parse_name_search, parse_port_listing
from portkill.runner import CommandRunner
from portkill.validation import parse_port

logger = structlog.get_logger(__name__)


class ProcessResolver:
    """Runs lsof/ps and turns their output into query results."""

    def __init__(self, runner: CommandRunner, settings: Settings | None = None) -> None:
        self._runner = runner
        self._settings = settings or Settings()
        self._logger = logger.bind(component="ProcessResolver")

    def port_command(self, port: int) -> list[str]:
        # TCP sockets in LISTEN state on this port only, no name resolution
        return [self._settings.lsof_path, "-nP", f"-iTCP:{port}", "-sTCP:LISTEN"]

    def name_command(self) -> list[str]:
        return [self._settings.ps_path, "-axo", "pid=,comm="]

    def query_by_port(self, port: str) -> PortQueryResult:
        """
        Find the processes listening on a TCP port.

        A non-zero lsof exit status means nothing matched and is not an error.
        """
        try:
            port_num = parse_port(port)
        except ValidationError as exc:
            return PortQueryResult.failed(str(exc))

        try:
            result = self._runner.run(self.port_command(port_num))
        except ToolInvocationError as exc:
            return PortQueryResult.failed(str(exc))

        if not result.ok:
            self._logger.debug("lsof found no listeners", port=port, returncode=result.returncode)
            return PortQueryResult.occupied_by([])

        return PortQueryResult.occupied_by(parse_port_listing(result.stdout, port))

    def query_by_name(self, name: str) -> NameQueryResult:
        """Find processes whose command name contains the given text."""
        if not name.strip():
            return NameQueryResult(error="Process name cannot be empty")

        try:
            result = self._runner.run(self.name_command())
        except ToolInvocationError as exc:
            return NameQueryResult(error=str(exc))

        if not result.ok:
            error = ToolExecutionError(result.tool, result.returncode, result.stderr)
            return NameQueryResult(error=str(error))

        return NameQueryResult(processes=tuple(parse_name_search(result.stdout, name)))
