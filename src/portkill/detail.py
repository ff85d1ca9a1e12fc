"""Per-process detail lookup."""

import structlog

from portkill.config import Settings
from portkill.errors import PortKillError, ToolExecutionError, ValidationError
from portkill.models import UNKNOWN_PORT, DetailResult, ProcessDetail
from portkill.parsers import (
    extract_ports,
    format_ports,
    parse_command,
    parse_identity,
    parse_resources,
    parse_start_time,
)
from portkill.runner import CommandRunner
from portkill.validation import parse_pid

logger = structlog.get_logger(__name__)


class DetailEnricher:
    """
    Builds a ProcessDetail from several ps/lsof calls for one PID.

    The identity lookup (pid, user, command name) is required. The argument
    line, resource usage, start time and the port lookup are optional: if
    they fail their fields are left empty (or "Unknown" for the port) and
    the detail is still returned.
    """

    def __init__(self, runner: CommandRunner, settings: Settings | None = None) -> None:
        self._runner = runner
        self._settings = settings or Settings()
        self._logger = logger.bind(component="DetailEnricher")

    def get_detail(self, pid: str) -> DetailResult:
        """Look up identity, usage, start time and ports of a process."""
        try:
            pid_num = parse_pid(pid)
        except ValidationError as exc:
            return DetailResult(error=str(exc))

        try:
            identity_output = self._checked_run(self._ps(pid_num, "pid=,user=,comm="))
        except PortKillError as exc:
            return DetailResult(error=f"identity lookup failed: {exc}")

        identity = parse_identity(identity_output)
        if identity is None:
            return DetailResult(error=f"identity lookup failed: no such process {pid}")
        _, user, name = identity

        command = None
        try:
            command = parse_command(self._checked_run(self._ps(pid_num, "args=")))
        except PortKillError as exc:
            self._logger.warning("command line lookup failed", pid=pid, error=str(exc))

        cpu_usage, memory_usage = None, None
        try:
            cpu_usage, memory_usage = parse_resources(
                self._checked_run(self._ps(pid_num, "pid=,%cpu=,%mem="))
            )
        except PortKillError as exc:
            self._logger.warning("resource lookup failed", pid=pid, error=str(exc))

        start_time = None
        try:
            start_time = parse_start_time(self._checked_run(self._ps(pid_num, "pid=,lstart=")))
        except PortKillError as exc:
            self._logger.warning("start time lookup failed", pid=pid, error=str(exc))

        return DetailResult(
            detail=ProcessDetail(
                pid=pid,
                name=name,
                port=self._lookup_ports(pid_num),
                user=user,
                command=command,
                cpu_usage=cpu_usage,
                memory_usage=memory_usage,
                start_time=start_time,
            )
        )

    def _lookup_ports(self, pid: int) -> str:
        """Return the TCP ports held by pid, or Unknown."""
        try:
            result = self._runner.run(
                [self._settings.lsof_path, "-nP", "-a", "-p", str(pid), "-iTCP"]
            )
        except PortKillError as exc:
            self._logger.debug("port lookup failed", pid=pid, error=str(exc))
            return UNKNOWN_PORT
        # lsof exits 1 when the process holds no TCP sockets
        if not result.ok:
            return UNKNOWN_PORT
        return format_ports(extract_ports(result.stdout))

    def _ps(self, pid: int, fields: str) -> list[str]:
        return [self._settings.ps_path, "-p", str(pid), "-o", fields]

    def _checked_run(self, args: list[str]) -> str:
        result = self._runner.run(args)
        if not result.ok:
            raise ToolExecutionError(result.tool, result.returncode, result.stderr)
        return result.stdout
