"""Blocking execution of external introspection tools."""

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from portkill.config import DEFAULT_TIMEOUT, MIN_TIMEOUT
from portkill.errors import ToolInvocationError, ToolTimeoutError

logger = structlog.get_logger(__name__)


@dataclass(slots=True, frozen=True)
class CommandResult:
    """Captured output of one external tool run."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def tool(self) -> str:
        return self.args[0] if self.args else ""


class CommandRunner:
    """
    Runs one external command at a time and waits for it.

    Every run is bounded by a timeout; when it expires the child is killed
    and ToolTimeoutError is raised.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._timeout = max(MIN_TIMEOUT, timeout)
        self._logger = logger.bind(component="CommandRunner")

    @property
    def timeout(self) -> float:
        return self._timeout

    def run(self, args: Sequence[str]) -> CommandResult:
        """
        Run a command and capture its output.

        Raises:
            ToolInvocationError: The binary could not be launched.
            ToolTimeoutError: The command did not finish in time.
        """
        argv = tuple(args)
        tool = argv[0]
        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            self._logger.warning("command timed out", argv=argv, timeout=self._timeout)
            raise ToolTimeoutError(tool, self._timeout) from exc
        except OSError as exc:
            self._logger.warning("command could not be launched", argv=argv, error=str(exc))
            raise ToolInvocationError(tool, exc.strerror or str(exc)) from exc

        self._logger.debug("command finished", argv=argv, returncode=completed.returncode)
        return CommandResult(
            args=argv,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
