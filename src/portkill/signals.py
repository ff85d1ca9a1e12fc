"""Signal delivery backends."""

from typing import Protocol

import psutil

from portkill.config import Settings
from portkill.errors import ToolExecutionError
from portkill.models import TerminationMode
from portkill.runner import CommandRunner


class SignalSender(Protocol):
    """Delivers a termination signal to a process or raises PortKillError."""

    def send(self, pid: int, mode: TerminationMode) -> None: ...


class CommandSignalSender:
    """Sends signals with kill(1)."""

    def __init__(self, runner: CommandRunner, kill_path: str = "kill") -> None:
        self._runner = runner
        self._kill_path = kill_path

    def send(self, pid: int, mode: TerminationMode) -> None:
        result = self._runner.run([self._kill_path, mode.kill_flag, str(pid)])
        if not result.ok:
            raise ToolExecutionError(result.tool, result.returncode, result.stderr)


class PsutilSignalSender:
    """Sends signals through psutil, for hosts without a kill binary."""

    def send(self, pid: int, mode: TerminationMode) -> None:
        try:
            proc = psutil.Process(pid)
            if mode is TerminationMode.FORCEFUL:
                proc.kill()
            else:
                proc.terminate()
        except psutil.NoSuchProcess as exc:
            raise ToolExecutionError("psutil", 1, f"No such process: {exc.pid}") from exc
        except psutil.AccessDenied as exc:
            raise ToolExecutionError("psutil", 1, f"Operation not permitted: {exc.pid}") from exc
        except psutil.Error as exc:
            raise ToolExecutionError("psutil", 1, str(exc)) from exc


def make_signal_sender(settings: Settings, runner: CommandRunner) -> SignalSender:
    """Pick the signal backend named in settings."""
    if settings.signal_backend == "psutil":
        return PsutilSignalSender()
    return CommandSignalSender(runner, settings.kill_path)
