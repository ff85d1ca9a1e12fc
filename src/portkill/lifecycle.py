"""Termination of processes."""

import structlog

from portkill.errors import PortKillError, ToolExecutionError, ValidationError
from portkill.models import FailureKind, TerminationMode, TerminationOutcome
from portkill.signals import SignalSender
from portkill.validation import parse_pid

logger = structlog.get_logger(__name__)


class LifecycleController:
    """
    Sends SIGKILL or SIGTERM to a single process.

    There is no retry and no escalation from graceful to forceful; a caller
    that wants to escalate makes a second, forceful call.
    """

    def __init__(self, sender: SignalSender) -> None:
        self._sender = sender
        self._logger = logger.bind(component="LifecycleController")

    def terminate(self, pid: str, forceful: bool) -> TerminationOutcome:
        mode = TerminationMode.from_flag(forceful)

        try:
            pid_num = parse_pid(pid)
        except ValidationError as exc:
            return TerminationOutcome(
                pid=pid, mode=mode, message=str(exc), failure=FailureKind.INVALID_FORMAT
            )

        try:
            self._sender.send(pid_num, mode)
        except ToolExecutionError as exc:
            diagnostic = exc.stderr or str(exc)
            return TerminationOutcome(
                pid=pid,
                mode=mode,
                message=f"Failed to {mode.action} process {pid}: {diagnostic}",
                failure=FailureKind.TERMINATION_FAILED,
            )
        except PortKillError as exc:
            return TerminationOutcome(
                pid=pid, mode=mode, message=str(exc), failure=FailureKind.TERMINATION_FAILED
            )

        return TerminationOutcome(
            pid=pid, mode=mode, message=f"Process {pid} {mode.verb} successfully"
        )
