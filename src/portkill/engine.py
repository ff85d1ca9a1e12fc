"""The four operations offered to the UI layer."""

import structlog

from portkill.config import Settings
from portkill.detail import DetailEnricher
from portkill.lifecycle import LifecycleController
from portkill.models import DetailResult, NameQueryResult, PortQueryResult, TerminationOutcome
from portkill.resolver import ProcessResolver
from portkill.runner import CommandRunner
from portkill.signals import SignalSender, make_signal_sender

logger = structlog.get_logger(__name__)


class ProcessEngine:
    """
    Facade over resolver, detail enricher and lifecycle controller.

    Every call is independent: the engine holds configuration only, so one
    instance can serve concurrent callers. Errors come back on the result
    records and no method raises.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        runner: CommandRunner | None = None,
        sender: SignalSender | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._runner = runner or CommandRunner(self.settings.command_timeout)
        self._resolver = ProcessResolver(self._runner, self.settings)
        self._enricher = DetailEnricher(self._runner, self.settings)
        self._controller = LifecycleController(
            sender or make_signal_sender(self.settings, self._runner)
        )
        self._logger = logger.bind(component="ProcessEngine")

    def check_port(self, port: str) -> PortQueryResult:
        self._logger.info("check_port started", port=port)
        result = self._resolver.query_by_port(port)
        self._logger.info(
            "check_port finished",
            port=port,
            occupied=result.is_occupied,
            count=len(result.processes),
            error=result.error,
        )
        return result

    def find_by_name(self, name: str) -> NameQueryResult:
        self._logger.info("find_by_name started", name=name)
        result = self._resolver.query_by_name(name)
        self._logger.info(
            "find_by_name finished", name=name, count=len(result.processes), error=result.error
        )
        return result

    def get_detail(self, pid: str) -> DetailResult:
        self._logger.info("get_detail started", pid=pid)
        result = self._enricher.get_detail(pid)
        self._logger.info(
            "get_detail finished", pid=pid, found=result.detail is not None, error=result.error
        )
        return result

    def terminate(self, pid: str, forceful: bool = False) -> TerminationOutcome:
        self._logger.info("terminate started", pid=pid, forceful=forceful)
        outcome = self._controller.terminate(pid, forceful)
        if outcome.succeeded:
            self._logger.info("terminate finished", pid=pid, mode=outcome.mode.value)
        else:
            self._logger.warning(
                "terminate failed",
                pid=pid,
                mode=outcome.mode.value,
                failure=outcome.failure.value,
                message=outcome.message,
            )
        return outcome
