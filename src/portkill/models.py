"""Data models for portkill."""

import signal
from dataclasses import dataclass
from enum import Enum

UNKNOWN_PORT = "Unknown"


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """A process found by a port or name query."""

    pid: str
    name: str
    port: str  # UNKNOWN_PORT for name queries


@dataclass(slots=True, frozen=True)
class ProcessDetail:
    """Merged identity, resource and port information for one process."""

    pid: str
    name: str
    port: str  # "3000, 8080" or UNKNOWN_PORT
    user: str | None = None
    command: str | None = None
    cpu_usage: str | None = None  # "5.2%"
    memory_usage: str | None = None  # raw percentage as reported by ps
    start_time: str | None = None


@dataclass(slots=True, frozen=True)
class PortQueryResult:
    """Outcome of a query by port."""

    is_occupied: bool
    processes: tuple[ProcessRecord, ...] = ()
    error: str | None = None

    @classmethod
    def occupied_by(cls, processes: list[ProcessRecord]) -> "PortQueryResult":
        """Build a result whose occupied flag follows the process list."""
        return cls(is_occupied=bool(processes), processes=tuple(processes))

    @classmethod
    def failed(cls, error: str) -> "PortQueryResult":
        """Build a not-occupied result carrying an error."""
        return cls(is_occupied=False, error=error)


@dataclass(slots=True, frozen=True)
class NameQueryResult:
    """Outcome of a query by name."""

    processes: tuple[ProcessRecord, ...] = ()
    error: str | None = None


@dataclass(slots=True, frozen=True)
class DetailResult:
    """Outcome of a detail query: either a detail record or an error."""

    detail: ProcessDetail | None = None
    error: str | None = None


class TerminationMode(Enum):
    """How a process should be asked to stop."""

    FORCEFUL = "forceful"
    GRACEFUL = "graceful"

    @classmethod
    def from_flag(cls, forceful: bool) -> "TerminationMode":
        return cls.FORCEFUL if forceful else cls.GRACEFUL

    @property
    def signal(self) -> signal.Signals:
        """The POSIX signal delivered for this mode."""
        return signal.SIGKILL if self is TerminationMode.FORCEFUL else signal.SIGTERM

    @property
    def kill_flag(self) -> str:
        """Signal selector understood by kill(1)."""
        return "-9" if self is TerminationMode.FORCEFUL else "-15"

    @property
    def verb(self) -> str:
        return "force killed" if self is TerminationMode.FORCEFUL else "gracefully terminated"

    @property
    def action(self) -> str:
        return "force kill" if self is TerminationMode.FORCEFUL else "terminate"


class FailureKind(Enum):
    """Classification of a failed termination."""

    INVALID_FORMAT = "invalid_format"
    TERMINATION_FAILED = "termination_failed"


@dataclass(slots=True, frozen=True)
class TerminationOutcome:
    """Result of a single terminate call."""

    pid: str
    mode: TerminationMode
    message: str
    failure: FailureKind | None = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None
