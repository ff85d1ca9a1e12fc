"""Runtime settings for portkill."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

DEFAULT_TIMEOUT = 10.0
MIN_TIMEOUT = 0.1
SIGNAL_BACKENDS = ("command", "psutil")


@dataclass(slots=True, frozen=True)
class Settings:
    """
    Settings shared by every operation.

    The tool paths let a host point portkill at its own lsof/ps/kill
    binaries; signal_backend selects between kill(1) and psutil.
    """

    command_timeout: float = DEFAULT_TIMEOUT
    lsof_path: str = "lsof"
    ps_path: str = "ps"
    kill_path: str = "kill"
    signal_backend: str = "command"
    log_level: str = "warning"
    log_file: str | None = None

    def __post_init__(self) -> None:
        if self.signal_backend not in SIGNAL_BACKENDS:
            raise ValueError(
                f"Unknown signal backend {self.signal_backend!r}, "
                f"expected one of {', '.join(SIGNAL_BACKENDS)}"
            )
        if self.command_timeout < MIN_TIMEOUT:
            object.__setattr__(self, "command_timeout", MIN_TIMEOUT)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from PORTKILL_* environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            command_timeout=_float(env.get("PORTKILL_COMMAND_TIMEOUT"), DEFAULT_TIMEOUT),
            lsof_path=env.get("PORTKILL_LSOF") or "lsof",
            ps_path=env.get("PORTKILL_PS") or "ps",
            kill_path=env.get("PORTKILL_KILL") or "kill",
            signal_backend=(env.get("PORTKILL_SIGNAL_BACKEND") or "command").lower(),
            log_level=(env.get("PORTKILL_LOG_LEVEL") or "warning").lower(),
            log_file=env.get("PORTKILL_LOG_FILE") or None,
        )

    def with_overrides(self, **changes: object) -> "Settings":
        """Return a copy with the non-None changes applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _float(raw: str | None, default: float) -> float:
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default
