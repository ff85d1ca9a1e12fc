"""portkill - find and stop the processes holding a TCP port."""

from portkill.engine import ProcessEngine
from portkill.models import (
    DetailResult,
    NameQueryResult,
    PortQueryResult,
    ProcessDetail,
    ProcessRecord,
    TerminationMode,
    TerminationOutcome,
)

__all__ = [
    "DetailResult",
    "NameQueryResult",
    "PortQueryResult",
    "ProcessDetail",
    "ProcessEngine",
    "ProcessRecord",
    "TerminationMode",
    "TerminationOutcome",
]
