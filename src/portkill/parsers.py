"""Parsers for lsof and ps output.

All parsers are pure functions over text. Lines or fields that do not have
the expected shape are skipped; a parser never raises on odd input.
"""

from portkill.models import UNKNOWN_PORT, ProcessRecord
from portkill.validation import is_port


def parse_port_listing(output: str, port: str) -> list[ProcessRecord]:
    """
    Parse `lsof` listening-socket output into process records.

    The first line is the lsof header. A process listening on both IPv4 and
    IPv6 shows up once per address family with the same PID; only its first
    line is kept.

    Args:
        output: Raw lsof stdout.
        port: Port label stamped on every record.

    Returns:
        Records in first-seen order, one per PID.
    """
    processes: list[ProcessRecord] = []
    seen: set[str] = set()

    for line in output.splitlines()[1:]:
        parts = line.split()
        if len(parts) < 2:
            continue
        name, pid = parts[0], parts[1]
        if pid in seen:
            continue
        seen.add(pid)
        processes.append(ProcessRecord(pid=pid, name=name, port=port))

    return processes


def parse_name_search(output: str, query: str) -> list[ProcessRecord]:
    """
    Filter `ps -o pid=,comm=` output by a case-insensitive name substring.

    Only the first token of the command column is matched. A blank query
    matches nothing.
    """
    needle = query.strip().lower()
    if not needle:
        return []

    processes: list[ProcessRecord] = []
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        pid, name = parts[0], parts[1]
        if needle in name.lower():
            processes.append(ProcessRecord(pid=pid, name=name, port=UNKNOWN_PORT))
    return processes


def parse_identity(output: str) -> tuple[str, str, str] | None:
    """
    Parse `ps -o pid=,user=,comm=` output for a single process.

    comm is the last column so a command name with spaces
    ("Google Chrome He") is read whole. Returns (pid, user, name) or None
    if the required columns are missing.
    """
    for line in output.splitlines():
        parts = line.split(None, 2)
        if len(parts) < 3:
            continue
        return parts[0], parts[1], parts[2].strip()
    return None


def parse_command(output: str) -> str | None:
    """Parse `ps -o args=` output; the whole line is the argument line."""
    for line in output.splitlines():
        if line.strip():
            return line.strip()
    return None


def parse_resources(output: str) -> tuple[str | None, str | None]:
    """Parse `ps -o pid=,%cpu=,%mem=` output into (cpu, memory) strings."""
    for line in output.splitlines():
        parts = line.split()
        if not parts:
            continue
        cpu = f"{parts[1]}%" if len(parts) > 1 else None
        memory = f"{parts[2]}%" if len(parts) > 2 else None
        return cpu, memory
    return None, None


def parse_start_time(output: str) -> str | None:
    """Parse `ps -o pid=,lstart=` output; everything after the PID is the timestamp."""
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        return " ".join(parts[1:])
    return None


def extract_ports(output: str) -> list[int]:
    """
    Collect the local ports named in `lsof -iTCP` output.

    Any field containing a colon is treated as an address:port pair. For
    connected sockets ("127.0.0.1:5000->127.0.0.1:61234") only the local side
    counts. Ports are distinct and in first-seen order.
    """
    ports: list[int] = []
    for line in output.splitlines():
        for field in line.split():
            if ":" not in field:
                continue
            local = field.split("->", 1)[0]
            suffix = local.rsplit(":", 1)[-1]
            if not is_port(suffix):
                continue
            port = int(suffix)
            if port not in ports:
                ports.append(port)
    return ports


def format_ports(ports: list[int]) -> str:
    """Join ports with ", ", or return the Unknown sentinel."""
    if not ports:
        return UNKNOWN_PORT
    return ", ".join(str(port) for port in ports)
