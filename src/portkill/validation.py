"""Validation of user-supplied port numbers and process ids."""

from portkill.errors import ValidationError

MAX_PORT = 0xFFFF
MAX_PID = 0xFFFFFFFF


def _parse_unsigned(text: str, upper: int) -> int | None:
    # str.isdigit() also accepts non-ASCII digits such as "²"
    if not text or not text.isascii() or not text.isdigit():
        return None
    value = int(text)
    if value > upper:
        return None
    return value


def parse_port(text: str) -> int:
    """Parse a TCP port (0-65535). Raises ValidationError."""
    value = _parse_unsigned(text, MAX_PORT)
    if value is None:
        raise ValidationError("Invalid port number")
    return value


def parse_pid(text: str) -> int:
    """
    Parse a process id (1 to 2**32 - 1). Raises ValidationError.

    0 is rejected: kill(1) treats it as the caller's own process group.
    """
    value = _parse_unsigned(text, MAX_PID)
    if not value:
        raise ValidationError(f"Invalid PID format: {text}")
    return value


def is_port(text: str) -> bool:
    """Return True if text is a valid port number."""
    return _parse_unsigned(text, MAX_PORT) is not None
