"""Exceptions raised inside portkill.

None of these escape the public operations; they are turned into error
strings on the result records.
"""


class PortKillError(Exception):
    """Base class for portkill errors."""


class ValidationError(PortKillError):
    """A port or process id string is malformed or out of range."""


class ToolInvocationError(PortKillError):
    """An external tool could not be launched."""

    def __init__(self, tool: str, reason: str) -> None:
        self.tool = tool
        self.reason = reason
        super().__init__(f"Failed to execute {tool}: {reason}")


class ToolTimeoutError(ToolInvocationError):
    """An external tool did not finish within the configured timeout."""

    def __init__(self, tool: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(tool, f"timed out after {timeout:g}s")


class ToolExecutionError(PortKillError):
    """An external tool ran but reported a failing exit status."""

    def __init__(self, tool: str, returncode: int, stderr: str) -> None:
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or "no diagnostic output"
        super().__init__(f"{tool} exited with status {returncode}: {detail}")
