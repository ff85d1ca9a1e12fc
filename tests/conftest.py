"""Shared fixtures for portkill tests."""

from collections.abc import Sequence

import pytest

from portkill.runner import CommandResult


class FakeRunner:
    """Scripted stand-in for CommandRunner; never spawns a process."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self._responses: dict[tuple[str, ...], CommandResult | Exception] = {}

    def add(
        self,
        args: Sequence[str],
        stdout: str = "",
        returncode: int = 0,
        stderr: str = "",
    ) -> None:
        argv = tuple(args)
        self._responses[argv] = CommandResult(argv, returncode, stdout, stderr)

    def fail(self, args: Sequence[str], error: Exception) -> None:
        self._responses[tuple(args)] = error

    def run(self, args: Sequence[str]) -> CommandResult:
        argv = tuple(args)
        self.calls.append(argv)
        response = self._responses.get(argv)
        if response is None:
            return CommandResult(argv, 1, "", f"unscripted command: {' '.join(argv)}")
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()
