"""Tests for the portkill Textual application."""

import pytest
from textual.widgets import DataTable, Static

from portkill.app import PortKillApp, ResultTable, build_parser, format_detail
from portkill.models import (
    DetailResult,
    FailureKind,
    NameQueryResult,
    PortQueryResult,
    ProcessDetail,
    ProcessRecord,
    TerminationMode,
    TerminationOutcome,
)


class FakeEngine:
    """Engine double that records calls and returns canned results."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.terminate_ok = True

    def check_port(self, port):
        self.calls.append(("check_port", port))
        if port == "3000":
            return PortQueryResult.occupied_by([ProcessRecord("1234", "node", "3000")])
        return PortQueryResult.occupied_by([])

    def find_by_name(self, name):
        self.calls.append(("find_by_name", name))
        return NameQueryResult(
            processes=(
                ProcessRecord("1234", "nodejs", "Unknown"),
                ProcessRecord("5678", "node-server", "Unknown"),
            )
        )

    def get_detail(self, pid):
        self.calls.append(("get_detail", pid))
        return DetailResult(detail=ProcessDetail(pid=pid, name="node", port="3000", user="alice"))

    def terminate(self, pid, forceful=False):
        self.calls.append(("terminate", pid, forceful))
        mode = TerminationMode.from_flag(forceful)
        if self.terminate_ok:
            return TerminationOutcome(pid=pid, mode=mode, message=f"Process {pid} {mode.verb} successfully")
        return TerminationOutcome(
            pid=pid, mode=mode, message="Failed", failure=FailureKind.TERMINATION_FAILED
        )


def test_format_detail():
    """Test format_detail lists every field and marks missing ones."""
    text = format_detail(ProcessDetail(pid="1234", name="node", port="3000, 8080", user="alice"))

    assert "1234" in text
    assert "3000, 8080" in text
    assert "alice" in text
    assert "CPU      -" in text


def test_build_parser():
    """Test the command line options are parsed."""
    args = build_parser().parse_args(["3000", "--timeout", "2", "--signal-backend", "psutil"])

    assert args.query == "3000"
    assert args.timeout == 2.0
    assert args.signal_backend == "psutil"


@pytest.mark.asyncio
async def test_app_creation():
    """Test PortKillApp can be instantiated."""
    app = PortKillApp(FakeEngine())
    assert app.title == "portkill"


@pytest.mark.asyncio
async def test_app_compose():
    """Test PortKillApp composes correctly."""
    app = PortKillApp(FakeEngine())
    async with app.run_test() as pilot:
        assert pilot.app.query_one("#query-input") is not None
        assert pilot.app.query_one("#result-table") is not None
        assert pilot.app.query_one("#detail-panel") is not None


@pytest.mark.asyncio
async def test_port_query_fills_table():
    engine = FakeEngine()
    app = PortKillApp(engine)
    async with app.run_test() as pilot:
        pilot.app.run_query("3000")
        await pilot.pause()

        table = pilot.app.query_one("#result-table", DataTable)
        assert table.row_count == 1
        assert engine.calls == [("check_port", "3000")]


@pytest.mark.asyncio
async def test_name_query_fills_table():
    engine = FakeEngine()
    app = PortKillApp(engine)
    async with app.run_test() as pilot:
        pilot.app.run_query("node")
        await pilot.pause()

        assert pilot.app.query_one("#result-table", DataTable).row_count == 2
        assert engine.calls == [("find_by_name", "node")]


@pytest.mark.asyncio
async def test_initial_query_runs_on_mount():
    engine = FakeEngine()
    app = PortKillApp(engine, initial_query="3000")
    async with app.run_test() as pilot:
        await pilot.pause()
        assert ("check_port", "3000") in engine.calls


@pytest.mark.asyncio
async def test_force_kill_selected_process():
    engine = FakeEngine()
    app = PortKillApp(engine)
    async with app.run_test() as pilot:
        pilot.app.run_query("3000")
        await pilot.pause()

        pilot.app.action_force_kill()
        await pilot.pause()

        assert ("terminate", "1234", True) in engine.calls
        # a successful kill refreshes the last query
        assert engine.calls.count(("check_port", "3000")) == 2


@pytest.mark.asyncio
async def test_failed_terminate_does_not_refresh():
    engine = FakeEngine()
    engine.terminate_ok = False
    app = PortKillApp(engine)
    async with app.run_test() as pilot:
        pilot.app.run_query("3000")
        await pilot.pause()

        pilot.app.action_terminate()
        await pilot.pause()

        assert ("terminate", "1234", False) in engine.calls
        assert engine.calls.count(("check_port", "3000")) == 1


@pytest.mark.asyncio
async def test_details_for_selected_process():
    engine = FakeEngine()
    app = PortKillApp(engine)
    async with app.run_test() as pilot:
        pilot.app.run_query("3000")
        await pilot.pause()

        pilot.app.action_details()
        await pilot.pause()

        assert ("get_detail", "1234") in engine.calls
        assert pilot.app.query_one(ResultTable).selected().pid == "1234"


@pytest.mark.asyncio
async def test_actions_without_selection_do_nothing():
    engine = FakeEngine()
    app = PortKillApp(engine)
    async with app.run_test() as pilot:
        pilot.app.action_force_kill()
        pilot.app.action_details()
        await pilot.pause()

        assert engine.calls == []
        assert isinstance(pilot.app.query_one("#detail-panel"), Static)
