"""Tests for portkill data models."""

import signal

import pytest

from portkill.models import (
    FailureKind,
    PortQueryResult,
    ProcessDetail,
    ProcessRecord,
    TerminationMode,
    TerminationOutcome,
)


def test_process_record_creation():
    """Test ProcessRecord dataclass creation."""
    record = ProcessRecord(pid="1234", name="node", port="3000")

    assert record.pid == "1234"
    assert record.name == "node"
    assert record.port == "3000"


def test_process_record_is_frozen():
    """Test that ProcessRecord is immutable (frozen)."""
    record = ProcessRecord(pid="1", name="init", port="Unknown")

    with pytest.raises(AttributeError):
        record.pid = "999"


def test_process_record_uses_slots():
    """Test that ProcessRecord uses __slots__."""
    record = ProcessRecord(pid="1", name="init", port="Unknown")

    assert not hasattr(record, "__dict__")


def test_process_detail_optional_fields_default_to_none():
    """Test ProcessDetail optional fields default to None."""
    detail = ProcessDetail(pid="1234", name="node", port="3000, 8080")

    assert detail.port == "3000, 8080"
    assert detail.user is None
    assert detail.command is None
    assert detail.cpu_usage is None
    assert detail.memory_usage is None
    assert detail.start_time is None


class TestPortQueryResult:
    """Tests for PortQueryResult helpers."""

    def test_occupied_follows_processes(self):
        """Test a non-empty process list means occupied."""
        result = PortQueryResult.occupied_by([ProcessRecord("1234", "node", "3000")])

        assert result.is_occupied
        assert len(result.processes) == 1
        assert result.error is None

    def test_empty_list_is_not_occupied(self):
        """Test an empty process list means not occupied, without error."""
        result = PortQueryResult.occupied_by([])

        assert not result.is_occupied
        assert result.processes == ()
        assert result.error is None

    def test_failed_carries_error(self):
        """Test failed() builds a not-occupied result with an error."""
        result = PortQueryResult.failed("Invalid port number")

        assert not result.is_occupied
        assert result.processes == ()
        assert result.error == "Invalid port number"


class TestTerminationMode:
    """Tests for TerminationMode."""

    def test_from_flag(self):
        """Test the forceful flag maps to a mode."""
        assert TerminationMode.from_flag(True) is TerminationMode.FORCEFUL
        assert TerminationMode.from_flag(False) is TerminationMode.GRACEFUL

    def test_signals(self):
        """Test each mode maps to its POSIX signal."""
        assert TerminationMode.FORCEFUL.signal == signal.SIGKILL
        assert TerminationMode.GRACEFUL.signal == signal.SIGTERM

    def test_kill_flags(self):
        """Test each mode maps to a kill(1) selector."""
        assert TerminationMode.FORCEFUL.kill_flag == "-9"
        assert TerminationMode.GRACEFUL.kill_flag == "-15"

    def test_verbs(self):
        """Test the verbs used in success messages."""
        assert TerminationMode.FORCEFUL.verb == "force killed"
        assert TerminationMode.GRACEFUL.verb == "gracefully terminated"


def test_termination_outcome_succeeded():
    """Test succeeded follows the failure field."""
    ok = TerminationOutcome(pid="1", mode=TerminationMode.GRACEFUL, message="done")
    failed = TerminationOutcome(
        pid="x",
        mode=TerminationMode.GRACEFUL,
        message="Invalid PID format: x",
        failure=FailureKind.INVALID_FORMAT,
    )

    assert ok.succeeded
    assert not failed.succeeded
