"""Unit tests for the Kong availability gate."""

from __future__ import annotations

import threading

import pytest

from kong_adapter.integrations.kong.availability import (
    AvailabilityGate,
    AvailabilityState,
    get_availability_gate,
    get_kong_cluster_status,
    is_kong_available,
    mark_kong_available,
    reset_availability,
)


@pytest.mark.unit
class TestAvailabilityGate:
    """Tests for AvailabilityGate."""

    def test_starts_available(self) -> None:
        gate = AvailabilityGate()

        assert gate.is_available()
        assert gate.get_message() is None
        assert gate.snapshot() == AvailabilityState()

    def test_mark_available_replaces_everything(self) -> None:
        gate = AvailabilityGate()
        gate.mark_available(True, None, {"database": {"reachable": True}})

        gate.mark_available(False, "refused")

        assert gate.snapshot() == AvailabilityState(False, "refused", None)

    def test_set_available_keeps_cluster_status(self) -> None:
        gate = AvailabilityGate()
        gate.mark_available(True, None, {"server": {}})

        gate.set_available(False, "timeout")

        state = gate.snapshot()
        assert state.available is False
        assert state.message == "timeout"
        assert state.cluster_status == {"server": {}}

    def test_reset(self) -> None:
        gate = AvailabilityGate()
        gate.mark_available(False, "down", {"x": 1})

        gate.reset()

        assert gate.is_available()
        assert gate.get_cluster_status() is None

    def test_concurrent_updates_leave_a_consistent_state(self) -> None:
        """Concurrent writers never leave message and flag from different updates."""
        gate = AvailabilityGate()

        def flip(n: int) -> None:
            for i in range(200):
                if (n + i) % 2:
                    gate.mark_available(False, f"down-{n}")
                else:
                    gate.mark_available(True, None)

        threads = [threading.Thread(target=flip, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        state = gate.snapshot()
        assert (state.available and state.message is None) or (
            not state.available and state.message is not None
        )


@pytest.mark.unit
class TestModuleFunctions:
    """Tests for the process-wide gate helpers."""

    def test_process_wide_gate(self) -> None:
        mark_kong_available(False, "down", {"database": {"reachable": False}})

        assert not is_kong_available()
        assert get_availability_gate().get_message() == "down"
        assert get_kong_cluster_status() == {"database": {"reachable": False}}

        reset_availability()

        assert is_kong_available()
