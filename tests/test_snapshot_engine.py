"""Unit tests for SnapshotEngine - pure Python logic tests.

These tests verify the stateless snapshot reconciliation without any Home
Assistant mocking.

Test Categories:
- Partitioning (dedup, ordering, timestamp clamping)
- Recency window
- Completion check
- Diff: first-seen pair, steady state, idempotency, monotonic announced set
"""

from __future__ import annotations

from custom_components.platinum_tracker.engines.snapshot_engine import SnapshotEngine
from tests.helpers import NOW, make_prior, make_snapshot

WINDOW = 900


# =============================================================================
# partition()
# =============================================================================


class TestPartition:
    """Tests for splitting a snapshot into unlocked and locked."""

    def test_unlocked_sorted_newest_first(self) -> None:
        """Unlocked achievements are ordered by unlock time, descending."""
        snapshot = make_snapshot(
            [("A", True, 100), ("B", True, 300), ("C", False, 0), ("D", True, 200)]
        )
        unlocked, locked = SnapshotEngine.partition(snapshot)

        assert [item["api_name"] for item in unlocked] == ["B", "D", "A"]
        assert locked == ["C"]

    def test_ties_keep_provider_order(self) -> None:
        """Equal unlock times keep the order the provider reported."""
        snapshot = make_snapshot([("X", True, 50), ("Y", True, 50), ("Z", True, 50)])
        unlocked, _ = SnapshotEngine.partition(snapshot)

        assert [item["api_name"] for item in unlocked] == ["X", "Y", "Z"]

    def test_duplicate_api_names_keep_first_occurrence(self) -> None:
        """A repeated api name is only counted once."""
        snapshot = make_snapshot([("A", True, 10), ("A", False, 0), ("B", False, 0)])
        unlocked, locked = SnapshotEngine.partition(snapshot)

        assert [item["api_name"] for item in unlocked] == ["A"]
        assert locked == ["B"]

    def test_negative_unlock_time_clamped_to_zero(self) -> None:
        """Negative timestamps are treated as missing."""
        snapshot = make_snapshot([("A", True, -5)])
        unlocked, _ = SnapshotEngine.partition(snapshot)

        assert unlocked[0]["unlock_time"] == 0


# =============================================================================
# recent() / is_complete()
# =============================================================================


class TestRecentAndComplete:
    """Tests for the recency window and completion check."""

    def test_window_cutoff_is_inclusive(self) -> None:
        """An unlock exactly at now - window is recent; one second older is not."""
        unlocked = [
            {"api_name": "EDGE", "unlock_time": NOW - WINDOW},
            {"api_name": "OLD", "unlock_time": NOW - WINDOW - 1},
        ]
        recent = SnapshotEngine.recent(unlocked, WINDOW, NOW)

        assert [item["api_name"] for item in recent] == ["EDGE"]

    def test_zero_unlock_time_is_never_recent(self) -> None:
        """Unlocked with no timestamp is never inside the window."""
        unlocked = [{"api_name": "A", "unlock_time": 0}]

        assert SnapshotEngine.recent(unlocked, NOW + 10, NOW) == []

    def test_is_complete(self) -> None:
        """Complete only when the total is known, positive and fully unlocked."""
        assert SnapshotEngine.is_complete(3, 3) is True
        assert SnapshotEngine.is_complete(3, 2) is False
        assert SnapshotEngine.is_complete(0, 0) is False
        assert SnapshotEngine.is_complete(None, 5) is False


# =============================================================================
# diff()
# =============================================================================


class TestDiffBootstrap:
    """Tests for the first time a (user, game) pair is seen."""

    def test_first_seen_announces_nothing(self) -> None:
        """Even fresh unlocks are recorded silently on first sight."""
        snapshot = make_snapshot(
            [("A", True, NOW - 10), ("B", True, NOW - 100000), ("C", False, 0)]
        )
        result = SnapshotEngine.diff(snapshot, make_prior(exists=False), WINDOW, NOW)

        assert result["is_bootstrap"] is True
        assert result["to_announce"] == []
        assert result["announced_api_names"] == ["A", "B"]
        assert result["unlocked_count"] == 2
        assert result["locked_count"] == 1

    def test_first_seen_complete_game(self) -> None:
        """A game completed before tracking is complete but posts nothing."""
        snapshot = make_snapshot([("A", True, NOW), ("B", True, NOW)])
        result = SnapshotEngine.diff(snapshot, make_prior(exists=False), WINDOW, NOW)

        assert result["is_complete"] is True
        assert result["to_announce"] == []


class TestDiffSteadyState:
    """Tests for known pairs."""

    def test_new_recent_unlocks_announced_newest_first(self) -> None:
        """Recent, unannounced unlocks are returned newest first and appended."""
        snapshot = make_snapshot(
            [
                ("OLD", True, NOW - 5000),
                ("NEW1", True, NOW - 300),
                ("NEW2", True, NOW - 30),
                ("LOCKED", False, 0),
            ]
        )
        result = SnapshotEngine.diff(snapshot, make_prior(["OLD"]), WINDOW, NOW)

        assert [item["api_name"] for item in result["to_announce"]] == ["NEW2", "NEW1"]
        assert result["announced_api_names"] == ["OLD", "NEW2", "NEW1"]
        assert result["is_bootstrap"] is False

    def test_old_unannounced_unlock_is_not_announced(self) -> None:
        """Unlocks outside the window stay unannounced."""
        snapshot = make_snapshot([("A", True, NOW - 5000)])
        result = SnapshotEngine.diff(snapshot, make_prior([]), WINDOW, NOW)

        assert result["to_announce"] == []
        assert result["announced_api_names"] == []

    def test_diff_is_idempotent(self) -> None:
        """Re-running with the produced state yields nothing new."""
        snapshot = make_snapshot([("A", True, NOW - 10), ("B", True, NOW - 20)])
        first = SnapshotEngine.diff(snapshot, make_prior([]), WINDOW, NOW)
        second = SnapshotEngine.diff(
            snapshot, make_prior(first["announced_api_names"]), WINDOW, NOW
        )

        assert len(first["to_announce"]) == 2
        assert second["to_announce"] == []
        assert second["announced_api_names"] == first["announced_api_names"]

    def test_announced_set_never_shrinks(self) -> None:
        """Names that vanished from the snapshot stay in the announced set."""
        snapshot = make_snapshot([("A", True, NOW - 10)])
        result = SnapshotEngine.diff(
            snapshot, make_prior(["GONE", "A", "GONE"]), WINDOW, NOW
        )

        assert result["announced_api_names"] == ["GONE", "A"]
        assert result["to_announce"] == []
