"""Snapshot Engine - Pure reconciliation of achievement snapshots.

The provider only ever returns the full current state of a game's
achievements. This engine turns one such snapshot plus the prior ledger state
into the list of achievements that should be announced now and the updated
announced set.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All methods are static and operate on passed-in data. The
ReconciliationManager performs the I/O around it (fetching, posting, saving).

Rules:
- First-seen pair (no prior ledger): announce nothing, mark every currently
  unlocked achievement as already announced.
- Known pair: announce unlocked achievements inside the recency window that
  are not yet in the announced set, newest first.
- Achievements unlocked with no timestamp (0) are never announced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..type_defs import (
        ApiName,
        DiffResult,
        LedgerState,
        Snapshot,
        UnlockedAchievement,
    )


class SnapshotEngine:
    """Pure logic engine for snapshot reconciliation.

    All methods are static - no instance state. Calling diff() twice with the
    same snapshot and the ledger state produced by the first call always
    yields an empty to_announce list.
    """

    @staticmethod
    def partition(
        snapshot: Snapshot,
    ) -> tuple[list[UnlockedAchievement], list[ApiName]]:
        """Split a snapshot into unlocked (newest first) and locked api names.

        Duplicate api names keep their first occurrence. The sort is stable,
        so achievements sharing an unlock time keep provider order.
        """
        unlocked: list[UnlockedAchievement] = []
        locked: list[ApiName] = []
        seen: set[ApiName] = set()

        for entry in snapshot["entries"]:
            api_name = entry["api_name"]
            if api_name in seen:
                continue
            seen.add(api_name)

            if entry["unlocked"]:
                unlocked.append(
                    {
                        "api_name": api_name,
                        "unlock_time": max(int(entry["unlock_time"] or 0), 0),
                    }
                )
            else:
                locked.append(api_name)

        unlocked.sort(key=lambda item: item["unlock_time"], reverse=True)
        return unlocked, locked

    @staticmethod
    def recent(
        unlocked: list[UnlockedAchievement], window_seconds: int, now_sec: int
    ) -> list[UnlockedAchievement]:
        """Return unlocked achievements inside the recency window.

        The cutoff is inclusive: unlock_time == now - window is recent.
        Zero timestamps are treated as old.
        """
        cutoff = now_sec - window_seconds
        return [
            item
            for item in unlocked
            if item["unlock_time"] > 0 and item["unlock_time"] >= cutoff
        ]

    @staticmethod
    def is_complete(total_count: int | None, unlocked_count: int) -> bool:
        """Return True when every achievement of a known, non-empty game is unlocked."""
        if total_count is None or total_count <= 0:
            return False
        return unlocked_count == total_count

    @classmethod
    def diff(
        cls,
        snapshot: Snapshot,
        prior: LedgerState,
        window_seconds: int,
        now_sec: int,
    ) -> DiffResult:
        """Reconcile a snapshot against the prior ledger state.

        Pure function - no side effects, no clock reads, no storage access.

        Args:
            snapshot: Current provider snapshot (must not be empty)
            prior: Ledger state for the pair; exists=False means first seen
            window_seconds: Recency window in seconds
            now_sec: Current unix time in seconds

        Returns:
            DiffResult with to_announce (newest first), the updated announced
            list and the completion flag
        """
        unlocked, locked = cls.partition(snapshot)
        recent_unlocked = cls.recent(unlocked, window_seconds, now_sec)

        if not prior["exists"]:
            to_announce: list[UnlockedAchievement] = []
            announced = [item["api_name"] for item in unlocked]
        else:
            announced = list(dict.fromkeys(prior["announced_api_names"]))
            already = set(announced)
            to_announce = [
                item for item in recent_unlocked if item["api_name"] not in already
            ]
            announced.extend(item["api_name"] for item in to_announce)

        return {
            "to_announce": to_announce,
            "announced_api_names": announced,
            "is_complete": cls.is_complete(snapshot["total_count"], len(unlocked)),
            "is_bootstrap": not prior["exists"],
            "unlocked": unlocked,
            "recent_unlocked": recent_unlocked,
            "locked_api_names": locked,
            "unlocked_count": len(unlocked),
            "locked_count": len(locked),
        }
