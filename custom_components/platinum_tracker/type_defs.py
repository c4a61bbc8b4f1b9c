"""Type definitions for Platinum Tracker data structures.

TypedDict is used for structures whose keys are fixed at design time
(snapshots, ledger records, engine results). Records read back from storage
are still accessed with ``.get()`` and defaults because TypedDict does not
enforce anything at runtime.

IMPORTANT: This file must NOT import from coordinator.py, managers or any
module that imports the coordinator, to avoid circular dependencies.
"""

from typing import Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

SteamId = str  # 64-bit SteamID as a decimal string
AppId = str  # Steam application id as a string
ApiName = str  # Achievement api name, unique within one game
LedgerKey = str  # "steam#<steam_id>#app#<appid>"
UnixSeconds = int


# =============================================================================
# Configuration
# =============================================================================


class TrackedUser(TypedDict):
    """A tracked Steam account, parsed from the users JSON."""

    name: str
    steam_id: SteamId
    webhook_url: NotRequired[str]
    timezone: NotRequired[str]
    window_seconds: NotRequired[int]


# =============================================================================
# Provider Data
# =============================================================================


class TargetGame(TypedDict):
    """Game selected for a user on this poll."""

    appid: AppId
    game_title: str | None  # presence or recent-games title, when Steam gives one
    source: Literal["currently_playing", "recently_played"]


class SnapshotEntry(TypedDict):
    """One achievement as reported by the provider."""

    api_name: ApiName
    unlocked: bool
    unlock_time: UnixSeconds  # 0 when the provider gives no timestamp


class Snapshot(TypedDict):
    """Full current achievement snapshot for one (user, game) pair."""

    entries: list[SnapshotEntry]
    total_count: int | None  # None when the total is unknown


class AchievementMeta(TypedDict):
    """Display metadata for one achievement from the game schema."""

    display_name: str
    description: str | None
    icon: str | None


class GameSchema(TypedDict):
    """Schema for one game, fetched lazily when something is announced."""

    canonical_title: str | None
    total_count: int
    achievements: dict[ApiName, AchievementMeta]


# =============================================================================
# Ledger
# =============================================================================


class LedgerState(TypedDict):
    """What the pipeline needs from the prior ledger record."""

    exists: bool
    announced_api_names: list[ApiName]
    platinum_announced: bool


class LedgerRecord(TypedDict):
    """Durable record stored per (steam_id, appid).

    The three diagnostic lists and the announced list may be removed by the
    size guardrail; the remaining fields are always present.
    """

    pk: LedgerKey
    name: str
    steam_id: SteamId
    appid: AppId
    game_title: str
    total_achievements: int
    unlocked_count: int
    locked_count: int
    progress_text: str
    unlocked_api_names: NotRequired[list[ApiName]]
    locked_api_names: NotRequired[list[ApiName]]
    unannounced_unlocked_api_names: NotRequired[list[ApiName]]
    announced_api_names: NotRequired[list[ApiName]]
    platinum_announced: bool
    updated_at: UnixSeconds
    arrays_truncated: NotRequired[bool]
    approx_bytes_before_truncate: NotRequired[int]
    announced_dropped: NotRequired[bool]


# =============================================================================
# Engine Results
# =============================================================================


class UnlockedAchievement(TypedDict):
    """An unlocked achievement with its unlock time."""

    api_name: ApiName
    unlock_time: UnixSeconds


class DiffResult(TypedDict):
    """Result of SnapshotEngine.diff()."""

    to_announce: list[UnlockedAchievement]
    announced_api_names: list[ApiName]
    is_complete: bool
    is_bootstrap: bool
    unlocked: list[UnlockedAchievement]
    recent_unlocked: list[UnlockedAchievement]
    locked_api_names: list[ApiName]
    unlocked_count: int
    locked_count: int


class GuardrailResult(TypedDict):
    """Result of GuardrailEngine.apply()."""

    record: LedgerRecord
    degraded: bool
    announced_dropped: bool
    dropped_fields: list[str]
    initial_bytes: int
    approx_bytes: int


class CompletionDecision(TypedDict):
    """Result of CompletionEngine.evaluate()."""

    should_celebrate: bool
    new_latched: bool


class UnitResult(TypedDict, total=False):
    """Per-user result of one batch run."""

    ok: bool
    error: str
    name: str
    posted: int
    reason: str
    appid: AppId
    game_title: str
    progress_text: str
    progress_pct: int
    unlocked_count: int
    total_count: int
    platinum: bool
    platinum_celebrated: bool
    bootstrap: bool
    truncated: bool


# =============================================================================
# Event Log
# =============================================================================


class EventLogEntry(TypedDict):
    """Append-once unlock row used for the weekly leaderboard."""

    week: str  # ISO week bucket "2026-W42"
    steam_id: SteamId
    name: str
    unlock_time: UnixSeconds
    appid: AppId
    api_name: ApiName
    achievement_name: str
    game_title: str
