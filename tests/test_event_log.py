"""Tests for the append-once unlock event log."""

# pylint: disable=protected-access
# pylint: disable=redefined-outer-name

from unittest.mock import AsyncMock, patch

import pytest
from homeassistant.core import HomeAssistant

from custom_components.platinum_tracker.event_log import PlatinumEventLogStore
from tests.helpers import APPID, NOW, STEAM_ID_ALEX, STEAM_ID_SAM


def make_event(
    name: str = "Sam",
    steam_id: str = STEAM_ID_SAM,
    api_name: str = "ACH_A",
    week: str = "2025-W41",
    unlock_time: int = NOW,
) -> dict:
    """Build an EventLogEntry."""
    return {
        "week": week,
        "steam_id": steam_id,
        "name": name,
        "unlock_time": unlock_time,
        "appid": APPID,
        "api_name": api_name,
        "achievement_name": api_name.title(),
        "game_title": "Portal 2",
    }


@pytest.fixture
async def event_log(hass: HomeAssistant) -> PlatinumEventLogStore:
    """Return an initialized, empty event log with saving mocked."""
    store = PlatinumEventLogStore(hass)
    with patch.object(store._store, "async_load", return_value=None):
        await store.async_initialize()
    store._store.async_save = AsyncMock()
    return store


async def test_append_writes_new_event(event_log: PlatinumEventLogStore) -> None:
    """A new key is written and persisted."""
    assert await event_log.async_append(make_event()) is True
    assert len(event_log.events) == 1
    event_log._store.async_save.assert_awaited_once()


async def test_duplicate_append_is_a_noop(event_log: PlatinumEventLogStore) -> None:
    """Replaying the same unlock never adds a second row."""
    await event_log.async_append(make_event())

    assert await event_log.async_append(make_event()) is False
    assert len(event_log.events) == 1
    assert event_log._store.async_save.await_count == 1


async def test_key_includes_every_identity_field() -> None:
    """The event key is week#steam_id#unlock_time#appid#api_name."""
    assert PlatinumEventLogStore.build_key(make_event()) == (
        f"2025-W41#{STEAM_ID_SAM}#{NOW}#{APPID}#ACH_A"
    )


async def test_week_leaderboard(event_log: PlatinumEventLogStore) -> None:
    """Leaderboard counts one week only, highest first, ties by name."""
    await event_log.async_append(make_event(api_name="A1"))
    await event_log.async_append(make_event(api_name="A2"))
    await event_log.async_append(
        make_event(name="Alex", steam_id=STEAM_ID_ALEX, api_name="B1")
    )
    await event_log.async_append(
        make_event(name="Alex", steam_id=STEAM_ID_ALEX, api_name="B2", week="2025-W40")
    )
    await event_log.async_append(
        make_event(name="Blake", steam_id="3", api_name="C1")
    )

    assert event_log.get_week_leaderboard("2025-W41") == [
        ("Sam", 2),
        ("Alex", 1),
        ("Blake", 1),
    ]
    assert event_log.get_week_leaderboard("2025-W39") == []


async def test_initialize_prunes_expired_weeks(hass: HomeAssistant) -> None:
    """Loading drops weeks older than the retention period and saves once."""
    old = make_event(week="2025-W01", unlock_time=NOW - 300 * 86400)
    recent = make_event(api_name="ACH_B")
    stored = {
        "events": {
            PlatinumEventLogStore.build_key(old): old,
            PlatinumEventLogStore.build_key(recent): recent,
        }
    }
    store = PlatinumEventLogStore(hass)

    with (
        patch.object(store._store, "async_load", return_value=stored),
        patch.object(store._store, "async_save", new=AsyncMock()) as save,
    ):
        await store.async_initialize(now_sec=NOW)

    assert list(store.events.values()) == [recent]
    save.assert_awaited_once()


async def test_prune_keeps_weeks_at_cutoff(event_log: PlatinumEventLogStore) -> None:
    """Only weeks strictly before the cutoff are removed."""
    await event_log.async_append(make_event(week="2024-W52"))
    await event_log.async_append(make_event(week="2025-W02", api_name="ACH_B"))
    await event_log.async_append(make_event(week="2025-W10", api_name="ACH_C"))
    event_log._store.async_save.reset_mock()

    assert await event_log.async_prune_before("2025-W02") == 1
    assert sorted(event["week"] for event in event_log.events.values()) == [
        "2025-W02",
        "2025-W10",
    ]
    event_log._store.async_save.assert_awaited_once()

    assert await event_log.async_prune_before("2025-W02") == 0
    event_log._store.async_save.assert_awaited_once()
