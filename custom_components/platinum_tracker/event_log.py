# File: event_log.py
"""Append-once unlock event log for the Platinum Tracker leaderboard.

Every announced achievement is recorded once, keyed by
(week bucket, steam_id, unlock time, appid, api name). Writing a key that
already exists is a no-op: at-least-once notification delivery can replay an
announcement, but never a leaderboard row.

Weeks older than EVENT_LOG_RETENTION_WEEKS are pruned when the log is loaded.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Any

from homeassistant.helpers.storage import Store

from . import const
from .utils.dt_utils import dt_now_unix, dt_week_bucket

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .type_defs import EventLogEntry


class PlatinumEventLogStore:
    """Conditional-write event log stored with Home Assistant's Storage helper."""

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY_EVENTS
    ) -> None:
        """Initialize the event log store."""
        self.hass = hass
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)
        self._data: dict[str, Any] = {const.DATA_EVENTS: {}}

    async def async_initialize(self, now_sec: int | None = None) -> None:
        """Load existing events from storage and prune expired weeks."""
        existing_data = await self._store.async_load()
        if existing_data is None:
            self._data = {const.DATA_EVENTS: {}}
        else:
            self._data = existing_data
            self._data.setdefault(const.DATA_EVENTS, {})
        const.LOGGER.debug(
            "DEBUG: Event log loaded: %s events", len(self._data[const.DATA_EVENTS])
        )

        if now_sec is None:
            now_sec = dt_now_unix()
        cutoff = dt_week_bucket(now_sec - const.EVENT_LOG_RETENTION_WEEKS * 7 * 86400)
        await self.async_prune_before(cutoff)

    @property
    def events(self) -> dict[str, EventLogEntry]:
        """Retrieve all events by key."""
        return self._data[const.DATA_EVENTS]

    @staticmethod
    def build_key(entry: EventLogEntry) -> str:
        """Return the unique key of an event."""
        return const.EVENT_LOG_KEY_FORMAT.format(
            week=entry["week"],
            steam_id=entry["steam_id"],
            unlock_time=entry["unlock_time"],
            appid=entry["appid"],
            api_name=entry["api_name"],
        )

    async def async_append(self, entry: EventLogEntry) -> bool:
        """Write an event only if its key does not exist yet.

        Returns:
            True when written, False when the key was already present.
        """
        key = self.build_key(entry)
        if key in self.events:
            const.LOGGER.debug("DEBUG: Event log already has %s, skipping", key)
            return False

        self.events[key] = entry
        await self._store.async_save(self._data)
        return True

    async def async_prune_before(self, week: str) -> int:
        """Drop events from weeks before the given bucket.

        Week buckets sort as text, so "2025-W09" < "2025-W10" < "2026-W01".

        Returns:
            Number of events removed.
        """
        expired = [
            key
            for key, event in self.events.items()
            if event[const.DATA_EVENT_WEEK] < week  # type: ignore[literal-required]
        ]
        if not expired:
            return 0

        for key in expired:
            del self.events[key]
        await self._store.async_save(self._data)
        const.LOGGER.info(
            "INFO: Pruned %s event log entries older than %s", len(expired), week
        )
        return len(expired)

    def get_week_leaderboard(self, week: str) -> list[tuple[str, int]]:
        """Return (name, unlock count) for one week, highest count first."""
        counts = Counter(
            event[const.DATA_EVENT_NAME]  # type: ignore[literal-required]
            for event in self.events.values()
            if event[const.DATA_EVENT_WEEK] == week  # type: ignore[literal-required]
        )
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))

    async def async_delete_storage(self) -> None:
        """Delete the event log file from disk."""
        self._data = {const.DATA_EVENTS: {}}
        try:
            await self._store.async_remove()
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove event log storage %s: %s",
                self._store.path,
                err,
            )
