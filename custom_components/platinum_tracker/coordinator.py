# File: coordinator.py
"""Coordinator for the Platinum Tracker integration.

Runs one announcement batch per update interval: every tracked user is
reconciled once, with bounded concurrency, and the per-user results are
aggregated into coordinator data for the sensors.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed
from homeassistant.util import dt as dt_util

from . import const
from .helpers.cache_helpers import GameMetadataCache
from .managers import NotificationManager, ReconciliationManager
from .pt_helpers import TrackerSettings, build_tracker_settings
from .steam_api import SteamApiClient
from .utils.batch_utils import async_run_with_concurrency
from .utils.dt_utils import dt_now_unix

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

    from .event_log import PlatinumEventLogStore
    from .storage_manager import PlatinumLedgerStorageManager
    from .type_defs import TrackedUser, UnitResult


class PlatinumTrackerCoordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Coordinator for Platinum Tracker integration.

    Owns the shared Steam client, the ledger and event log stores, and the
    managers that run the per-user pipeline.
    """

    config_entry: ConfigEntry

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        storage_manager: PlatinumLedgerStorageManager,
        event_log: PlatinumEventLogStore,
    ) -> None:
        """Initialize the PlatinumTrackerCoordinator.

        Raises:
            InvalidTrackedUsersError: When the stored users list is invalid.
        """
        update_interval_minutes = config_entry.options.get(
            const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
        )

        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(minutes=update_interval_minutes),
        )
        self.storage_manager = storage_manager
        self.event_log = event_log
        self.settings: TrackerSettings = build_tracker_settings(
            config_entry, hass.config.time_zone or const.DEFAULT_TIMEZONE
        )
        self.session = async_get_clientsession(hass)
        self.steam_client = SteamApiClient(self.session, self.settings.api_key)

        self.notification_manager = NotificationManager(hass, self)
        self.reconciliation_manager = ReconciliationManager(hass, self)

    @property
    def tracked_users(self) -> list[TrackedUser]:
        """Return the tracked users of this instance."""
        return self.settings.users

    async def _async_update_data(self) -> dict[str, Any]:
        """Run one batch over every tracked user."""
        settings = self.settings
        users = settings.users
        now_sec = dt_now_unix()
        # Scoped to this batch only
        cache = GameMetadataCache(self.steam_client)

        const.LOGGER.debug(
            "DEBUG: Starting batch for %s users (concurrency=%s, window=%ss)",
            len(users),
            settings.concurrency,
            settings.window_seconds,
        )

        async def _process(user: TrackedUser) -> UnitResult:
            return await self.reconciliation_manager.async_process_user(
                user, settings, cache, now_sec
            )

        results = await async_run_with_concurrency(users, _process, settings.concurrency)

        users_data: dict[str, UnitResult] = {}
        posted_total = const.DEFAULT_ZERO
        platinum_total = const.DEFAULT_ZERO
        failed: list[str] = []

        for user, result in zip(users, results, strict=True):
            result.setdefault(const.RESULT_NAME, user["name"])
            users_data[user["steam_id"]] = result  # type: ignore[assignment]

            if not result.get(const.RESULT_OK):
                failed.append(user["name"])
                const.LOGGER.error(
                    "ERROR: [%s] Reconciliation failed: %s",
                    user["name"],
                    result.get(const.RESULT_ERROR),
                )
                continue

            posted_total += result.get(const.RESULT_POSTED, const.DEFAULT_ZERO)
            if result.get(const.RESULT_PLATINUM_CELEBRATED):
                platinum_total += 1

        const.LOGGER.info(
            "INFO: Batch complete: posted=%s platinum=%s failed=%s/%s",
            posted_total,
            platinum_total,
            len(failed),
            len(users),
        )

        if users and len(failed) == len(users):
            raise UpdateFailed(
                f"All {len(users)} tracked users failed: "
                f"{users_data[users[0]['steam_id']].get(const.RESULT_ERROR)}"
            )

        return {
            const.DATA_COORD_USERS: users_data,
            const.DATA_COORD_POSTED_TOTAL: posted_total,
            const.DATA_COORD_PLATINUM_TOTAL: platinum_total,
            const.DATA_COORD_FAILED_TOTAL: len(failed),
            const.DATA_COORD_FAILED_USERS: failed,
            const.DATA_COORD_LAST_RUN: dt_util.utcnow().isoformat(),
        }
