# File: sensor.py
"""Sensors for the Platinum Tracker integration.

Sensors Defined in This File (2):

# Tracked-User Sensors
01. TrackedUserProgressSensor

# System-Level Sensors
02. SystemAnnouncementsSensor
"""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from . import const
from .coordinator import PlatinumTrackerCoordinator
from .entity import PlatinumTrackerCoordinatorEntity
from .helpers.device_helpers import (
    create_system_device_info,
    create_tracked_user_device_info,
)
from .utils.dt_utils import dt_now_unix, dt_week_bucket


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up sensors for Platinum Tracker integration."""
    data = hass.data[const.DOMAIN][entry.entry_id]
    coordinator: PlatinumTrackerCoordinator = data[const.COORDINATOR]

    entities: list[SensorEntity] = [
        TrackedUserProgressSensor(coordinator, entry, user["steam_id"], user["name"])
        for user in coordinator.tracked_users
    ]
    entities.append(SystemAnnouncementsSensor(coordinator, entry))

    async_add_entities(entities)


# ------------------------------------------------------------------------------------------
class TrackedUserProgressSensor(PlatinumTrackerCoordinatorEntity, SensorEntity):
    """Completion percentage of a tracked user's current game.

    A failed or game-less run keeps the last known progress; the failure is
    exposed through the last_error attribute instead.
    """

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_SENSOR_USER_PROGRESS
    _attr_native_unit_of_measurement = PERCENTAGE
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:trophy-outline"

    def __init__(
        self,
        coordinator: PlatinumTrackerCoordinator,
        entry: ConfigEntry,
        steam_id: str,
        name: str,
    ) -> None:
        """Initialize the sensor.

        Args:
            coordinator: PlatinumTrackerCoordinator instance for data access.
            entry: ConfigEntry for this integration instance.
            steam_id: SteamID of the tracked user.
            name: Display name of the tracked user.
        """
        super().__init__(coordinator)
        self._steam_id = steam_id
        self._user_name = name
        self._last_progress: dict[str, Any] = {}
        self._attr_unique_id = (
            f"{entry.entry_id}_{steam_id}{const.SENSOR_UID_SUFFIX_USER_PROGRESS}"
        )
        self._attr_translation_placeholders = {"user_name": name}
        self._attr_device_info = create_tracked_user_device_info(steam_id, name, entry)
        self._remember_progress()

    def _remember_progress(self) -> None:
        """Keep the latest result that carried game progress."""
        result = self.get_user_result(self._steam_id)
        if result.get(const.RESULT_OK) and const.RESULT_APPID in result:
            self._last_progress = result

    @callback
    def _handle_coordinator_update(self) -> None:
        """Update cached progress before writing state."""
        self._remember_progress()
        super()._handle_coordinator_update()

    @property
    def native_value(self) -> int | None:
        """Return the completion percent of the current game."""
        return self._last_progress.get(const.RESULT_PROGRESS_PCT)

    @property
    def icon(self) -> str:
        """Return a filled trophy once the game is platinum."""
        if self._last_progress.get(const.RESULT_PLATINUM):
            return "mdi:trophy"
        return "mdi:trophy-outline"

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the current game and the last run outcome."""
        result = self.get_user_result(self._steam_id)
        return {
            const.ATTR_STEAM_ID: self._steam_id,
            const.ATTR_GAME_TITLE: self._last_progress.get(const.RESULT_GAME_TITLE),
            const.ATTR_APPID: self._last_progress.get(const.RESULT_APPID),
            const.ATTR_PROGRESS_TEXT: self._last_progress.get(
                const.RESULT_PROGRESS_TEXT
            ),
            const.ATTR_UNLOCKED_COUNT: self._last_progress.get(
                const.RESULT_UNLOCKED_COUNT
            ),
            const.ATTR_TOTAL_COUNT: self._last_progress.get(const.RESULT_TOTAL_COUNT),
            const.ATTR_PLATINUM: self._last_progress.get(const.RESULT_PLATINUM, False),
            const.ATTR_LAST_POSTED: result.get(const.RESULT_POSTED, const.DEFAULT_ZERO),
            const.ATTR_LAST_ERROR: None
            if result.get(const.RESULT_OK, True)
            else result.get(const.RESULT_ERROR),
        }


# ------------------------------------------------------------------------------------------
class SystemAnnouncementsSensor(PlatinumTrackerCoordinatorEntity, SensorEntity):
    """Achievements announced by the last batch, with the weekly leaderboard."""

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_SENSOR_SYSTEM_ANNOUNCEMENTS
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:bullhorn-outline"

    def __init__(self, coordinator: PlatinumTrackerCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator)
        self._attr_unique_id = (
            f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_SYSTEM_ANNOUNCEMENTS}"
        )
        self._attr_device_info = create_system_device_info(entry)

    @property
    def native_value(self) -> int:
        """Return the number of achievements posted in the last batch."""
        return self.batch_data.get(const.DATA_COORD_POSTED_TOTAL, const.DEFAULT_ZERO)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose failures, platinum count and this week's leaderboard."""
        attributes: dict[str, Any] = {
            const.ATTR_FAILED_USERS: self.batch_data.get(
                const.DATA_COORD_FAILED_USERS, []
            ),
            const.ATTR_PLATINUM_TOTAL: self.batch_data.get(
                const.DATA_COORD_PLATINUM_TOTAL, const.DEFAULT_ZERO
            ),
            const.ATTR_LAST_RUN: self.batch_data.get(const.DATA_COORD_LAST_RUN),
        }

        if self.coordinator.settings.enable_event_log:
            week = dt_week_bucket(dt_now_unix())
            attributes[const.ATTR_WEEKLY_LEADERBOARD] = [
                {"name": name, "count": count}
                for name, count in self.coordinator.event_log.get_week_leaderboard(week)
            ]

        return attributes
