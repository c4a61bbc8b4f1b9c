# File: __init__.py
"""Initialization file for the Platinum Tracker integration.

Handles setting up the integration, including loading configuration entries,
initializing ledger and event log storage, and preparing the coordinator that
runs the announcement batches.

Key Features:
- Config entry setup, unload and removal support.
- Coordinator initialization for scheduled polling.
- Reload on options change.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryError

from . import const
from .coordinator import PlatinumTrackerCoordinator
from .event_log import PlatinumEventLogStore
from .exceptions import InvalidTrackedUsersError
from .storage_manager import PlatinumLedgerStorageManager


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info(
        "INFO: Starting setup for Platinum Tracker entry: %s", entry.entry_id
    )

    # Initialize the ledger and event log stores.
    storage_manager = PlatinumLedgerStorageManager(hass, const.STORAGE_KEY_LEDGER)
    await storage_manager.async_initialize()
    event_log = PlatinumEventLogStore(hass, const.STORAGE_KEY_EVENTS)
    await event_log.async_initialize()

    try:
        coordinator = PlatinumTrackerCoordinator(hass, entry, storage_manager, event_log)
    except InvalidTrackedUsersError as err:
        const.LOGGER.error("ERROR: Invalid tracked users configuration: %s", err)
        raise ConfigEntryError(f"Invalid tracked users configuration: {err}") from err

    # Perform the first batch. Raises ConfigEntryNotReady on UpdateFailed.
    await coordinator.async_config_entry_first_refresh()

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORAGE_MANAGER: storage_manager,
        const.EVENT_LOG_STORE: event_log,
    }

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    entry.async_on_unload(entry.add_update_listener(async_update_options))

    const.LOGGER.info(
        "INFO: Platinum Tracker setup complete for entry: %s (%s users)",
        entry.entry_id,
        len(coordinator.tracked_users),
    )
    return True


async def async_update_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry so new options take effect."""
    const.LOGGER.debug("DEBUG: Options updated, reloading entry %s", entry.entry_id)
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading Platinum Tracker entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        hass.data[const.DOMAIN].pop(entry.entry_id, None)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry by deleting its storage files."""
    const.LOGGER.info("INFO: Removing Platinum Tracker entry: %s", entry.entry_id)

    # Entry is unloaded by now, so use fresh store handles.
    await PlatinumLedgerStorageManager(
        hass, const.STORAGE_KEY_LEDGER
    ).async_delete_storage()
    await PlatinumEventLogStore(hass, const.STORAGE_KEY_EVENTS).async_delete_storage()

    const.LOGGER.info("INFO: Platinum Tracker entry data cleared: %s", entry.entry_id)
