"""Diagnostics support for Platinum Tracker integration.

Returns the raw ledger records so a stuck or truncated record can be
inspected, plus the event log size and the last batch result. The Steam API
key and every webhook URL are redacted.
"""

from typing import Any

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import PlatinumTrackerCoordinator


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: PlatinumTrackerCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    return {
        "entry": {
            "data": async_redact_data(dict(entry.data), const.DIAGNOSTICS_REDACT_KEYS),
            "options": dict(entry.options),
        },
        "ledger": coordinator.storage_manager.data,
        "event_log_size": len(coordinator.event_log.events),
        "last_batch": coordinator.data,
    }
