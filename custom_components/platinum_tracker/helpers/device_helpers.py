"""Device registry helpers for Platinum Tracker entities.

Each tracked Steam account gets its own device; the batch-level sensor lives
on a single system device per config entry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.helpers.device_registry import DeviceEntryType
from homeassistant.helpers.entity import DeviceInfo

from .. import const

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry


def create_tracked_user_device_info(
    steam_id: str, name: str, config_entry: ConfigEntry
) -> DeviceInfo:
    """Create device info for a tracked Steam account.

    Args:
        steam_id: 64-bit SteamID of the account
        name: Display name of the tracked user
        config_entry: Config entry for this integration instance
    """
    return DeviceInfo(
        identifiers={(const.DOMAIN, steam_id)},
        name=f"{name} ({config_entry.title})",
        manufacturer="Platinum Tracker",
        model="Steam Account",
        entry_type=DeviceEntryType.SERVICE,
        configuration_url=f"https://steamcommunity.com/profiles/{steam_id}",
    )


def create_system_device_info(config_entry: ConfigEntry) -> DeviceInfo:
    """Create device info for system/global entities."""
    return DeviceInfo(
        identifiers={(const.DOMAIN, f"{config_entry.entry_id}_system")},
        name=f"System ({config_entry.title})",
        manufacturer="Platinum Tracker",
        model="Announcement Batch",
        entry_type=DeviceEntryType.SERVICE,
    )
