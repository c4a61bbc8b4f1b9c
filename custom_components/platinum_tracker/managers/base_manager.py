"""Base manager class for Platinum Tracker managers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import PlatinumTrackerCoordinator


class BaseManager:
    """Base class for Platinum Tracker managers.

    Provides:
    - Access to the coordinator that owns the shared clients and stores
    - Instance-scoped event firing on the Home Assistant bus (fire_event)
    """

    def __init__(
        self, hass: HomeAssistant, coordinator: PlatinumTrackerCoordinator
    ) -> None:
        """Initialize manager.

        Args:
            hass: Home Assistant instance
            coordinator: Parent coordinator managing this integration instance
        """
        self.hass = hass
        self.coordinator = coordinator
        self.entry_id = coordinator.config_entry.entry_id

    def fire_event(self, event_type: str, **payload: Any) -> None:
        """Fire an event on the Home Assistant bus for automations.

        Args:
            event_type: Event type constant (e.g., const.EVENT_ACHIEVEMENT_ANNOUNCED)
            **payload: Event data (must be JSON-serializable)
        """
        const.LOGGER.debug(
            "Firing event '%s' for instance %s with payload keys: %s",
            event_type,
            self.entry_id,
            list(payload.keys()),
        )
        self.hass.bus.async_fire(event_type, {"entry_id": self.entry_id, **payload})
