"""Base entity classes for Platinum Tracker integration."""

from __future__ import annotations

from typing import Any

from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from .coordinator import PlatinumTrackerCoordinator


class PlatinumTrackerCoordinatorEntity(CoordinatorEntity[PlatinumTrackerCoordinator]):
    """Base entity class for Platinum Tracker sensors with typed coordinator access."""

    @property
    def coordinator(self) -> PlatinumTrackerCoordinator:
        """Return typed coordinator."""
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: PlatinumTrackerCoordinator) -> None:
        """Set coordinator with proper typing."""
        object.__setattr__(self, "_coordinator", value)

    @property
    def batch_data(self) -> dict[str, Any]:
        """Return the last batch result, or an empty dict before the first run."""
        return self.coordinator.data or {}

    def get_user_result(self, steam_id: str) -> dict[str, Any]:
        """Return the last unit result for one tracked user."""
        return self.batch_data.get(const.DATA_COORD_USERS, {}).get(steam_id, {})
