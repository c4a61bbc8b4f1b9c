"""Helper modules for Platinum Tracker integration.

Helpers are stateless or per-batch utilities that need integration types but
no coordinator access.
"""

from .cache_helpers import GameMetadataCache
from .device_helpers import create_system_device_info, create_tracked_user_device_info

__all__ = [
    "GameMetadataCache",
    "create_system_device_info",
    "create_tracked_user_device_info",
]
