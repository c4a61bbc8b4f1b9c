"""Managers for Platinum Tracker integration.

Managers own the stateful I/O around the pure engines: they call the Steam
client, post webhooks and write storage through the coordinator.
"""

from .base_manager import BaseManager
from .notification_manager import NotificationManager
from .reconciliation_manager import ReconciliationManager

__all__ = [
    "BaseManager",
    "NotificationManager",
    "ReconciliationManager",
]
