"""Exceptions raised by the Platinum Tracker integration."""

from __future__ import annotations

from homeassistant.exceptions import HomeAssistantError


class PlatinumTrackerError(HomeAssistantError):
    """Base class for Platinum Tracker runtime errors.

    Any of these aborts the current user's run; the batch runner records it
    and the next poll retries because no ledger state was advanced.
    """


class ProviderFetchError(PlatinumTrackerError):
    """Raised when the Steam Web API fails or returns an unusable body.

    Attributes:
        status: HTTP status code, or None for transport or parse failures
        body: Response body text (may be empty)
    """

    def __init__(self, message: str, status: int | None = None, body: str = "") -> None:
        """Initialize ProviderFetchError."""
        super().__init__(message)
        self.status = status
        self.body = body


class NotificationDeliveryError(PlatinumTrackerError):
    """Raised when the webhook rejects a notification.

    Attributes:
        status: HTTP status code, or None for transport failures
        body: Response body text (may be empty)
    """

    def __init__(self, status: int | None, body: str = "") -> None:
        """Initialize NotificationDeliveryError."""
        super().__init__(f"Webhook error {status}: {body}")
        self.status = status
        self.body = body


class LedgerPersistenceError(PlatinumTrackerError):
    """Raised when a ledger record could not be written to storage."""


class InvalidTrackedUsersError(ValueError):
    """Raised when the tracked users JSON is not a valid user list.

    This is a configuration failure: it is reported by the config flow and
    turned into ConfigEntryError at setup, never into a per-user failure.
    """
