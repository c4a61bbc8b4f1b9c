# File: notification_helper.py
"""Sends notifications to a Discord-compatible webhook.

This module is the notification sink of the integration. A payload is posted
exactly once; failures are raised to the caller and never retried here, so
the reconciliation pipeline can abort the user's run before the ledger is
saved.
"""

from __future__ import annotations

from typing import Any

import aiohttp

from . import const
from .exceptions import NotificationDeliveryError


async def async_post_webhook(
    session: aiohttp.ClientSession,
    webhook_url: str,
    payload: dict[str, Any],
) -> None:
    """Post a JSON payload to a webhook.

    Raises:
        NotificationDeliveryError: On a non-2xx status or a transport error.
    """
    try:
        async with session.post(
            webhook_url,
            json=payload,
            timeout=aiohttp.ClientTimeout(total=const.HTTP_TIMEOUT_SECONDS),
        ) as response:
            if not 200 <= response.status < 300:
                body = await response.text()
                const.LOGGER.error(
                    "ERROR: Webhook post failed: %s %s", response.status, body
                )
                raise NotificationDeliveryError(response.status, body)
    except (aiohttp.ClientError, TimeoutError) as err:
        const.LOGGER.error("ERROR: Webhook post failed: %s", err)
        raise NotificationDeliveryError(None, str(err)) from err

    const.LOGGER.debug("DEBUG: Webhook post succeeded")
