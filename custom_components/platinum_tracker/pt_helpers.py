# File: pt_helpers.py
"""Platinum Tracker helper functions and shared logic."""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import TYPE_CHECKING, Any

from . import const
from .exceptions import InvalidTrackedUsersError

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry

    from .type_defs import AppId, LedgerKey, SteamId, TrackedUser


# -------- Ledger Keys --------
def build_ledger_key(steam_id: SteamId, appid: AppId) -> LedgerKey:
    """Return the ledger primary key for a (user, game) pair."""
    return const.LEDGER_KEY_FORMAT.format(steam_id=steam_id, appid=appid)


# -------- Tracked Users --------
def parse_tracked_users(raw: str | list[Any]) -> list[TrackedUser]:
    """Parse and validate the tracked users list.

    Accepts the JSON text typed into the config flow or the already decoded
    list stored on the config entry.

    Raises:
        InvalidTrackedUsersError: When the value is not a non-empty array of
            objects each carrying a name and a steam_id, or a steam_id repeats.
    """
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except ValueError as err:
            raise InvalidTrackedUsersError(f"Users must be valid JSON. Got: {raw}") from err
    else:
        parsed = raw

    if not isinstance(parsed, list) or not parsed:
        raise InvalidTrackedUsersError("Users must be a non-empty JSON array")

    users: list[TrackedUser] = []
    seen_ids: set[str] = set()
    for item in parsed:
        if not isinstance(item, dict):
            raise InvalidTrackedUsersError(f"Bad user entry: {item!r}")

        name = str(item.get(const.CONF_USER_NAME) or "").strip()
        steam_id = str(item.get(const.CONF_USER_STEAM_ID) or "").strip()
        if not name or not steam_id:
            raise InvalidTrackedUsersError(
                f'Each user must include "name" and "steam_id". Bad entry: {item!r}'
            )
        if steam_id in seen_ids:
            raise InvalidTrackedUsersError(f"Duplicate steam_id: {steam_id}")
        seen_ids.add(steam_id)

        user: TrackedUser = {"name": name, "steam_id": steam_id}
        if item.get(const.CONF_USER_WEBHOOK_URL):
            user["webhook_url"] = str(item[const.CONF_USER_WEBHOOK_URL])
        if item.get(const.CONF_USER_TIMEZONE):
            user["timezone"] = str(item[const.CONF_USER_TIMEZONE])
        if item.get(const.CONF_USER_WINDOW_SECONDS) is not None:
            try:
                window_seconds = int(item[const.CONF_USER_WINDOW_SECONDS])
            except (TypeError, ValueError) as err:
                raise InvalidTrackedUsersError(
                    f"window_seconds must be an integer. Bad entry: {item!r}"
                ) from err
            if window_seconds < const.MIN_WINDOW_SECONDS:
                raise InvalidTrackedUsersError(
                    f"window_seconds must be at least {const.MIN_WINDOW_SECONDS}. "
                    f"Bad entry: {item!r}"
                )
            user["window_seconds"] = window_seconds
        users.append(user)

    return users


# -------- Runtime Settings --------
@dataclass(frozen=True)
class TrackerSettings:
    """Settings for one batch run, built from the config entry."""

    api_key: str
    webhook_url: str
    users: list[TrackedUser]
    platinum_image_url: str | None
    window_seconds: int
    concurrency: int
    max_item_bytes: int
    timezone: str
    enable_event_log: bool
    update_interval_seconds: int = const.DEFAULT_UPDATE_INTERVAL * 60

    def webhook_for(self, user: TrackedUser) -> str:
        """Return the user's webhook, falling back to the default one."""
        return user.get("webhook_url") or self.webhook_url

    def timezone_for(self, user: TrackedUser) -> str:
        """Return the user's timezone, falling back to the configured one."""
        return user.get("timezone") or self.timezone

    def window_for(self, user: TrackedUser) -> int:
        """Return the user's recency window in seconds, at least one poll interval."""
        window = user.get("window_seconds") or self.window_seconds
        return max(window, self.update_interval_seconds)


def build_tracker_settings(entry: ConfigEntry, default_timezone: str) -> TrackerSettings:
    """Build TrackerSettings from a config entry's data and options.

    Raises:
        InvalidTrackedUsersError: When the stored users list is invalid.
    """
    options = entry.options
    return TrackerSettings(
        api_key=entry.data[const.CONF_API_KEY],
        webhook_url=entry.data[const.CONF_WEBHOOK_URL],
        users=parse_tracked_users(entry.data.get(const.CONF_USERS, [])),
        platinum_image_url=entry.data.get(const.CONF_PLATINUM_IMAGE_URL) or None,
        window_seconds=max(
            const.MIN_WINDOW_SECONDS,
            int(options.get(const.CONF_WINDOW_SECONDS, const.DEFAULT_WINDOW_SECONDS)),
        ),
        concurrency=max(
            const.MIN_CONCURRENCY,
            int(options.get(const.CONF_CONCURRENCY, const.DEFAULT_CONCURRENCY)),
        ),
        max_item_bytes=max(
            const.MIN_MAX_ITEM_BYTES,
            int(options.get(const.CONF_MAX_ITEM_BYTES, const.DEFAULT_MAX_ITEM_BYTES)),
        ),
        timezone=options.get(const.CONF_TIMEZONE) or default_timezone,
        enable_event_log=bool(
            options.get(const.CONF_ENABLE_EVENT_LOG, const.DEFAULT_ENABLE_EVENT_LOG)
        ),
        update_interval_seconds=60
        * int(options.get(const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL)),
    )
