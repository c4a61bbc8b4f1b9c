# File: notification_manager.py
"""Notification Manager for Platinum Tracker integration.

This manager builds and sends the outgoing webhook messages:
- One embed per newly announced achievement
- One celebration message when a game reaches 100% (platinum)

Payload builders are static so they can be tested without Home Assistant.
Sending goes through the module-level async_post_webhook, which tests patch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const
from ..notification_helper import async_post_webhook
from ..utils.dt_utils import dt_format_unix_local
from .base_manager import BaseManager

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import PlatinumTrackerCoordinator
    from ..type_defs import AchievementMeta, AppId, SteamId, UnlockedAchievement


class NotificationManager(BaseManager):
    """Manager for webhook notifications.

    Uses coordinator for:
    - session: shared aiohttp session
    """

    def __init__(
        self, hass: HomeAssistant, coordinator: PlatinumTrackerCoordinator
    ) -> None:
        """Initialize notification manager."""
        super().__init__(hass, coordinator)

    # =========================================================================
    # Payload Builders
    # =========================================================================

    @staticmethod
    def build_username(name: str) -> str:
        """Return the webhook display name for a tracked user."""
        return const.NOTIFY_USERNAME_FORMAT.format(name=name)

    @staticmethod
    def build_achievement_embed(
        *,
        name: str,
        steam_id: SteamId,
        appid: AppId,
        game_title: str,
        achievement: UnlockedAchievement,
        meta: AchievementMeta | None,
        rarity_percent: float | None,
        unlocked_count: int,
        total_count: int,
        progress_pct: int,
        timezone: str,
    ) -> dict[str, Any]:
        """Build the Discord embed for one announced achievement."""
        achievement_name = (meta or {}).get("display_name") or achievement["api_name"]
        description = (meta or {}).get("description") or const.NOTIFY_HIDDEN_DESCRIPTION
        icon_url = (meta or {}).get("icon")

        fields: list[dict[str, Any]] = [
            {
                "name": f"{name}'s Most Recent Achievement:",
                "value": achievement_name,
                "inline": False,
            },
            {
                "name": "Achievement Description:",
                "value": description,
                "inline": False,
            },
            {
                "name": "Unlocked On:",
                "value": dt_format_unix_local(
                    achievement["unlock_time"], timezone, const.NOTIFY_DATE_FORMAT
                ),
                "inline": False,
            },
            {
                "name": f"Total {game_title} Progress:",
                "value": f"{unlocked_count}/{total_count} — {progress_pct}%",
                "inline": False,
            },
        ]
        if rarity_percent is not None:
            fields.append(
                {
                    "name": "Global Unlock Rate:",
                    "value": f"{rarity_percent:.1f}%",
                    "inline": False,
                }
            )

        embed: dict[str, Any] = {
            "color": const.NOTIFY_EMBED_COLOR,
            "author": {"name": NotificationManager.build_username(name)},
            "description": (
                f"**{name} unlocked a new achievement in {game_title}, "
                f"they are now {progress_pct}% complete.**"
            ),
            "fields": fields,
            "url": const.STEAM_COMMUNITY_ACHIEVEMENTS_URL.format(
                steam_id=steam_id, appid=appid
            ),
        }
        if icon_url:
            embed["thumbnail"] = {"url": icon_url}
        return embed

    @staticmethod
    def build_achievement_payload(name: str, embed: dict[str, Any]) -> dict[str, Any]:
        """Wrap an embed in a webhook payload."""
        return {
            "username": NotificationManager.build_username(name),
            "embeds": [embed],
        }

    @staticmethod
    def build_platinum_payload(
        name: str, game_title: str, image_url: str | None
    ) -> dict[str, Any]:
        """Build the one-shot platinum celebration payload."""
        return {
            "username": NotificationManager.build_username(name),
            "content": (
                f"@everyone Congratulations on your shiny new {game_title} "
                f"platinum, {name}! 🏆✨"
            ),
            "embeds": [{"image": {"url": image_url}}] if image_url else [],
        }

    # =========================================================================
    # Sending
    # =========================================================================

    async def async_send_achievement(
        self, webhook_url: str, name: str, embed: dict[str, Any]
    ) -> None:
        """Post one achievement embed.

        Raises:
            NotificationDeliveryError: When the webhook rejects the post.
        """
        const.LOGGER.info(
            "INFO: [%s] Posting achievement embed: %s",
            name,
            embed["fields"][0]["value"],
        )
        await async_post_webhook(
            self.coordinator.session,
            webhook_url,
            self.build_achievement_payload(name, embed),
        )

    async def async_send_platinum(
        self, webhook_url: str, name: str, game_title: str, image_url: str | None
    ) -> None:
        """Post the platinum celebration.

        Raises:
            NotificationDeliveryError: When the webhook rejects the post.
        """
        const.LOGGER.info(
            "INFO: [%s] Posting platinum celebration for '%s'", name, game_title
        )
        await async_post_webhook(
            self.coordinator.session,
            webhook_url,
            self.build_platinum_payload(name, game_title, image_url),
        )
