# File: reconciliation_manager.py
"""Reconciliation Manager - One user's pass through the announcement pipeline.

For each tracked user on each poll:
1. Pick the target game (currently playing, else most recently played)
2. Fetch the full achievement snapshot and load the prior ledger state
3. Diff them (SnapshotEngine) to find achievements to announce
4. Post one webhook embed per new achievement, newest first
5. Evaluate the platinum latch (CompletionEngine) and celebrate once
6. Save the updated ledger record through the size guardrail

Delivery is at-least-once: the ledger is only saved after every post of the
run succeeded, so a failed post means the same achievements are retried on
the next poll while they are still inside the window. A save that Store fails
to write is logged by Store and the record stays current in memory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..engines.completion_engine import CompletionEngine
from ..engines.snapshot_engine import SnapshotEngine
from ..pt_helpers import build_ledger_key
from ..utils.dt_utils import dt_week_bucket
from ..utils.math_utils import floor_percent, format_progress_text
from .base_manager import BaseManager

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import PlatinumTrackerCoordinator
    from ..helpers.cache_helpers import GameMetadataCache
    from ..pt_helpers import TrackerSettings
    from ..type_defs import (
        AppId,
        DiffResult,
        GameSchema,
        LedgerRecord,
        TargetGame,
        TrackedUser,
        UnitResult,
    )


class ReconciliationManager(BaseManager):
    """Manager for the per-user reconciliation pipeline.

    Uses coordinator for:
    - steam_client: target game and snapshot fetches
    - storage_manager: ledger load/save
    - event_log: leaderboard rows (when enabled)
    - notification_manager: webhook posts
    """

    def __init__(
        self, hass: HomeAssistant, coordinator: PlatinumTrackerCoordinator
    ) -> None:
        """Initialize reconciliation manager."""
        super().__init__(hass, coordinator)

    @staticmethod
    def resolve_game_title(
        target: TargetGame, schema: GameSchema | None, appid: AppId
    ) -> str:
        """Return the best display title for a game.

        Presence or recent-games title first, then the schema title unless it
        is a Valve placeholder, then "Steam App <appid>".
        """
        if target.get("game_title"):
            return target["game_title"]  # type: ignore[return-value]

        schema_title = (schema or {}).get("canonical_title")
        if schema_title and not schema_title.startswith(
            const.STEAM_PLACEHOLDER_TITLE_PREFIX
        ):
            return schema_title

        if schema_title:
            const.LOGGER.debug(
                "DEBUG: Ignoring placeholder schema title '%s' (appid=%s)",
                schema_title,
                appid,
            )
        return const.STEAM_APP_TITLE_FALLBACK.format(appid=appid)

    @staticmethod
    def build_record(
        *,
        pk: str,
        user: TrackedUser,
        appid: AppId,
        game_title: str,
        total_count: int,
        diff: DiffResult,
        platinum_announced: bool,
        now_sec: int,
    ) -> LedgerRecord:
        """Build the full (pre-guardrail) ledger record for a pair."""
        announced = diff["announced_api_names"]
        announced_set = set(announced)
        unlocked_names = [item["api_name"] for item in diff["unlocked"]]

        return {
            "pk": pk,
            "name": user["name"],
            "steam_id": user["steam_id"],
            "appid": appid,
            "game_title": game_title,
            "total_achievements": total_count,
            "unlocked_count": diff["unlocked_count"],
            "locked_count": diff["locked_count"],
            "progress_text": format_progress_text(diff["unlocked_count"], total_count),
            "unlocked_api_names": unlocked_names,
            "locked_api_names": list(diff["locked_api_names"]),
            "unannounced_unlocked_api_names": [
                name for name in unlocked_names if name not in announced_set
            ],
            "announced_api_names": list(announced),
            "platinum_announced": platinum_announced,
            "updated_at": now_sec,
        }

    async def async_process_user(
        self,
        user: TrackedUser,
        settings: TrackerSettings,
        cache: GameMetadataCache,
        now_sec: int,
    ) -> UnitResult:
        """Run the full pipeline for one tracked user.

        Raises:
            ProviderFetchError: When the target game or snapshot cannot be fetched.
            NotificationDeliveryError: When a webhook post fails.
            LedgerPersistenceError: When the ledger cannot be saved.
        """
        name = user["name"]
        steam_id = user["steam_id"]

        target = await self.coordinator.steam_client.async_resolve_target_game(steam_id)
        if target is None:
            const.LOGGER.info("INFO: [%s] No current or recent game found", name)
            return {
                const.RESULT_OK: True,
                const.RESULT_NAME: name,
                const.RESULT_POSTED: 0,
                const.RESULT_REASON: const.REASON_NO_GAME,
            }  # type: ignore[return-value]

        appid = target["appid"]
        const.LOGGER.info(
            "INFO: [%s] Checking achievements for %s (appid=%s, source=%s)",
            name,
            target.get("game_title") or appid,
            appid,
            target["source"],
        )

        snapshot = await self.coordinator.steam_client.async_get_achievement_snapshot(
            steam_id, appid
        )
        total_count = snapshot["total_count"] or 0

        pk = build_ledger_key(steam_id, appid)
        prior = self.coordinator.storage_manager.load(pk)

        diff = SnapshotEngine.diff(snapshot, prior, settings.window_for(user), now_sec)
        progress_pct = floor_percent(diff["unlocked_count"], total_count)

        if diff["is_bootstrap"]:
            const.LOGGER.info(
                "INFO: [%s] First time seeing appid=%s: recording %s unlocked "
                "achievements as already announced",
                name,
                appid,
                diff["unlocked_count"],
            )

        schema: GameSchema | None = None
        posted = 0
        if diff["to_announce"]:
            schema = await cache.async_get_schema(appid)
            rarity = await cache.async_get_rarity(appid)
            game_title = self.resolve_game_title(target, schema, appid)
            webhook_url = settings.webhook_for(user)
            timezone = settings.timezone_for(user)

            const.LOGGER.info(
                "INFO: [%s] %s new achievement(s) to announce in %s",
                name,
                len(diff["to_announce"]),
                game_title,
            )

            for achievement in diff["to_announce"]:
                api_name = achievement["api_name"]
                meta = schema["achievements"].get(api_name)
                embed = self.coordinator.notification_manager.build_achievement_embed(
                    name=name,
                    steam_id=steam_id,
                    appid=appid,
                    game_title=game_title,
                    achievement=achievement,
                    meta=meta,
                    rarity_percent=(rarity or {}).get(api_name),
                    unlocked_count=diff["unlocked_count"],
                    total_count=total_count,
                    progress_pct=progress_pct,
                    timezone=timezone,
                )
                await self.coordinator.notification_manager.async_send_achievement(
                    webhook_url, name, embed
                )
                posted += 1

                achievement_name = (meta or {}).get("display_name") or api_name
                if settings.enable_event_log:
                    await self.coordinator.event_log.async_append(
                        {
                            "week": dt_week_bucket(achievement["unlock_time"]),
                            "steam_id": steam_id,
                            "name": name,
                            "unlock_time": achievement["unlock_time"],
                            "appid": appid,
                            "api_name": api_name,
                            "achievement_name": achievement_name,
                            "game_title": game_title,
                        }
                    )

                self.fire_event(
                    const.EVENT_ACHIEVEMENT_ANNOUNCED,
                    name=name,
                    steam_id=steam_id,
                    appid=appid,
                    game_title=game_title,
                    api_name=api_name,
                    achievement_name=achievement_name,
                    unlock_time=achievement["unlock_time"],
                )
        else:
            game_title = self.resolve_game_title(target, None, appid)
            const.LOGGER.debug(
                "DEBUG: [%s] Nothing new to announce for %s", name, game_title
            )

        decision = CompletionEngine.evaluate(
            diff["is_complete"], prior["platinum_announced"], posted
        )
        if decision["should_celebrate"]:
            await self.coordinator.notification_manager.async_send_platinum(
                settings.webhook_for(user),
                name,
                game_title,
                settings.platinum_image_url,
            )
            self.fire_event(
                const.EVENT_PLATINUM_ANNOUNCED,
                name=name,
                steam_id=steam_id,
                appid=appid,
                game_title=game_title,
            )

        record = self.build_record(
            pk=pk,
            user=user,
            appid=appid,
            game_title=game_title,
            total_count=total_count,
            diff=diff,
            platinum_announced=decision["new_latched"],
            now_sec=now_sec,
        )
        saved = await self.coordinator.storage_manager.async_save_record(
            pk, record, settings.max_item_bytes
        )

        return {
            const.RESULT_OK: True,
            const.RESULT_NAME: name,
            const.RESULT_POSTED: posted,
            const.RESULT_APPID: appid,
            const.RESULT_GAME_TITLE: game_title,
            const.RESULT_PROGRESS_TEXT: record["progress_text"],
            const.RESULT_PROGRESS_PCT: progress_pct,
            const.RESULT_UNLOCKED_COUNT: diff["unlocked_count"],
            const.RESULT_TOTAL_COUNT: total_count,
            const.RESULT_PLATINUM: decision["new_latched"],
            const.RESULT_PLATINUM_CELEBRATED: decision["should_celebrate"],
            const.RESULT_BOOTSTRAP: diff["is_bootstrap"],
            const.RESULT_TRUNCATED: saved["degraded"],
        }  # type: ignore[return-value]
