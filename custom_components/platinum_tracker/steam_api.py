# File: steam_api.py
"""Steam Web API client for the Platinum Tracker integration.

Wraps the handful of Steam endpoints the reconciliation pipeline needs and
normalizes their bodies into the integration's TypedDicts. Every non-success
status, transport error or malformed body raises ProviderFetchError; nothing
here ever substitutes an empty result for a failed call, because an empty
snapshot would look like a valid zero-progress state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import aiohttp

from . import const
from .exceptions import ProviderFetchError

if TYPE_CHECKING:
    from .type_defs import (
        AchievementMeta,
        ApiName,
        AppId,
        GameSchema,
        Snapshot,
        SnapshotEntry,
        SteamId,
        TargetGame,
    )


class SteamApiClient:
    """Async client for the Steam Web API.

    Uses the Home Assistant shared aiohttp session; the client itself holds no
    per-game state. Per-batch caching lives in GameMetadataCache.
    """

    def __init__(self, session: aiohttp.ClientSession, api_key: str) -> None:
        """Initialize the client.

        Args:
            session: aiohttp session (from async_get_clientsession)
            api_key: Steam Web API key
        """
        self._session = session
        self._api_key = api_key
        self._timeout = aiohttp.ClientTimeout(total=const.HTTP_TIMEOUT_SECONDS)

    async def _async_get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        """GET a Steam endpoint and return its JSON object body."""
        query = {"key": self._api_key, **params}
        endpoint = url.removeprefix(const.STEAM_API_BASE_URL)

        try:
            async with self._session.get(
                url, params=query, timeout=self._timeout
            ) as response:
                if not 200 <= response.status < 300:
                    body = await response.text()
                    const.LOGGER.warning(
                        "WARNING: Steam API call %s failed: %s %s",
                        endpoint,
                        response.status,
                        body,
                    )
                    raise ProviderFetchError(
                        f"Steam API error {response.status}: {body}",
                        status=response.status,
                        body=body,
                    )
                try:
                    data = await response.json(content_type=None)
                except ValueError as err:
                    raise ProviderFetchError(
                        f"Steam API returned invalid JSON for {endpoint}"
                    ) from err
        except (aiohttp.ClientError, TimeoutError) as err:
            raise ProviderFetchError(
                f"Steam API request to {endpoint} failed: {err}"
            ) from err

        if not isinstance(data, dict):
            raise ProviderFetchError(f"Steam API returned a non-object body for {endpoint}")
        return data

    async def async_resolve_target_game(self, steam_id: SteamId) -> TargetGame | None:
        """Return the game being played now, else the most recently played one.

        Returns None when the user is not in game and has no recent games.
        """
        summaries = await self._async_get_json(
            const.STEAM_URL_PLAYER_SUMMARIES, {"steamids": steam_id}
        )
        players = (summaries.get("response") or {}).get("players") or []
        player = players[0] if players else {}

        if player.get("gameid"):
            appid = str(player["gameid"])
            return {
                "appid": appid,
                "game_title": player.get("gameextrainfo") or None,
                "source": const.GAME_SOURCE_CURRENT,
            }

        recent = await self._async_get_json(
            const.STEAM_URL_RECENTLY_PLAYED, {"steamid": steam_id, "count": 1}
        )
        games = (recent.get("response") or {}).get("games") or []
        game = games[0] if games else {}

        if game.get("appid"):
            appid = str(game["appid"])
            return {
                "appid": appid,
                "game_title": game.get("name") or None,
                "source": const.GAME_SOURCE_RECENT,
            }

        return None

    async def async_get_achievement_snapshot(
        self, steam_id: SteamId, appid: AppId
    ) -> Snapshot:
        """Return the player's full achievement snapshot for one game.

        Raises:
            ProviderFetchError: On HTTP failure, success=false, an empty
                achievement list or an entry without an api name.
        """
        body = await self._async_get_json(
            const.STEAM_URL_PLAYER_ACHIEVEMENTS, {"steamid": steam_id, "appid": appid}
        )
        stats = body.get("playerstats")
        if not isinstance(stats, dict) or stats.get("success") is False:
            error = stats.get("error") if isinstance(stats, dict) else None
            raise ProviderFetchError(
                f"Steam returned no player stats for app {appid}: {error or 'unknown'}"
            )

        raw_achievements = stats.get("achievements")
        if not isinstance(raw_achievements, list) or not raw_achievements:
            raise ProviderFetchError(f"Steam returned an empty snapshot for app {appid}")

        entries: list[SnapshotEntry] = []
        for raw in raw_achievements:
            api_name = raw.get("apiname") if isinstance(raw, dict) else None
            if not api_name:
                raise ProviderFetchError(
                    f"Steam returned a malformed achievement for app {appid}: {raw!r}"
                )
            try:
                achieved = int(raw.get("achieved", 0)) == 1
                unlock_time = int(raw.get("unlocktime") or 0)
            except (TypeError, ValueError) as err:
                raise ProviderFetchError(
                    f"Steam returned a malformed achievement for app {appid}: {raw!r}"
                ) from err
            entries.append(
                {
                    "api_name": str(api_name),
                    "unlocked": achieved,
                    "unlock_time": unlock_time,
                }
            )

        return {"entries": entries, "total_count": len(entries)}

    async def async_get_game_schema(self, appid: AppId) -> GameSchema:
        """Return display metadata for every achievement of a game."""
        body = await self._async_get_json(const.STEAM_URL_GAME_SCHEMA, {"appid": appid})
        game = body.get("game") or {}
        raw_achievements = (game.get("availableGameStats") or {}).get(
            "achievements"
        ) or []

        achievements: dict[ApiName, AchievementMeta] = {}
        for raw in raw_achievements:
            if not isinstance(raw, dict) or not raw.get("name"):
                continue
            achievements[raw["name"]] = {
                "display_name": raw.get("displayName") or raw["name"],
                "description": raw.get("description"),
                "icon": raw.get("icon"),
            }

        return {
            "canonical_title": game.get("gameName"),
            "total_count": len(raw_achievements),
            "achievements": achievements,
        }

    async def async_get_rarity_percentiles(
        self, appid: AppId
    ) -> dict[ApiName, float] | None:
        """Return global unlock percentages by api name, or None when Steam has none."""
        body = await self._async_get_json(
            const.STEAM_URL_GLOBAL_PERCENTAGES, {"gameid": appid}
        )
        raw_achievements = (body.get("achievementpercentages") or {}).get(
            "achievements"
        ) or []

        percentiles: dict[ApiName, float] = {}
        for raw in raw_achievements:
            if not isinstance(raw, dict) or not raw.get("name"):
                continue
            try:
                percentiles[raw["name"]] = float(raw.get("percent"))
            except (TypeError, ValueError):
                continue

        return percentiles or None
