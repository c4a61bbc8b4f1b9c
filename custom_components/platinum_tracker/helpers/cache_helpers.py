"""Per-batch read-through cache for Steam game metadata.

A new GameMetadataCache is created for every coordinator refresh and dropped
when the batch ends, so schema and rarity data are fetched at most once per
game per batch and never outlive it. Only successful fetches are cached.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..exceptions import ProviderFetchError

if TYPE_CHECKING:
    from ..steam_api import SteamApiClient
    from ..type_defs import ApiName, AppId, GameSchema


class GameMetadataCache:
    """Read-through cache of game schemas and rarity data, keyed by appid."""

    def __init__(self, client: SteamApiClient) -> None:
        """Initialize an empty cache bound to a Steam client."""
        self._client = client
        self._schemas: dict[AppId, GameSchema] = {}
        self._rarity: dict[AppId, dict[ApiName, float] | None] = {}

    async def async_get_schema(self, appid: AppId) -> GameSchema:
        """Return the schema for a game, fetching it on first use.

        Raises:
            ProviderFetchError: When the schema cannot be fetched.
        """
        if appid not in self._schemas:
            const.LOGGER.debug("DEBUG: Fetching game schema (appid=%s)", appid)
            self._schemas[appid] = await self._client.async_get_game_schema(appid)
        return self._schemas[appid]

    async def async_get_rarity(self, appid: AppId) -> dict[ApiName, float] | None:
        """Return global unlock percentages for a game, or None.

        Rarity is optional enrichment: a failed fetch is logged and treated as
        "no rarity" for the rest of this batch.
        """
        if appid not in self._rarity:
            try:
                self._rarity[appid] = await self._client.async_get_rarity_percentiles(
                    appid
                )
            except ProviderFetchError as err:
                const.LOGGER.warning(
                    "WARNING: Rarity data unavailable for appid=%s: %s", appid, err
                )
                self._rarity[appid] = None
        return self._rarity[appid]
