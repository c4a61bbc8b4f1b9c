"""Tests for the Steam Web API client.

Uses the aioclient_mock fixture; URLs are registered without a query string,
so they match whatever query parameters the client sends.
"""

# pylint: disable=redefined-outer-name

import aiohttp
import pytest
from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from pytest_homeassistant_custom_component.test_util.aiohttp import AiohttpClientMocker

from custom_components.platinum_tracker import const
from custom_components.platinum_tracker.exceptions import ProviderFetchError
from custom_components.platinum_tracker.steam_api import SteamApiClient
from tests.helpers import APPID, STEAM_ID_SAM


@pytest.fixture
def client(hass: HomeAssistant, aioclient_mock: AiohttpClientMocker) -> SteamApiClient:
    """Return a client bound to the mocked session."""
    return SteamApiClient(async_get_clientsession(hass), "steam-key")


# =============================================================================
# async_resolve_target_game()
# =============================================================================


class TestResolveTargetGame:
    """Tests for picking the game to reconcile."""

    async def test_currently_playing_wins(
        self, client: SteamApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """A game in progress is used without asking for recent games."""
        aioclient_mock.get(
            const.STEAM_URL_PLAYER_SUMMARIES,
            json={
                "response": {
                    "players": [{"gameid": "620", "gameextrainfo": "Portal 2"}]
                }
            },
        )

        target = await client.async_resolve_target_game(STEAM_ID_SAM)

        assert target == {
            "appid": "620",
            "game_title": "Portal 2",
            "source": const.GAME_SOURCE_CURRENT,
        }
        assert aioclient_mock.call_count == 1
        _, url, _, _ = aioclient_mock.mock_calls[0]
        assert url.query["key"] == "steam-key"
        assert url.query["steamids"] == STEAM_ID_SAM

    async def test_falls_back_to_recently_played(
        self, client: SteamApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """Not in game: the most recently played game is used."""
        aioclient_mock.get(
            const.STEAM_URL_PLAYER_SUMMARIES,
            json={"response": {"players": [{"personaname": "sam"}]}},
        )
        aioclient_mock.get(
            const.STEAM_URL_RECENTLY_PLAYED,
            json={"response": {"games": [{"appid": 400, "name": "Portal"}]}},
        )

        target = await client.async_resolve_target_game(STEAM_ID_SAM)

        assert target == {
            "appid": "400",
            "game_title": "Portal",
            "source": const.GAME_SOURCE_RECENT,
        }

    async def test_missing_title_is_none(
        self, client: SteamApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """A game without a presence title leaves the title unresolved."""
        aioclient_mock.get(
            const.STEAM_URL_PLAYER_SUMMARIES,
            json={"response": {"players": [{"gameid": "620"}]}},
        )

        target = await client.async_resolve_target_game(STEAM_ID_SAM)

        assert target["game_title"] is None

    async def test_no_game_returns_none(
        self, client: SteamApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """No current and no recent game resolves to None."""
        aioclient_mock.get(
            const.STEAM_URL_PLAYER_SUMMARIES, json={"response": {"players": []}}
        )
        aioclient_mock.get(
            const.STEAM_URL_RECENTLY_PLAYED, json={"response": {"total_count": 0}}
        )

        assert await client.async_resolve_target_game(STEAM_ID_SAM) is None


# =============================================================================
# async_get_achievement_snapshot()
# =============================================================================


class TestAchievementSnapshot:
    """Tests for the full snapshot fetch."""

    async def test_parses_snapshot(
        self, client: SteamApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """Entries are normalized and total_count is the entry count."""
        aioclient_mock.get(
            const.STEAM_URL_PLAYER_ACHIEVEMENTS,
            json={
                "playerstats": {
                    "success": True,
                    "achievements": [
                        {"apiname": "ACH_A", "achieved": 1, "unlocktime": 1700000000},
                        {"apiname": "ACH_B", "achieved": 0, "unlocktime": 0},
                    ],
                }
            },
        )

        snapshot = await client.async_get_achievement_snapshot(STEAM_ID_SAM, APPID)

        assert snapshot == {
            "entries": [
                {"api_name": "ACH_A", "unlocked": True, "unlock_time": 1700000000},
                {"api_name": "ACH_B", "unlocked": False, "unlock_time": 0},
            ],
            "total_count": 2,
        }

    @pytest.mark.parametrize(
        "body",
        [
            {"playerstats": {"success": False, "error": "Profile is not public"}},
            {"playerstats": {"success": True, "achievements": []}},
            {"playerstats": {"success": True}},
            {"playerstats": {"achievements": [{"achieved": 1}]}},
            {},
        ],
        ids=["success_false", "empty", "missing", "no_apiname", "no_playerstats"],
    )
    async def test_unusable_snapshot_raises(
        self,
        client: SteamApiClient,
        aioclient_mock: AiohttpClientMocker,
        body: dict,
    ) -> None:
        """Empty or malformed snapshots are errors, never zero progress."""
        aioclient_mock.get(const.STEAM_URL_PLAYER_ACHIEVEMENTS, json=body)

        with pytest.raises(ProviderFetchError):
            await client.async_get_achievement_snapshot(STEAM_ID_SAM, APPID)


# =============================================================================
# Error handling
# =============================================================================


class TestErrors:
    """Tests for HTTP and transport failures."""

    async def test_http_error_carries_status_and_body(
        self, client: SteamApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """A non-2xx response raises with status and body."""
        aioclient_mock.get(
            const.STEAM_URL_PLAYER_ACHIEVEMENTS, status=403, text="Forbidden"
        )

        with pytest.raises(ProviderFetchError) as err:
            await client.async_get_achievement_snapshot(STEAM_ID_SAM, APPID)

        assert err.value.status == 403
        assert err.value.body == "Forbidden"

    async def test_transport_error(
        self, client: SteamApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """Connection errors become ProviderFetchError."""
        aioclient_mock.get(
            const.STEAM_URL_PLAYER_SUMMARIES, exc=aiohttp.ClientConnectionError()
        )

        with pytest.raises(ProviderFetchError):
            await client.async_resolve_target_game(STEAM_ID_SAM)

    async def test_timeout(
        self, client: SteamApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """Timeouts become ProviderFetchError."""
        aioclient_mock.get(const.STEAM_URL_PLAYER_SUMMARIES, exc=TimeoutError())

        with pytest.raises(ProviderFetchError):
            await client.async_resolve_target_game(STEAM_ID_SAM)

    async def test_invalid_json(
        self, client: SteamApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """A body that is not JSON raises."""
        aioclient_mock.get(const.STEAM_URL_GAME_SCHEMA, text="<html>oops</html>")

        with pytest.raises(ProviderFetchError):
            await client.async_get_game_schema(APPID)


# =============================================================================
# Schema and rarity
# =============================================================================


class TestSchemaAndRarity:
    """Tests for game metadata fetches."""

    async def test_game_schema(
        self, client: SteamApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """Schema achievements are keyed by api name."""
        aioclient_mock.get(
            const.STEAM_URL_GAME_SCHEMA,
            json={
                "game": {
                    "gameName": "Portal 2",
                    "availableGameStats": {
                        "achievements": [
                            {
                                "name": "ACH_A",
                                "displayName": "Wake Up Call",
                                "description": "Survive.",
                                "icon": "https://cdn.example/a.jpg",
                            },
                            {"name": "ACH_B", "hidden": 1},
                        ]
                    },
                }
            },
        )

        schema = await client.async_get_game_schema(APPID)

        assert schema["canonical_title"] == "Portal 2"
        assert schema["total_count"] == 2
        assert schema["achievements"]["ACH_A"] == {
            "display_name": "Wake Up Call",
            "description": "Survive.",
            "icon": "https://cdn.example/a.jpg",
        }
        assert schema["achievements"]["ACH_B"] == {
            "display_name": "ACH_B",
            "description": None,
            "icon": None,
        }

    async def test_rarity_percentiles(
        self, client: SteamApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """Percentages are parsed as floats; string values are accepted."""
        aioclient_mock.get(
            const.STEAM_URL_GLOBAL_PERCENTAGES,
            json={
                "achievementpercentages": {
                    "achievements": [
                        {"name": "ACH_A", "percent": "71.2"},
                        {"name": "ACH_B", "percent": 3.5},
                        {"name": "ACH_C", "percent": "n/a"},
                    ]
                }
            },
        )

        assert await client.async_get_rarity_percentiles(APPID) == {
            "ACH_A": 71.2,
            "ACH_B": 3.5,
        }

    async def test_rarity_empty_is_none(
        self, client: SteamApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """No rarity data resolves to None."""
        aioclient_mock.get(const.STEAM_URL_GLOBAL_PERCENTAGES, json={})

        assert await client.async_get_rarity_percentiles(APPID) is None
