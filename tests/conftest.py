"""Shared fixtures for Platinum Tracker tests."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.platinum_tracker import const
from tests.helpers import (
    APPID,
    STEAM_ID_ALEX,
    STEAM_ID_SAM,
    WEBHOOK_URL,
    make_prior,
    make_schema,
    make_user,
)

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a mock config entry tracking two users."""
    return MockConfigEntry(
        domain=const.DOMAIN,
        title=const.PLATINUM_TRACKER_TITLE,
        data={
            const.CONF_API_KEY: "steam-key",
            const.CONF_WEBHOOK_URL: WEBHOOK_URL,
            const.CONF_USERS: [
                make_user("Sam", STEAM_ID_SAM),
                make_user("Alex", STEAM_ID_ALEX),
            ],
            const.CONF_PLATINUM_IMAGE_URL: "",
        },
        options={const.CONF_TIMEZONE: "UTC"},
        entry_id="test_entry_id",
    )


@pytest.fixture
def mock_coordinator() -> MagicMock:
    """Return a mock coordinator with mocked Steam client and stores."""
    mock = MagicMock()
    mock.config_entry.entry_id = "test_entry_id"
    mock.session = MagicMock()

    mock.steam_client = MagicMock()
    mock.steam_client.async_resolve_target_game = AsyncMock(
        return_value={
            "appid": APPID,
            "game_title": "Portal 2",
            "source": const.GAME_SOURCE_CURRENT,
        }
    )
    mock.steam_client.async_get_achievement_snapshot = AsyncMock()

    mock.storage_manager = MagicMock()
    mock.storage_manager.load = MagicMock(return_value=make_prior(exists=False))
    mock.storage_manager.async_save_record = AsyncMock(
        side_effect=lambda pk, record, max_bytes: {
            "record": record,
            "degraded": False,
            "announced_dropped": False,
            "dropped_fields": [],
            "initial_bytes": 0,
            "approx_bytes": 0,
        }
    )

    mock.event_log = MagicMock()
    mock.event_log.async_append = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def mock_cache() -> MagicMock:
    """Return a mock per-batch metadata cache."""
    mock = MagicMock()
    mock.async_get_schema = AsyncMock(return_value=make_schema())
    mock.async_get_rarity = AsyncMock(return_value={"ACH_A": 71.2, "ACH_B": 12.25})
    return mock
