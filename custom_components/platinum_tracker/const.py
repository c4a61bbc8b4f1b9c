# File: const.py
"""Constants for the Platinum Tracker integration.

This file centralizes configuration keys, defaults, storage field names,
provider endpoints and event names for consistency across the integration.
"""

import logging

from homeassistant.const import Platform

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
PLATINUM_TRACKER_TITLE = "Platinum Tracker"

# Integration Domain
DOMAIN = "platinum_tracker"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORAGE_MANAGER = "storage_manager"
EVENT_LOG_STORE = "event_log_store"
STORAGE_KEY_LEDGER = "platinum_tracker_ledger"
STORAGE_KEY_EVENTS = "platinum_tracker_events"
STORAGE_VERSION = 1

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------

# ConfigFlow Steps
CONFIG_FLOW_STEP_USER = "user"
OPTIONS_FLOW_STEP_INIT = "init"

# Entry data
CONF_API_KEY = "api_key"
CONF_WEBHOOK_URL = "webhook_url"
CONF_USERS = "users"
CONF_PLATINUM_IMAGE_URL = "platinum_image_url"

# Entry options
CONF_WINDOW_SECONDS = "window_seconds"
CONF_CONCURRENCY = "concurrency"
CONF_MAX_ITEM_BYTES = "max_item_bytes"
CONF_UPDATE_INTERVAL = "update_interval"
CONF_TIMEZONE = "timezone"
CONF_ENABLE_EVENT_LOG = "enable_event_log"

# Tracked user fields (inside CONF_USERS)
CONF_USER_NAME = "name"
CONF_USER_STEAM_ID = "steam_id"
CONF_USER_WEBHOOK_URL = "webhook_url"
CONF_USER_TIMEZONE = "timezone"
CONF_USER_WINDOW_SECONDS = "window_seconds"

# ------------------------------------------------------------------------------------------------
# Defaults and Bounds
# ------------------------------------------------------------------------------------------------
DEFAULT_WINDOW_SECONDS = 900  # 15 minutes
DEFAULT_CONCURRENCY = 5
DEFAULT_MAX_ITEM_BYTES = 350000
DEFAULT_UPDATE_INTERVAL = 5  # minutes
DEFAULT_TIMEZONE = "America/New_York"
DEFAULT_ENABLE_EVENT_LOG = True
DEFAULT_ZERO = 0

MIN_WINDOW_SECONDS = 60
MIN_CONCURRENCY = 1
MAX_CONCURRENCY = 20
MIN_MAX_ITEM_BYTES = 100000
MIN_UPDATE_INTERVAL = 1
MAX_UPDATE_INTERVAL = 60

# HTTP
HTTP_TIMEOUT_SECONDS = 30

# ------------------------------------------------------------------------------------------------
# Ledger Storage Keys
# ------------------------------------------------------------------------------------------------
DATA_RECORDS = "records"

DATA_LEDGER_PK = "pk"
DATA_LEDGER_NAME = "name"
DATA_LEDGER_STEAM_ID = "steam_id"
DATA_LEDGER_APPID = "appid"
DATA_LEDGER_GAME_TITLE = "game_title"
DATA_LEDGER_TOTAL_ACHIEVEMENTS = "total_achievements"
DATA_LEDGER_UNLOCKED_COUNT = "unlocked_count"
DATA_LEDGER_LOCKED_COUNT = "locked_count"
DATA_LEDGER_PROGRESS_TEXT = "progress_text"
DATA_LEDGER_UNLOCKED_API_NAMES = "unlocked_api_names"
DATA_LEDGER_LOCKED_API_NAMES = "locked_api_names"
DATA_LEDGER_UNANNOUNCED_UNLOCKED_API_NAMES = "unannounced_unlocked_api_names"
DATA_LEDGER_ANNOUNCED_API_NAMES = "announced_api_names"
DATA_LEDGER_ANNOUNCED_LEGACY = "announced"
DATA_LEDGER_PLATINUM_ANNOUNCED = "platinum_announced"
DATA_LEDGER_UPDATED_AT = "updated_at"
DATA_LEDGER_ARRAYS_TRUNCATED = "arrays_truncated"
DATA_LEDGER_APPROX_BYTES_BEFORE_TRUNCATE = "approx_bytes_before_truncate"
DATA_LEDGER_ANNOUNCED_DROPPED = "announced_dropped"

LEDGER_KEY_FORMAT = "steam#{steam_id}#app#{appid}"

# Guardrail drop order (step 1). The announced list is only dropped afterwards.
GUARDRAIL_DROP_ORDER = (
    DATA_LEDGER_UNLOCKED_API_NAMES,
    DATA_LEDGER_LOCKED_API_NAMES,
    DATA_LEDGER_UNANNOUNCED_UNLOCKED_API_NAMES,
)

# ------------------------------------------------------------------------------------------------
# Event Log Storage Keys
# ------------------------------------------------------------------------------------------------
DATA_EVENTS = "events"

DATA_EVENT_WEEK = "week"
DATA_EVENT_STEAM_ID = "steam_id"
DATA_EVENT_NAME = "name"
DATA_EVENT_UNLOCK_TIME = "unlock_time"
DATA_EVENT_APPID = "appid"
DATA_EVENT_API_NAME = "api_name"
DATA_EVENT_ACHIEVEMENT_NAME = "achievement_name"
DATA_EVENT_GAME_TITLE = "game_title"

EVENT_LOG_KEY_FORMAT = "{week}#{steam_id}#{unlock_time}#{appid}#{api_name}"
EVENT_LOG_RETENTION_WEEKS = 8

# ------------------------------------------------------------------------------------------------
# Run Result Keys
# ------------------------------------------------------------------------------------------------
RESULT_OK = "ok"
RESULT_ERROR = "error"
RESULT_NAME = "name"
RESULT_POSTED = "posted"
RESULT_REASON = "reason"
RESULT_APPID = "appid"
RESULT_GAME_TITLE = "game_title"
RESULT_PROGRESS_TEXT = "progress_text"
RESULT_PROGRESS_PCT = "progress_pct"
RESULT_UNLOCKED_COUNT = "unlocked_count"
RESULT_TOTAL_COUNT = "total_count"
RESULT_PLATINUM = "platinum"
RESULT_PLATINUM_CELEBRATED = "platinum_celebrated"
RESULT_BOOTSTRAP = "bootstrap"
RESULT_TRUNCATED = "truncated"

REASON_NO_GAME = "no_current_or_recent_game"

# Coordinator data
DATA_COORD_USERS = "users"
DATA_COORD_POSTED_TOTAL = "posted_total"
DATA_COORD_PLATINUM_TOTAL = "platinum_total"
DATA_COORD_FAILED_TOTAL = "failed_total"
DATA_COORD_FAILED_USERS = "failed_users"
DATA_COORD_LAST_RUN = "last_run"

# ------------------------------------------------------------------------------------------------
# Steam Web API
# ------------------------------------------------------------------------------------------------
STEAM_API_BASE_URL = "https://api.steampowered.com"
STEAM_URL_PLAYER_SUMMARIES = (
    f"{STEAM_API_BASE_URL}/ISteamUser/GetPlayerSummaries/v0002/"
)
STEAM_URL_RECENTLY_PLAYED = (
    f"{STEAM_API_BASE_URL}/IPlayerService/GetRecentlyPlayedGames/v0001/"
)
STEAM_URL_PLAYER_ACHIEVEMENTS = (
    f"{STEAM_API_BASE_URL}/ISteamUserStats/GetPlayerAchievements/v0001/"
)
STEAM_URL_GAME_SCHEMA = f"{STEAM_API_BASE_URL}/ISteamUserStats/GetSchemaForGame/v0002/"
STEAM_URL_GLOBAL_PERCENTAGES = (
    f"{STEAM_API_BASE_URL}/ISteamUserStats/GetGlobalAchievementPercentagesForApp/v0002/"
)
STEAM_COMMUNITY_ACHIEVEMENTS_URL = (
    "https://steamcommunity.com/profiles/{steam_id}/stats/{appid}/achievements/"
)
STEAM_APP_TITLE_FALLBACK = "Steam App {appid}"
STEAM_PLACEHOLDER_TITLE_PREFIX = "ValveTestApp"

GAME_SOURCE_CURRENT = "currently_playing"
GAME_SOURCE_RECENT = "recently_played"

# ------------------------------------------------------------------------------------------------
# Notifications (Discord webhook payloads)
# ------------------------------------------------------------------------------------------------
NOTIFY_USERNAME_FORMAT = "{name}'s Platinum Bot"
NOTIFY_EMBED_COLOR = 0xE74C3C
NOTIFY_HIDDEN_DESCRIPTION = "Hidden Achievement"
NOTIFY_UNKNOWN_DATE = "Unknown"
NOTIFY_DATE_FORMAT = "%m/%d/%Y, %I:%M:%S %p"

# ------------------------------------------------------------------------------------------------
# Events fired on the Home Assistant bus
# ------------------------------------------------------------------------------------------------
EVENT_ACHIEVEMENT_ANNOUNCED = f"{DOMAIN}_achievement_announced"
EVENT_PLATINUM_ANNOUNCED = f"{DOMAIN}_platinum_announced"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------
SENSOR_UID_SUFFIX_USER_PROGRESS = "_progress"
SENSOR_UID_SUFFIX_SYSTEM_ANNOUNCEMENTS = "_announcements"

ATTR_GAME_TITLE = "game_title"
ATTR_APPID = "appid"
ATTR_PROGRESS_TEXT = "progress_text"
ATTR_UNLOCKED_COUNT = "unlocked_count"
ATTR_TOTAL_COUNT = "total_count"
ATTR_LAST_POSTED = "last_posted"
ATTR_PLATINUM = "platinum"
ATTR_LAST_ERROR = "last_error"
ATTR_STEAM_ID = "steam_id"
ATTR_FAILED_USERS = "failed_users"
ATTR_PLATINUM_TOTAL = "platinum_total"
ATTR_LAST_RUN = "last_run"
ATTR_WEEKLY_LEADERBOARD = "weekly_leaderboard"

TRANS_KEY_SENSOR_USER_PROGRESS = "user_progress"
TRANS_KEY_SENSOR_SYSTEM_ANNOUNCEMENTS = "system_announcements"

# ------------------------------------------------------------------------------------------------
# Translation / Error Keys
# ------------------------------------------------------------------------------------------------
TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"
CFOP_ERROR_INVALID_USERS = "invalid_users"
CFOP_ERROR_REQUIRED = "required"
CFOP_ERROR_INVALID_TIMEZONE = "invalid_timezone"
CFOP_ERROR_WINDOW_SHORTER_THAN_INTERVAL = "window_shorter_than_interval"

# Diagnostics
DIAGNOSTICS_REDACT_KEYS = {
    CONF_API_KEY,
    CONF_WEBHOOK_URL,
    CONF_USER_WEBHOOK_URL,
}
