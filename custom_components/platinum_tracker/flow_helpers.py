# File: flow_helpers.py
"""Helpers for the Platinum Tracker integration's Config and Options flow.

Provides schema builders and input-processing logic for both flows.

Functions follow one pattern:
- build_<step>_schema(default, ...) -> vol.Schema
- validate_<step>_inputs(user_input, ...) -> Tuple[errors_dict, data_dict]

Validation returns an (errors, data) tuple; the data is only built when there
are no errors, so a flow step reads:

```python
errors, data = validate_user_inputs(user_input)
if not errors:
    return self.async_create_entry(title=..., data=data)
```
"""

from __future__ import annotations

import json
from typing import Any

from homeassistant.helpers import selector
import voluptuous as vol

from . import const
from .exceptions import InvalidTrackedUsersError
from .pt_helpers import parse_tracked_users
from .utils.dt_utils import is_valid_timezone

# ----------------------------------------------------------------------------------
# USER STEP (entry data)
# ----------------------------------------------------------------------------------


def build_user_schema(default: dict[str, Any] | None = None) -> vol.Schema:
    """Build the schema for the initial setup step."""
    default = default or {}
    default_users = default.get(const.CONF_USERS)
    if isinstance(default_users, list):
        default_users = json.dumps(default_users)

    return vol.Schema(
        {
            vol.Required(
                const.CONF_API_KEY, default=default.get(const.CONF_API_KEY, "")
            ): selector.TextSelector(
                selector.TextSelectorConfig(type=selector.TextSelectorType.PASSWORD)
            ),
            vol.Required(
                const.CONF_WEBHOOK_URL, default=default.get(const.CONF_WEBHOOK_URL, "")
            ): selector.TextSelector(
                selector.TextSelectorConfig(type=selector.TextSelectorType.URL)
            ),
            vol.Required(
                const.CONF_USERS, default=default_users or ""
            ): selector.TextSelector(selector.TextSelectorConfig(multiline=True)),
            vol.Optional(
                const.CONF_PLATINUM_IMAGE_URL,
                default=default.get(const.CONF_PLATINUM_IMAGE_URL, ""),
            ): selector.TextSelector(
                selector.TextSelectorConfig(type=selector.TextSelectorType.URL)
            ),
        }
    )


def validate_user_inputs(
    user_input: dict[str, Any],
) -> tuple[dict[str, str], dict[str, Any]]:
    """Validate the setup step and build the entry data.

    Returns:
        (errors, data) - data is empty when errors is not.
    """
    errors: dict[str, str] = {}

    api_key = str(user_input.get(const.CONF_API_KEY, "")).strip()
    webhook_url = str(user_input.get(const.CONF_WEBHOOK_URL, "")).strip()
    if not api_key:
        errors[const.CONF_API_KEY] = const.CFOP_ERROR_REQUIRED
    if not webhook_url:
        errors[const.CONF_WEBHOOK_URL] = const.CFOP_ERROR_REQUIRED

    try:
        users = parse_tracked_users(user_input.get(const.CONF_USERS, ""))
    except InvalidTrackedUsersError as err:
        const.LOGGER.debug("DEBUG: Rejected users JSON: %s", err)
        errors[const.CONF_USERS] = const.CFOP_ERROR_INVALID_USERS
        users = []

    for user in users:
        if user.get("timezone") and not is_valid_timezone(user["timezone"]):
            errors[const.CONF_USERS] = const.CFOP_ERROR_INVALID_TIMEZONE
            break

    if errors:
        return errors, {}

    return errors, {
        const.CONF_API_KEY: api_key,
        const.CONF_WEBHOOK_URL: webhook_url,
        const.CONF_USERS: users,
        const.CONF_PLATINUM_IMAGE_URL: str(
            user_input.get(const.CONF_PLATINUM_IMAGE_URL) or ""
        ).strip(),
    }


# ----------------------------------------------------------------------------------
# GENERAL OPTIONS (entry options)
# ----------------------------------------------------------------------------------


def _number_selector(
    minimum: int, maximum: int | None = None, step: int = 1
) -> selector.NumberSelector:
    """Return a box-mode integer NumberSelector."""
    config: dict[str, Any] = {
        "mode": selector.NumberSelectorMode.BOX,
        "min": minimum,
        "step": step,
    }
    if maximum is not None:
        config["max"] = maximum
    return selector.NumberSelector(selector.NumberSelectorConfig(**config))


def build_general_options_schema(
    default: dict[str, Any] | None, default_timezone: str
) -> vol.Schema:
    """Build schema for polling, guardrail and display options."""
    default = default or {}

    return vol.Schema(
        {
            vol.Required(
                const.CONF_UPDATE_INTERVAL,
                default=default.get(
                    const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
                ),
            ): _number_selector(const.MIN_UPDATE_INTERVAL, const.MAX_UPDATE_INTERVAL),
            vol.Required(
                const.CONF_WINDOW_SECONDS,
                default=default.get(
                    const.CONF_WINDOW_SECONDS, const.DEFAULT_WINDOW_SECONDS
                ),
            ): _number_selector(const.MIN_WINDOW_SECONDS),
            vol.Required(
                const.CONF_CONCURRENCY,
                default=default.get(const.CONF_CONCURRENCY, const.DEFAULT_CONCURRENCY),
            ): _number_selector(const.MIN_CONCURRENCY, const.MAX_CONCURRENCY),
            vol.Required(
                const.CONF_MAX_ITEM_BYTES,
                default=default.get(
                    const.CONF_MAX_ITEM_BYTES, const.DEFAULT_MAX_ITEM_BYTES
                ),
            ): _number_selector(const.MIN_MAX_ITEM_BYTES, step=1000),
            vol.Required(
                const.CONF_TIMEZONE,
                default=default.get(const.CONF_TIMEZONE) or default_timezone,
            ): selector.TextSelector(),
            vol.Required(
                const.CONF_ENABLE_EVENT_LOG,
                default=default.get(
                    const.CONF_ENABLE_EVENT_LOG, const.DEFAULT_ENABLE_EVENT_LOG
                ),
            ): selector.BooleanSelector(),
        }
    )


def validate_general_options_inputs(
    user_input: dict[str, Any],
) -> tuple[dict[str, str], dict[str, Any]]:
    """Validate the options step and build the entry options.

    NumberSelector returns floats; every numeric option is stored as int.
    """
    errors: dict[str, str] = {}

    timezone = str(user_input.get(const.CONF_TIMEZONE, "")).strip()
    if not is_valid_timezone(timezone):
        errors[const.CONF_TIMEZONE] = const.CFOP_ERROR_INVALID_TIMEZONE

    if int(user_input[const.CONF_WINDOW_SECONDS]) < 60 * int(
        user_input[const.CONF_UPDATE_INTERVAL]
    ):
        errors[const.CONF_WINDOW_SECONDS] = const.CFOP_ERROR_WINDOW_SHORTER_THAN_INTERVAL

    if errors:
        return errors, {}

    return errors, {
        const.CONF_UPDATE_INTERVAL: int(user_input[const.CONF_UPDATE_INTERVAL]),
        const.CONF_WINDOW_SECONDS: int(user_input[const.CONF_WINDOW_SECONDS]),
        const.CONF_CONCURRENCY: int(user_input[const.CONF_CONCURRENCY]),
        const.CONF_MAX_ITEM_BYTES: int(user_input[const.CONF_MAX_ITEM_BYTES]),
        const.CONF_TIMEZONE: timezone,
        const.CONF_ENABLE_EVENT_LOG: bool(user_input[const.CONF_ENABLE_EVENT_LOG]),
    }
