# File: config_flow.py
"""Config flow for the Platinum Tracker integration.

A single step collects the Steam API key, the default webhook and the tracked
users JSON. Only one instance is allowed: ledger and event log storage are
shared per Home Assistant installation.
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries
from homeassistant.core import callback

from . import const
from . import flow_helpers as fh
from .options_flow import PlatinumTrackerOptionsFlowHandler


class PlatinumTrackerConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for Platinum Tracker."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        """Collect API key, webhook and tracked users."""
        if any(self._async_current_entries()):
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        errors: dict[str, str] = {}
        if user_input is not None:
            errors, data = fh.validate_user_inputs(user_input)
            if not errors:
                const.LOGGER.info(
                    "INFO: Creating Platinum Tracker entry for %s users",
                    len(data[const.CONF_USERS]),
                )
                return self.async_create_entry(
                    title=const.PLATINUM_TRACKER_TITLE,
                    data=data,
                    options={
                        const.CONF_TIMEZONE: self.hass.config.time_zone
                        or const.DEFAULT_TIMEZONE,
                    },
                )

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=fh.build_user_schema(user_input),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return PlatinumTrackerOptionsFlowHandler()
