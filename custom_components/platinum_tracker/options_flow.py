# File: options_flow.py
"""Options flow for the Platinum Tracker integration.

Edits the polling, recency window, concurrency, guardrail and display
options. Saving the options reloads the entry (see async_update_options in
__init__.py), which rebuilds the coordinator with the new settings.
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries

from . import const
from . import flow_helpers as fh


class PlatinumTrackerOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for general settings."""

    async def async_step_init(self, user_input: dict[str, Any] | None = None):
        """Show and save the general options."""
        errors: dict[str, str] = {}

        if user_input is not None:
            errors, options = fh.validate_general_options_inputs(user_input)
            if not errors:
                const.LOGGER.debug("DEBUG: Saving options: %s", options)
                return self.async_create_entry(title="", data=options)

        default_timezone = self.hass.config.time_zone or const.DEFAULT_TIMEZONE
        return self.async_show_form(
            step_id=const.OPTIONS_FLOW_STEP_INIT,
            data_schema=fh.build_general_options_schema(
                user_input or dict(self.config_entry.options), default_timezone
            ),
            errors=errors,
        )
