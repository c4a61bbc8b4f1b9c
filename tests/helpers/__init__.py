"""Test helpers for Platinum Tracker integration tests.

This module re-exports all helpers for convenient imports:

    from tests.helpers import (
        NOW, STEAM_ID_SAM, APPID,
        make_snapshot, make_prior, make_record, make_settings,
    )
"""

from .builders import (
    APPID,
    NOW,
    PK_SAM,
    STEAM_ID_ALEX,
    STEAM_ID_SAM,
    WEBHOOK_URL,
    make_prior,
    make_record,
    make_schema,
    make_settings,
    make_snapshot,
    make_user,
)

__all__ = [
    "APPID",
    "NOW",
    "PK_SAM",
    "STEAM_ID_ALEX",
    "STEAM_ID_SAM",
    "WEBHOOK_URL",
    "make_prior",
    "make_record",
    "make_schema",
    "make_settings",
    "make_snapshot",
    "make_user",
]
