# File: storage_manager.py
"""Handles persistent ledger storage for the Platinum Tracker integration.

Uses Home Assistant's Storage helper to keep one reconciliation record per
(steam_id, appid) pair. Records are written through the size guardrail and
replaced wholesale on every save (last writer wins); each pair is handled by
at most one worker per batch, so no locking is needed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.helpers.storage import Store

from . import const
from .engines.guardrail_engine import GuardrailEngine
from .exceptions import LedgerPersistenceError

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .type_defs import GuardrailResult, LedgerKey, LedgerRecord, LedgerState


class PlatinumLedgerStorageManager:
    """Manages loading and saving reconciliation ledger records.

    Utilizes the ledger key ("steam#<steam_id>#app#<appid>") as primary key.
    """

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY_LEDGER
    ) -> None:
        """Initialize the storage manager.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY_LEDGER).

        """
        self.hass = hass
        self._storage_key = storage_key
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)
        self._data: dict[str, Any] = self._get_default_structure()

    @staticmethod
    def _get_default_structure() -> dict[str, Any]:
        """Return the empty ledger structure."""
        return {const.DATA_RECORDS: {}}

    async def async_initialize(self) -> None:
        """Load data from storage during startup.

        If no data exists, initializes with an empty structure.
        """
        const.LOGGER.debug("DEBUG: PlatinumLedgerStorageManager: Loading data from storage")
        existing_data = await self._store.async_load()

        if existing_data is None:
            const.LOGGER.info("INFO: No existing ledger found. Initializing new data")
            self._data = self._get_default_structure()
        else:
            self._data = existing_data
            self._data.setdefault(const.DATA_RECORDS, {})
            const.LOGGER.debug(
                "DEBUG: Loaded existing ledger: %s records",
                len(self._data[const.DATA_RECORDS]),
            )

    @property
    def data(self) -> dict[str, Any]:
        """Retrieve the in-memory data cache."""
        return self._data

    def get_records(self) -> dict[LedgerKey, LedgerRecord]:
        """Retrieve every ledger record."""
        return self._data.get(const.DATA_RECORDS, {})

    def get_record(self, pk: LedgerKey) -> LedgerRecord | None:
        """Retrieve one ledger record, or None when the pair was never seen."""
        return self.get_records().get(pk)

    def load(self, pk: LedgerKey) -> LedgerState:
        """Return the reconciliation state for a pair.

        A missing record is a first-seen pair (exists=False), never an error.
        Records written before the announced list was renamed are read through
        the legacy "announced" key.
        """
        record = self.get_record(pk)
        if record is None:
            return {"exists": False, "announced_api_names": [], "platinum_announced": False}

        announced = record.get(const.DATA_LEDGER_ANNOUNCED_API_NAMES)
        if announced is None:
            announced = record.get(const.DATA_LEDGER_ANNOUNCED_LEGACY, [])  # type: ignore[misc]

        return {
            "exists": True,
            "announced_api_names": list(announced or []),
            "platinum_announced": bool(
                record.get(const.DATA_LEDGER_PLATINUM_ANNOUNCED, False)
            ),
        }

    async def async_save_record(
        self, pk: LedgerKey, record: LedgerRecord, max_bytes: int
    ) -> GuardrailResult:
        """Apply the size guardrail and upsert a record.

        Store logs its own serialization and write failures without raising,
        so in that case the record stays in memory and is written again with
        the next save. Only errors raised out of async_save are handled here.

        Raises:
            LedgerPersistenceError: When async_save raises. The in-memory
                record is restored first.
        """
        result = GuardrailEngine.apply(record, max_bytes)

        if result["announced_dropped"]:
            const.LOGGER.error(
                "ERROR: Ledger record %s still too large after truncation "
                "(approxBytes=%s, limit=%s). Dropped announced list as last resort; "
                "achievements may be announced again",
                pk,
                result["initial_bytes"],
                max_bytes,
            )
        elif result["degraded"]:
            const.LOGGER.warning(
                "WARNING: Ledger record %s nearing size limit (approxBytes=%s, limit=%s). "
                "Dropped %s",
                pk,
                result["initial_bytes"],
                max_bytes,
                ", ".join(result["dropped_fields"]),
            )

        records = self._data.setdefault(const.DATA_RECORDS, {})
        previous = records.get(pk)
        records[pk] = result["record"]

        try:
            await self._store.async_save(self._data)
        except (OSError, TypeError, ValueError) as err:
            if previous is None:
                records.pop(pk, None)
            else:
                records[pk] = previous
            const.LOGGER.error(
                "ERROR: Failed to save ledger record %s to %s: %s",
                pk,
                self._store.path,
                err,
            )
            raise LedgerPersistenceError(f"Failed to save ledger record {pk}: {err}") from err

        const.LOGGER.debug(
            "DEBUG: Ledger record %s saved (approxBytes=%s%s)",
            pk,
            result["approx_bytes"],
            ", TRUNCATED" if result["degraded"] else "",
        )
        return result

    async def async_delete_storage(self) -> None:
        """Delete the ledger file completely from disk."""
        self._data = self._get_default_structure()
        try:
            await self._store.async_remove()
            const.LOGGER.info("INFO: Ledger storage removed: %s", self._store.path)
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove ledger storage %s: %s. Check file permissions",
                self._store.path,
                err,
            )
