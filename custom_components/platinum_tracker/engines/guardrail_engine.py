"""Guardrail Engine - Keeps ledger records under the storage size budget.

A ledger record carries a few large, purely diagnostic lists next to the
announced list that deduplication depends on. When a serialized record grows
past the configured budget, fields are dropped in a fixed order:

1. unlocked_api_names, locked_api_names, unannounced_unlocked_api_names,
   one at a time, stopping as soon as the record fits.
2. announced_api_names, only if step 1 was not enough. The next poll may then
   re-announce achievements that were already posted.

Identity fields, counts and the platinum latch are never dropped.

ARCHITECTURE: Pure logic, no Home Assistant dependencies. Logging of the
degradation is done by the storage manager from the returned result.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from .. import const

if TYPE_CHECKING:
    from ..type_defs import GuardrailResult, LedgerRecord


class GuardrailEngine:
    """Pure logic engine for the ledger size guardrail."""

    @staticmethod
    def approx_bytes(record: dict[str, Any]) -> int:
        """Return the UTF-8 byte length of the compact JSON serialization."""
        serialized = json.dumps(record, separators=(",", ":"), ensure_ascii=False)
        return len(serialized.encode("utf-8"))

    @classmethod
    def apply(cls, record: LedgerRecord, max_bytes: int) -> GuardrailResult:
        """Bound the serialized size of a ledger record.

        The input record is never mutated; a shallow copy is returned.

        Args:
            record: Ledger record about to be persisted
            max_bytes: Maximum serialized size in bytes

        Returns:
            GuardrailResult with the (possibly trimmed) record, whether it was
            degraded, which fields were dropped and the size before and after
        """
        trimmed: dict[str, Any] = dict(record)
        initial_bytes = cls.approx_bytes(trimmed)

        if initial_bytes <= max_bytes:
            return {
                "record": record,
                "degraded": False,
                "announced_dropped": False,
                "dropped_fields": [],
                "initial_bytes": initial_bytes,
                "approx_bytes": initial_bytes,
            }

        dropped: list[str] = []
        trimmed[const.DATA_LEDGER_ARRAYS_TRUNCATED] = True
        trimmed[const.DATA_LEDGER_APPROX_BYTES_BEFORE_TRUNCATE] = initial_bytes
        current_bytes = cls.approx_bytes(trimmed)

        # Step 1: diagnostic lists, in order, until it fits
        for field in const.GUARDRAIL_DROP_ORDER:
            if current_bytes <= max_bytes:
                break
            if field not in trimmed:
                continue
            del trimmed[field]
            dropped.append(field)
            current_bytes = cls.approx_bytes(trimmed)

        # Step 2: last resort
        announced_dropped = False
        if current_bytes > max_bytes and const.DATA_LEDGER_ANNOUNCED_API_NAMES in trimmed:
            del trimmed[const.DATA_LEDGER_ANNOUNCED_API_NAMES]
            trimmed[const.DATA_LEDGER_ANNOUNCED_DROPPED] = True
            dropped.append(const.DATA_LEDGER_ANNOUNCED_API_NAMES)
            announced_dropped = True
            current_bytes = cls.approx_bytes(trimmed)

        return {
            "record": trimmed,  # type: ignore[typeddict-item]
            "degraded": True,
            "announced_dropped": announced_dropped,
            "dropped_fields": dropped,
            "initial_bytes": initial_bytes,
            "approx_bytes": current_bytes,
        }
