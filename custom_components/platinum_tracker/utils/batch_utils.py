# File: utils/batch_utils.py
"""Bounded-concurrency batch runner for Platinum Tracker.

Pure asyncio with ZERO Home Assistant dependencies.

A fixed pool of workers pulls units from a shared index. Each worker runs one
unit to completion before pulling the next, so at most ``concurrency`` units
are in flight at any time. A unit that raises is recorded as a failure in its
own slot and never stops the pool.

Functions:
    - async_run_with_concurrency: Run every unit once, results in input order
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeVar

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

UnitT = TypeVar("UnitT")

# Result keys (local copies to avoid circular imports)
RESULT_OK = "ok"
RESULT_ERROR = "error"


async def async_run_with_concurrency(
    units: Sequence[UnitT],
    worker: Callable[[UnitT], Awaitable[dict[str, Any]]],
    concurrency: int,
) -> list[dict[str, Any]]:
    """Run ``worker`` once for every unit with a bounded worker pool.

    Args:
        units: Units of work; each is attempted exactly once
        worker: Coroutine function processing one unit
        concurrency: Maximum number of units in flight (values < 1 mean 1)

    Returns:
        One result per unit, positionally aligned with ``units`` regardless of
        completion order. Failed units yield {"ok": False, "error": "..."}.
    """
    results: list[dict[str, Any]] = [{} for _ in units]
    if not units:
        return results

    next_index = 0

    async def _runner() -> None:
        nonlocal next_index
        while True:
            # No await between read and increment, so the claim is atomic
            current = next_index
            next_index += 1
            if current >= len(units):
                return
            try:
                results[current] = await worker(units[current])
            except Exception as err:  # pylint: disable=broad-exception-caught
                # Per-unit isolation: record the failure and keep pulling
                _LOGGER.debug(
                    "DEBUG: Batch unit %s failed: %s", current, err, exc_info=True
                )
                results[current] = {
                    RESULT_OK: False,
                    RESULT_ERROR: str(err) or err.__class__.__name__,
                }

    pool_size = min(max(1, concurrency), len(units))
    await asyncio.gather(*(_runner() for _ in range(pool_size)))
    return results
