# File: utils/math_utils.py
"""Math and progress utilities for Platinum Tracker.

Pure Python functions with ZERO Home Assistant dependencies.

Functions:
    - floor_percent: Whole-number completion percentage
    - format_progress_text: "12/40 (30%)" progress string
"""

from __future__ import annotations


def floor_percent(numerator: int, denominator: int | None) -> int:
    """Return floor(numerator / denominator * 100), or 0 for an empty denominator.

    Examples:
        floor_percent(1, 3) → 33
        floor_percent(5, 0) → 0
    """
    if not denominator:
        return 0
    return (numerator * 100) // denominator


def format_progress_text(unlocked_count: int, total_count: int | None) -> str:
    """Return the progress text stored on ledger records and shown in sensors."""
    total = total_count or 0
    return f"{unlocked_count}/{total} ({floor_percent(unlocked_count, total)}%)"
