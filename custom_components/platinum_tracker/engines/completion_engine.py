"""Completion Engine - One-shot platinum celebration gate.

A pair is celebrated at most once, and only when this integration witnessed
the completing unlock: the game must be 100% complete AND something must have
been announced on the same run. A game that was already complete before it
was first tracked never triggers a celebration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..type_defs import CompletionDecision


class CompletionEngine:
    """Pure logic engine for the platinum latch."""

    @staticmethod
    def evaluate(
        is_complete: bool, prior_latched: bool, announced_this_run: int
    ) -> CompletionDecision:
        """Decide whether to celebrate and return the new latch value.

        Once latched, the pair stays latched even if a later snapshot reports
        the game as incomplete.
        """
        should_celebrate = (
            is_complete and not prior_latched and announced_this_run > 0
        )
        return {
            "should_celebrate": should_celebrate,
            "new_latched": prior_latched or should_celebrate,
        }
