# File: utils/__init__.py
"""Pure Python utilities for Platinum Tracker.

This module contains pure Python functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Submodules:
    - batch_utils: Bounded-concurrency batch runner
    - dt_utils: Unix timestamp formatting and week buckets
    - math_utils: Progress percentages
"""

from . import batch_utils, dt_utils, math_utils

__all__ = ["batch_utils", "dt_utils", "math_utils"]
