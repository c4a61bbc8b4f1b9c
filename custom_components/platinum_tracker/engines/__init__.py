"""Engine modules for Platinum Tracker integration.

Contains pure computation engines:
- snapshot_engine: Snapshot reconciliation (what is new since the last poll)
- guardrail_engine: Ledger record size guardrail
- completion_engine: One-shot platinum celebration gate
"""

from .completion_engine import CompletionEngine
from .guardrail_engine import GuardrailEngine
from .snapshot_engine import SnapshotEngine

__all__ = [
    "CompletionEngine",
    "GuardrailEngine",
    "SnapshotEngine",
]
