"""Batching layer for assembling a large dataset out of small pages.

Architecture:
    The batching layer consists of:
    - definitions.py: Policy, plan and result structures plus the pure
      state transitions that decide when a run stops
    - executors.py: Batch execution (sequential fetch, retry, backoff)
    - telemetry.py: Structured logging

Usage:
    Connectors hand the executor a function that fetches one BatchPlan and a
    record budget; the executor returns a FetchResult that is never an
    exception for transport failures, only a shorter dataset.
"""

from __future__ import annotations

from .definitions import (
    BatchPlan,
    BatchPolicy,
    FetchResult,
    FetchState,
    StopReason,
    advance_state,
    check_budget,
    next_plan,
)
from .executors import BatchExecutor

__all__ = [
    "BatchExecutor",
    "BatchPlan",
    "BatchPolicy",
    "FetchResult",
    "FetchState",
    "StopReason",
    "advance_state",
    "check_budget",
    "next_plan",
]
