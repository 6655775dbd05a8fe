"""Batching metadata definitions and the comprehensive-fetch state machine.

This module defines the data structures used to describe batched fetching
(policy, plan, result) together with the pure transition functions that
decide when a comprehensive fetch stops. Keeping the transitions pure lets
each termination condition be tested without any I/O.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from ...core.constants import (
    DEFAULT_BACKOFF_BASE_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_CONSECUTIVE_EMPTY,
    PAGE_SIZE,
)


class StopReason(str, Enum):
    """Why a comprehensive fetch stopped."""

    MAX_RECORDS = "max_records"
    SHORT_BATCH = "short_batch"
    CONSECUTIVE_EMPTY = "consecutive_empty"
    FETCH_FAILED = "fetch_failed"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value


@dataclass(frozen=True)
class BatchPolicy:
    """Batching policy for the comprehensive fetch.

    Attributes:
        batch_size: Records requested per upstream call
        max_attempts: Attempts per batch before giving up on the whole run
        backoff_base: Delay (seconds) after the first failed attempt
        max_consecutive_empty: Empty batches in a row that mean end-of-data
    """

    batch_size: int = PAGE_SIZE
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    backoff_base: float = DEFAULT_BACKOFF_BASE_SECONDS
    max_consecutive_empty: int = DEFAULT_MAX_CONSECUTIVE_EMPTY

    def __post_init__(self) -> None:
        """Validate policy configuration."""
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.max_attempts <= 0:
            raise ValueError("max_attempts must be positive")
        if self.backoff_base < 0:
            raise ValueError("backoff_base cannot be negative")
        if self.max_consecutive_empty <= 0:
            raise ValueError("max_consecutive_empty must be positive")

    def backoff_delay(self, attempt: int) -> float:
        """Delay after failed ``attempt`` (1-based): ``base * 2 ** (attempt - 1)``."""
        return self.backoff_base * (2 ** (attempt - 1))


@dataclass(frozen=True)
class BatchPlan:
    """Plan for a single batch.

    Attributes:
        start: Zero-based upstream offset
        limit: Records requested
        batch_index: Zero-based index of this batch in the run
    """

    start: int
    limit: int
    batch_index: int = 0


@dataclass(frozen=True)
class FetchState:
    """Accumulator for one comprehensive fetch run.

    ``stop_reason`` is None while the run should continue.
    """

    current_start: int = 0
    collected: tuple[Any, ...] = ()
    consecutive_empty: int = 0
    batches_used: int = 0
    stop_reason: StopReason | None = None

    @property
    def done(self) -> bool:
        return self.stop_reason is not None


@dataclass
class FetchResult:
    """Result of a comprehensive fetch.

    Attributes:
        data: Records in upstream order
        batches_used: Number of batches that returned (successfully or empty)
        stop_reason: Condition that ended the run
        failed_attempts: Attempts that raised and were retried or absorbed
    """

    data: list[Any]
    batches_used: int
    stop_reason: StopReason
    failed_attempts: int = 0

    @property
    def total_points(self) -> int:
        return len(self.data)

    @property
    def partial(self) -> bool:
        """Whether the run ended on a fetch failure."""
        return self.stop_reason == StopReason.FETCH_FAILED


def next_plan(state: FetchState, policy: BatchPolicy) -> BatchPlan:
    """Plan the batch at the current offset."""
    return BatchPlan(
        start=state.current_start,
        limit=policy.batch_size,
        batch_index=state.batches_used,
    )


def check_budget(state: FetchState, max_records: int) -> FetchState:
    """Stop before issuing another batch once the budget is reached."""
    if state.done or len(state.collected) < max_records:
        return state
    return replace(state, stop_reason=StopReason.MAX_RECORDS)


def advance_state(
    state: FetchState, batch: Sequence[Any] | None, policy: BatchPolicy
) -> FetchState:
    """Apply one batch outcome to the run state.

    Args:
        state: State before the batch
        batch: Records returned, or None when every attempt failed
        policy: Batching policy

    Returns:
        New state. The offset advances by ``batch_size`` whatever the outcome.
    """
    next_start = state.current_start + policy.batch_size

    if batch is None:
        return replace(state, current_start=next_start, stop_reason=StopReason.FETCH_FAILED)

    batches_used = state.batches_used + 1

    if not batch:
        consecutive_empty = state.consecutive_empty + 1
        stop = (
            StopReason.CONSECUTIVE_EMPTY
            if consecutive_empty >= policy.max_consecutive_empty
            else None
        )
        return replace(
            state,
            current_start=next_start,
            consecutive_empty=consecutive_empty,
            batches_used=batches_used,
            stop_reason=stop,
        )

    # A full batch may still be the last one; the next request then comes back empty
    stop = StopReason.SHORT_BATCH if len(batch) < policy.batch_size else None
    return replace(
        state,
        current_start=next_start,
        collected=state.collected + tuple(batch),
        consecutive_empty=0,
        batches_used=batches_used,
        stop_reason=stop,
    )
