"""Batch execution logic for the comprehensive fetch.

This module provides the BatchExecutor class that drives the fetch state
machine from ``definitions.py``: it issues batches strictly one after the
other, retries failed batches with exponential backoff, and turns a batch
that keeps failing into a partial result instead of an exception.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from time import perf_counter
from typing import Any

from ...core.exceptions import AuthError, GameNotFoundError
from .definitions import (
    BatchPlan,
    BatchPolicy,
    FetchResult,
    FetchState,
    advance_state,
    check_budget,
    next_plan,
)
from .telemetry import (
    log_batch_completed,
    log_batch_error,
    log_batch_retry,
    log_fetch_all_complete,
)

FetchBatch = Callable[[BatchPlan], Awaitable[Sequence[Any]]]
Sleep = Callable[[float], Awaitable[Any]]

# Never retried and never absorbed into a partial result
NON_RETRYABLE: tuple[type[BaseException], ...] = (AuthError, GameNotFoundError)


class BatchExecutor:
    """Executes a comprehensive fetch and aggregates its batches.

    The executor takes a batch fetch function and a record budget, then
    fetches batches until one of the stop conditions in ``advance_state`` or
    ``check_budget`` holds.
    """

    def __init__(
        self,
        policy: BatchPolicy | None = None,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize batch executor.

        Args:
            policy: Batching policy (defaults to 25-record batches, 3 attempts)
            sleep: Awaitable used for backoff delays
        """
        self._policy = policy or BatchPolicy()
        self._sleep = sleep

    @property
    def policy(self) -> BatchPolicy:
        return self._policy

    async def fetch_all(
        self,
        *,
        fetch_batch: FetchBatch,
        max_records: int,
        endpoint_id: str = "players",
    ) -> FetchResult:
        """Fetch batches until the data or the budget runs out.

        Args:
            fetch_batch: Async function that takes a BatchPlan and returns records
            max_records: Stop before issuing a batch once this many are collected
            endpoint_id: Identifier used in telemetry

        Returns:
            FetchResult with the records in upstream order

        Raises:
            AuthError: The credential became unusable; never absorbed
            GameNotFoundError: The season has no game; no partial result exists
        """
        if max_records <= 0:
            raise ValueError("max_records must be positive")

        run_start = perf_counter()
        state = FetchState()
        failed_attempts = 0

        while True:
            state = check_budget(state, max_records)
            if state.done:
                break

            plan = next_plan(state, self._policy)
            batch, failures = await self._fetch_with_retry(plan, fetch_batch, endpoint_id)
            failed_attempts += failures
            state = advance_state(state, batch, self._policy)
            if state.done:
                break

        # stop_reason is always set once the loop exits
        result = FetchResult(
            data=list(state.collected),
            batches_used=state.batches_used,
            stop_reason=state.stop_reason,  # type: ignore[arg-type]
            failed_attempts=failed_attempts,
        )
        log_fetch_all_complete(
            endpoint_id=endpoint_id,
            result=result,
            total_latency_ms=(perf_counter() - run_start) * 1000.0,
        )
        return result

    async def _fetch_with_retry(
        self,
        plan: BatchPlan,
        fetch_batch: FetchBatch,
        endpoint_id: str,
    ) -> tuple[list[Any] | None, int]:
        """Fetch one batch with exponential backoff.

        Returns:
            The records (None when every attempt failed) and the number of
            failed attempts
        """
        max_attempts = self._policy.max_attempts
        for attempt in range(1, max_attempts + 1):
            batch_start = perf_counter()
            try:
                records = list(await fetch_batch(plan))
            except NON_RETRYABLE:
                raise
            except Exception as e:
                if attempt >= max_attempts:
                    log_batch_error(
                        endpoint_id=endpoint_id, plan=plan, attempts=attempt, error=e
                    )
                    return None, attempt
                delay = self._policy.backoff_delay(attempt)
                log_batch_retry(
                    endpoint_id=endpoint_id,
                    plan=plan,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    delay_seconds=delay,
                    error=e,
                )
                await self._sleep(delay)
                continue

            log_batch_completed(
                endpoint_id=endpoint_id,
                plan=plan,
                rows=len(records),
                latency_ms=(perf_counter() - batch_start) * 1000.0,
            )
            return records, attempt - 1

        return None, max_attempts
