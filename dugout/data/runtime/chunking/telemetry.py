"""Structured logging for batched fetch operations.

This module provides telemetry hooks for the comprehensive fetch, emitting
structured log records that carry their fields in ``extra``.
"""

from __future__ import annotations

import logging

from .definitions import BatchPlan, FetchResult

logger = logging.getLogger(__name__)


def log_batch_completed(
    *,
    endpoint_id: str,
    plan: BatchPlan,
    rows: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single batch.

    Args:
        endpoint_id: Endpoint identifier
        plan: Batch that completed
        rows: Number of records returned
        latency_ms: Latency in milliseconds (optional)
    """
    logger.info(
        "batch_completed",
        extra={
            "endpoint_id": endpoint_id,
            "batch_index": plan.batch_index,
            "start": plan.start,
            "limit": plan.limit,
            "rows": rows,
            "latency_ms": latency_ms,
        },
    )


def log_batch_retry(
    *,
    endpoint_id: str,
    plan: BatchPlan,
    attempt: int,
    max_attempts: int,
    delay_seconds: float,
    error: BaseException,
) -> None:
    """Log a failed attempt that will be retried."""
    logger.warning(
        "batch_retry",
        extra={
            "endpoint_id": endpoint_id,
            "batch_index": plan.batch_index,
            "start": plan.start,
            "attempt": attempt,
            "max_attempts": max_attempts,
            "delay_seconds": delay_seconds,
            "error_type": type(error).__name__,
            "error_message": str(error),
        },
    )


def log_batch_error(
    *,
    endpoint_id: str,
    plan: BatchPlan,
    attempts: int,
    error: BaseException,
) -> None:
    """Log a batch that failed on every attempt."""
    logger.error(
        "batch_error",
        extra={
            "endpoint_id": endpoint_id,
            "batch_index": plan.batch_index,
            "start": plan.start,
            "attempts": attempts,
            "error_type": type(error).__name__,
            "error_message": str(error),
        },
    )


def log_fetch_all_complete(
    *,
    endpoint_id: str,
    result: FetchResult,
    total_latency_ms: float | None = None,
) -> None:
    """Log completion of a comprehensive fetch."""
    logger.info(
        "fetch_all_complete",
        extra={
            "endpoint_id": endpoint_id,
            "batches_used": result.batches_used,
            "total_points": result.total_points,
            "stop_reason": result.stop_reason.value,
            "failed_attempts": result.failed_attempts,
            "total_latency_ms": total_latency_ms,
        },
    )
