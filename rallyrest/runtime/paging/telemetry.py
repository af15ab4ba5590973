"""Structured logging for pagination.

This module emits one structured log record per page fetched, per failed
fetch, per batch delivered and per finished query.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    resource: str,
    page_index: int,
    start: int,
    page_size: int,
    records: int,
    latency_ms: float | None = None,
) -> None:
    """Log a page response.

    Args:
        resource: Relative path of the queried collection
        page_index: Zero-based index of the request
        start: Start index sent with the request
        page_size: Page size sent with the request
        records: Number of records in the response
        latency_ms: Request latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "resource": resource,
            "page_index": page_index,
            "start": start,
            "page_size": page_size,
            "records": records,
            "latency_ms": latency_ms,
        },
    )


def log_page_error(
    *,
    resource: str,
    page_index: int,
    error_type: str,
    error_message: str,
) -> None:
    logger.error(
        "page_fetch_error",
        extra={
            "resource": resource,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_batch_delivered(
    *,
    resource: str,
    batch_number: int,
    batch_size: int,
    total_processed: int,
) -> None:
    logger.debug(
        "batch_delivered",
        extra={
            "resource": resource,
            "batch_number": batch_number,
            "batch_size": batch_size,
            "total_processed": total_processed,
        },
    )


def log_pagination_stopped(
    *,
    resource: str,
    strategy: str,
    reason: str,
    pages_fetched: int,
    total_processed: int,
) -> None:
    """Log the end of a query.

    Args:
        resource: Relative path of the queried collection
        strategy: Driver that ran the query ("query", "stream")
        reason: Why no further page was requested
        pages_fetched: Number of requests issued
        total_processed: Records returned or delivered to callbacks
    """
    logger.info(
        "pagination_stopped",
        extra={
            "resource": resource,
            "strategy": strategy,
            "reason": reason,
            "pages_fetched": pages_fetched,
            "total_processed": total_processed,
        },
    )
