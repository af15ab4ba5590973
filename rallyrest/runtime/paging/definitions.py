"""Pagination metadata definitions and result structures.

This module defines the data structures passed between the page planner,
the drivers and caller callbacks.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class PageRequest:
    """Plan for a single page request.

    Attributes:
        start: 1-based index of the first record to request
        page_size: Value sent as the ``pagesize`` parameter
        page_index: Zero-based index of this request within the query
    """

    start: int
    page_size: int
    page_index: int = 0


@dataclass(frozen=True)
class PageInfo:
    """Summary of one page handed to a page callback.

    Attributes:
        start_index: Server-reported start index of the page
        page_size: Number of records delivered in this page (after limit trimming)
        total_result_count: Server-reported total result count
        total_processed: Records delivered so far, this page included
    """

    start_index: Any
    page_size: int
    total_result_count: Any
    total_processed: int


@dataclass(frozen=True)
class BatchInfo:
    """Summary of one batch handed to a batch callback.

    Attributes:
        batch_number: 1-based batch number
        batch_size: Number of records in this batch
        total_processed: Records delivered in batches so far, this one included
        total_result_count: Server-reported total result count
    """

    batch_number: int
    batch_size: int
    total_processed: int
    total_result_count: Any


@dataclass(frozen=True)
class QueryResult:
    """Result of a bulk query.

    ``start_index`` echoes the caller's start and ``page_size`` is the
    number of accumulated records; the remaining fields come from the last
    page received.
    """

    results: list[Any]
    start_index: int
    page_size: int
    total_result_count: Any = None
    errors: list[Any] = field(default_factory=list)
    warnings: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class StreamResult:
    """Result of a streamed query.

    ``completed`` is False only when a page callback asked to stop.
    """

    total_processed: int
    completed: bool


@dataclass(frozen=True)
class BatchResult:
    total_processed: int
    total_batches: int
    completed: bool


class StopReason(str, Enum):
    """Why a driver stopped requesting pages."""

    LIMIT_REACHED = "limit_reached"
    EXHAUSTED = "exhausted"
    INVALID_METADATA = "invalid_metadata"
    CALLBACK_STOP = "callback_stop"


PageFetcher = Callable[..., Awaitable[Any]]
PageCallback = Callable[[list[Any], PageInfo], bool | Awaitable[bool]]
BatchCallback = Callable[[list[Any], BatchInfo], bool | Awaitable[bool]]
