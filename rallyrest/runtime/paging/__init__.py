"""Pagination layer for paged collection queries.

Architecture:
    - definitions.py: request plans, per-page/per-batch info and results
    - planners.py: first page size, continuation rule, next page start
    - executors.py: PaginationDriver (bulk) and StreamDriver (per page)
    - aggregators.py: BatchAggregator (fixed-size batches over the stream)
    - telemetry.py: structured logging

Usage:
    The drivers take any async page fetcher ``fetch_page(path, params=...)``
    that returns an unwrapped page envelope; RESTTransport.get is one.
"""

from __future__ import annotations

from .aggregators import BatchAggregator
from .definitions import (
    BatchCallback,
    BatchInfo,
    BatchResult,
    PageCallback,
    PageFetcher,
    PageInfo,
    PageRequest,
    QueryResult,
    StopReason,
    StreamResult,
)
from .executors import PaginationDriver, StreamDriver, resolve_continue
from .planners import PagePlanner, has_valid_metadata, optimal_page_size

__all__ = [
    "PageRequest",
    "PageInfo",
    "BatchInfo",
    "QueryResult",
    "StreamResult",
    "BatchResult",
    "StopReason",
    "PageFetcher",
    "PageCallback",
    "BatchCallback",
    "PagePlanner",
    "PaginationDriver",
    "StreamDriver",
    "BatchAggregator",
    "optimal_page_size",
    "has_valid_metadata",
    "resolve_continue",
]
