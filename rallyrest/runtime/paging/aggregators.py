"""Batch regrouping on top of the page stream.

Server pages and caller batches are independent sizes: a batch may take its
records from several pages, and one page may fill several batches.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ...models import QueryOptions
from .definitions import BatchCallback, BatchInfo, BatchResult, PageInfo
from .executors import StreamDriver, resolve_continue
from .telemetry import log_batch_delivered


class _BatchBuffer:
    """Pending batch and counters for a single aggregation."""

    def __init__(self, resource: str, batch_size: int, on_batch: BatchCallback) -> None:
        self.resource = resource
        self.batch_size = batch_size
        self.on_batch = on_batch
        self.pending: list[Any] = []
        self.batches = 0
        self.processed = 0
        self.total_result_count: Any = None

    async def on_page(self, records: list[Any], info: PageInfo) -> bool:
        self.total_result_count = info.total_result_count
        for record in records:
            self.pending.append(record)
            if len(self.pending) >= self.batch_size and not await self.flush():
                return False
        return True

    async def flush(self) -> bool:
        """Deliver the pending records as one batch; returns the callback's decision."""
        batch = list(self.pending)
        info = BatchInfo(
            batch_number=self.batches + 1,
            batch_size=len(batch),
            total_processed=self.processed + len(batch),
            total_result_count=self.total_result_count,
        )
        keep_going = await resolve_continue(self.on_batch(batch, info))
        self.batches += 1
        self.processed += len(batch)
        self.pending = []
        log_batch_delivered(
            resource=self.resource,
            batch_number=info.batch_number,
            batch_size=info.batch_size,
            total_processed=self.processed,
        )
        return keep_going


class BatchAggregator:
    """Regroups a page stream into fixed-size batches."""

    def __init__(self, stream: StreamDriver) -> None:
        self._stream = stream

    async def run(
        self,
        options: QueryOptions | Mapping[str, Any],
        batch_size: int | None,
        on_batch: BatchCallback,
    ) -> BatchResult:
        """Run a batched query.

        ``on_batch(records, batch_info)`` receives batches of exactly
        ``batch_size`` records, then one final call with any remainder once
        the stream ends. A falsy return stops the underlying stream; the
        final remainder call's return value is ignored.

        Args:
            options: Query options
            batch_size: Records per batch; None means the query page size
            on_batch: Batch callback, sync or async

        Raises:
            ValueError: If batch_size is not a positive integer
        """
        options = QueryOptions.apply_defaults(options)
        if batch_size is None:
            batch_size = options.page_size
        if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
            raise ValueError(f"batch_size must be a positive integer, got {batch_size!r}")

        buffer = _BatchBuffer(options.resource_path, batch_size, on_batch)
        stream_result = await self._stream.run(options, buffer.on_page)
        if buffer.pending:
            await buffer.flush()

        return BatchResult(
            total_processed=buffer.processed,
            total_batches=buffer.batches,
            completed=stream_result.completed,
        )
