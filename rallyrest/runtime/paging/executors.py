"""Page drivers that fetch pages until the query is done.

PaginationDriver accumulates every record into one result; StreamDriver
hands each page to a callback and keeps nothing. Both fetch strictly one
page at a time and share the planner's continuation rule.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any

from ...models import PageEnvelope, QueryOptions
from .definitions import (
    PageCallback,
    PageFetcher,
    PageInfo,
    PageRequest,
    QueryResult,
    StopReason,
    StreamResult,
)
from .planners import PagePlanner
from .telemetry import log_page_error, log_page_fetched, log_pagination_stopped


async def resolve_continue(decision: Any) -> bool:
    """Await a callback's decision if needed and coerce it to continue/stop."""
    if inspect.isawaitable(decision):
        decision = await decision
    return bool(decision)


@dataclass
class _PageState:
    """Accumulator owned by a single driver invocation."""

    delivered: int = 0
    pages_fetched: int = 0
    records: list[Any] = field(default_factory=list)


class _PageDriver:
    strategy = "query"

    def __init__(self, fetch_page: PageFetcher) -> None:
        """Initialize the driver.

        Args:
            fetch_page: Async callable ``fetch_page(path, params=...)`` returning
                the unwrapped page envelope
        """
        self._fetch_page = fetch_page

    async def _fetch(
        self, planner: PagePlanner, request: PageRequest, state: _PageState
    ) -> PageEnvelope:
        started = perf_counter()
        try:
            raw = await self._fetch_page(planner.path, params=planner.params_for(request))
        except Exception as e:
            log_page_error(
                resource=planner.path,
                page_index=request.page_index,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise
        state.pages_fetched += 1
        envelope = PageEnvelope.from_response(raw)
        log_page_fetched(
            resource=planner.path,
            page_index=request.page_index,
            start=request.start,
            page_size=request.page_size,
            records=len(envelope.results),
            latency_ms=(perf_counter() - started) * 1000.0,
        )
        return envelope

    def _stopped(self, planner: PagePlanner, reason: StopReason, state: _PageState) -> None:
        log_pagination_stopped(
            resource=planner.path,
            strategy=self.strategy,
            reason=reason.value,
            pages_fetched=state.pages_fetched,
            total_processed=state.delivered,
        )


class PaginationDriver(_PageDriver):
    """Fetches every page of a query and returns the records in one list."""

    async def run(self, options: QueryOptions | Mapping[str, Any]) -> QueryResult:
        """Run a bulk query.

        Args:
            options: Query options; defaults are applied to a copy

        Returns:
            QueryResult holding all records, trimmed to ``limit`` if given

        Raises:
            RequestError: If any page request fails; records fetched so far
                are discarded
        """
        options = QueryOptions.apply_defaults(options)
        planner = PagePlanner(options)
        state = _PageState()

        request = planner.first_request()
        if request is None:
            self._stopped(planner, StopReason.LIMIT_REACHED, state)
            return QueryResult(results=[], start_index=options.start, page_size=0)

        while True:
            envelope = await self._fetch(planner, request, state)
            reason = self._accumulate(planner, envelope, state)
            if reason is None:
                reason = planner.stop_reason(envelope, state.delivered, request)
            if reason is not None:
                self._stopped(planner, reason, state)
                return QueryResult(
                    results=state.records,
                    start_index=options.start,
                    page_size=len(state.records),
                    total_result_count=envelope.total_result_count,
                    errors=envelope.errors,
                    warnings=envelope.warnings,
                )
            request = planner.next_request(envelope, request)

    @staticmethod
    def _accumulate(
        planner: PagePlanner, envelope: PageEnvelope, state: _PageState
    ) -> StopReason | None:
        if not envelope.results:
            return None
        if planner.limit_reached(state.delivered):
            return StopReason.LIMIT_REACHED
        page = planner.trim(envelope.results, state.delivered)
        state.records.extend(page)
        state.delivered += len(page)
        if len(page) < len(envelope.results):
            return StopReason.LIMIT_REACHED
        return None


class StreamDriver(_PageDriver):
    """Fetches pages one at a time and hands each to a callback."""

    strategy = "stream"

    async def run(
        self, options: QueryOptions | Mapping[str, Any], on_page: PageCallback
    ) -> StreamResult:
        """Run a streamed query.

        ``on_page(records, page_info)`` is called once per non-empty page,
        with records already trimmed to ``limit``. It may return a bool or an
        awaitable bool; a falsy value stops the stream before the next
        request.

        Returns:
            StreamResult with ``completed=False`` only if ``on_page`` stopped it
        """
        options = QueryOptions.apply_defaults(options)
        planner = PagePlanner(options)
        state = _PageState()

        request = planner.first_request()
        if request is None:
            self._stopped(planner, StopReason.LIMIT_REACHED, state)
            return StreamResult(total_processed=0, completed=True)

        while True:
            envelope = await self._fetch(planner, request, state)
            reason = await self._deliver(planner, envelope, state, on_page)
            if reason is None:
                reason = planner.stop_reason(envelope, state.delivered, request)
            if reason is not None:
                self._stopped(planner, reason, state)
                return StreamResult(
                    total_processed=state.delivered,
                    completed=reason is not StopReason.CALLBACK_STOP,
                )
            request = planner.next_request(envelope, request)

    @staticmethod
    async def _deliver(
        planner: PagePlanner,
        envelope: PageEnvelope,
        state: _PageState,
        on_page: PageCallback,
    ) -> StopReason | None:
        if not envelope.results:
            return None
        if planner.limit_reached(state.delivered):
            return StopReason.LIMIT_REACHED

        page = planner.trim(envelope.results, state.delivered)
        info = PageInfo(
            start_index=envelope.start_index,
            page_size=len(page),
            total_result_count=envelope.total_result_count,
            total_processed=state.delivered + len(page),
        )
        keep_going = await resolve_continue(on_page(page, info))
        state.delivered += len(page)

        if not keep_going:
            return StopReason.CALLBACK_STOP
        if planner.limit_reached(state.delivered):
            return StopReason.LIMIT_REACHED
        return None
