"""Page planning logic.

The planner decides the size of the first request, whether another page
should be requested after each response, and where that page starts. The
continuation rule refuses to go on whenever the server's pagination metadata
cannot be trusted, so a malformed response can never cause an endless run of
requests.
"""

from __future__ import annotations

import math
from typing import Any

from ...models import PageEnvelope, QueryOptions
from .definitions import PageRequest, StopReason


def is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_positive_number(value: Any) -> bool:
    return is_number(value) and value > 0


def optimal_page_size(page_size: int, limit: int | None) -> int:
    """Size of the first request.

    A small positive limit shrinks the first page so the server does not
    return records that would be discarded.

    Examples:
        >>> optimal_page_size(200, 5)
        5
        >>> optimal_page_size(200, None)
        200
        >>> optimal_page_size(0, None)
        1
    """
    size = page_size
    if limit is not None and limit > 0:
        size = min(page_size, limit)
    return max(size, 1)


def has_valid_metadata(envelope: PageEnvelope, page_size: Any) -> bool:
    """Whether the envelope's metadata can tell if more pages exist."""
    return (
        is_positive_number(envelope.start_index)
        and is_positive_number(page_size)
        and is_number(envelope.total_result_count)
    )


class PagePlanner:
    """Plans page requests for a single query invocation."""

    def __init__(self, options: QueryOptions) -> None:
        self._options = options
        self._first_page_size = optimal_page_size(options.page_size, options.limit)
        self.path = options.resource_path

    @property
    def limit(self) -> int | None:
        return self._options.limit

    def first_request(self) -> PageRequest | None:
        """First page request, or None when a zero limit needs no request."""
        if self._options.limit == 0:
            return None
        return PageRequest(start=self._options.start, page_size=self._first_page_size)

    def params_for(self, request: PageRequest) -> dict[str, Any]:
        return self._options.to_params(start=request.start, page_size=request.page_size)

    def remaining(self, delivered: int) -> int | None:
        if self._options.limit is None:
            return None
        return self._options.limit - delivered

    def limit_reached(self, delivered: int) -> bool:
        remaining = self.remaining(delivered)
        return remaining is not None and remaining <= 0

    def trim(self, records: list[Any], delivered: int) -> list[Any]:
        """Copy of ``records`` cut down to what the limit still allows."""
        remaining = self.remaining(delivered)
        if remaining is not None and len(records) > remaining:
            return records[: max(remaining, 0)]
        return list(records)

    def stop_reason(
        self, envelope: PageEnvelope, delivered: int, request: PageRequest | None = None
    ) -> StopReason | None:
        """Reason to stop after ``envelope``, or None if another page is due.

        When the ``request`` that produced ``envelope`` is given, a page whose
        StartIndex is behind the requested start counts as invalid metadata.
        """
        if self.limit_reached(delivered):
            return StopReason.LIMIT_REACHED
        if not has_valid_metadata(envelope, self._options.page_size):
            return StopReason.INVALID_METADATA
        if request is not None and envelope.start_index < request.start:
            return StopReason.INVALID_METADATA
        if envelope.start_index + self._options.page_size > envelope.total_result_count:
            return StopReason.EXHAUSTED
        return None

    def next_request(self, envelope: PageEnvelope, previous: PageRequest) -> PageRequest:
        # Advances by the requested page size, not the trimmed first size.
        return PageRequest(
            start=envelope.start_index + self._options.page_size,
            page_size=previous.page_size,
            page_index=previous.page_index + 1,
        )
