"""High-level client for the web services API.

RestApi is the entry point for applications. Collection queries go through
the pagination drivers; object operations (create, get, update, delete and
collection add/remove) issue exactly one request each.

Example:
    >>> async with RestApi(api_key="...") as api:
    ...     result = await api.query({"type": "defect", "limit": 50, "fetch": ["Name"]})
    ...     print(len(result.results))
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from ..core.config import ClientConfig
from ..core.exceptions import InvalidRefError, ValidationError
from ..models import QueryOptions, request_params
from ..runtime.paging import (
    BatchAggregator,
    BatchCallback,
    BatchResult,
    PageCallback,
    PaginationDriver,
    QueryResult,
    StreamDriver,
    StreamResult,
)
from ..runtime.rest import RESTTransport
from ..utils.ref import get_relative, get_type
from .compat import with_callback


@dataclass(frozen=True)
class ObjectResult:
    """A single object returned by ``get``."""

    object: dict[str, Any]
    errors: list[Any] = field(default_factory=list)
    warnings: list[Any] = field(default_factory=list)


def _relative_ref(options: Mapping[str, Any]) -> str:
    relative = get_relative(options.get("ref"))
    if relative is None:
        raise InvalidRefError(options.get("ref"))
    return relative


class RestApi:
    """Client for one server.

    Args:
        config: Connection settings; when omitted they are read from the
            environment. Keyword overrides (``api_key=...``) are applied on
            top in both cases
        transport: Pre-built transport, mainly for tests
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: RESTTransport | None = None,
        **overrides: Any,
    ) -> None:
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if config is None:
            config = ClientConfig.from_env(**overrides)
        elif overrides:
            config = replace(config, **overrides)
        self.config = config
        self.transport = transport or RESTTransport(self.config)
        self._pagination = PaginationDriver(self._fetch_page)
        self._stream = StreamDriver(self._fetch_page)
        self._batches = BatchAggregator(self._stream)

    async def _fetch_page(self, path: str, params: dict[str, Any]) -> Any:
        return await self.transport.get(path, params=params)

    @with_callback
    async def query(self, options: QueryOptions | Mapping[str, Any]) -> QueryResult:
        """Query a collection and return every matching record.

        Options: ``type`` or ``ref``, ``start`` (1-based, default 1),
        ``page_size`` (default 200), ``limit``, ``order``, ``query``,
        ``fetch`` and ``scope``.
        """
        return await self._pagination.run(options)

    @with_callback
    async def query_stream(
        self, options: QueryOptions | Mapping[str, Any], on_page: PageCallback
    ) -> StreamResult:
        """Query a collection, handing each page to ``on_page(records, page_info)``.

        Return False (or an awaitable resolving to False) from ``on_page``
        to stop before the next page is requested.
        """
        return await self._stream.run(options, on_page)

    @with_callback
    async def query_batch(
        self,
        options: QueryOptions | Mapping[str, Any],
        batch_size: int | BatchCallback | None = None,
        on_batch: BatchCallback | None = None,
    ) -> BatchResult:
        """Query a collection in fixed-size batches.

        ``batch_size`` may be omitted by passing the callback in its place,
        in which case batches match the query page size.
        """
        if callable(batch_size):
            on_batch, batch_size = batch_size, None
        if on_batch is None:
            raise ValueError("on_batch callback is required")
        return await self._batches.run(options, batch_size, on_batch)

    @with_callback
    async def create(self, options: Mapping[str, Any]) -> Any:
        """Create an object of ``options["type"]`` from ``options["data"]``."""
        if not options.get("type"):
            raise ValidationError("type is required")
        return await self.transport.post(
            f"/{options['type']}/create",
            json_body={options["type"]: options.get("data", {})},
            params=request_params(options.get("scope"), options.get("fetch")),
        )

    @with_callback
    async def get(self, options: Mapping[str, Any]) -> ObjectResult:
        relative = _relative_ref(options)
        result = await self.transport.get(
            relative, params=request_params(options.get("scope"), options.get("fetch"))
        )
        result = dict(result) if isinstance(result, Mapping) else {}
        errors = result.pop("Errors", None) or []
        warnings = result.pop("Warnings", None) or []
        return ObjectResult(object=result, errors=errors, warnings=warnings)

    @with_callback
    async def update(self, options: Mapping[str, Any]) -> Any:
        relative = _relative_ref(options)
        return await self.transport.put(
            relative,
            json_body={get_type(relative): options.get("data", {})},
            params=request_params(options.get("scope"), options.get("fetch")),
        )

    @with_callback
    async def delete(self, options: Mapping[str, Any]) -> Any:
        relative = _relative_ref(options)
        return await self.transport.delete(
            relative, params=request_params(options.get("scope"), None)
        )

    @with_callback
    async def add(self, options: Mapping[str, Any]) -> Any:
        """Add ``options["data"]`` items to ``options["collection"]`` of a ref."""
        return await self._collection_post(options, "add")

    @with_callback
    async def remove(self, options: Mapping[str, Any]) -> Any:
        return await self._collection_post(options, "remove")

    async def _collection_post(self, options: Mapping[str, Any], operation: str) -> Any:
        relative = _relative_ref(options)
        return await self.transport.post(
            f"{relative}/{options['collection']}/{operation}",
            json_body={"CollectionItems": options.get("data", [])},
            params=request_params(options.get("scope"), options.get("fetch")),
        )

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> RestApi:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def create_client(config: ClientConfig | None = None, **overrides: Any) -> RestApi:
    """Create a RestApi client."""
    return RestApi(config, **overrides)
