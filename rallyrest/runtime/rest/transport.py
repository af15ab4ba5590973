"""REST transport for the web services API.

Every response body is a single-key object wrapping the actual result,
e.g. ``{"QueryResult": {...}}``. The transport unwraps it and turns both
transport failures and the result's own ``Errors`` into RequestError.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from ...core.config import ClientConfig
from ...core.exceptions import RequestError
from .http_client import HTTPClient

logger = logging.getLogger(__name__)

AUTHORIZE_PATH = "/security/authorize"


class RESTTransport:
    """Unwrapping, error-translating transport bound to one server."""

    def __init__(
        self, config: ClientConfig | None = None, *, http: HTTPClient | None = None
    ) -> None:
        self._config = config or ClientConfig()
        auth = None
        if not self._config.uses_api_key and self._config.username:
            auth = aiohttp.BasicAuth(self._config.username, self._config.password or "")
        self._http = http or HTTPClient(
            base_url=self._config.wsapi_url,
            timeout=self._config.timeout,
            headers=self._config.request_headers(),
            auth=auth,
        )
        self._token: str | None = None

    @property
    def base_url(self) -> str:
        return self._config.wsapi_url

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return await self._request("get", path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        params = await self._secured(params)
        return await self._request(
            "post", path, json_body=json_body, params=params, headers=headers
        )

    async def put(
        self,
        path: str,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        params = await self._secured(params)
        return await self._request(
            "put", path, json_body=json_body, params=params, headers=headers
        )

    async def delete(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        params = await self._secured(params)
        return await self._request("delete", path, params=params, headers=headers)

    async def authorize(self) -> str | None:
        """Fetch and cache the security token required for write requests."""
        result = await self._request("get", AUTHORIZE_PATH)
        self._token = result.get("SecurityToken") if isinstance(result, Mapping) else None
        logger.debug("Security token acquired", extra={"has_token": self._token is not None})
        return self._token

    async def close(self) -> None:
        await self._http.close()

    async def _secured(self, params: dict[str, Any] | None) -> dict[str, Any] | None:
        # Api key sessions authenticate through the zsessionid header alone
        if self._config.uses_api_key:
            return params
        if self._token is None and await self.authorize() is None:
            raise RequestError([f"{AUTHORIZE_PATH}: unable to obtain security token"])
        return {**(params or {}), "key": self._token}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        try:
            if method in ("post", "put"):
                body = await getattr(self._http, method)(
                    path, json=json_body, params=params, headers=headers
                )
            else:
                body = await getattr(self._http, method)(path, params=params, headers=headers)
        except aiohttp.ClientResponseError as e:
            raise RequestError([f"{path}: {e.status}! {e.message}"], status_code=e.status) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RequestError([f"Unable to connect to server: {self.base_url}"]) from e
        except ValueError as e:
            raise RequestError([f"{path}: invalid JSON response"]) from e

        return self._unwrap(path, body)

    @staticmethod
    def _unwrap(path: str, body: Any) -> Any:
        if not isinstance(body, Mapping) or not body:
            raise RequestError([f"{path}: empty or non-object response! body={body!r}"])
        result = next(iter(body.values()))
        if isinstance(result, Mapping):
            errors = result.get("Errors")
            if errors:
                raise RequestError([str(e) for e in errors])
        return result
