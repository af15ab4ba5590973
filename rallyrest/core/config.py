"""Client configuration and server constants.

Defaults can be overridden per client; credentials fall back to the
``RALLY_*`` environment variables when not passed explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

LIBRARY_VERSION = "0.1.0"

DEFAULT_SERVER = "https://rally1.rallydev.com"
DEFAULT_API_VERSION = "v2.0"
DEFAULT_START = 1
DEFAULT_PAGE_SIZE = 200
DEFAULT_TIMEOUT = 30.0

INTEGRATION_NAME = "Rally REST Toolkit for Python"
INTEGRATION_VENDOR = "Rally Software, Inc."


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for a RestApi client.

    Attributes:
        server: Scheme and host of the server
        api_version: WSAPI version segment of the URL
        api_key: Api key sent as the ``zsessionid`` header
        username: Basic auth user (only used without an api key)
        password: Basic auth password (only used without an api key)
        timeout: Total per-request timeout in seconds
        headers: Extra headers merged over the integration headers
    """

    server: str = DEFAULT_SERVER
    api_version: str = DEFAULT_API_VERSION
    api_key: str | None = None
    username: str | None = None
    password: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls, **overrides: object) -> ClientConfig:
        """Build a config from ``RALLY_*`` variables, explicit values winning."""
        values: dict[str, object] = {
            "server": os.environ.get("RALLY_SERVER") or DEFAULT_SERVER,
            "api_key": os.environ.get("RALLY_API_KEY"),
            "username": os.environ.get("RALLY_USERNAME"),
            "password": os.environ.get("RALLY_PASSWORD"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]

    @property
    def wsapi_url(self) -> str:
        return f"{self.server.rstrip('/')}/slm/webservice/{self.api_version}"

    @property
    def uses_api_key(self) -> bool:
        return bool(self.api_key)

    def request_headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        headers = {
            "X-RallyIntegrationLibrary": f"{INTEGRATION_NAME} v{LIBRARY_VERSION}",
            "X-RallyIntegrationName": INTEGRATION_NAME,
            "X-RallyIntegrationVendor": INTEGRATION_VENDOR,
            "X-RallyIntegrationVersion": LIBRARY_VERSION,
        }
        if self.api_key:
            headers["zsessionid"] = self.api_key
        headers.update(self.headers)
        return headers
