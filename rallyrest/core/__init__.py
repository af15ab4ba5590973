"""Core components."""

from .config import (
    DEFAULT_API_VERSION,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SERVER,
    DEFAULT_START,
    DEFAULT_TIMEOUT,
    ClientConfig,
)
from .exceptions import (
    InvalidRefError,
    RallyError,
    RequestError,
    ValidationError,
)

__all__ = [
    "ClientConfig",
    "DEFAULT_SERVER",
    "DEFAULT_API_VERSION",
    "DEFAULT_START",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_TIMEOUT",
    "RallyError",
    "RequestError",
    "InvalidRefError",
    "ValidationError",
]
