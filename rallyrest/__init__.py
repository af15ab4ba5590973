"""rallyrest - paged collection client for the web services API."""

from .api import ObjectResult, RestApi, callbackify, create_client
from .core import (
    DEFAULT_API_VERSION,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SERVER,
    ClientConfig,
    InvalidRefError,
    RallyError,
    RequestError,
    ValidationError,
)
from .core.config import LIBRARY_VERSION
from .models import PageEnvelope, QueryOptions, Scope
from .runtime.paging import (
    BatchAggregator,
    BatchInfo,
    BatchResult,
    PageInfo,
    PaginationDriver,
    QueryResult,
    StreamDriver,
    StreamResult,
)
from .runtime.rest import HTTPClient, RESTTransport
from .utils import Query, ref, where

__version__ = LIBRARY_VERSION

__all__ = [
    # Client
    "RestApi",
    "create_client",
    "callbackify",
    "ObjectResult",
    # Configuration
    "ClientConfig",
    "DEFAULT_SERVER",
    "DEFAULT_API_VERSION",
    "DEFAULT_PAGE_SIZE",
    # Models
    "QueryOptions",
    "Scope",
    "PageEnvelope",
    # Pagination
    "PaginationDriver",
    "StreamDriver",
    "BatchAggregator",
    "PageInfo",
    "BatchInfo",
    "QueryResult",
    "StreamResult",
    "BatchResult",
    # Transport
    "HTTPClient",
    "RESTTransport",
    # Utilities
    "Query",
    "where",
    "ref",
    # Exceptions
    "RallyError",
    "RequestError",
    "InvalidRefError",
    "ValidationError",
]
