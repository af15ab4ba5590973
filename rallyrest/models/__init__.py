"""Data models."""

from .page import PageEnvelope
from .query import QueryOptions, Scope, request_params

__all__ = [
    "PageEnvelope",
    "QueryOptions",
    "Scope",
    "request_params",
]
