"""Public client API."""

from .compat import callbackify, with_callback
from .rest_api import ObjectResult, RestApi, create_client

__all__ = [
    "RestApi",
    "ObjectResult",
    "create_client",
    "callbackify",
    "with_callback",
]
