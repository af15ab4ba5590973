"""Page envelope model.

The server wraps every collection response in an envelope carrying the
page's records and its pagination metadata. The metadata is kept exactly as
received: callers decide whether it is usable.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PageEnvelope(BaseModel):
    """One server response to a page request."""

    results: list[Any] = Field(default_factory=list, alias="Results")
    start_index: Any = Field(default=None, alias="StartIndex")
    page_size: Any = Field(default=None, alias="PageSize")
    total_result_count: Any = Field(default=None, alias="TotalResultCount")
    errors: list[Any] = Field(default_factory=list, alias="Errors")
    warnings: list[Any] = Field(default_factory=list, alias="Warnings")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("results", "errors", "warnings", mode="before")
    @classmethod
    def coerce_list(cls, v: Any) -> list[Any]:
        if isinstance(v, (list, tuple)):
            return list(v)
        return []

    @classmethod
    def from_response(cls, response: Any) -> PageEnvelope:
        """Parse a raw envelope, treating anything unusable as an empty page."""
        if not isinstance(response, Mapping):
            return cls()
        return cls.model_validate(dict(response))
