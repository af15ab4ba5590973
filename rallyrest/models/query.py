"""Query options model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.config import DEFAULT_PAGE_SIZE, DEFAULT_START
from ..core.exceptions import InvalidRefError, ValidationError
from ..utils.ref import get_relative


def _wire_bool(value: bool) -> str:
    return "true" if value else "false"


def _join(value: Any) -> str | None:
    if isinstance(value, bool):
        return _wire_bool(value)
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    if isinstance(value, str):
        return value
    return None


class Scope(BaseModel):
    """Workspace/project scoping applied to a request.

    ``project`` takes precedence over ``workspace``; ``up``/``down`` only
    apply when a project is given.
    """

    workspace: Any = None
    project: Any = None
    up: bool | None = None
    down: bool | None = None

    model_config = ConfigDict(frozen=True)

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.project:
            project = get_relative(self.project)
            if project:
                params["project"] = project
            if self.up is not None:
                params["projectScopeUp"] = _wire_bool(self.up)
            if self.down is not None:
                params["projectScopeDown"] = _wire_bool(self.down)
        elif self.workspace:
            workspace = get_relative(self.workspace)
            if workspace:
                params["workspace"] = workspace
        return params


def request_params(scope: Scope | Mapping[str, Any] | None, fetch: Any) -> dict[str, str]:
    """Query parameters shared by every operation: scope and fetch."""
    params: dict[str, str] = {}
    if scope:
        if not isinstance(scope, Scope):
            scope = Scope.model_validate(scope)
        params.update(scope.to_params())
    fetch_value = _join(fetch)
    if fetch_value is not None:
        params["fetch"] = fetch_value
    return params


class QueryOptions(BaseModel):
    """Options for a paged collection query.

    Either ``ref`` (a collection ref such as ``/defect/12/tasks``) or
    ``type`` (e.g. ``defect``) locates the resource. Wire-style aliases
    (``pageSize``) are accepted alongside the field names.
    """

    ref: Any = None
    type: str | None = None
    start: int = Field(default=DEFAULT_START, ge=1)
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        validation_alias=AliasChoices("page_size", "pageSize"),
    )
    limit: int | None = Field(default=None, ge=0)
    order: str | list[str] | None = None
    query: Any = None
    fetch: Any = None
    scope: Scope | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("page_size", mode="before")
    @classmethod
    def default_page_size(cls, v: Any) -> Any:
        return DEFAULT_PAGE_SIZE if v is None else v

    @field_validator("start", mode="before")
    @classmethod
    def default_start(cls, v: Any) -> Any:
        return DEFAULT_START if v is None else v

    @field_validator("page_size")
    @classmethod
    def clamp_page_size(cls, v: int) -> int:
        """A page size of zero or less would never advance; raise it to 1."""
        return max(v, 1)

    @model_validator(mode="after")
    def require_locator(self) -> QueryOptions:
        if not self.ref and not self.type:
            raise ValueError("either ref or type is required")
        return self

    @classmethod
    def apply_defaults(cls, options: QueryOptions | Mapping[str, Any]) -> QueryOptions:
        """Return a new options value with defaults merged in.

        Raises:
            ValidationError: If the options are invalid
        """
        if isinstance(options, QueryOptions):
            return options.model_copy()
        try:
            return cls.model_validate(dict(options))
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

    @property
    def resource_path(self) -> str:
        if self.ref:
            relative = get_relative(self.ref)
            if relative is None:
                raise InvalidRefError(self.ref)
            return relative
        return f"/{self.type}"

    def to_params(self, *, start: int, page_size: int) -> dict[str, Any]:
        """Build the query string parameters for one page request."""
        params: dict[str, Any] = {"start": start, "pagesize": page_size}
        order = _join(self.order)
        if order:
            params["order"] = order
        if self.query:
            if hasattr(self.query, "to_query_string"):
                params["query"] = self.query.to_query_string()
            else:
                params["query"] = str(self.query)
        params.update(request_params(self.scope, self.fetch))
        return params
