"""Custom exception hierarchy."""

from __future__ import annotations


class RallyError(Exception):
    """Base exception for all library errors."""

    pass


class RequestError(RallyError):
    """Request to the server failed.

    Carries the full list of error strings reported for the request. The
    exception message is the first of them.
    """

    def __init__(
        self,
        errors: list[str] | str,
        status_code: int | None = None,
    ) -> None:
        if isinstance(errors, str):
            errors = [errors]
        errors = list(errors) or ["Unknown error"]
        super().__init__(errors[0])
        self.errors = errors
        self.status_code = status_code


class InvalidRefError(RequestError):
    """Ref could not be parsed into a relative object URL."""

    def __init__(self, ref: object) -> None:
        super().__init__([f"Invalid ref: {ref}"])
        self.ref = ref


class ValidationError(RallyError, ValueError):
    """Invalid options passed to an operation."""

    pass
