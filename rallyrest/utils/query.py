"""Query expression builder.

Builds the parenthesised filter syntax the server expects::

    >>> where("Name", "contains", "login").and_("Priority", "=", "High").to_query_string()
    '((Name contains login) AND (Priority = High))'
"""

from __future__ import annotations

from typing import Any


class Query:
    """A single ``(left op right)`` term, possibly nesting other terms."""

    def __init__(self, left: Any, op: str, right: Any) -> None:
        self.left = left
        self.op = op
        self.right = right

    def to_query_string(self) -> str:
        left = self.left.to_query_string() if isinstance(self.left, Query) else self.left
        right = self.right
        if right is None:
            right = "null"
        elif isinstance(right, Query):
            right = right.to_query_string()
        elif isinstance(right, bool):
            right = "true" if right else "false"
        elif isinstance(right, str) and " " in right:
            right = f'"{right}"'
        return f"({left} {self.op} {right})"

    def and_(self, left: Any, op: str | None = None, right: Any = None) -> Query:
        return Query(self, "AND", self._term(left, op, right))

    def or_(self, left: Any, op: str | None = None, right: Any = None) -> Query:
        return Query(self, "OR", self._term(left, op, right))

    @staticmethod
    def _term(left: Any, op: str | None, right: Any) -> Query:
        if isinstance(left, Query):
            return left
        if op is None:
            raise ValueError("op is required when left is not a Query")
        return Query(left, op, right)

    def __str__(self) -> str:
        return self.to_query_string()

    def __repr__(self) -> str:
        return f"Query({self.to_query_string()!r})"


def where(left: Any, op: str, right: Any) -> Query:
    """Start a query expression."""
    return Query(left, op, right)
