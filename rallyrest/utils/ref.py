"""Helpers for parsing object refs.

A ref is either relative (``/defect/1234``), absolute
(``https://rally1.rallydev.com/slm/webservice/v2.0/defect/1234``) or an
object carrying a ``_ref`` key. Typed portfolio items keep both path
segments (``/portfolioitem/feature/12``) and collection refs end with the
collection name (``/defect/1234/tasks``).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_PREFIX_RE = re.compile(r"^(?:https?://[^/]+)?(?:/slm/webservice/[^/]+)?(?P<path>/.*)$")
_PATH_RE = re.compile(
    r"^/(?P<type>(?:\w+/)?\w+)/(?P<id>-?\d+|[0-9a-fA-F-]{36})(?:/(?P<collection>\w+))?/?$"
)


def _match(ref: Any) -> re.Match[str] | None:
    if isinstance(ref, Mapping):
        ref = ref.get("_ref")
    if not isinstance(ref, str) or not ref:
        return None
    ref = ref.split("?", 1)[0].split("#", 1)[0]
    prefix = _PREFIX_RE.match(ref)
    if prefix is None:
        return None
    return _PATH_RE.match(prefix.group("path"))


def is_ref(ref: Any) -> bool:
    return _match(ref) is not None


def get_relative(ref: Any) -> str | None:
    """Return ``/type/id[/collection]`` for ``ref``, or None if unparseable."""
    match = _match(ref)
    if match is None:
        return None
    relative = f"/{match.group('type')}/{match.group('id')}"
    if match.group("collection"):
        relative = f"{relative}/{match.group('collection')}"
    return relative


def get_type(ref: Any) -> str | None:
    match = _match(ref)
    return match.group("type").lower() if match else None


def get_id(ref: Any) -> str | None:
    match = _match(ref)
    return match.group("id") if match else None
