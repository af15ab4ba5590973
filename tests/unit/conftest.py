"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import Any

import pytest


def build_page(start: int, count: int, total: Any = 10000, **overrides: Any) -> dict[str, Any]:
    """Unwrapped page envelope holding records ``start .. start + count - 1``."""
    page: dict[str, Any] = {
        "Errors": [],
        "Warnings": [],
        "StartIndex": start,
        "PageSize": count,
        "TotalResultCount": total,
        "Results": [
            {"_ref": f"/defect/{i}", "FormattedID": f"DE{i}"} for i in range(start, start + count)
        ],
    }
    page.update(overrides)
    return page


@pytest.fixture
def make_page():
    """Factory for page envelopes."""
    return build_page
