"""Unit tests for page streaming."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from rallyrest.core import RequestError
from rallyrest.runtime.paging import PageInfo, StreamDriver


class TestStreamDriver:
    """Test StreamDriver callbacks and termination."""

    @pytest.mark.asyncio
    async def test_streams_pages_in_order(self, make_page):
        fetch = AsyncMock(
            side_effect=[
                make_page(1, 100, total=250),
                make_page(101, 100, total=250),
                make_page(201, 50, total=250),
            ]
        )
        pages: list[list] = []
        infos: list[PageInfo] = []

        def on_page(records, info):
            pages.append(records)
            infos.append(info)
            return True

        result = await StreamDriver(fetch).run({"type": "defect", "pageSize": 100}, on_page)

        assert [len(p) for p in pages] == [100, 100, 50]
        assert [i.start_index for i in infos] == [1, 101, 201]
        assert [i.total_processed for i in infos] == [100, 200, 250]
        assert infos[0].total_result_count == 250
        assert result.total_processed == 250
        assert result.completed is True

    @pytest.mark.asyncio
    async def test_callback_can_stop_early(self, make_page):
        """Test returning False after the second page stops before a third request."""
        fetch = AsyncMock(
            side_effect=[
                make_page(1, 100, total=1000),
                make_page(101, 100, total=1000),
                make_page(201, 100, total=1000),
            ]
        )
        pages: list[list] = []

        def on_page(records, info):
            pages.append(records)
            return len(pages) < 2

        result = await StreamDriver(fetch).run({"type": "defect", "page_size": 100}, on_page)

        assert len(pages) == 2
        assert fetch.call_count == 2
        assert result.total_processed == 200
        assert result.completed is False

    @pytest.mark.asyncio
    async def test_async_callback_is_awaited(self, make_page):
        fetch = AsyncMock(side_effect=[make_page(1, 100, total=1000), make_page(101, 100)])
        seen: list[int] = []

        async def on_page(records, info):
            seen.append(info.start_index)
            return False

        result = await StreamDriver(fetch).run({"type": "defect", "page_size": 100}, on_page)

        assert seen == [1]
        assert fetch.call_count == 1
        assert result.completed is False

    @pytest.mark.asyncio
    async def test_limit_trims_and_completes(self, make_page):
        """Test the trimmed page is delivered before completing at the limit."""
        fetch = AsyncMock(side_effect=[make_page(1, 100), make_page(101, 100)])
        infos: list[PageInfo] = []

        def on_page(records, info):
            assert len(records) == info.page_size
            infos.append(info)
            return True

        result = await StreamDriver(fetch).run(
            {"type": "defect", "page_size": 100, "limit": 150}, on_page
        )

        assert fetch.call_count == 2
        assert [i.page_size for i in infos] == [100, 50]
        assert infos[-1].total_processed == 150
        assert result.total_processed == 150
        assert result.completed is True

    @pytest.mark.asyncio
    async def test_empty_page_is_not_delivered(self, make_page):
        fetch = AsyncMock(return_value=make_page(1, 0, total=0))
        on_page = AsyncMock(return_value=True)

        result = await StreamDriver(fetch).run({"type": "defect"}, on_page)

        on_page.assert_not_called()
        assert result.total_processed == 0
        assert result.completed is True

    @pytest.mark.asyncio
    async def test_zero_limit_issues_no_request(self):
        fetch = AsyncMock()
        on_page = AsyncMock(return_value=True)

        result = await StreamDriver(fetch).run({"type": "defect", "limit": 0}, on_page)

        fetch.assert_not_called()
        on_page.assert_not_called()
        assert result.total_processed == 0
        assert result.completed is True

    @pytest.mark.asyncio
    async def test_invalid_metadata_completes_after_one_page(self, make_page):
        fetch = AsyncMock(return_value=make_page(1, 3, total="invalid"))
        on_page = AsyncMock(return_value=True)

        result = await StreamDriver(fetch).run({"type": "defect"}, on_page)

        assert fetch.call_count == 1
        assert on_page.call_count == 1
        assert result.total_processed == 3
        assert result.completed is True

    @pytest.mark.asyncio
    async def test_fetch_error_propagates(self, make_page):
        fetch = AsyncMock(side_effect=[make_page(1, 100), RequestError("boom")])
        on_page = AsyncMock(return_value=True)

        with pytest.raises(RequestError, match="boom"):
            await StreamDriver(fetch).run({"type": "defect", "page_size": 100}, on_page)

        assert on_page.call_count == 1
