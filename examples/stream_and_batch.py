#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from rallyrest import BatchInfo, PageInfo, RestApi


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream a collection, then process it in batches")
    p.add_argument("type", nargs="?", default="defect")
    p.add_argument("--pages", type=int, default=2, help="Stop streaming after this many pages")
    p.add_argument("--batch-size", type=int, default=75)
    p.add_argument("--limit", type=int, default=500)
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    seen_pages = 0

    async def on_page(records: list, info: PageInfo) -> bool:
        nonlocal seen_pages
        seen_pages += 1
        print(f"page {seen_pages}: start={info.start_index} size={info.page_size} "
              f"processed={info.total_processed}/{info.total_result_count}")
        return seen_pages < args.pages

    def on_batch(records: list, info: BatchInfo) -> bool:
        print(f"batch {info.batch_number}: {info.batch_size} records "
              f"({info.total_processed} processed)")
        return True

    async with RestApi() as api:
        stream = await api.query_stream({"type": args.type, "page_size": 100}, on_page)
        print(f"stream: processed={stream.total_processed} completed={stream.completed}")

        batches = await api.query_batch(
            {"type": args.type, "limit": args.limit}, args.batch_size, on_batch
        )
        print(f"batches: {batches.total_batches} processed={batches.total_processed}")


if __name__ == "__main__":
    asyncio.run(main())
