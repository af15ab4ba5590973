#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from rallyrest import RestApi, where


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Query defects page by page")
    p.add_argument("type", nargs="?", default="defect")
    p.add_argument("limit", nargs="?", type=int, default=25)
    p.add_argument("--page-size", type=int, default=200)
    p.add_argument("--state", default=None, help="Filter on the State field")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    options = {
        "type": args.type,
        "limit": args.limit,
        "page_size": args.page_size,
        "fetch": ["FormattedID", "Name", "State"],
        "order": "FormattedID",
    }
    if args.state:
        options["query"] = where("State", "=", args.state)

    async with RestApi() as api:
        result = await api.query(options)

    print("=" * 65)
    print(f"Type          : {args.type}")
    print(f"Total on server: {result.total_result_count}")
    print(f"Returned      : {len(result.results)}")
    print("=" * 65)
    for record in result.results:
        print(f"{record.get('FormattedID', ''):10} | {record.get('Name', '')}")


if __name__ == "__main__":
    asyncio.run(main())
