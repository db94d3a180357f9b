#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import os

from pagewalk import (
    Credential,
    PagingAPI,
    PagingConfig,
    HTTPClient,
    RESTPageFetcher,
    StaticCredentialProvider,
)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream eligible items page by page")
    p.add_argument("url", help="First page URL")
    p.add_argument("--token", default=os.environ.get("PAGEWALK_ACCESS_TOKEN"))
    p.add_argument("--unwrap", action="append", default=[], help="Wrapper key, repeatable")
    p.add_argument("--max-items", type=int, default=0, help="Stop after this many (0 = all)")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    if not args.token:
        raise SystemExit("Pass --token or set PAGEWALK_ACCESS_TOKEN")

    config = PagingConfig.from_env()
    credentials = StaticCredentialProvider(Credential(access_token=args.token))

    async with HTTPClient.from_config(config) as client:
        fetcher = RESTPageFetcher(args.url, client, unwrap_keys=args.unwrap)
        api = PagingAPI(fetcher, credentials, config=config)
        task, channel = api.open_stream()
        received = 0
        async for event in channel:
            print(f"page {event.page_index}: {len(event)} items")
            for item in event.items:
                print(f"  {item.id} {item.title}")
            received += len(event)
            if args.max_items and received >= args.max_items:
                channel.close()
                break
        await task
    print(f"Received {received} items")


if __name__ == "__main__":
    asyncio.run(main())
