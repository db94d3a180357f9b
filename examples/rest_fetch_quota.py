#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
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
    p = argparse.ArgumentParser(description="Fetch N eligible items from a paginated listing")
    p.add_argument("url", help="First page URL, e.g. https://api.example.com/me/likes")
    p.add_argument("quota", nargs="?", type=int, default=24)
    p.add_argument("--token", default=os.environ.get("PAGEWALK_ACCESS_TOKEN"))
    p.add_argument("--unwrap", action="append", default=[], help="Wrapper key, repeatable")
    p.add_argument("--resume", help="Resume cursor from a previous run")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    if not args.token:
        raise SystemExit("Pass --token or set PAGEWALK_ACCESS_TOKEN")
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = PagingConfig.from_env()
    credentials = StaticCredentialProvider(Credential(access_token=args.token))

    async with HTTPClient.from_config(config) as client:
        fetcher = RESTPageFetcher(
            args.url, client, unwrap_keys=args.unwrap, base_params={"linked_partitioning": "true"}
        )
        api = PagingAPI(fetcher, credentials, config=config)
        outcome = await api.fetch_until_quota(args.quota, start_cursor=args.resume)

    print(
        f"{len(outcome)} eligible items from {outcome.pages_fetched} pages "
        f"({outcome.raw_items_seen} raw):"
    )
    print(f"{'ID':>14} | Title")
    print("-" * 60)
    for item in outcome.items:
        print(f"{item.id!s:>14} | {item.title}")
    if outcome.exhausted:
        print("Listing exhausted")
    else:
        print(f"Resume with --resume '{outcome.resume_cursor}'")


if __name__ == "__main__":
    asyncio.run(main())
