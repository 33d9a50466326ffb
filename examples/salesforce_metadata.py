#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import os

from orgcheck.salesforce import MetadataRequest, SalesforceManager


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Read Metadata API components (use * for all)")
    p.add_argument("type", nargs="?", default="CustomLabel")
    p.add_argument("members", nargs="*", default=["*"])
    p.add_argument("--instance-url", default=os.environ.get("ORGCHECK_INSTANCE_URL"))
    p.add_argument("--access-token", default=os.environ.get("ORGCHECK_ACCESS_TOKEN"))
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    if not args.instance_url or not args.access_token:
        raise SystemExit("Set ORGCHECK_INSTANCE_URL and ORGCHECK_ACCESS_TOKEN (or pass them)")

    async with SalesforceManager.connect(
        instance_url=args.instance_url, access_token=args.access_token
    ) as manager:
        response = await manager.describe_metadata(
            [MetadataRequest(type=args.type, members=list(args.members))]
        )
        snapshot = manager.get_quota_snapshot()

    items = response.get(args.type, [])
    print("=" * 65)
    print(f"Type       : {args.type}")
    print(f"Components : {len(items)}")
    print("=" * 65)
    for item in items:
        print(item.get("fullName"))
    print("=" * 65)
    print(f"API usage  : {snapshot.percentage}% ({snapshot.zone.value})")


if __name__ == "__main__":
    asyncio.run(main())
