#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import os

from orgcheck.salesforce import QuerySpec, SalesforceManager


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run SOQL queries and print the daily API usage")
    p.add_argument("queries", nargs="*", default=["SELECT Id, Name FROM Organization"])
    p.add_argument("--tooling", action="store_true", help="Use the Tooling API")
    p.add_argument("--dependencies", metavar="FIELD", help="Enrich with dependencies of FIELD")
    p.add_argument("--bypass", action="append", default=[], help="Error code to treat as empty")
    p.add_argument("--instance-url", default=os.environ.get("ORGCHECK_INSTANCE_URL"))
    p.add_argument("--access-token", default=os.environ.get("ORGCHECK_ACCESS_TOKEN"))
    p.add_argument("--api-version", default=None)
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    if not args.instance_url or not args.access_token:
        raise SystemExit("Set ORGCHECK_INSTANCE_URL and ORGCHECK_ACCESS_TOKEN (or pass them)")

    specs = [
        QuerySpec(
            text=text,
            tooling=args.tooling,
            bypass_error_codes=frozenset(args.bypass),
            dependency_field=args.dependencies,
        )
        for text in args.queries
    ]

    async with SalesforceManager.connect(
        instance_url=args.instance_url,
        access_token=args.access_token,
        api_version=args.api_version,
    ) as manager:
        results = await manager.run_queries(specs)
        snapshot = manager.get_quota_snapshot()

    print("=" * 65)
    for spec, result in zip(specs, results):
        print(f"Query      : {spec.text}")
        if result.skipped:
            print("Records    : skipped (bypassed error)")
        else:
            print(f"Records    : {len(result.records)}")
        if result.dependencies is not None:
            print(f"Edges      : {len(result.dependencies)}")
        elif result.enrichment_error is not None:
            print(f"Edges      : failed ({result.enrichment_error})")
        print("-" * 65)
    print(f"API usage  : {snapshot.percentage}% ({snapshot.zone.value})")
    print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
