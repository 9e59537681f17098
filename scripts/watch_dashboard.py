#!/usr/bin/env python3
"""Print dashboard metrics for a scope, refreshed on a fixed interval."""

import argparse
import asyncio

import sys
sys.path.insert(0, ".")

from src.config import settings
from src.logging_config import configure_logging
from src.services import MetricsAggregator, PeriodicTask, StoreRegistry, get_gateway


async def watch(store_id: str | None, interval: float, duration: float | None) -> None:
    """Refresh until interrupted (or for ``duration`` seconds)."""
    gateway = get_gateway()
    store = await StoreRegistry(gateway).get(store_id) if store_id else None
    aggregator = MetricsAggregator(gateway)

    async def refresh():
        snapshot = await aggregator.snapshot(store)
        summary = snapshot.summary
        print(
            f"[{snapshot.source}] orders={summary.total_orders} "
            f"pending={summary.pending_orders} "
            f"revenue={summary.total_revenue:.2f} "
            f"net={snapshot.financials.estimated_net:.2f} "
            f"conversion={summary.conversion_rate}%"
        )

    try:
        async with PeriodicTask(refresh, interval, name="dashboard_refresh"):
            if duration is None:
                await asyncio.Event().wait()
            else:
                await asyncio.sleep(duration)
    finally:
        await gateway.remote.close()


def main():
    parser = argparse.ArgumentParser(description="Watch dashboard metrics")
    parser.add_argument("--store-id", help="Limit to one store")
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.dashboard_refresh_interval,
        help="Seconds between refreshes",
    )
    parser.add_argument("--duration", type=float, help="Stop after this many seconds")

    args = parser.parse_args()
    configure_logging(settings.log_level, settings.log_json)

    try:
        asyncio.run(watch(args.store_id, args.interval, args.duration))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
