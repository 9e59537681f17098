#!/usr/bin/env python3
"""Generate a payment link (pending order) and print its checkout URL."""

import argparse
import asyncio

import sys
sys.path.insert(0, ".")

from src.config import settings
from src.entities import Order
from src.exceptions import AmountOutOfRange, NotFound
from src.logging_config import configure_logging
from src.services import (
    OrderLifecycleManager,
    StoreRegistry,
    checkout_link,
    evaluate,
    get_gateway,
)


async def create_order(amount: float, description: str, store_id: str | None) -> Order:
    """Create the order, scoped to a store when one is given."""
    gateway = get_gateway()
    try:
        store = await StoreRegistry(gateway).get(store_id) if store_id else None
        manager = OrderLifecycleManager(
            gateway,
            strict_transitions=settings.strict_order_transitions,
        )
        return await manager.create_order(amount, description, store)
    finally:
        await gateway.remote.close()


def main():
    parser = argparse.ArgumentParser(description="Generate a payment link")
    parser.add_argument("--amount", type=float, required=True, help="Amount to collect")
    parser.add_argument("--description", default="", help="Shown to the payer")
    parser.add_argument("--store-id", help="Store the order belongs to")

    args = parser.parse_args()
    configure_logging(settings.log_level, settings.log_json)

    preview = evaluate(args.amount)
    try:
        order = asyncio.run(create_order(args.amount, args.description, args.store_id))
    except (AmountOutOfRange, NotFound) as e:
        parser.error(e.message)

    print(f"\n✅ Payment link created!\n")
    print(f"Order ID:   {order.id}")
    print(f"Amount:     {order.amount:.2f}")
    print(f"Fee:        {preview.fee:.2f}")
    print(f"Net:        {preview.net:.2f}")
    print(f"Link:       {checkout_link(order.id, settings.checkout_base_url)}\n")


if __name__ == "__main__":
    main()
