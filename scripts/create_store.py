#!/usr/bin/env python3
"""Create a new store, optionally with its own API key and fees."""

import argparse
import asyncio

import sys
sys.path.insert(0, ".")

from src.config import settings
from src.entities import Store
from src.exceptions import InvalidStore
from src.logging_config import configure_logging
from src.services import StoreRegistry, get_gateway, resolve_store_settings


async def create_store(
    name: str,
    description: str | None,
    api_key: str | None,
    fee_percent: float | None,
    fee_fixed: float | None,
) -> Store:
    """Register the store through the persistence gateway."""
    gateway = get_gateway()
    registry = StoreRegistry(gateway)
    try:
        return await registry.create(
            Store(
                name=name,
                description=description,
                api_key=api_key,
                fee_percent=fee_percent,
                fee_fixed=fee_fixed,
            )
        )
    finally:
        await gateway.remote.close()


def main():
    parser = argparse.ArgumentParser(description="Create a new store")
    parser.add_argument("--name", required=True, help="Store name")
    parser.add_argument("--description", help="Short description")
    parser.add_argument("--api-key", help="Store-specific payment API key")
    parser.add_argument("--fee-percent", type=float, help="Fee percentage, e.g. 0.99")
    parser.add_argument("--fee-fixed", type=float, help="Fixed fee per order, e.g. 0.50")

    args = parser.parse_args()
    configure_logging(settings.log_level, settings.log_json)

    try:
        store = asyncio.run(create_store(
            name=args.name,
            description=args.description,
            api_key=args.api_key,
            fee_percent=args.fee_percent,
            fee_fixed=args.fee_fixed,
        ))
    except InvalidStore as e:
        parser.error(e.message)

    effective = resolve_store_settings(store, settings.admin_settings())

    print(f"\n✅ Store created successfully!\n")
    print(f"Store ID:   {store.id}")
    print(f"Name:       {store.name}")
    print(f"Fees:       {effective.fee_percent}% + {effective.fee_fixed:.2f}")
    if not effective.api_key:
        print(f"\n⚠️  No API key configured for this store or globally!\n")


if __name__ == "__main__":
    main()
