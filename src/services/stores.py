"""Store registry."""

import structlog

from src.entities import Store
from src.exceptions import InvalidStore, NotFound
from src.services.persistence import EntityKind, GatewayResult, PersistenceGateway

logger = structlog.get_logger()


class StoreRegistry:
    """CRUD over merchant stores."""

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def list(self) -> GatewayResult[list[Store]]:
        """All stores, newest first."""
        return await self.gateway.list_entities(EntityKind.STORE)

    async def get(self, store_id: str) -> Store:
        """Fetch a store or raise NotFound."""
        result = await self.gateway.get(EntityKind.STORE, store_id)
        if result.value is None:
            raise NotFound("store", store_id)
        return result.value

    async def create(self, store: Store) -> Store:
        """
        Register a new store.

        Raises:
            InvalidStore: If the name is blank
        """
        if not store.name or not store.name.strip():
            raise InvalidStore("Store name must not be blank")

        result = await self.gateway.create(store)
        logger.info(
            "store_created",
            store_id=result.value.id,
            name=result.value.name,
            source=result.source.value,
        )
        return result.value

    async def update(self, store: Store) -> Store:
        """
        Replace a store record with ``store`` (a complete, merged record).

        Raises:
            NotFound: If the store does not exist
        """
        result = await self.gateway.update(store)
        if result.value is None:
            raise NotFound("store", store.id)
        logger.info("store_updated", store_id=store.id, source=result.source.value)
        return result.value

    async def update_settings(
        self,
        store_id: str,
        api_key: str | None = None,
        fee_percent: float | None = None,
        fee_fixed: float | None = None,
    ) -> Store:
        """
        Change the credential and fee overrides of a store.

        Keeps id, name, description and created_at from the stored record.
        """
        current = await self.get(store_id)
        updated = current.merged(
            {
                "api_key": api_key,
                "fee_percent": fee_percent,
                "fee_fixed": fee_fixed,
            }
        )
        return await self.update(updated)
