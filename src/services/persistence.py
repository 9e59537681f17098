"""Persistence gateway: remote service first, local cache on failure."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from typing import Any, Generic, TypeVar

import httpx
import structlog
from pydantic import ValidationError

from src.entities import MetricsSummary, Order, OrderStatus, Store, utcnow
from src.exceptions import AlreadyExists
from src.integrations.local_cache import LocalCache, get_local_cache
from src.integrations.payments_api import PaymentsAPIClient, get_payments_client
from src.services.metrics import compute_metrics

logger = structlog.get_logger()

T = TypeVar("T")
Entity = Store | Order


class Source(StrEnum):
    """Which target answered a gateway call."""

    REMOTE = "remote"
    LOCAL = "local"


class EntityKind(StrEnum):
    """Persisted entity types."""

    STORE = "store"
    ORDER = "order"

    @property
    def collection(self) -> str:
        return f"{self.value}s"

    @property
    def model(self) -> type[Store] | type[Order]:
        return Store if self is EntityKind.STORE else Order


def kind_of(entity: Entity) -> EntityKind:
    if isinstance(entity, Store):
        return EntityKind.STORE
    return EntityKind.ORDER


@dataclass(frozen=True)
class GatewayResult(Generic[T]):
    """A value together with the target that produced it."""

    source: Source
    value: T

    @property
    def from_fallback(self) -> bool:
        return self.source == Source.LOCAL


class PersistenceGateway:
    """
    Uniform read/write contract over the remote service and the local cache.

    Every call tries the remote service once. Any failure (transport error,
    timeout, non-2xx answer, malformed payload) switches that single call to
    the local cache; nothing is retried or synchronized afterwards. Two
    answers are not failures: a 404 on a lookup is a remote "not found", and
    a 409 raises AlreadyExists.
    """

    def __init__(self, remote: PaymentsAPIClient, local: LocalCache):
        self.remote = remote
        self.local = local

    async def _attempt(
        self,
        operation: str,
        remote_call: Callable[[], Awaitable[T]],
        local_call: Callable[[], T],
    ) -> GatewayResult[T]:
        try:
            value = await remote_call()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == httpx.codes.CONFLICT:
                raise AlreadyExists(operation, e.response.text[:200]) from e
            self._log_fallback(operation, e)
        except (httpx.RequestError, ValueError) as e:
            # ValueError covers undecodable JSON and pydantic validation errors
            self._log_fallback(operation, e)
        else:
            return GatewayResult(Source.REMOTE, value)

        return GatewayResult(Source.LOCAL, local_call())

    @staticmethod
    def _log_fallback(operation: str, error: Exception) -> None:
        logger.warning(
            "remote_unavailable_using_local_cache",
            operation=operation,
            error_type=type(error).__name__,
            error=str(error),
        )

    # === Local helpers ===

    def _local_entities(self, kind: EntityKind) -> list[Any]:
        entities = []
        for item in self.local.read(kind.collection):
            try:
                entities.append(kind.model.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    "local_cache_record_skipped",
                    kind=kind.value,
                    record_id=item.get("id") if isinstance(item, dict) else None,
                    error=str(e),
                )
        return entities

    def _local_index(self, kind: EntityKind, entity_id: str) -> tuple[list[dict[str, Any]], int | None]:
        items = self.local.read(kind.collection)
        for idx, item in enumerate(items):
            if isinstance(item, dict) and item.get("id") == entity_id:
                return items, idx
        return items, None

    def _local_upsert(self, kind: EntityKind, entity: Entity) -> None:
        items, idx = self._local_index(kind, entity.id)
        if idx is None:
            items.append(entity.to_wire())
        else:
            items[idx] = entity.to_wire()
        self.local.write(kind.collection, items)

    # === Operations ===

    async def list_entities(
        self,
        kind: EntityKind,
        store_id: str | None = None,
    ) -> GatewayResult[list[Any]]:
        """
        List stores or orders, newest first.

        Args:
            kind: Entity type
            store_id: For orders, only those of this store
        """

        async def remote():
            if kind is EntityKind.STORE:
                items = await self.remote.list_stores()
            else:
                items = await self.remote.list_orders(store_id)
            return [kind.model.model_validate(item) for item in items]

        def local():
            entities = self._local_entities(kind)
            if kind is EntityKind.ORDER and store_id:
                entities = [e for e in entities if e.store_id == store_id]
            return sorted(entities, key=lambda e: e.created_at, reverse=True)

        return await self._attempt(f"list_{kind.collection}", remote, local)

    async def get(self, kind: EntityKind, entity_id: str) -> GatewayResult[Any]:
        """Fetch one entity; the value is None when it does not exist."""

        async def remote():
            if kind is EntityKind.STORE:
                data = await self.remote.get_store(entity_id)
            else:
                data = await self.remote.get_order(entity_id)
            return kind.model.model_validate(data) if data is not None else None

        def local():
            return next(
                (e for e in self._local_entities(kind) if e.id == entity_id),
                None,
            )

        return await self._attempt(f"get_{kind.value}", remote, local)

    async def create(self, entity: Entity) -> GatewayResult[Any]:
        """
        Store a new entity.

        Orders are upserted by id on both targets; the local path stamps
        ``updated_at``. Stores are upserted by id locally.
        """
        kind = kind_of(entity)

        async def remote():
            if kind is EntityKind.STORE:
                data = await self.remote.create_store(entity.to_wire())
            else:
                data = await self.remote.save_order(entity.to_wire())
            return kind.model.model_validate(data)

        def local():
            stored = entity
            if kind is EntityKind.ORDER:
                stored = entity.merged({"updated_at": utcnow()})
            self._local_upsert(kind, stored)
            return stored

        return await self._attempt(f"create_{kind.value}", remote, local)

    async def update(self, store: Store) -> GatewayResult[Store | None]:
        """Replace an existing store record; None when it does not exist."""

        async def remote():
            data = await self.remote.update_store(store.id, store.to_wire())
            return Store.model_validate(data) if data is not None else None

        def local():
            items, idx = self._local_index(EntityKind.STORE, store.id)
            if idx is None:
                return None
            items[idx] = store.to_wire()
            self.local.write(EntityKind.STORE.collection, items)
            return store

        return await self._attempt("update_store", remote, local)

    async def update_status(self, order_id: str, status: OrderStatus) -> GatewayResult[Order | None]:
        """Overwrite an order's status and stamp ``updated_at``."""
        status = OrderStatus(status)

        async def remote():
            data = await self.remote.update_order_status(order_id, status.value)
            return Order.model_validate(data) if data is not None else None

        def local():
            items, idx = self._local_index(EntityKind.ORDER, order_id)
            if idx is None:
                return None
            order = Order.model_validate(items[idx]).merged(
                {"status": status, "updated_at": utcnow()}
            )
            items[idx] = order.to_wire()
            self.local.write(EntityKind.ORDER.collection, items)
            return order

        return await self._attempt("update_order_status", remote, local)

    async def update_fields(
        self,
        kind: EntityKind,
        entity_id: str,
        fields: dict[str, Any],
    ) -> GatewayResult[Any]:
        """
        Merge ``fields`` into an existing entity (read, merge, write back).

        The id is never changed. The value is None when the entity does not
        exist on the target that answered.
        """
        fields = {k: v for k, v in fields.items() if k != "id"}
        if kind is EntityKind.ORDER:
            fields["updated_at"] = utcnow()

        async def remote():
            if kind is EntityKind.STORE:
                data = await self.remote.get_store(entity_id)
            else:
                data = await self.remote.get_order(entity_id)
            if data is None:
                return None
            updated = kind.model.model_validate(data).merged(fields)
            if kind is EntityKind.STORE:
                saved = await self.remote.update_store(entity_id, updated.to_wire())
            else:
                saved = await self.remote.save_order(updated.to_wire())
            return kind.model.model_validate(saved) if saved is not None else None

        def local():
            items, idx = self._local_index(kind, entity_id)
            if idx is None:
                return None
            updated = kind.model.model_validate(items[idx]).merged(fields)
            items[idx] = updated.to_wire()
            self.local.write(kind.collection, items)
            return updated

        return await self._attempt(f"update_{kind.value}_fields", remote, local)

    async def metrics(self, store_id: str | None = None) -> GatewayResult[MetricsSummary]:
        """Dashboard metrics from the remote service, or computed from the cached orders."""

        async def remote():
            return MetricsSummary.model_validate(await self.remote.get_metrics(store_id))

        def local():
            orders = self._local_entities(EntityKind.ORDER)
            if store_id:
                orders = [o for o in orders if o.store_id == store_id]
            return compute_metrics(orders)

        return await self._attempt("metrics", remote, local)


@lru_cache
def get_gateway() -> PersistenceGateway:
    """Get the gateway wired to the configured remote service and cache."""
    return PersistenceGateway(get_payments_client(), get_local_cache())
