"""Metrics aggregation for the operator dashboard."""

import asyncio
from dataclasses import dataclass

import structlog

from src.entities import MetricsSummary, Order, Store
from src.services.metrics import FinancialEstimate, compute_metrics, estimate_financials
from src.services.persistence import EntityKind, GatewayResult, PersistenceGateway, Source

logger = structlog.get_logger()


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the dashboard shows for one scope."""

    summary: MetricsSummary
    orders: list[Order]
    financials: FinancialEstimate
    source: Source


class MetricsAggregator:
    """Derives per-scope statistics from the stored orders. Read-only."""

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def summarize(self, store_id: str | None = None) -> GatewayResult[MetricsSummary]:
        """
        Summarize the orders of one store, or of everything.

        Args:
            store_id: Scope; None for the global view

        Returns:
            Metrics tagged with the target the orders came from
        """
        orders = await self.gateway.list_entities(EntityKind.ORDER, store_id)
        return GatewayResult(orders.source, compute_metrics(orders.value))

    async def snapshot(self, store: Store | None = None) -> DashboardSnapshot:
        """
        Metrics, orders and fee estimates for a scope, fetched concurrently.

        The reported source is local if either read fell back.
        """
        store_id = store.id if store else None
        metrics, orders = await asyncio.gather(
            self.gateway.metrics(store_id),
            self.gateway.list_entities(EntityKind.ORDER, store_id),
        )
        source = Source.LOCAL if Source.LOCAL in (metrics.source, orders.source) else Source.REMOTE

        logger.debug(
            "dashboard_refreshed",
            store_id=store_id,
            total_orders=metrics.value.total_orders,
            source=source.value,
        )
        return DashboardSnapshot(
            summary=metrics.value,
            orders=orders.value,
            financials=estimate_financials(metrics.value, store),
            source=source,
        )
