"""Dashboard metrics endpoint."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_session
from src.entities import MetricsSummary, OrderStatus
from src.models import Order
from src.services.metrics import format_conversion_rate

router = APIRouter()


def _scoped(stmt: Select, store_id: str | None) -> Select:
    if store_id:
        return stmt.where(Order.store_id == store_id)
    return stmt


@router.get("/dashboard/metrics", response_model=MetricsSummary)
async def get_metrics(
    store_id: str | None = Query(None, alias="storeId", description="Filter by store"),
    session: AsyncSession = Depends(get_session),
):
    """
    Dashboard metrics for one store or globally.

    Revenue only counts completed orders.
    """
    total_result = await session.execute(_scoped(select(func.count(Order.id)), store_id))
    total_orders = total_result.scalar() or 0

    pending_result = await session.execute(
        _scoped(select(func.count(Order.id)), store_id).where(
            Order.status == OrderStatus.PENDING.value
        )
    )
    pending_orders = pending_result.scalar() or 0

    completed_result = await session.execute(
        _scoped(
            select(func.count(Order.id), func.coalesce(func.sum(Order.amount), 0)),
            store_id,
        ).where(Order.status == OrderStatus.COMPLETED.value)
    )
    completed_count, total_revenue = completed_result.one()

    return MetricsSummary(
        total_orders=total_orders,
        total_revenue=total_revenue,
        pending_orders=pending_orders,
        conversion_rate=format_conversion_rate(completed_count, total_orders),
    )
