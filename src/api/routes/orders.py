"""Order endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.schemas import StatusUpdateRequest, order_from_row
from src.database import get_session
from src.entities import Order, utcnow
from src.models import Order as OrderRow

logger = structlog.get_logger()
router = APIRouter()


@router.get("/orders", response_model=list[Order])
async def list_orders(
    store_id: str | None = Query(None, alias="storeId", description="Filter by store"),
    session: AsyncSession = Depends(get_session),
):
    """List orders, newest first."""
    stmt = select(OrderRow).order_by(OrderRow.created_at.desc())
    if store_id:
        stmt = stmt.where(OrderRow.store_id == store_id)
    result = await session.execute(stmt)
    return [order_from_row(row) for row in result.scalars().all()]


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(order_id: str, session: AsyncSession = Depends(get_session)):
    """Get an order by id."""
    row = await session.get(OrderRow, order_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order_from_row(row)


@router.post("/orders", response_model=Order)
async def save_order(order: Order, session: AsyncSession = Depends(get_session)):
    """
    Create or update an order, matched by id.

    On update only the fields present in the body are written.
    updated_at is always stamped by the server.
    """
    row = await session.get(OrderRow, order.id)
    if row is None:
        row = OrderRow(**order.model_dump())
        session.add(row)
        created = True
    else:
        for field, value in order.model_dump(exclude={"id"}, exclude_unset=True).items():
            setattr(row, field, value)
        created = False
    row.updated_at = utcnow()
    await session.flush()

    logger.info("order_saved", order_id=row.id, created=created, status=row.status)
    return order_from_row(row)


@router.patch("/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: str,
    request: StatusUpdateRequest,
    session: AsyncSession = Depends(get_session),
):
    """Overwrite an order's status."""
    row = await session.get(OrderRow, order_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Order not found")

    previous = row.status
    row.status = request.status.value
    row.updated_at = utcnow()
    await session.flush()

    logger.info(
        "order_status_updated",
        order_id=order_id,
        previous=previous,
        status=row.status,
    )
    return order_from_row(row)
