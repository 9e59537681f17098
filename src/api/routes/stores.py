"""Store endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.schemas import store_from_row
from src.database import get_session
from src.entities import Store
from src.models import Store as StoreRow

logger = structlog.get_logger()
router = APIRouter()


@router.get("/stores", response_model=list[Store])
async def list_stores(session: AsyncSession = Depends(get_session)):
    """List stores, newest first."""
    result = await session.execute(select(StoreRow).order_by(StoreRow.created_at.desc()))
    return [store_from_row(row) for row in result.scalars().all()]


@router.get("/stores/{store_id}", response_model=Store)
async def get_store(store_id: str, session: AsyncSession = Depends(get_session)):
    """Get a single store."""
    row = await session.get(StoreRow, store_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Store not found")
    return store_from_row(row)


@router.post("/stores", response_model=Store)
async def create_store(store: Store, session: AsyncSession = Depends(get_session)):
    """Create a store; the id must not be taken."""
    if await session.get(StoreRow, store.id) is not None:
        raise HTTPException(status_code=409, detail="Store already exists")

    row = StoreRow(**store.model_dump())
    session.add(row)
    await session.flush()

    logger.info("store_created", store_id=row.id, name=row.name)
    return store_from_row(row)


@router.put("/stores/{store_id}", response_model=Store)
async def update_store(
    store_id: str,
    store: Store,
    session: AsyncSession = Depends(get_session),
):
    """
    Update store settings (API key, fees).

    Fields present in the body overwrite the stored ones; the id in the
    path wins over any id in the body.
    """
    row = await session.get(StoreRow, store_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Store not found")

    for field, value in store.model_dump(exclude={"id"}, exclude_unset=True).items():
        setattr(row, field, value)
    await session.flush()

    logger.info("store_updated", store_id=store_id)
    return store_from_row(row)
