"""API request/response schemas."""

from typing import Any

from pydantic import BaseModel

from src.entities import Order, OrderStatus, Store
from src.models import Base


class StatusUpdateRequest(BaseModel):
    """Body of PATCH /orders/{id}/status."""

    status: OrderStatus


def _columns(row: Base) -> dict[str, Any]:
    return {column.key: getattr(row, column.key) for column in row.__mapper__.column_attrs}


def store_from_row(row: Base) -> Store:
    """Convert a stores row into the wire entity."""
    return Store.model_validate(_columns(row))


def order_from_row(row: Base) -> Order:
    """Convert an orders row into the wire entity."""
    return Order.model_validate(_columns(row))
