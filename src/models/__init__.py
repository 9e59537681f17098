"""Database models."""

from src.models.base import Base
from src.models.order import Order
from src.models.store import Store

__all__ = [
    "Base",
    "Order",
    "Store",
]
