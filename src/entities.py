"""Domain entities shared by the services, the persistence gateway and the API."""

import uuid
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, assert_never

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utcnow() -> datetime:
    return datetime.now(UTC)


class OrderStatus(StrEnum):
    """Payment lifecycle of an order."""

    PENDING = "pending"
    COMPLETED = "completed"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"

    @property
    def is_terminal(self) -> bool:
        match self:
            case OrderStatus.PENDING:
                return False
            case (
                OrderStatus.COMPLETED
                | OrderStatus.EXPIRED
                | OrderStatus.CANCELLED
                | OrderStatus.REFUNDED
            ):
                return True
            case _:
                assert_never(self)


class _Entity(BaseModel):
    """Base for persisted records; accepts both wire aliases and field names."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    @field_validator("created_at", "updated_at", check_fields=False)
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Storage backends may hand back naive timestamps
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict using the wire (alias) field names."""
        return self.model_dump(mode="json", by_alias=True)

    def merged(self, fields: dict[str, Any]):
        """Return a validated copy with ``fields`` applied on top."""
        return type(self).model_validate({**self.model_dump(), **fields})


class Store(_Entity):
    """Merchant scope; api_key and fee fields override the global defaults."""

    id: str = Field(default_factory=lambda: f"store_{uuid.uuid4().hex[:12]}")
    name: str
    description: str | None = None
    api_key: str | None = Field(None, alias="apiKey")
    fee_percent: float | None = Field(None, alias="feePercent")
    fee_fixed: float | None = Field(None, alias="feeFixed")
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")


class CustomerData(BaseModel):
    """Payer identification collected when checkout starts."""

    customer_name: str | None = None
    customer_tax_id: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None


class Order(_Entity):
    """A payment intent plus the payer snapshot."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    amount: float = Field(..., gt=0)
    description: str = ""
    status: OrderStatus = OrderStatus.PENDING

    # Store association (snapshot taken at creation)
    store_id: str | None = None
    store_name: str | None = None

    # Customer data
    customer_name: str | None = None
    customer_tax_id: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None

    # Payment provider data
    payment_id: str | None = None
    qr_code: str | None = None
    qr_image_url: str | None = None

    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=utcnow, alias="updatedAt")


class MetricsSummary(BaseModel):
    """Dashboard figures for one scope (a store or everything)."""

    model_config = ConfigDict(populate_by_name=True)

    total_orders: int = Field(0, alias="totalOrders")
    total_revenue: float = Field(0, alias="totalRevenue")
    pending_orders: int = Field(0, alias="pendingOrders")
    conversion_rate: str = Field("0.0", alias="conversionRate")


class AdminSettings(BaseModel):
    """Global fallback credentials."""

    api_key: str = ""
    admin_password: str | None = None
