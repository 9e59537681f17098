"""Order model."""

from datetime import datetime

from sqlalchemy import DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.entities import OrderStatus, utcnow
from src.models.base import Base, CreatedAtMixin, StringIdMixin


class Order(Base, StringIdMixin, CreatedAtMixin):
    """A payment link and the payer data collected at checkout."""

    __tablename__ = "orders"

    amount: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(
        String(20),
        default=OrderStatus.PENDING.value,
        index=True,
    )

    # Store association; store_name is a snapshot, no foreign key
    store_id: Mapped[str | None] = mapped_column(String(64), index=True)
    store_name: Mapped[str | None] = mapped_column(String(255))

    # Customer data
    customer_name: Mapped[str | None] = mapped_column(String(255))
    customer_tax_id: Mapped[str | None] = mapped_column(String(32))
    customer_email: Mapped[str | None] = mapped_column(String(255))
    customer_phone: Mapped[str | None] = mapped_column(String(32))

    # Payment provider data
    payment_id: Mapped[str | None] = mapped_column(String(100))
    qr_code: Mapped[str | None] = mapped_column(Text)
    qr_image_url: Mapped[str | None] = mapped_column(Text)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Order {self.id[:8]} {self.amount} ({self.status})>"
