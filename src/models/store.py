"""Store model."""

from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, CreatedAtMixin, StringIdMixin


class Store(Base, StringIdMixin, CreatedAtMixin):
    """Merchant store with optional fee and credential overrides."""

    __tablename__ = "stores"

    # Basic info
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    # Overrides of the global defaults (NULL = use default)
    api_key: Mapped[str | None] = mapped_column(Text)
    fee_percent: Mapped[float | None] = mapped_column(Float)
    fee_fixed: Mapped[float | None] = mapped_column(Float)

    def __repr__(self) -> str:
        return f"<Store {self.name} ({self.id})>"
