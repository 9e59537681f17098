"""Effective per-store settings after applying the global defaults."""

from dataclasses import dataclass

from src.entities import AdminSettings, Store
from src.exceptions import MissingCredentials


@dataclass(frozen=True)
class EffectiveStoreSettings:
    """Fee and credential settings after applying the global defaults."""

    store_id: str | None
    api_key: str | None
    fee_percent: float
    fee_fixed: float

    def require_api_key(self) -> str:
        """Return the API key, or raise MissingCredentials if none is configured."""
        if not self.api_key:
            raise MissingCredentials(self.store_id)
        return self.api_key


def resolve_store_settings(store: Store | None, admin: AdminSettings) -> EffectiveStoreSettings:
    """
    Resolve what a store actually uses.

    Fees fall back to 0 and the API key falls back to the global key. A
    blank store key counts as not set.
    """
    if store is None:
        return EffectiveStoreSettings(
            store_id=None,
            api_key=admin.api_key or None,
            fee_percent=0,
            fee_fixed=0,
        )

    api_key = store.api_key if store.api_key and store.api_key.strip() else admin.api_key
    return EffectiveStoreSettings(
        store_id=store.id,
        api_key=api_key or None,
        fee_percent=store.fee_percent if store.fee_percent is not None else 0,
        fee_fixed=store.fee_fixed if store.fee_fixed is not None else 0,
    )
