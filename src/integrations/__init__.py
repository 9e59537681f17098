"""Storage backends: the remote payments API and the local cache."""

from src.integrations.local_cache import LocalCache, get_local_cache
from src.integrations.payments_api import PaymentsAPIClient, get_payments_client

__all__ = [
    "LocalCache",
    "get_local_cache",
    "PaymentsAPIClient",
    "get_payments_client",
]
