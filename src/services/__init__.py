"""Payment links core services."""

from src.services.dashboard import DashboardSnapshot, MetricsAggregator
from src.services.fees import FeeEvaluation, evaluate
from src.services.metrics import compute_metrics, estimate_financials
from src.services.orders import OrderLifecycleManager, checkout_link
from src.services.persistence import (
    EntityKind,
    GatewayResult,
    PersistenceGateway,
    Source,
    get_gateway,
)
from src.services.refresh import PeriodicTask
from src.services.store_settings import EffectiveStoreSettings, resolve_store_settings
from src.services.stores import StoreRegistry

__all__ = [
    "DashboardSnapshot",
    "EffectiveStoreSettings",
    "EntityKind",
    "FeeEvaluation",
    "GatewayResult",
    "MetricsAggregator",
    "OrderLifecycleManager",
    "PeriodicTask",
    "PersistenceGateway",
    "Source",
    "StoreRegistry",
    "checkout_link",
    "compute_metrics",
    "estimate_financials",
    "evaluate",
    "get_gateway",
    "resolve_store_settings",
]
