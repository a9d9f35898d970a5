"""In-memory, thread-safe stores for logistics entities."""

from parcel_router.store.base import EntityStore, UniqueIndex
from parcel_router.store.logistics import (
    BusinessRuleStore,
    ContainerStore,
    DepartmentStore,
    LogisticsDataStore,
    ParcelStore,
)

__all__ = [
    "BusinessRuleStore",
    "ContainerStore",
    "DepartmentStore",
    "EntityStore",
    "LogisticsDataStore",
    "ParcelStore",
    "UniqueIndex",
]
