"""Logistics entity stores built on :class:`EntityStore`."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable

from parcel_router.exceptions import InvalidArgumentError
from parcel_router.models import validation
from parcel_router.models.logistics import (
    BusinessRule,
    BusinessRuleType,
    ContainerStatus,
    Department,
    Parcel,
    ParcelStatus,
    ShippingContainer,
)
from parcel_router.store.base import EntityStore, UniqueIndex


class _StoreFacade:
    """Store contract delegated to a composed :class:`EntityStore`."""

    _store: EntityStore[Any]

    def get(self, entity_id: str) -> Any | None:
        return self._store.get(entity_id)

    def get_all(self) -> list[Any]:
        return self._store.get_all()

    def add(self, entity: Any) -> Any:
        return self._store.add(entity)

    def update(self, entity: Any) -> Any:
        return self._store.update(entity)

    def modify(self, entity_id: str, change: Callable[[Any], None]) -> Any:
        return self._store.modify(entity_id, change)

    def delete(self, entity_id: str) -> None:
        self._store.delete(entity_id)

    def exists(self, entity_id: str) -> bool:
        return self._store.exists(entity_id)

    def count(self) -> int:
        return self._store.count()


def _check_range(minimum: Any, maximum: Any, field_name: str) -> tuple[Decimal, Decimal]:
    low = validation.not_negative(minimum, f"Minimum {field_name}")
    high = validation.to_decimal(maximum, f"Maximum {field_name}")
    if high < low:
        raise InvalidArgumentError(f"Maximum {field_name} cannot be less than minimum {field_name}")
    return low, high


class ParcelStore(_StoreFacade):
    """Parcels keyed by ``parcel_id``."""

    def __init__(self) -> None:
        self._store: EntityStore[Parcel] = EntityStore(lambda p: p.parcel_id, "Parcel")

    def get_by_status(self, status: ParcelStatus) -> list[Parcel]:
        return self._store.find(lambda p: p.status == status)

    def get_by_weight_range(self, min_weight: Any, max_weight: Any) -> list[Parcel]:
        low, high = _check_range(min_weight, max_weight, "weight")
        return self._store.find(lambda p: low <= p.weight <= high)

    def get_by_value_range(self, min_value: Any, max_value: Any) -> list[Parcel]:
        low, high = _check_range(min_value, max_value, "value")
        return self._store.find(lambda p: low <= p.value <= high)

    def get_requiring_insurance(self) -> list[Parcel]:
        return self._store.find(lambda p: p.requires_insurance_approval)

    def get_by_department(self, department_id: str) -> list[Parcel]:
        return self._store.find(
            lambda p: any(d.department_id == department_id for d in p.assigned_departments)
        )


class ContainerStore(_StoreFacade):
    """Shipping containers keyed by ``id`` and indexed by ``container_id``."""

    def __init__(self) -> None:
        self._store: EntityStore[ShippingContainer] = EntityStore(
            lambda c: c.id,
            "Container",
            indexes={"container_id": UniqueIndex(lambda c: c.container_id, str.strip)},
        )

    def get_by_container_id(self, container_id: str) -> ShippingContainer | None:
        return self._store.get_by_key("container_id", container_id)

    def get_by_status(self, status: ContainerStatus) -> list[ShippingContainer]:
        return self._store.find(lambda c: c.status == status)

    def get_by_date_range(self, start: datetime, end: datetime) -> list[ShippingContainer]:
        if start > end:
            raise InvalidArgumentError("Start date cannot be later than end date")
        return self._store.find(lambda c: start <= c.shipping_date <= end)


def _department_key(name: str) -> str:
    return name.strip().casefold()


class DepartmentStore(_StoreFacade):
    """Departments keyed by ``department_id`` and indexed by name (case-insensitive)."""

    def __init__(self) -> None:
        self._store: EntityStore[Department] = EntityStore(
            lambda d: d.department_id,
            "Department",
            indexes={"name": UniqueIndex(lambda d: d.name, _department_key)},
        )

    def get_by_name(self, name: str) -> Department | None:
        return self._store.get_by_key("name", name)

    def get_active_departments(self) -> list[Department]:
        return self._store.find(lambda d: d.is_active)

    def get_inactive_departments(self) -> list[Department]:
        return self._store.find(lambda d: not d.is_active)


class BusinessRuleStore(_StoreFacade):
    """Routing rules keyed by ``rule_id``."""

    def __init__(self) -> None:
        self._store: EntityStore[BusinessRule] = EntityStore(lambda r: r.rule_id, "Business rule")

    def get_all_rules(self) -> list[BusinessRule]:
        return self._store.get_all()

    def get_active_rules(self) -> list[BusinessRule]:
        return self._store.find(lambda r: r.is_active)

    def get_active_rules_by_type(self, rule_type: BusinessRuleType) -> list[BusinessRule]:
        return self._store.find(lambda r: r.is_active and r.rule_type == rule_type)

    def get_by_name(self, name: str) -> BusinessRule | None:
        """First rule, in insertion order, whose name matches case-insensitively."""
        wanted = validation.required(name, "Rule name").casefold()
        return self._store.find_first(lambda r: r.name.casefold() == wanted)


@dataclass
class LogisticsDataStore:
    """All logistics stores for one process.

    Created once at start-up and handed to every service that needs it;
    nothing is persisted beyond the process lifetime.
    """

    parcels: ParcelStore = field(default_factory=ParcelStore)
    containers: ContainerStore = field(default_factory=ContainerStore)
    departments: DepartmentStore = field(default_factory=DepartmentStore)
    rules: BusinessRuleStore = field(default_factory=BusinessRuleStore)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "parcels": self.parcels.count(),
            "containers": self.containers.count(),
            "departments": self.departments.count(),
            "rules": self.rules.count(),
        }
