"""Parcel and container routing workflow."""

import logging

from parcel_router.config import RoutingConfig
from parcel_router.exceptions import EntityNotFoundError, InvalidEntityStateError
from parcel_router.models.logistics import (
    BusinessRuleType,
    ContainerStatus,
    Department,
    Parcel,
    ParcelStatus,
    ShippingContainer,
)
from parcel_router.rules.resolver import RuleResolver
from parcel_router.store.logistics import LogisticsDataStore

logger = logging.getLogger(__name__)

# Parcels in these states no longer hold a container in PROCESSING
SETTLED_PARCEL_STATUSES = frozenset(
    {
        ParcelStatus.ASSIGNED_TO_DEPARTMENT,
        ParcelStatus.PROCESSED,
        ParcelStatus.SHIPPED,
        ParcelStatus.DELIVERED,
        ParcelStatus.INSURANCE_REJECTED,
        ParcelStatus.FAILED,
    }
)


class ParcelProcessingService:
    """Drive parcels and containers through their lifecycles.

    Entities accept any status through ``update_status``; this workflow is
    where the lifecycle graph is enforced, unless
    ``RoutingConfig.strict_transitions`` is switched off.

    Parameters
    ----------
    store : LogisticsDataStore
        Process-wide stores.
    resolver : RuleResolver | None
        Defaults to a resolver over ``store.rules`` and ``store.departments``.
    config : RoutingConfig | None
        Workflow settings.
    """

    def __init__(
        self,
        store: LogisticsDataStore,
        resolver: RuleResolver | None = None,
        config: RoutingConfig | None = None,
    ) -> None:
        self._store = store
        self._resolver = resolver or RuleResolver(store.rules, store.departments)
        self._config = config or RoutingConfig()

    # Queries

    def requires_insurance_approval(self, parcel_id: str) -> bool:
        return self._require_parcel(parcel_id).requires_insurance_approval

    def determine_departments(self, parcel_id: str) -> list[Department]:
        parcel = self._require_parcel(parcel_id)
        return self._resolver.determine_departments(parcel.weight, parcel.value)

    def get_assigned_departments(self, parcel_id: str) -> list[Department]:
        return list(self._require_parcel(parcel_id).assigned_departments)

    # Parcel workflow

    def process_parcel(self, parcel_id: str) -> Parcel:
        """Route a parcel, stopping at the insurance gate when its value requires it."""
        parcel = self._require_parcel(parcel_id)

        # Resolve everything before touching the parcel so a failure leaves it as it was
        if parcel.requires_insurance_approval:
            insurance = self._resolver.resolve_department(BusinessRuleType.VALUE, parcel.value)
            self._set_parcel_status(parcel, ParcelStatus.PROCESSING)
            self._set_parcel_status(parcel, ParcelStatus.INSURANCE_APPROVAL_REQUIRED)
            parcel.clear_departments()
            if insurance is not None:
                parcel.assign_department(insurance)
            logger.info(
                "Parcel %s (value %s) awaits insurance approval",
                parcel.parcel_id,
                parcel.value,
                extra={"parcel_id": parcel.parcel_id},
            )
        else:
            departments = self._resolver.determine_departments(parcel.weight, parcel.value)
            self._set_parcel_status(parcel, ParcelStatus.PROCESSING)
            parcel.clear_departments()
            for department in departments:
                parcel.assign_department(department)
            self._set_parcel_status(parcel, ParcelStatus.ASSIGNED_TO_DEPARTMENT)
            logger.info(
                "Assigned parcel %s to departments: %s",
                parcel.parcel_id,
                ", ".join(d.name for d in departments),
                extra={"parcel_id": parcel.parcel_id},
            )

        return self._store.parcels.update(parcel)

    def approve_insurance(self, parcel_id: str) -> Parcel:
        """Approve a high-value parcel and route it by weight."""
        parcel = self._require_awaiting_insurance(parcel_id)
        weight_department = self._resolver.resolve_department(BusinessRuleType.WEIGHT, parcel.weight)

        self._set_parcel_status(parcel, ParcelStatus.INSURANCE_APPROVED)
        if weight_department is not None:
            parcel.assign_department(weight_department)
        self._set_parcel_status(parcel, ParcelStatus.ASSIGNED_TO_DEPARTMENT)
        logger.info("Insurance approved for parcel %s", parcel.parcel_id, extra={"parcel_id": parcel.parcel_id})
        return self._store.parcels.update(parcel)

    def reject_insurance(self, parcel_id: str) -> Parcel:
        """Reject a high-value parcel; it is not routed any further."""
        parcel = self._require_awaiting_insurance(parcel_id)
        self._set_parcel_status(parcel, ParcelStatus.INSURANCE_REJECTED)
        logger.info("Insurance rejected for parcel %s", parcel.parcel_id, extra={"parcel_id": parcel.parcel_id})
        return self._store.parcels.update(parcel)

    def assign_department(self, parcel_id: str, department_id: str) -> Parcel:
        parcel = self._require_parcel(parcel_id)
        department = self._require_department(department_id)
        if not department.is_active:
            logger.warning("Refusing to assign inactive department %s", department.name)
            raise InvalidEntityStateError(f"Department {department.name!r} is inactive")
        if parcel.status == ParcelStatus.INSURANCE_REJECTED:
            raise InvalidEntityStateError(
                f"Parcel {parcel_id} was rejected by insurance and cannot be assigned"
            )
        parcel.assign_department(department)
        return self._store.parcels.update(parcel)

    def remove_department(self, parcel_id: str, department_id: str) -> Parcel:
        parcel = self._require_parcel(parcel_id)
        department = self._require_department(department_id)
        parcel.remove_department(department)
        return self._store.parcels.update(parcel)

    def update_parcel_status(self, parcel_id: str, status: ParcelStatus) -> Parcel:
        parcel = self._require_parcel(parcel_id)
        self._set_parcel_status(parcel, status)
        return self._store.parcels.update(parcel)

    # Container workflow

    def process_container(self, container_id: str) -> list[Parcel]:
        """Route every pending parcel of a container and refresh its status."""
        container = self._require_container(container_id)
        self._set_container_status(container, ContainerStatus.PROCESSING)
        self._store.containers.update(container)

        processed = []
        for parcel in list(container.parcels):
            if parcel.status == ParcelStatus.PENDING:
                processed.append(self.process_parcel(parcel.parcel_id))

        self.refresh_container_status(container_id)
        logger.info(
            "Processed %d parcels of container %s (%s)",
            len(processed),
            container.container_id,
            container.status.value,
        )
        return processed

    def refresh_container_status(self, container_id: str) -> ShippingContainer:
        """Mark a PROCESSING container PROCESSED once none of its parcels is still in flight."""
        container = self._require_container(container_id)
        if container.status == ContainerStatus.PROCESSING and all(
            p.status in SETTLED_PARCEL_STATUSES for p in container.parcels
        ):
            self._set_container_status(container, ContainerStatus.PROCESSED)
            self._store.containers.update(container)
        return container

    def update_container_status(self, container_id: str, status: ContainerStatus) -> ShippingContainer:
        container = self._require_container(container_id)
        self._set_container_status(container, status)
        return self._store.containers.update(container)

    # Helpers

    def _set_parcel_status(self, parcel: Parcel, status: ParcelStatus) -> None:
        if self._config.strict_transitions:
            parcel.transition_to(status)
        else:
            parcel.update_status(status)

    def _set_container_status(self, container: ShippingContainer, status: ContainerStatus) -> None:
        if self._config.strict_transitions:
            container.transition_to(status)
        else:
            container.update_status(status)

    def _require_awaiting_insurance(self, parcel_id: str) -> Parcel:
        parcel = self._require_parcel(parcel_id)
        if parcel.status != ParcelStatus.INSURANCE_APPROVAL_REQUIRED:
            raise InvalidEntityStateError(
                f"Parcel {parcel_id} is {parcel.status.value}, not awaiting insurance approval"
            )
        return parcel

    def _require_parcel(self, parcel_id: str) -> Parcel:
        parcel = self._store.parcels.get(parcel_id)
        if parcel is None:
            raise EntityNotFoundError(f"Parcel with ID {parcel_id} not found")
        return parcel

    def _require_department(self, department_id: str) -> Department:
        department = self._store.departments.get(department_id)
        if department is None:
            raise EntityNotFoundError(f"Department with ID {department_id} not found")
        return department

    def _require_container(self, container_id: str) -> ShippingContainer:
        container = self._store.containers.get(container_id)
        if container is None:
            raise EntityNotFoundError(f"Container with ID {container_id} not found")
        return container
