"""Tests for ParcelProcessingService."""

from typing import Callable

import pytest

from parcel_router.config import RoutingConfig
from parcel_router.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    InvalidStatusTransitionError,
    UnresolvableDepartmentError,
)
from parcel_router.models.logistics import (
    ContainerStatus,
    Department,
    Parcel,
    ParcelStatus,
    ShippingContainer,
)
from parcel_router.services import ParcelProcessingService
from parcel_router.store.logistics import LogisticsDataStore


@pytest.fixture
def service(seeded_store: LogisticsDataStore) -> ParcelProcessingService:
    return ParcelProcessingService(seeded_store)


@pytest.fixture
def add_parcel(
    seeded_store: LogisticsDataStore, make_parcel: Callable[..., Parcel]
) -> Callable[..., Parcel]:
    def _add(weight: str = "2.5", value: str = "50") -> Parcel:
        return seeded_store.parcels.add(make_parcel(weight=weight, value=value))

    return _add


def _names(parcel: Parcel) -> list[str]:
    return [d.name for d in parcel.assigned_departments]


class TestProcessParcel:
    """Tests for routing single parcels."""

    @pytest.mark.parametrize(
        "weight,expected", [("0.5", "Mail"), ("1", "Mail"), ("5", "Regular"), ("15", "Heavy")]
    )
    def test_routes_by_weight(
        self, service: ParcelProcessingService, add_parcel: Callable[..., Parcel], weight: str, expected: str
    ) -> None:
        parcel = service.process_parcel(add_parcel(weight=weight).parcel_id)

        assert parcel.status == ParcelStatus.ASSIGNED_TO_DEPARTMENT
        assert _names(parcel) == [expected]

    def test_high_value_stops_at_insurance(
        self, service: ParcelProcessingService, add_parcel: Callable[..., Parcel]
    ) -> None:
        parcel = service.process_parcel(add_parcel(weight="3", value="1500").parcel_id)

        assert parcel.status == ParcelStatus.INSURANCE_APPROVAL_REQUIRED
        assert _names(parcel) == ["Insurance"]
        assert service.requires_insurance_approval(parcel.parcel_id)

    def test_value_at_threshold_is_not_insured(
        self, service: ParcelProcessingService, add_parcel: Callable[..., Parcel]
    ) -> None:
        parcel = service.process_parcel(add_parcel(value="1000").parcel_id)

        assert parcel.status == ParcelStatus.ASSIGNED_TO_DEPARTMENT
        assert _names(parcel) == ["Regular"]

    def test_approve_insurance(
        self, service: ParcelProcessingService, add_parcel: Callable[..., Parcel]
    ) -> None:
        parcel = add_parcel(weight="15", value="1500")
        service.process_parcel(parcel.parcel_id)

        service.approve_insurance(parcel.parcel_id)

        assert parcel.status == ParcelStatus.ASSIGNED_TO_DEPARTMENT
        assert _names(parcel) == ["Insurance", "Heavy"]

    def test_reject_insurance(
        self, service: ParcelProcessingService, add_parcel: Callable[..., Parcel]
    ) -> None:
        parcel = add_parcel(value="1500")
        service.process_parcel(parcel.parcel_id)

        service.reject_insurance(parcel.parcel_id)

        assert parcel.status == ParcelStatus.INSURANCE_REJECTED
        assert _names(parcel) == ["Insurance"]

    def test_insurance_decision_requires_pending_approval(
        self, service: ParcelProcessingService, add_parcel: Callable[..., Parcel]
    ) -> None:
        parcel = add_parcel()

        with pytest.raises(InvalidEntityStateError):
            service.approve_insurance(parcel.parcel_id)
        with pytest.raises(InvalidEntityStateError):
            service.reject_insurance(parcel.parcel_id)

    def test_unknown_parcel(self, service: ParcelProcessingService) -> None:
        with pytest.raises(EntityNotFoundError):
            service.process_parcel("missing")

    def test_unresolvable_department_leaves_parcel_untouched(
        self,
        service: ParcelProcessingService,
        seeded_store: LogisticsDataStore,
        add_parcel: Callable[..., Parcel],
    ) -> None:
        seeded_store.departments.get_by_name("Regular").deactivate()
        parcel = add_parcel(weight="5")

        with pytest.raises(UnresolvableDepartmentError):
            service.process_parcel(parcel.parcel_id)

        assert parcel.status == ParcelStatus.PENDING
        assert parcel.assigned_departments == []

    def test_determine_and_get_departments(
        self, service: ParcelProcessingService, add_parcel: Callable[..., Parcel]
    ) -> None:
        parcel = add_parcel(weight="12", value="2000")

        assert [d.name for d in service.determine_departments(parcel.parcel_id)] == ["Insurance", "Heavy"]
        assert service.get_assigned_departments(parcel.parcel_id) == []


class TestStatusEnforcement:
    """Strict and permissive status handling."""

    def test_strict_refuses_illegal_jump(
        self, service: ParcelProcessingService, add_parcel: Callable[..., Parcel]
    ) -> None:
        parcel = add_parcel()

        with pytest.raises(InvalidStatusTransitionError):
            service.update_parcel_status(parcel.parcel_id, ParcelStatus.DELIVERED)

        assert parcel.status == ParcelStatus.PENDING

    def test_permissive_accepts_any_status(
        self, seeded_store: LogisticsDataStore, add_parcel: Callable[..., Parcel]
    ) -> None:
        service = ParcelProcessingService(seeded_store, config=RoutingConfig(strict_transitions=False))
        parcel = add_parcel(value="1500")

        service.update_parcel_status(parcel.parcel_id, ParcelStatus.ASSIGNED_TO_DEPARTMENT)

        assert parcel.status == ParcelStatus.ASSIGNED_TO_DEPARTMENT

    def test_processed_parcel_cannot_be_reprocessed(
        self, service: ParcelProcessingService, add_parcel: Callable[..., Parcel]
    ) -> None:
        parcel = add_parcel()
        service.process_parcel(parcel.parcel_id)

        with pytest.raises(InvalidStatusTransitionError):
            service.process_parcel(parcel.parcel_id)


class TestManualAssignment:
    """Manual department assignment."""

    def test_assign_and_remove(
        self,
        service: ParcelProcessingService,
        seeded_store: LogisticsDataStore,
        add_parcel: Callable[..., Parcel],
    ) -> None:
        parcel = add_parcel()
        heavy = seeded_store.departments.get_by_name("Heavy")

        service.assign_department(parcel.parcel_id, heavy.department_id)
        service.assign_department(parcel.parcel_id, heavy.department_id)
        assert _names(parcel) == ["Heavy"]

        service.remove_department(parcel.parcel_id, heavy.department_id)
        assert parcel.assigned_departments == []

    def test_assign_inactive_department(
        self,
        service: ParcelProcessingService,
        seeded_store: LogisticsDataStore,
        add_parcel: Callable[..., Parcel],
    ) -> None:
        parcel = add_parcel()
        heavy = seeded_store.departments.get_by_name("Heavy")
        heavy.deactivate()

        with pytest.raises(InvalidEntityStateError):
            service.assign_department(parcel.parcel_id, heavy.department_id)

    def test_assign_unknown_department(
        self, service: ParcelProcessingService, add_parcel: Callable[..., Parcel]
    ) -> None:
        with pytest.raises(EntityNotFoundError):
            service.assign_department(add_parcel().parcel_id, Department(name="Ghost").department_id)

    def test_assign_to_rejected_parcel(
        self,
        service: ParcelProcessingService,
        seeded_store: LogisticsDataStore,
        add_parcel: Callable[..., Parcel],
    ) -> None:
        parcel = add_parcel(value="5000")
        service.process_parcel(parcel.parcel_id)
        service.reject_insurance(parcel.parcel_id)
        mail = seeded_store.departments.get_by_name("Mail")

        with pytest.raises(InvalidEntityStateError):
            service.assign_department(parcel.parcel_id, mail.department_id)


class TestProcessContainer:
    """Container-level processing."""

    @pytest.fixture
    def container(
        self,
        seeded_store: LogisticsDataStore,
        sample_container: ShippingContainer,
        add_parcel: Callable[..., Parcel],
    ) -> ShippingContainer:
        for weight, value in (("0.5", "10"), ("5", "100"), ("20", "200")):
            sample_container.add_parcel(add_parcel(weight=weight, value=value))
        return seeded_store.containers.add(sample_container)

    def test_all_routed_container_is_processed(
        self, service: ParcelProcessingService, container: ShippingContainer
    ) -> None:
        processed = service.process_container(container.id)

        assert len(processed) == 3
        assert container.status == ContainerStatus.PROCESSED
        assert all(p.status == ParcelStatus.ASSIGNED_TO_DEPARTMENT for p in container.parcels)

    def test_waits_for_insurance(
        self,
        service: ParcelProcessingService,
        container: ShippingContainer,
        add_parcel: Callable[..., Parcel],
    ) -> None:
        valuable = add_parcel(value="2500")
        container.add_parcel(valuable)

        service.process_container(container.id)
        assert container.status == ContainerStatus.PROCESSING

        service.reject_insurance(valuable.parcel_id)
        service.refresh_container_status(container.id)
        assert container.status == ContainerStatus.PROCESSED

    def test_skips_parcels_already_routed(
        self, service: ParcelProcessingService, container: ShippingContainer
    ) -> None:
        service.process_parcel(container.parcels[0].parcel_id)

        processed = service.process_container(container.id)

        assert len(processed) == 2

    def test_unknown_container(self, service: ParcelProcessingService) -> None:
        with pytest.raises(EntityNotFoundError):
            service.process_container("missing")

    def test_update_container_status(
        self, service: ParcelProcessingService, container: ShippingContainer
    ) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            service.update_container_status(container.id, ContainerStatus.SHIPPED)

        service.update_container_status(container.id, ContainerStatus.FAILED)
        assert container.status == ContainerStatus.FAILED
