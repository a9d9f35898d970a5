"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable

import pytest

from parcel_router.models.base import Address, Customer
from parcel_router.models.logistics import Parcel, ShippingContainer
from parcel_router.services import DataInitializationService
from parcel_router.services.manifest import ContainerManifest, ParcelManifest
from parcel_router.store.logistics import LogisticsDataStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def shipping_date() -> datetime:
    return datetime(2026, 3, 14, tzinfo=timezone.utc)


@pytest.fixture
def sample_address() -> Address:
    """Create a sample Dutch address."""
    return Address(
        street="Markt",
        number="12",
        neighborhood="Centrum",
        city="Bergeijk",
        state="Noord-Brabant",
        postal_code="5571AB",
    )


@pytest.fixture
def sample_customer(sample_address: Address) -> Customer:
    return Customer(name="Anna de Vries", address=sample_address)


@pytest.fixture
def make_parcel(sample_customer: Customer) -> Callable[..., Parcel]:
    """Factory for parcels sharing one recipient."""

    def _make(weight: Any = Decimal("2.5"), value: Any = Decimal("50")) -> Parcel:
        return Parcel(recipient=sample_customer, weight=weight, value=value)

    return _make


@pytest.fixture
def store() -> LogisticsDataStore:
    """Create a fresh, empty store for each test."""
    return LogisticsDataStore()


@pytest.fixture
def seeded_store() -> LogisticsDataStore:
    """Store holding the default departments and rules."""
    store = LogisticsDataStore()
    DataInitializationService(store).initialize()
    return store


@pytest.fixture
def make_line() -> Callable[..., ParcelManifest]:
    """Factory for manifest parcel lines."""

    def _make(
        recipient_name: str = "Jan Jansen",
        weight: Any = "2.50",
        value: Any = "45.00",
        postal_code: str = "1012AB",
    ) -> ParcelManifest:
        return ParcelManifest(
            recipient_name=recipient_name,
            street="Damrak",
            house_number="1",
            postal_code=postal_code,
            city="Amsterdam",
            weight=weight,
            value=value,
        )

    return _make


@pytest.fixture
def sample_manifest(
    make_line: Callable[..., ParcelManifest], shipping_date: datetime
) -> ContainerManifest:
    """Manifest with one parcel per routing band plus one high-value parcel."""
    return ContainerManifest(
        container_id="CNT-0001",
        shipping_date=shipping_date,
        parcels=[
            make_line("Mail Recipient", "0.50", "20.00"),
            make_line("Regular Recipient", "5.00", "150.00"),
            make_line("Heavy Recipient", "15.00", "300.00"),
            make_line("Valuable Recipient", "3.00", "2500.00"),
        ],
    )


@pytest.fixture
def sample_container(shipping_date: datetime) -> ShippingContainer:
    return ShippingContainer(container_id="CNT-0001", shipping_date=shipping_date)
