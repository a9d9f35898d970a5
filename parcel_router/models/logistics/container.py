"""Shipping container model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from parcel_router.models import validation
from parcel_router.models.base import new_id, utcnow
from parcel_router.models.logistics import lifecycle
from parcel_router.models.logistics.enums import ContainerStatus
from parcel_router.models.logistics.parcel import Parcel


@dataclass
class ShippingContainer:
    """Container holding an ordered list of parcels.

    ``container_id`` is the business key printed on the manifest; ``id`` is
    the internal identifier the store is keyed by.
    """

    container_id: str
    shipping_date: datetime
    id: str = field(default_factory=new_id)
    status: ContainerStatus = field(default=ContainerStatus.PENDING, init=False)
    parcels: list[Parcel] = field(default_factory=list, init=False)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.container_id = validation.required(self.container_id, "Container id")
        self.shipping_date = validation.not_null(self.shipping_date, "Shipping date")

    @property
    def total_parcels(self) -> int:
        return len(self.parcels)

    @property
    def total_weight(self) -> Decimal:
        return sum((p.weight for p in self.parcels), Decimal("0"))

    @property
    def total_value(self) -> Decimal:
        return sum((p.value for p in self.parcels), Decimal("0"))

    @property
    def parcels_requiring_insurance(self) -> int:
        return sum(1 for p in self.parcels if p.requires_insurance_approval)

    def add_parcel(self, parcel: Parcel) -> None:
        validation.not_null(parcel, "Parcel")
        self.parcels.append(parcel)
        self.updated_at = utcnow()

    def remove_parcel(self, parcel: Parcel) -> None:
        validation.not_null(parcel, "Parcel")
        self.parcels = [p for p in self.parcels if p.parcel_id != parcel.parcel_id]
        self.updated_at = utcnow()

    def update_shipping_date(self, shipping_date: datetime) -> None:
        self.shipping_date = validation.not_null(shipping_date, "Shipping date")
        self.updated_at = utcnow()

    def update_status(self, status: ContainerStatus) -> None:
        """Set ``status`` without consulting the lifecycle graph."""
        self.status = ContainerStatus(status)
        self.updated_at = utcnow()

    def transition_to(self, status: ContainerStatus) -> None:
        lifecycle.check_transition(
            lifecycle.CONTAINER_TRANSITIONS, self.status, status, f"Container {self.container_id}"
        )
        self.update_status(status)
