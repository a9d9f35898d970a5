"""Parcel model and its department assignments."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from parcel_router.models import validation
from parcel_router.models.base import Customer, new_id, utcnow
from parcel_router.models.logistics import lifecycle
from parcel_router.models.logistics.department import Department
from parcel_router.models.logistics.enums import ParcelStatus

INSURANCE_VALUE_THRESHOLD = Decimal("1000")
MAIL_WEIGHT_LIMIT = Decimal("1")
REGULAR_WEIGHT_LIMIT = Decimal("10")


@dataclass
class Parcel:
    """Parcel addressed to a recipient, weighed in kg and valued in euros.

    The classification flags are properties so they always reflect the
    current weight and value.
    """

    recipient: Customer
    weight: Decimal
    value: Decimal
    parcel_id: str = field(default_factory=new_id)
    status: ParcelStatus = field(default=ParcelStatus.PENDING, init=False)
    assigned_departments: list[Department] = field(default_factory=list, init=False)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        validation.not_null(self.recipient, "Recipient")
        self.weight, self.value = _clean_measurements(self.weight, self.value)

    @property
    def requires_insurance_approval(self) -> bool:
        return self.value > INSURANCE_VALUE_THRESHOLD

    @property
    def is_mail_parcel(self) -> bool:
        return self.weight <= MAIL_WEIGHT_LIMIT

    @property
    def is_regular_parcel(self) -> bool:
        return MAIL_WEIGHT_LIMIT < self.weight <= REGULAR_WEIGHT_LIMIT

    @property
    def is_heavy_parcel(self) -> bool:
        return self.weight > REGULAR_WEIGHT_LIMIT

    @property
    def is_terminal(self) -> bool:
        return lifecycle.is_parcel_terminal(self.status)

    def update(self, weight: Any, value: Any) -> None:
        """Replace weight and value; neither changes if either is invalid."""
        self.weight, self.value = _clean_measurements(weight, value)
        self.updated_at = utcnow()

    def assign_department(self, department: Department) -> None:
        """Add ``department`` unless it is already assigned."""
        validation.not_null(department, "Department")
        if department not in self.assigned_departments:
            self.assigned_departments.append(department)
            self.updated_at = utcnow()

    def remove_department(self, department: Department) -> None:
        validation.not_null(department, "Department")
        if department in self.assigned_departments:
            self.assigned_departments.remove(department)
            self.updated_at = utcnow()

    def clear_departments(self) -> None:
        if self.assigned_departments:
            self.assigned_departments.clear()
            self.updated_at = utcnow()

    def update_status(self, status: ParcelStatus) -> None:
        """Set ``status`` without consulting the lifecycle graph.

        Workflows that need the graph enforced call :meth:`transition_to`.
        """
        self.status = ParcelStatus(status)
        self.updated_at = utcnow()

    def can_transition_to(self, status: ParcelStatus) -> bool:
        return lifecycle.can_transition(lifecycle.PARCEL_TRANSITIONS, self.status, status)

    def transition_to(self, status: ParcelStatus) -> None:
        lifecycle.check_transition(
            lifecycle.PARCEL_TRANSITIONS, self.status, status, f"Parcel {self.parcel_id}"
        )
        self.update_status(status)


def _clean_measurements(weight: Any, value: Any) -> tuple[Decimal, Decimal]:
    return (
        validation.greater_than(weight, 0, "Weight"),
        validation.not_negative(value, "Value"),
    )
