"""Configurable routing rule model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from parcel_router.exceptions import InvalidArgumentError
from parcel_router.models import validation
from parcel_router.models.base import new_id, utcnow
from parcel_router.models.logistics.enums import BusinessRuleType


@dataclass
class BusinessRule:
    """Routes measurements inside ``[min_value, max_value]`` to a department.

    Both bounds are inclusive; ``max_value=None`` leaves the range open above.
    """

    name: str
    description: str
    rule_type: BusinessRuleType
    min_value: Decimal
    max_value: Decimal | None
    target_department: str
    rule_id: str = field(default_factory=new_id)
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        try:
            self.rule_type = BusinessRuleType(self.rule_type)
        except ValueError as exc:
            raise InvalidArgumentError(f"Unknown rule type {self.rule_type!r}") from exc
        cleaned = _clean_rule_fields(
            self.name, self.description, self.min_value, self.max_value, self.target_department
        )
        for name, value in cleaned.items():
            setattr(self, name, value)

    @property
    def width(self) -> Decimal | None:
        """Size of the matched range, ``None`` when unbounded."""
        if self.max_value is None:
            return None
        return self.max_value - self.min_value

    def matches(self, measurement: Any) -> bool:
        m = validation.to_decimal(measurement, "Measurement")
        return m >= self.min_value and (self.max_value is None or m <= self.max_value)

    def update(
        self,
        name: str,
        description: str,
        min_value: Any,
        max_value: Any | None,
        target_department: str,
    ) -> None:
        cleaned = _clean_rule_fields(name, description, min_value, max_value, target_department)
        for attr, value in cleaned.items():
            setattr(self, attr, value)
        self.updated_at = utcnow()

    def activate(self) -> None:
        self.is_active = True
        self.updated_at = utcnow()

    def deactivate(self) -> None:
        self.is_active = False
        self.updated_at = utcnow()


def _clean_rule_fields(
    name: str,
    description: str,
    min_value: Any,
    max_value: Any | None,
    target_department: str,
) -> dict[str, Any]:
    minimum = validation.not_negative(min_value, "Minimum value")
    maximum = None
    if max_value is not None:
        maximum = validation.to_decimal(max_value, "Maximum value")
        if maximum < minimum:
            raise InvalidArgumentError(
                f"Maximum value {maximum} cannot be less than minimum value {minimum}"
            )
    return {
        "name": validation.required(name, "Name"),
        "description": validation.required(description, "Description"),
        "min_value": minimum,
        "max_value": maximum,
        "target_department": validation.required(target_department, "Target department"),
    }
