"""Fixed fallback thresholds and default department names.

Used only when no active custom rule matches a measurement; never stored.
"""

from decimal import Decimal

from parcel_router.models.logistics.parcel import (
    INSURANCE_VALUE_THRESHOLD,
    MAIL_WEIGHT_LIMIT,
    REGULAR_WEIGHT_LIMIT,
)

MAIL = "Mail"
REGULAR = "Regular"
HEAVY = "Heavy"
INSURANCE = "Insurance"

DEFAULT_DEPARTMENTS: dict[str, str] = {
    MAIL: "Department responsible for parcels up to 1kg",
    REGULAR: "Department responsible for parcels between 1kg and 10kg",
    HEAVY: "Department responsible for parcels over 10kg",
    INSURANCE: "Department responsible for high-value parcel approval",
}


def default_weight_department(weight: Decimal) -> str:
    if weight <= MAIL_WEIGHT_LIMIT:
        return MAIL
    if weight <= REGULAR_WEIGHT_LIMIT:
        return REGULAR
    return HEAVY


def default_value_department(value: Decimal) -> str | None:
    return INSURANCE if value > INSURANCE_VALUE_THRESHOLD else None
