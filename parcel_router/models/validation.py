"""Field validation helpers shared by the domain entities.

Every helper either returns the cleaned value or raises at the call site,
so constructors can validate all fields before assigning any of them.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, TypeVar

from parcel_router.exceptions import InvalidArgumentError, NullArgumentError

T = TypeVar("T")

DUTCH_POSTCODE = re.compile(r"[0-9]{4}[A-Z]{2}")


def required(value: str | None, field_name: str) -> str:
    """Return ``value`` stripped, rejecting None and blank strings."""
    if value is None or not str(value).strip():
        raise InvalidArgumentError(f"{field_name} cannot be empty")
    return str(value).strip()


def trim_or_empty(value: str | None) -> str:
    return value.strip() if value else ""


def not_null(value: T | None, field_name: str) -> T:
    if value is None:
        raise NullArgumentError(f"{field_name} cannot be null")
    return value


def to_decimal(value: Any, field_name: str) -> Decimal:
    """Coerce int, float, str or Decimal input to ``Decimal``.

    Floats go through ``str`` so ``1.1`` becomes ``Decimal("1.1")``.
    """
    if value is None:
        raise NullArgumentError(f"{field_name} cannot be null")
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{field_name} must be numeric")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation as exc:
            raise InvalidArgumentError(f"{field_name} must be numeric, got {value!r}") from exc
    if not result.is_finite():
        raise InvalidArgumentError(f"{field_name} must be a finite number")
    return result


def greater_than(value: Any, min_exclusive: Any, field_name: str) -> Decimal:
    number = to_decimal(value, field_name)
    if number <= to_decimal(min_exclusive, field_name):
        raise InvalidArgumentError(f"{field_name} must be greater than {min_exclusive}")
    return number


def not_negative(value: Any, field_name: str) -> Decimal:
    number = to_decimal(value, field_name)
    if number < 0:
        raise InvalidArgumentError(f"{field_name} cannot be negative")
    return number


def dutch_postcode(value: str | None, field_name: str = "Postal code") -> str:
    """Normalize a Dutch postal code to ``1234AB``.

    Surrounding whitespace is dropped and letters are uppercased before the
    format check; an inner space (``"4744 AT"``) is not accepted.
    """
    clean = required(value, field_name).upper()
    if not DUTCH_POSTCODE.fullmatch(clean):
        raise InvalidArgumentError(
            f"{field_name} must be in Dutch format 1234AB (4 digits + 2 letters), got {value!r}"
        )
    return clean
