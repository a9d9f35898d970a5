"""Base models shared across the logistics domain."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from parcel_router.models import validation


def utcnow() -> datetime:
    """Timezone-aware current UTC time used for every entity timestamp."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Address:
    """Dutch postal address of a parcel recipient.

    Fields are validated on construction and on :meth:`update`:
    - street/number/neighborhood/city/state/country: required, stored trimmed
    - postal_code: uppercased and checked against ``1234AB``
    - complement: optional, stored trimmed (empty when absent)
    """

    street: str
    number: str
    neighborhood: str
    city: str
    state: str
    postal_code: str
    complement: str = ""
    country: str = "Netherlands"
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        cleaned = _clean_address_fields(
            self.street,
            self.number,
            self.complement,
            self.neighborhood,
            self.city,
            self.state,
            self.postal_code,
            self.country,
        )
        self._assign(cleaned)

    def update(
        self,
        street: str,
        number: str,
        complement: str | None,
        neighborhood: str,
        city: str,
        state: str,
        postal_code: str,
        country: str,
    ) -> None:
        """Replace every field, keeping ``created_at`` and stamping ``updated_at``."""
        cleaned = _clean_address_fields(
            street, number, complement, neighborhood, city, state, postal_code, country
        )
        self._assign(cleaned)
        self.updated_at = utcnow()

    def _assign(self, cleaned: dict[str, str]) -> None:
        for name, value in cleaned.items():
            setattr(self, name, value)


def _clean_address_fields(
    street: str,
    number: str,
    complement: str | None,
    neighborhood: str,
    city: str,
    state: str,
    postal_code: str,
    country: str,
) -> dict[str, str]:
    return {
        "street": validation.required(street, "Street"),
        "number": validation.required(number, "Number"),
        "complement": validation.trim_or_empty(complement),
        "neighborhood": validation.required(neighborhood, "Neighborhood"),
        "city": validation.required(city, "City"),
        "state": validation.required(state, "State"),
        "postal_code": validation.dutch_postcode(postal_code, "Postal code"),
        "country": validation.required(country, "Country"),
    }


@dataclass
class Customer:
    """Parcel recipient."""

    name: str
    address: Address
    customer_id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.name = validation.required(self.name, "Name")
        validation.not_null(self.address, "Address")

    def update(self, name: str, address: Address) -> None:
        cleaned_name = validation.required(name, "Name")
        self.address = validation.not_null(address, "Address")
        self.name = cleaned_name
        self.updated_at = utcnow()
