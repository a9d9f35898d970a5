"""Dutch address generation."""

from __future__ import annotations

import random
import string

from faker import Faker

from parcel_router.models.base import Address


class AddressFactory:
    """Generate valid Dutch recipient addresses.

    Always uses the ``nl_NL`` Faker provider. Postal codes are built in the
    compact ``1234AB`` form the address model accepts.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._fake = Faker("nl_NL")
        self._random = random.Random(seed)
        if seed is not None:
            self._fake.seed_instance(seed)

    def postal_code(self) -> str:
        return self._fake.bothify("%###??", letters=string.ascii_uppercase)

    def generate(self) -> Address:
        return Address(
            street=self._fake.street_name(),
            number=str(self._random.randint(1, 250)),
            neighborhood=self._fake.city(),
            city=self._fake.city(),
            state=self._fake.province(),
            postal_code=self.postal_code(),
            complement=self._random.choice(["", "", "", f"{self._random.randint(1, 4)}e verdieping"]),
            country="Netherlands",
        )
