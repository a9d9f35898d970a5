"""Synthetic container manifest generator."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterator

from parcel_router.generators.address import AddressFactory
from parcel_router.generators.base import BaseGenerator
from parcel_router.services.manifest import ContainerManifest, ParcelManifest


class ManifestGenerator(BaseGenerator):
    """Generate container manifests with a realistic parcel mix.

    Weights fall in the mail, regular and heavy bands with the configured
    shares; values follow a log-normal curve so a small fraction exceeds the
    insurance threshold.
    """

    WEIGHT_BANDS = [
        (Decimal("0.05"), Decimal("1.00")),
        (Decimal("1.01"), Decimal("10.00")),
        (Decimal("10.01"), Decimal("40.00")),
    ]
    WEIGHT_SHARES = [0.45, 0.40, 0.15]

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "nl_NL",
        high_value_rate: float = 0.1,
    ) -> None:
        super().__init__(seed, locale)
        self._address_factory = AddressFactory(seed=seed)
        self.high_value_rate = high_value_rate
        self._sequence = 0

    def generate(self, num_parcels: int = 10, shipping_date: datetime | None = None) -> ContainerManifest:
        """Generate one manifest.

        Parameters
        ----------
        num_parcels : int
            Number of parcel lines.
        shipping_date : datetime | None
            Defaults to a date within the next two weeks.

        Returns
        -------
        ContainerManifest
            Generated manifest.
        """
        self._sequence += 1
        if shipping_date is None:
            shipping_date = datetime.now(timezone.utc).replace(
                hour=0, minute=0, second=0, microsecond=0
            ) + timedelta(days=self.random.randint(0, 14))

        return ContainerManifest(
            container_id=f"{self.fake.bothify('??').upper()}{self._sequence:06d}",
            shipping_date=shipping_date,
            parcels=[self.generate_parcel() for _ in range(num_parcels)],
        )

    def generate_batch(self, count: int, num_parcels: int = 10) -> Iterator[ContainerManifest]:
        for _ in range(count):
            yield self.generate(num_parcels)

    def generate_parcel(self) -> ParcelManifest:
        address = self._address_factory.generate()
        return ParcelManifest(
            recipient_name=self.fake.name(),
            street=address.street,
            house_number=address.number,
            postal_code=address.postal_code,
            city=address.city,
            weight=self._weight(),
            value=self._value(),
        )

    def _weight(self) -> Decimal:
        low, high = self.random.choices(self.WEIGHT_BANDS, weights=self.WEIGHT_SHARES, k=1)[0]
        grams = self.random.randint(int(low * 100), int(high * 100))
        return Decimal(grams) / 100

    def _value(self) -> Decimal:
        if self.random.random() < self.high_value_rate:
            amount = self.random.uniform(1000.01, 5000)
        else:
            amount = min(self.random.lognormvariate(4.5, 1.0), 1000)
        return Decimal(str(round(amount, 2)))
