"""Container manifest intake.

The manifest arrives already parsed: reading the serialized file is the
caller's job. Importing the same manifest twice returns the stored container;
importing different data under an existing container id is refused.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from parcel_router.exceptions import InvalidArgumentError, ManifestIntegrityError
from parcel_router.models import validation
from parcel_router.models.base import Address, Customer
from parcel_router.models.logistics import Parcel, ShippingContainer
from parcel_router.store.logistics import LogisticsDataStore

logger = logging.getLogger(__name__)

# Weight and value differences below this are treated as rounding noise
INTEGRITY_TOLERANCE = Decimal("0.01")

# Manifests only carry street, number, postal code and city
DEFAULT_NEIGHBORHOOD = "Default"
DEFAULT_STATE = "NL"
DEFAULT_COUNTRY = "Netherlands"


@dataclass(frozen=True)
class ParcelManifest:
    """One parcel line of a container manifest."""

    recipient_name: str
    street: str
    house_number: str
    postal_code: str
    city: str
    weight: Any
    value: Any

    @property
    def signature(self) -> str:
        return "|".join(
            [
                self.recipient_name,
                str(self.weight),
                str(self.value),
                self.street,
                self.house_number,
                self.postal_code,
                self.city,
            ]
        )


@dataclass(frozen=True)
class ContainerManifest:
    """Container header plus its parcel lines."""

    container_id: str
    shipping_date: datetime
    parcels: list[ParcelManifest] = field(default_factory=list)


class ManifestImporter:
    """Create containers and parcels from manifests.

    Parameters
    ----------
    store : LogisticsDataStore
        Process-wide stores; the container store and the parcel store are
        written independently.
    """

    def __init__(self, store: LogisticsDataStore) -> None:
        self._store = store

    def validate(self, manifest: ContainerManifest | None) -> bool:
        if manifest is None:
            logger.warning("Manifest validation failed: manifest is missing")
            return False
        is_valid = bool(manifest.container_id and manifest.container_id.strip()) and bool(
            manifest.parcels
        )
        logger.info(
            "Manifest validation completed. Valid: %s, ContainerId: %s, ParcelCount: %d",
            is_valid,
            manifest.container_id,
            len(manifest.parcels),
        )
        return is_valid

    def import_manifest(self, manifest: ContainerManifest) -> ShippingContainer:
        validation.not_null(manifest, "Manifest")
        if not self.validate(manifest):
            raise InvalidArgumentError("Manifest needs a container id and at least one parcel")

        existing = self._store.containers.get_by_container_id(manifest.container_id)
        if existing is not None:
            issues = self.check_integrity(existing, manifest)
            if issues:
                logger.warning(
                    "Container %s exists but has integrity issues: %s",
                    manifest.container_id,
                    ", ".join(issues),
                )
                raise ManifestIntegrityError(manifest.container_id, issues)
            logger.info(
                "Container %s already imported with %d parcels",
                existing.container_id,
                existing.total_parcels,
            )
            return existing

        container = ShippingContainer(
            container_id=manifest.container_id, shipping_date=manifest.shipping_date
        )
        self._store.containers.add(container)

        try:
            self._add_parcels(container, manifest.parcels)
            self._store.containers.update(container)
        except Exception:
            logger.exception(
                "Failed to create parcels for container %s. Rolling back.", container.container_id
            )
            self._rollback(container)
            raise

        logger.info(
            "Imported container %s with %d parcels",
            container.container_id,
            container.total_parcels,
            extra={"container_id": container.container_id},
        )
        return container

    def check_integrity(self, existing: ShippingContainer, manifest: ContainerManifest) -> list[str]:
        """Describe every difference between a stored container and a manifest."""
        issues: list[str] = []
        if existing.shipping_date != manifest.shipping_date:
            issues.append(
                f"Shipping date mismatch: existing={existing.shipping_date:%Y-%m-%d}, "
                f"new={manifest.shipping_date:%Y-%m-%d}"
            )

        lines, _ = unique_lines(manifest.parcels)
        if existing.total_parcels != len(lines):
            issues.append(
                f"Parcel count mismatch: existing={existing.total_parcels}, new={len(lines)}"
            )
            return issues

        for i, (parcel, line) in enumerate(zip(existing.parcels, lines), start=1):
            weight = validation.to_decimal(line.weight, "Weight")
            value = validation.to_decimal(line.value, "Value")
            if abs(parcel.weight - weight) > INTEGRITY_TOLERANCE:
                issues.append(f"Parcel {i} weight mismatch: existing={parcel.weight}, new={weight}")
            if abs(parcel.value - value) > INTEGRITY_TOLERANCE:
                issues.append(f"Parcel {i} value mismatch: existing={parcel.value}, new={value}")
            if parcel.recipient.name != line.recipient_name.strip():
                issues.append(
                    f"Parcel {i} recipient name mismatch: existing={parcel.recipient.name}, "
                    f"new={line.recipient_name}"
                )
        return issues

    def _add_parcels(self, container: ShippingContainer, lines: list[ParcelManifest]) -> None:
        unique, duplicates = unique_lines(lines)
        for line in unique:
            parcel = self._parcel_from_line(line)
            self._store.parcels.add(parcel)
            container.add_parcel(parcel)

        if duplicates:
            logger.info(
                "Created %d unique parcels, skipped %d duplicates", container.total_parcels, duplicates
            )

    @staticmethod
    def _parcel_from_line(line: ParcelManifest) -> Parcel:
        address = Address(
            street=line.street,
            number=line.house_number,
            neighborhood=DEFAULT_NEIGHBORHOOD,
            city=line.city,
            state=DEFAULT_STATE,
            postal_code=line.postal_code,
            country=DEFAULT_COUNTRY,
        )
        return Parcel(
            recipient=Customer(name=line.recipient_name, address=address),
            weight=line.weight,
            value=line.value,
        )

    def _rollback(self, container: ShippingContainer) -> None:
        for parcel in container.parcels:
            if self._store.parcels.exists(parcel.parcel_id):
                self._store.parcels.delete(parcel.parcel_id)
        if self._store.containers.exists(container.id):
            self._store.containers.delete(container.id)


def unique_lines(lines: list[ParcelManifest]) -> tuple[list[ParcelManifest], int]:
    """Drop repeated parcel lines, keeping the first; return the kept lines and the drop count."""
    seen: set[str] = set()
    unique: list[ParcelManifest] = []
    for line in lines:
        if line.signature in seen:
            logger.warning(
                "Duplicate parcel skipped: %s, weight %s, value %s",
                line.recipient_name,
                line.weight,
                line.value,
            )
            continue
        seen.add(line.signature)
        unique.append(line)
    return unique, len(lines) - len(unique)
