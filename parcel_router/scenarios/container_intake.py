"""Container intake scenario: import, route and settle synthetic containers."""

import logging
import random

from parcel_router.config import ParcelRouterConfig
from parcel_router.exceptions import ParcelRouterError
from parcel_router.generators import ManifestGenerator
from parcel_router.models.logistics import Parcel, ParcelStatus, ShippingContainer
from parcel_router.services import DataInitializationService, ManifestImporter, ParcelProcessingService
from parcel_router.store.logistics import LogisticsDataStore

logger = logging.getLogger(__name__)


class ContainerIntakeScenario:
    """Run the full intake flow over generated manifests.

    This scenario:
    - Seeds the default departments and weight/value rules
    - Imports one manifest per container
    - Routes every parcel of every container
    - Decides insurance for high-value parcels, approving a share of them
    - Refreshes container status once every parcel is settled
    """

    def __init__(
        self,
        config: ParcelRouterConfig | None = None,
        high_value_rate: float = 0.1,
        approval_rate: float = 0.8,
    ) -> None:
        """Initialize container intake scenario.

        Parameters
        ----------
        config : ParcelRouterConfig | None
            Generator and routing settings; defaults apply when omitted.
        high_value_rate : float
            Share of parcels valued above the insurance threshold (0.0 to 1.0).
        approval_rate : float
            Share of insurance decisions that approve (0.0 to 1.0).
        """
        self.config = config or ParcelRouterConfig()
        self.approval_rate = approval_rate
        self._random = random.Random(self.config.generator.seed)

        self.store = LogisticsDataStore()
        self.importer = ManifestImporter(self.store)
        self.processing = ParcelProcessingService(self.store, config=self.config.routing)
        self._generator = ManifestGenerator(
            seed=self.config.generator.seed,
            locale=self.config.generator.locale,
            high_value_rate=high_value_rate,
        )

        self.failed_containers: list[str] = []

    def generate(self) -> LogisticsDataStore:
        """Run the scenario.

        Returns
        -------
        LogisticsDataStore
            Store holding every imported container and routed parcel.
        """
        generator_config = self.config.generator
        logger.info(
            "Starting container intake scenario: %d containers, %d parcels each",
            generator_config.num_containers,
            generator_config.parcels_per_container,
        )

        DataInitializationService(self.store).initialize()

        for manifest in self._generator.generate_batch(
            generator_config.num_containers, generator_config.parcels_per_container
        ):
            try:
                container = self.importer.import_manifest(manifest)
                self.processing.process_container(container.id)
                self._decide_insurance(container)
            except ParcelRouterError:
                logger.exception("Container %s could not be processed", manifest.container_id)
                self.failed_containers.append(manifest.container_id)

        logger.info("Scenario complete: %s", self.store.summary())
        return self.store

    def get_awaiting_insurance(self) -> list[Parcel]:
        return self.store.parcels.get_by_status(ParcelStatus.INSURANCE_APPROVAL_REQUIRED)

    def _decide_insurance(self, container: ShippingContainer) -> None:
        approved = rejected = 0
        for parcel in container.parcels:
            if parcel.status != ParcelStatus.INSURANCE_APPROVAL_REQUIRED:
                continue
            if self._random.random() < self.approval_rate:
                self.processing.approve_insurance(parcel.parcel_id)
                approved += 1
            else:
                self.processing.reject_insurance(parcel.parcel_id)
                rejected += 1

        if approved or rejected:
            logger.info(
                "Container %s insurance decisions: %d approved, %d rejected",
                container.container_id,
                approved,
                rejected,
            )
        self.processing.refresh_container_status(container.id)
