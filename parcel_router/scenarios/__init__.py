"""Pre-built routing scenarios."""

from parcel_router.scenarios.container_intake import ContainerIntakeScenario

__all__ = ["ContainerIntakeScenario"]
