"""Synthetic data generators."""

from parcel_router.generators.address import AddressFactory
from parcel_router.generators.manifest import ManifestGenerator

__all__ = ["AddressFactory", "ManifestGenerator"]
