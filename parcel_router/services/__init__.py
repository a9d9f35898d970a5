"""Workflows composed over the logistics stores."""

from parcel_router.services.departments import DepartmentService
from parcel_router.services.initialization import DataInitializationService
from parcel_router.services.manifest import ContainerManifest, ManifestImporter, ParcelManifest
from parcel_router.services.processing import ParcelProcessingService

__all__ = [
    "ContainerManifest",
    "DataInitializationService",
    "DepartmentService",
    "ManifestImporter",
    "ParcelManifest",
    "ParcelProcessingService",
]
