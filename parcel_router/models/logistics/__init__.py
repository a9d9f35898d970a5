"""Logistics domain models."""

from parcel_router.models.logistics.business_rule import BusinessRule
from parcel_router.models.logistics.container import ShippingContainer
from parcel_router.models.logistics.department import Department
from parcel_router.models.logistics.enums import BusinessRuleType, ContainerStatus, ParcelStatus
from parcel_router.models.logistics.parcel import Parcel

__all__ = [
    "BusinessRule",
    "BusinessRuleType",
    "ContainerStatus",
    "Department",
    "Parcel",
    "ParcelStatus",
    "ShippingContainer",
]
