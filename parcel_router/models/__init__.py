"""Domain models for parcel routing."""

from parcel_router.models.base import Address, Customer

__all__ = ["Address", "Customer"]
