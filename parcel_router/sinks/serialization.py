"""Shared serialization utilities for sinks."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from parcel_router.models.logistics import Department, Parcel, ShippingContainer


def to_dict(obj: Any) -> dict:
    """Convert a record to a JSON-ready dictionary.

    Parcels and containers get compact summaries: a container would otherwise
    embed every parcel, each with its departments.
    """
    if isinstance(obj, ShippingContainer):
        return container_summary(obj)
    elif isinstance(obj, Parcel):
        return parcel_summary(obj)
    elif is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert a dataclass without deep-copying it."""
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def parcel_summary(parcel: Parcel) -> dict:
    return {
        "parcel_id": parcel.parcel_id,
        "recipient": parcel.recipient.name,
        "postal_code": parcel.recipient.address.postal_code,
        "city": parcel.recipient.address.city,
        "weight": serialize_value(parcel.weight),
        "value": serialize_value(parcel.value),
        "status": parcel.status.value,
        "departments": [d.name for d in parcel.assigned_departments],
    }


def container_summary(container: ShippingContainer) -> dict:
    return {
        "id": container.id,
        "container_id": container.container_id,
        "shipping_date": serialize_value(container.shipping_date),
        "status": container.status.value,
        "total_parcels": container.total_parcels,
        "total_weight": serialize_value(container.total_weight),
        "total_value": serialize_value(container.total_value),
        "parcels_requiring_insurance": container.parcels_requiring_insurance,
    }


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, Department):
        return value.name
    elif is_dataclass(value):
        return dataclass_to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value
