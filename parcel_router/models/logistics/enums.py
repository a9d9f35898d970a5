"""Enumeration types for logistics domain entities."""

from enum import Enum


class ParcelStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    INSURANCE_APPROVAL_REQUIRED = "INSURANCE_APPROVAL_REQUIRED"
    INSURANCE_APPROVED = "INSURANCE_APPROVED"
    INSURANCE_REJECTED = "INSURANCE_REJECTED"
    ASSIGNED_TO_DEPARTMENT = "ASSIGNED_TO_DEPARTMENT"
    PROCESSED = "PROCESSED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"


class ContainerStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    PROCESSED = "PROCESSED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"


class BusinessRuleType(str, Enum):
    WEIGHT = "WEIGHT"
    VALUE = "VALUE"
