"""Routing rule resolution and management."""

from parcel_router.rules.resolver import RuleResolver
from parcel_router.rules.service import BusinessRuleService

__all__ = ["BusinessRuleService", "RuleResolver"]
