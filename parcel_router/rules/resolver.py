"""Resolve measurements to target departments."""

import logging
from decimal import Decimal
from typing import Any

from parcel_router.exceptions import UnresolvableDepartmentError
from parcel_router.models import validation
from parcel_router.models.logistics import BusinessRule, BusinessRuleType, Department
from parcel_router.rules import defaults
from parcel_router.store.logistics import BusinessRuleStore, DepartmentStore

logger = logging.getLogger(__name__)


def _precedence(rule: BusinessRule) -> tuple[bool, Decimal, Decimal, Any, str]:
    """Sort key: narrowest range, then highest minimum, oldest, smallest id.

    Unbounded rules sort after every bounded one.
    """
    width = rule.width
    return (
        width is None,
        width if width is not None else Decimal("0"),
        -rule.min_value,
        rule.created_at,
        rule.rule_id,
    )


class RuleResolver:
    """Map a weight or value to a department name.

    Active custom rules take precedence; when none matches, the fixed bands in
    :mod:`parcel_router.rules.defaults` apply.

    Parameters
    ----------
    rules : BusinessRuleStore
        Source of custom rules.
    departments : DepartmentStore
        Directory used to turn names into departments.
    """

    def __init__(self, rules: BusinessRuleStore, departments: DepartmentStore) -> None:
        self._rules = rules
        self._departments = departments

    def find_matching_rule(self, rule_type: BusinessRuleType, measurement: Any) -> BusinessRule | None:
        m = validation.to_decimal(measurement, "Measurement")
        candidates = [
            rule for rule in self._rules.get_active_rules_by_type(rule_type) if rule.matches(m)
        ]
        if not candidates:
            return None

        candidates.sort(key=_precedence)
        if len(candidates) > 1:
            logger.warning(
                "%d active %s rules match %s; using %r",
                len(candidates),
                rule_type.value,
                m,
                candidates[0].name,
            )
        return candidates[0]

    def resolve(self, rule_type: BusinessRuleType, measurement: Any) -> str | None:
        """Return the target department name for ``measurement``.

        ``None`` means the rule type forces no department (values at or below
        the insurance threshold without a matching rule).
        """
        m = validation.to_decimal(measurement, "Measurement")
        rule = self.find_matching_rule(rule_type, m)
        if rule is not None:
            logger.debug("Rule %r routes %s %s to %s", rule.name, rule_type.value, m, rule.target_department)
            return rule.target_department

        if rule_type == BusinessRuleType.WEIGHT:
            return defaults.default_weight_department(m)
        return defaults.default_value_department(m)

    def resolve_department(self, rule_type: BusinessRuleType, measurement: Any) -> Department | None:
        name = self.resolve(rule_type, measurement)
        if name is None:
            return None
        return self.department_named(name)

    def department_named(self, name: str) -> Department:
        """Look up an active department by name or raise ``UnresolvableDepartmentError``."""
        department = self._departments.get_by_name(name)
        if department is None:
            raise UnresolvableDepartmentError(f"Department {name!r} does not exist")
        if not department.is_active:
            raise UnresolvableDepartmentError(f"Department {name!r} is inactive")
        return department

    def determine_departments(self, weight: Any, value: Any) -> list[Department]:
        """Departments required for a parcel: value axis first, then weight axis."""
        departments: list[Department] = []
        for rule_type, measurement in (
            (BusinessRuleType.VALUE, value),
            (BusinessRuleType.WEIGHT, weight),
        ):
            department = self.resolve_department(rule_type, measurement)
            if department is not None and department not in departments:
                departments.append(department)
        return departments
