"""Business rule management."""

import logging
from typing import Any

from parcel_router.exceptions import EntityNotFoundError
from parcel_router.models.logistics import BusinessRule, BusinessRuleType
from parcel_router.store.logistics import BusinessRuleStore

logger = logging.getLogger(__name__)


class BusinessRuleService:
    """Create, query and toggle routing rules."""

    def __init__(self, rules: BusinessRuleStore) -> None:
        self._rules = rules

    def get_all_rules(self) -> list[BusinessRule]:
        return self._rules.get_all_rules()

    def get_active_rules(self) -> list[BusinessRule]:
        return self._rules.get_active_rules()

    def get_active_rules_by_type(self, rule_type: BusinessRuleType) -> list[BusinessRule]:
        return self._rules.get_active_rules_by_type(rule_type)

    def get_rule(self, rule_id: str) -> BusinessRule | None:
        return self._rules.get(rule_id)

    def get_rule_by_name(self, name: str) -> BusinessRule | None:
        return self._rules.get_by_name(name)

    def create_rule(
        self,
        name: str,
        description: str,
        rule_type: BusinessRuleType,
        min_value: Any,
        max_value: Any | None,
        target_department: str,
    ) -> BusinessRule:
        rule = BusinessRule(
            name=name,
            description=description,
            rule_type=rule_type,
            min_value=min_value,
            max_value=max_value,
            target_department=target_department,
        )
        self._rules.add(rule)
        logger.info(
            "Created %s rule %r [%s, %s] -> %s",
            rule.rule_type.value,
            rule.name,
            rule.min_value,
            "inf" if rule.max_value is None else rule.max_value,
            rule.target_department,
        )
        return rule

    def update_rule(
        self,
        rule_id: str,
        name: str,
        description: str,
        min_value: Any,
        max_value: Any | None,
        target_department: str,
    ) -> BusinessRule:
        rule = self._require(rule_id)
        rule.update(name, description, min_value, max_value, target_department)
        self._rules.update(rule)
        logger.info("Updated rule %s", rule_id)
        return rule

    def activate_rule(self, rule_id: str) -> BusinessRule:
        rule = self._require(rule_id)
        rule.activate()
        return self._rules.update(rule)

    def deactivate_rule(self, rule_id: str) -> BusinessRule:
        rule = self._require(rule_id)
        rule.deactivate()
        return self._rules.update(rule)

    def delete_rule(self, rule_id: str) -> None:
        self._rules.delete(rule_id)
        logger.info("Deleted rule %s", rule_id)

    def _require(self, rule_id: str) -> BusinessRule:
        rule = self._rules.get(rule_id)
        if rule is None:
            logger.warning("Business rule %s not found", rule_id)
            raise EntityNotFoundError(f"Business rule with ID {rule_id} not found")
        return rule
