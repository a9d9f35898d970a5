"""Tests for BusinessRuleService."""

from decimal import Decimal

import pytest

from parcel_router.exceptions import EntityNotFoundError, InvalidArgumentError
from parcel_router.models.logistics import BusinessRuleType
from parcel_router.rules import BusinessRuleService
from parcel_router.store.logistics import LogisticsDataStore


@pytest.fixture
def service(store: LogisticsDataStore) -> BusinessRuleService:
    return BusinessRuleService(store.rules)


class TestBusinessRuleService:
    """Tests for rule CRUD and activation."""

    def test_create_rule(self, service: BusinessRuleService) -> None:
        rule = service.create_rule("Mail Rule", "Handle mail parcels", BusinessRuleType.WEIGHT, 0, 1, "Mail")

        assert rule.target_department == "Mail"
        assert rule.is_active
        assert rule.max_value == Decimal("1")
        assert service.get_rule(rule.rule_id) is rule

    def test_create_rejects_inverted_range(self, service: BusinessRuleService) -> None:
        with pytest.raises(InvalidArgumentError):
            service.create_rule("Bad", "bad", BusinessRuleType.WEIGHT, 10, 1, "Mail")

        assert service.get_all_rules() == []

    def test_queries(self, service: BusinessRuleService) -> None:
        mail = service.create_rule("Mail Rule", "m", BusinessRuleType.WEIGHT, 0, 1, "Mail")
        regular = service.create_rule("Regular Rule", "r", BusinessRuleType.WEIGHT, Decimal("1.01"), 10, "Regular")
        insurance = service.create_rule("Insurance Rule", "i", BusinessRuleType.VALUE, 1000, None, "Insurance")
        service.deactivate_rule(regular.rule_id)

        assert len(service.get_all_rules()) == 3
        assert service.get_active_rules() == [mail, insurance]
        assert service.get_active_rules_by_type(BusinessRuleType.WEIGHT) == [mail]
        assert service.get_rule_by_name("REGULAR RULE") is regular

    def test_update_rule(self, service: BusinessRuleService) -> None:
        rule = service.create_rule("Original Rule", "Original", BusinessRuleType.WEIGHT, 0, 1, "Mail")

        updated = service.update_rule(rule.rule_id, "Updated Rule", "Updated", 0, 2, "Regular")

        assert updated.name == "Updated Rule"
        assert updated.max_value == Decimal("2")
        assert updated.target_department == "Regular"
        assert updated.rule_type == BusinessRuleType.WEIGHT

    def test_update_missing_rule(self, service: BusinessRuleService) -> None:
        with pytest.raises(EntityNotFoundError):
            service.update_rule("missing", "Test", "Test", 0, 1, "Mail")

    def test_activate_and_deactivate(self, service: BusinessRuleService) -> None:
        rule = service.create_rule("Mail Rule", "m", BusinessRuleType.WEIGHT, 0, 1, "Mail")

        assert not service.deactivate_rule(rule.rule_id).is_active
        assert service.activate_rule(rule.rule_id).is_active

    def test_delete_rule(self, service: BusinessRuleService) -> None:
        rule = service.create_rule("Mail Rule", "m", BusinessRuleType.WEIGHT, 0, 1, "Mail")

        service.delete_rule(rule.rule_id)

        assert service.get_rule(rule.rule_id) is None
        with pytest.raises(EntityNotFoundError):
            service.delete_rule(rule.rule_id)
