"""Seed default departments and routing rules at start-up."""

import logging
from decimal import Decimal

from parcel_router.models.logistics import BusinessRule, BusinessRuleType, Department
from parcel_router.rules import defaults
from parcel_router.store.logistics import LogisticsDataStore

logger = logging.getLogger(__name__)


def default_rules() -> list[BusinessRule]:
    """Editable rules mirroring the fixed fallback bands.

    Weight bands share their boundaries; the resolver's narrowest-range
    precedence sends 1kg to Mail and 10kg to Regular. The insurance rule
    starts one cent above the threshold because the fallback is strict.
    """
    return [
        BusinessRule(
            name="Mail Weight Rule",
            description="Parcels with weight up to 1kg are handled by Mail department",
            rule_type=BusinessRuleType.WEIGHT,
            min_value=Decimal("0"),
            max_value=Decimal("1"),
            target_department=defaults.MAIL,
        ),
        BusinessRule(
            name="Regular Weight Rule",
            description="Parcels with weight between 1kg and 10kg are handled by Regular department",
            rule_type=BusinessRuleType.WEIGHT,
            min_value=Decimal("1"),
            max_value=Decimal("10"),
            target_department=defaults.REGULAR,
        ),
        BusinessRule(
            name="Heavy Weight Rule",
            description="Parcels with weight over 10kg are handled by Heavy department",
            rule_type=BusinessRuleType.WEIGHT,
            min_value=Decimal("10"),
            max_value=None,
            target_department=defaults.HEAVY,
        ),
        BusinessRule(
            name="Insurance Value Rule",
            description="Parcels with value over 1000 EUR require Insurance department approval",
            rule_type=BusinessRuleType.VALUE,
            min_value=Decimal("1000.01"),
            max_value=None,
            target_department=defaults.INSURANCE,
        ),
    ]


class DataInitializationService:
    """Populate an empty store with the default departments and rules."""

    def __init__(self, store: LogisticsDataStore) -> None:
        self._store = store

    def initialize(self) -> None:
        self.initialize_departments()
        self.initialize_rules()

    def initialize_departments(self) -> int:
        """Create the default departments unless any department exists.

        Returns
        -------
        int
            Number of departments created.
        """
        if self._store.departments.count():
            logger.info("Departments already exist. Skipping initialization")
            return 0
        try:
            for name, description in defaults.DEFAULT_DEPARTMENTS.items():
                self._store.departments.add(Department(name=name, description=description))
        except Exception:
            logger.exception("Failed to initialize default departments")
            raise
        logger.info("Initialized %d default departments", len(defaults.DEFAULT_DEPARTMENTS))
        return len(defaults.DEFAULT_DEPARTMENTS)

    def initialize_rules(self) -> int:
        """Create the default rules unless an active rule exists."""
        if self._store.rules.get_active_rules():
            logger.info("Business rules already exist. Skipping initialization")
            return 0
        rules = default_rules()
        try:
            for rule in rules:
                self._store.rules.add(rule)
        except Exception:
            logger.exception("Failed to initialize default business rules")
            raise
        logger.info("Initialized %d configurable business rules", len(rules))
        return len(rules)
