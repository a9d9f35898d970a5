"""Department directory operations."""

import logging

from parcel_router.exceptions import DuplicateKeyError, EntityNotFoundError, InvalidEntityStateError
from parcel_router.models import validation
from parcel_router.models.logistics import Department
from parcel_router.store.logistics import DepartmentStore, ParcelStore

logger = logging.getLogger(__name__)


class DepartmentService:
    """Manage named, activatable departments.

    Deactivated departments stay resolvable by identifier; listings meant for
    routing should use :meth:`get_active_departments`.
    """

    def __init__(self, departments: DepartmentStore, parcels: ParcelStore) -> None:
        self._departments = departments
        self._parcels = parcels

    def get_all_departments(self) -> list[Department]:
        return self._departments.get_all()

    def get_active_departments(self) -> list[Department]:
        return self._departments.get_active_departments()

    def get_inactive_departments(self) -> list[Department]:
        return self._departments.get_inactive_departments()

    def get_department(self, department_id: str) -> Department | None:
        return self._departments.get(department_id)

    def get_department_by_name(self, name: str) -> Department | None:
        return self._departments.get_by_name(validation.required(name, "Department name"))

    def create_department(self, name: str, description: str = "") -> Department:
        department = Department(name=name, description=description)
        try:
            self._departments.add(department)
        except DuplicateKeyError:
            logger.warning("Attempted to create department with existing name: %s", department.name)
            raise
        logger.info("Created department %s with ID %s", department.name, department.department_id)
        return department

    def update_department(self, department_id: str, name: str, description: str = "") -> Department:
        new_name = validation.required(name, "Department name")
        self._require(department_id)

        # Name check and rename happen under the store lock
        try:
            department = self._departments.modify(
                department_id, lambda d: d.update(new_name, description)
            )
        except DuplicateKeyError:
            logger.warning("Attempted to rename department %s to existing name %s", department_id, new_name)
            raise
        logger.info("Updated department %s", department_id)
        return department

    def activate_department(self, department_id: str) -> Department:
        department = self._require(department_id)
        department.activate()
        self._departments.update(department)
        logger.info("Activated department %s", department.name)
        return department

    def deactivate_department(self, department_id: str) -> Department:
        department = self._require(department_id)
        department.deactivate()
        self._departments.update(department)
        logger.info("Deactivated department %s", department.name)
        return department

    def delete_department(self, department_id: str) -> None:
        """Delete a department no stored parcel is assigned to."""
        department = self._require(department_id)
        referencing = self._parcels.get_by_department(department_id)
        if referencing:
            logger.warning(
                "Refusing to delete department %s referenced by %d parcels",
                department.name,
                len(referencing),
            )
            raise InvalidEntityStateError(
                f"Department {department.name!r} is assigned to {len(referencing)} parcels; deactivate it instead"
            )
        self._departments.delete(department_id)
        logger.info("Deleted department %s", department.name)

    def _require(self, department_id: str) -> Department:
        department = self._departments.get(department_id)
        if department is None:
            logger.warning("Department %s not found", department_id)
            raise EntityNotFoundError(f"Department with ID {department_id} not found")
        return department
