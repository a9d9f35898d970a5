"""Department model for the logistics domain."""

from dataclasses import dataclass, field
from datetime import datetime

from parcel_router.models import validation
from parcel_router.models.base import new_id, utcnow


@dataclass(eq=False)
class Department:
    """Handling department a parcel can be routed to.

    Two departments are equal when they share ``department_id``; name and
    activity may change over the department's life.
    """

    name: str
    description: str = ""
    department_id: str = field(default_factory=new_id)
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.name = validation.required(self.name, "Department name")
        self.description = validation.trim_or_empty(self.description)

    def update(self, name: str, description: str | None = "") -> None:
        self.name = validation.required(name, "Department name")
        self.description = validation.trim_or_empty(description)
        self.updated_at = utcnow()

    def activate(self) -> None:
        self.is_active = True
        self.updated_at = utcnow()

    def deactivate(self) -> None:
        self.is_active = False
        self.updated_at = utcnow()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Department):
            return NotImplemented
        return self.department_id == other.department_id

    def __hash__(self) -> int:
        return hash(self.department_id)
