"""Status transition graphs for parcels and shipping containers.

Entities expose a permissive ``update_status`` and a checked
``transition_to``; both read the graphs defined here. ``FAILED`` is reachable
from every non-terminal status, ``DELIVERED`` and ``FAILED`` are terminal.
"""

from enum import Enum
from typing import TypeVar

from parcel_router.exceptions import InvalidStatusTransitionError
from parcel_router.models.logistics.enums import ContainerStatus, ParcelStatus

S = TypeVar("S", bound=Enum)

PARCEL_TRANSITIONS: dict[ParcelStatus, frozenset[ParcelStatus]] = {
    ParcelStatus.PENDING: frozenset({ParcelStatus.PROCESSING, ParcelStatus.FAILED}),
    ParcelStatus.PROCESSING: frozenset(
        {
            ParcelStatus.INSURANCE_APPROVAL_REQUIRED,
            ParcelStatus.ASSIGNED_TO_DEPARTMENT,
            ParcelStatus.FAILED,
        }
    ),
    ParcelStatus.INSURANCE_APPROVAL_REQUIRED: frozenset(
        {
            ParcelStatus.INSURANCE_APPROVED,
            ParcelStatus.INSURANCE_REJECTED,
            ParcelStatus.FAILED,
        }
    ),
    ParcelStatus.INSURANCE_APPROVED: frozenset(
        {ParcelStatus.ASSIGNED_TO_DEPARTMENT, ParcelStatus.FAILED}
    ),
    # A rejected parcel halts; it is not routed any further
    ParcelStatus.INSURANCE_REJECTED: frozenset({ParcelStatus.FAILED}),
    ParcelStatus.ASSIGNED_TO_DEPARTMENT: frozenset({ParcelStatus.PROCESSED, ParcelStatus.FAILED}),
    ParcelStatus.PROCESSED: frozenset({ParcelStatus.SHIPPED, ParcelStatus.FAILED}),
    ParcelStatus.SHIPPED: frozenset({ParcelStatus.DELIVERED, ParcelStatus.FAILED}),
    ParcelStatus.DELIVERED: frozenset(),
    ParcelStatus.FAILED: frozenset(),
}

CONTAINER_TRANSITIONS: dict[ContainerStatus, frozenset[ContainerStatus]] = {
    ContainerStatus.PENDING: frozenset({ContainerStatus.PROCESSING, ContainerStatus.FAILED}),
    ContainerStatus.PROCESSING: frozenset({ContainerStatus.PROCESSED, ContainerStatus.FAILED}),
    ContainerStatus.PROCESSED: frozenset({ContainerStatus.SHIPPED, ContainerStatus.FAILED}),
    ContainerStatus.SHIPPED: frozenset({ContainerStatus.DELIVERED, ContainerStatus.FAILED}),
    ContainerStatus.DELIVERED: frozenset(),
    ContainerStatus.FAILED: frozenset(),
}

PARCEL_TERMINAL = frozenset({ParcelStatus.DELIVERED, ParcelStatus.FAILED})
CONTAINER_TERMINAL = frozenset({ContainerStatus.DELIVERED, ContainerStatus.FAILED})


def can_transition(graph: dict[S, frozenset[S]], current: S, target: S) -> bool:
    """Return True when ``target`` is a legal next status from ``current``.

    Re-applying the current status of a non-terminal entity is accepted so
    workflows can be re-run on a parcel that is already where they want it.
    """
    if current == target:
        return bool(graph[current])
    return target in graph[current]


def check_transition(graph: dict[S, frozenset[S]], current: S, target: S, subject: str) -> None:
    if not can_transition(graph, current, target):
        raise InvalidStatusTransitionError(
            f"{subject} cannot move from {current.value} to {target.value}"
        )


def is_parcel_terminal(status: ParcelStatus) -> bool:
    return status in PARCEL_TERMINAL


def is_container_terminal(status: ContainerStatus) -> bool:
    return status in CONTAINER_TERMINAL
