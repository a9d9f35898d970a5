"""Custom exception hierarchy for parcel-router."""


class ParcelRouterError(Exception):
    """Base exception for all parcel-router errors."""


class InvalidArgumentError(ParcelRouterError, ValueError):
    """Raised when a supplied value violates a field invariant."""


class NullArgumentError(InvalidArgumentError):
    """Raised when a required reference is missing."""


class EntityNotFoundError(ParcelRouterError):
    """Raised when an operation addresses an identifier that does not exist."""


class UnresolvableDepartmentError(EntityNotFoundError):
    """Raised when a target department name does not resolve to an active department."""


class DuplicateKeyError(ParcelRouterError):
    """Raised when an insert collides with an existing identifier or business key."""


class InvalidEntityStateError(ParcelRouterError):
    """Raised when an entity is in an invalid state for the operation."""


class InvalidStatusTransitionError(InvalidEntityStateError):
    """Raised when a lifecycle transition is not allowed from the current status."""


class ManifestIntegrityError(ParcelRouterError):
    """Raised when a re-imported manifest disagrees with the stored container."""

    def __init__(self, container_id: str, issues: list[str]) -> None:
        self.container_id = container_id
        self.issues = list(issues)
        super().__init__(
            f"Container {container_id} already exists with different data: {', '.join(self.issues)}"
        )


class ConfigurationError(ParcelRouterError):
    """Raised when configuration is invalid or missing."""
