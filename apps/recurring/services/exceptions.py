"""Domain-specific exceptions for recurring bill services."""
from apps.common.exceptions import (
    RoomyServiceError,
    NotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
)


class RecurringServiceError(RoomyServiceError):
    """Base exception for recurring service errors that have no shared kind."""
    pass


class RecurringBillNotFoundError(NotFoundError):
    """Raised when a recurring bill schedule does not exist."""
    default_detail = 'Recurring bill not found.'


__all__ = [
    'RecurringServiceError',
    'RecurringBillNotFoundError',
    'NotMemberError',
    'InsufficientPermissionsError',
]
