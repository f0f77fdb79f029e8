"""Domain-specific exceptions for bills services."""
from apps.common.exceptions import (
    RoomyServiceError,
    NotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
    InvalidStateError,
)


class BillsServiceError(RoomyServiceError):
    """Base exception for bills service errors that have no shared kind."""
    pass


class BillNotFoundError(NotFoundError):
    """Raised when a bill does not exist."""
    default_detail = 'Bill not found.'


class BillNotEditableError(InvalidStateError):
    """Raised when a bill is modified after it left DRAFT."""
    default_detail = 'Only draft bills can be modified.'
    default_code = 'bill_not_editable'


class BillAlreadyPaidError(InvalidStateError):
    """Raised when cancelling a bill that has been paid."""
    default_detail = 'A paid bill cannot be cancelled.'
    default_code = 'bill_already_paid'


class InvalidBillCategoryError(BillsServiceError):
    """Raised when a bill is filed under a category of another group or a deleted one."""
    default_detail = 'Category does not exist in this group.'
    default_code = 'invalid_category'


__all__ = [
    'BillsServiceError',
    'BillNotFoundError',
    'BillNotEditableError',
    'BillAlreadyPaidError',
    'InvalidBillCategoryError',
    'NotMemberError',
    'InsufficientPermissionsError',
]
