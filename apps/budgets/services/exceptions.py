"""Domain-specific exceptions for budget category services."""
from apps.common.exceptions import (
    RoomyServiceError,
    NotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
)


class BudgetsServiceError(RoomyServiceError):
    pass


class BudgetCategoryNotFoundError(NotFoundError):
    """Raised when a category does not exist or has been deleted."""
    default_detail = 'Budget category not found.'


__all__ = [
    'BudgetsServiceError',
    'BudgetCategoryNotFoundError',
    'NotMemberError',
    'InsufficientPermissionsError',
]
