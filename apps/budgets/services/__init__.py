"""Services for group budget categories."""

from .exceptions import (
    BudgetsServiceError,
    BudgetCategoryNotFoundError,
)
from .category_management import (
    create_budget_category,
    update_budget_category,
    delete_budget_category,
    get_group_categories,
    get_category_by_id,
)

__all__ = [
    # Exceptions
    'BudgetsServiceError',
    'BudgetCategoryNotFoundError',
    # Services
    'create_budget_category',
    'update_budget_category',
    'delete_budget_category',
    'get_group_categories',
    'get_category_by_id',
]
