"""Services for bills business logic."""

from .exceptions import (
    BillsServiceError,
    BillNotFoundError,
    BillNotEditableError,
    BillAlreadyPaidError,
    InvalidBillCategoryError,
)
from .bill_management import create_bill, update_bill, delete_bill
from .bill_queries import get_bill_by_id, get_group_bills, get_user_bills

__all__ = [
    # Exceptions
    'BillsServiceError',
    'BillNotFoundError',
    'BillNotEditableError',
    'BillAlreadyPaidError',
    'InvalidBillCategoryError',
    # Services
    'create_bill',
    'update_bill',
    'delete_bill',
    'get_bill_by_id',
    'get_group_bills',
    'get_user_bills',
]
