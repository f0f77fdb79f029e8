"""Services for recurring bill schedules."""

from .exceptions import (
    RecurringServiceError,
    RecurringBillNotFoundError,
)
from .schedule_management import (
    compute_next_due_date,
    next_due_after,
    create_recurring_bill,
    update_recurring_bill,
    deactivate_recurring_bill,
    get_group_recurring_bills,
    get_recurring_bill_by_id,
)
from .processing import ProcessingResult, process_due_recurring_bills

__all__ = [
    # Exceptions
    'RecurringServiceError',
    'RecurringBillNotFoundError',
    # Schedules
    'compute_next_due_date',
    'next_due_after',
    'create_recurring_bill',
    'update_recurring_bill',
    'deactivate_recurring_bill',
    'get_group_recurring_bills',
    'get_recurring_bill_by_id',
    # Sweep
    'ProcessingResult',
    'process_due_recurring_bills',
]
