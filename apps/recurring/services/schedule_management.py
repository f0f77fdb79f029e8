"""
Recurring bill schedule management.

Only group admins manage schedules; any active member can list them.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from dateutil.relativedelta import relativedelta
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.bills.models import Currency
from apps.groups.models import Group, GroupRole
from apps.groups.services import GroupNotFoundError, require_membership
from apps.recurring.models import Frequency, RecurringBill

from .exceptions import RecurringBillNotFoundError, InsufficientPermissionsError


logger = logging.getLogger(__name__)

FREQUENCY_STEPS = {
    Frequency.DAILY: relativedelta(days=1),
    Frequency.WEEKLY: relativedelta(weeks=1),
    Frequency.BIWEEKLY: relativedelta(weeks=2),
    Frequency.MONTHLY: relativedelta(months=1),
    Frequency.QUARTERLY: relativedelta(months=3),
    Frequency.YEARLY: relativedelta(years=1),
}

UPDATABLE_FIELDS = (
    'title', 'description', 'amount', 'currency', 'payee_address',
    'frequency', 'start_date', 'end_date', 'is_active', 'auto_propose',
)


def compute_next_due_date(from_date: datetime, frequency: str) -> datetime:
    """
    One period after from_date.

    Month-based steps clamp to the end of shorter months
    (Jan 31 + 1 month is Feb 28/29).
    """
    try:
        return from_date + FREQUENCY_STEPS[frequency]
    except KeyError:
        raise ValueError(f"Invalid frequency. Must be one of: {Frequency.values}")


def next_due_after(start_date: datetime, after: datetime, frequency: str) -> datetime:
    """
    First occurrence of the schedule strictly later than ``after``.

    Occurrences are counted as whole periods from start_date, so a clamped
    month does not shift later ones (Jan 31, Feb 28, Mar 31, ...).
    """
    if frequency not in FREQUENCY_STEPS:
        raise ValueError(f"Invalid frequency. Must be one of: {Frequency.values}")

    step = FREQUENCY_STEPS[frequency]
    periods = 1
    while start_date + step * periods <= after:
        periods += 1
    return start_date + step * periods


def _require_admin(user: User, group_id: UUID) -> None:
    membership = require_membership(user=user, group_id=group_id)
    if membership.role != GroupRole.ADMIN:
        raise InsufficientPermissionsError("Only group admins can manage recurring bills")


def create_recurring_bill(
    *,
    user: User,
    group_id: UUID,
    title: str,
    amount: Decimal,
    payee_address: str,
    frequency: str,
    start_date: datetime,
    description: str = '',
    currency: str = Currency.USDC,
    end_date: Optional[datetime] = None,
    auto_propose: bool = True,
) -> RecurringBill:
    """
    Create a schedule (admin only).

    The first bill is due one period after start_date.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not an active member
        InsufficientPermissionsError: If user is not admin
    """
    if not Group.objects.filter(id=group_id, is_active=True).exists():
        raise GroupNotFoundError()
    _require_admin(user, group_id)

    recurring = RecurringBill.objects.create(
        group_id=group_id,
        title=title,
        description=description,
        amount=amount,
        currency=currency,
        payee_address=payee_address,
        frequency=frequency,
        start_date=start_date,
        next_due_date=compute_next_due_date(start_date, frequency),
        end_date=end_date,
        auto_propose=auto_propose,
    )
    logger.info("Recurring bill %s created in group %s", recurring.id, group_id)
    return recurring


@transaction.atomic
def update_recurring_bill(
    *,
    user: User,
    recurring_id: UUID,
    next_due_date: Optional[datetime] = None,
    **changes
) -> RecurringBill:
    """
    Update a schedule (admin only).

    An explicit next_due_date wins; otherwise changing frequency or
    start_date recomputes it from the new start (or the current due date).

    Raises:
        RecurringBillNotFoundError: If schedule doesn't exist
        NotMemberError: If user is not an active member
        InsufficientPermissionsError: If user is not admin
    """
    try:
        recurring = RecurringBill.objects.select_for_update().get(id=recurring_id)
    except RecurringBill.DoesNotExist:
        raise RecurringBillNotFoundError()

    _require_admin(user, recurring.group_id)

    update_fields = [field for field in UPDATABLE_FIELDS if field in changes]
    for field in update_fields:
        setattr(recurring, field, changes[field])

    if next_due_date is not None:
        recurring.next_due_date = next_due_date
        update_fields.append('next_due_date')
    elif 'frequency' in changes or 'start_date' in changes:
        base = changes.get('start_date') or recurring.next_due_date
        recurring.next_due_date = compute_next_due_date(base, recurring.frequency)
        update_fields.append('next_due_date')

    if update_fields:
        recurring.save(update_fields=update_fields + ['updated_at'])
    return recurring


@transaction.atomic
def deactivate_recurring_bill(*, user: User, recurring_id: UUID) -> None:
    """
    Stop a schedule (admin only). Bills already created are kept.

    Raises:
        RecurringBillNotFoundError: If schedule doesn't exist
        NotMemberError: If user is not an active member
        InsufficientPermissionsError: If user is not admin
    """
    try:
        recurring = RecurringBill.objects.select_for_update().get(id=recurring_id)
    except RecurringBill.DoesNotExist:
        raise RecurringBillNotFoundError()

    _require_admin(user, recurring.group_id)

    recurring.is_active = False
    recurring.save(update_fields=['is_active', 'updated_at'])


def get_group_recurring_bills(*, user: User, group_id: UUID) -> QuerySet[RecurringBill]:
    """Active schedules of a group, soonest first (members only)."""
    require_membership(user=user, group_id=group_id)
    return RecurringBill.objects.filter(group_id=group_id, is_active=True).order_by('next_due_date')


def get_recurring_bill_by_id(*, user: User, recurring_id: UUID) -> RecurringBill:
    try:
        recurring = RecurringBill.objects.get(id=recurring_id)
    except RecurringBill.DoesNotExist:
        raise RecurringBillNotFoundError()

    require_membership(user=user, group_id=recurring.group_id)
    return recurring
