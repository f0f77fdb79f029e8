"""
Read-only bill queries.

Cancelled bills are hidden from list queries.
"""

from uuid import UUID

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.bills.models import Bill, BillStatus
from apps.groups.services import require_membership

from .exceptions import BillNotFoundError


def get_bill_by_id(*, bill_id: UUID, user: User) -> Bill:
    """
    Get a bill with its items (members only).

    Raises:
        BillNotFoundError: If bill doesn't exist
        NotMemberError: If user is not an active member of the bill's group
    """
    try:
        bill = (
            Bill.objects
            .select_related('created_by', 'group')
            .prefetch_related('items')
            .get(id=bill_id)
        )
    except Bill.DoesNotExist:
        raise BillNotFoundError()

    require_membership(user=user, group_id=bill.group_id)
    return bill


def get_group_bills(*, group_id: UUID, user: User, status: str = None) -> QuerySet[Bill]:
    """Bills of one group, newest first (members only)."""
    require_membership(user=user, group_id=group_id)

    bills = (
        Bill.objects
        .filter(group_id=group_id)
        .exclude(status=BillStatus.CANCELLED)
        .select_related('created_by')
        .prefetch_related('items')
    )
    if status:
        bills = bills.filter(status=status)
    return bills.order_by('-created_at')


def get_user_bills(*, user: User) -> QuerySet[Bill]:
    """Bills across every group the user is an active member of."""
    return (
        Bill.objects
        .filter(
            group__is_active=True,
            group__memberships__user=user,
            group__memberships__is_active=True,
        )
        .exclude(status=BillStatus.CANCELLED)
        .select_related('created_by', 'group')
        .prefetch_related('items')
        .distinct()
        .order_by('-created_at')
    )
