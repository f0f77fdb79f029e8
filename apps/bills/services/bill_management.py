"""
Bill management service.

Bills are created as DRAFT by any active member. Only the creator or a
group admin may edit them (while DRAFT) or cancel them (until PAID).
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.bills.models import Bill, BillItem, BillStatus, Currency
from apps.budgets.models import BudgetCategory
from apps.groups.models import Group, GroupRole
from apps.groups.services import require_membership, GroupNotFoundError
from apps.proposals.models import Proposal, ProposalStatus

from .exceptions import (
    BillNotFoundError,
    BillNotEditableError,
    BillAlreadyPaidError,
    InvalidBillCategoryError,
    InsufficientPermissionsError,
)


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    'title', 'description', 'total_amount', 'currency', 'due_date', 'payee_address', 'attachment_url',
)


def _write_items(bill: Bill, items: Iterable[dict]) -> None:
    BillItem.objects.bulk_create([
        BillItem(
            bill=bill,
            description=item['description'],
            amount=item['amount'],
            quantity=item.get('quantity', 1),
            position=position,
        )
        for position, item in enumerate(items)
    ])


def _check_category(category_id: Optional[UUID], group_id: UUID) -> None:
    if category_id is None:
        return
    if not BudgetCategory.objects.filter(id=category_id, group_id=group_id, is_active=True).exists():
        raise InvalidBillCategoryError()


@transaction.atomic
def create_bill(
    *,
    user: User,
    group_id: UUID,
    title: str,
    total_amount: Decimal,
    payee_address: str,
    description: str = '',
    currency: str = Currency.USDC,
    due_date: Optional[datetime] = None,
    category_id: Optional[UUID] = None,
    attachment_url: str = '',
    items: Optional[Iterable[dict]] = None,
) -> Bill:
    """
    Create a DRAFT bill with its line items.

    Bill and items are written in one transaction. The total is taken as
    given; it is not reconciled against the item sum.

    Args:
        user: Creator (must be an active member)
        group_id: UUID of the group
        title: Bill title
        total_amount: Amount owed
        payee_address: Destination address of the payment
        description: Optional description
        currency: One of Currency values
        due_date: Optional due date
        category_id: Optional budget category of the same group
        attachment_url: Optional link to a receipt or invoice
        items: Dicts with description, amount and optional quantity

    Returns:
        Created Bill instance

    Raises:
        GroupNotFoundError: If group doesn't exist or is inactive
        NotMemberError: If user is not an active member
        InvalidBillCategoryError: If the category is not an active one of this group
    """
    if not Group.objects.filter(id=group_id, is_active=True).exists():
        raise GroupNotFoundError()
    require_membership(user=user, group_id=group_id)
    _check_category(category_id, group_id)

    bill = Bill.objects.create(
        group_id=group_id,
        created_by=user,
        title=title,
        description=description,
        total_amount=total_amount,
        currency=currency,
        due_date=due_date,
        payee_address=payee_address,
        category_id=category_id,
        attachment_url=attachment_url,
        status=BillStatus.DRAFT,
    )
    _write_items(bill, items or [])

    logger.info("Bill %s created in group %s by %s", bill.id, group_id, user.id)
    return bill


def _lock_bill_for_change(bill_id: UUID, user: User) -> Bill:
    """
    Lock a bill and check the caller may change it.

    Order of checks: existence, membership, creator-or-admin.
    """
    try:
        bill = Bill.objects.select_for_update().get(id=bill_id)
    except Bill.DoesNotExist:
        raise BillNotFoundError()

    membership = require_membership(user=user, group_id=bill.group_id)
    if bill.created_by_id != user.id and membership.role != GroupRole.ADMIN:
        raise InsufficientPermissionsError(
            "Only the bill creator or a group admin can change this bill"
        )
    return bill


@transaction.atomic
def update_bill(*, bill_id: UUID, user: User, items: Optional[Iterable[dict]] = None, **changes) -> Bill:
    """
    Update a DRAFT bill.

    Only fields in EDITABLE_FIELDS and category_id are applied; status
    cannot be patched. A category_id of None clears the category.
    When items are given they replace the existing ones.

    Raises:
        BillNotFoundError: If bill doesn't exist
        NotMemberError: If user is not an active member of the bill's group
        InsufficientPermissionsError: If user is neither creator nor admin
        BillNotEditableError: If bill is not DRAFT
        InvalidBillCategoryError: If category_id is not an active category of the group
    """
    bill = _lock_bill_for_change(bill_id, user)

    if bill.status != BillStatus.DRAFT:
        raise BillNotEditableError()

    update_fields = [field for field in EDITABLE_FIELDS if field in changes]
    for field in update_fields:
        setattr(bill, field, changes[field])

    if 'category_id' in changes:
        _check_category(changes['category_id'], bill.group_id)
        bill.category_id = changes['category_id']
        update_fields.append('category')

    if update_fields:
        bill.save(update_fields=update_fields + ['updated_at'])

    if items is not None:
        bill.items.all().delete()
        _write_items(bill, items)

    return bill


@transaction.atomic
def delete_bill(*, bill_id: UUID, user: User) -> Bill:
    """
    Cancel a bill (soft delete).

    A PENDING or APPROVED proposal on the bill is cancelled in the same
    transaction, so it can no longer be voted on or executed.

    Raises:
        BillNotFoundError: If bill doesn't exist
        NotMemberError: If user is not an active member of the bill's group
        InsufficientPermissionsError: If user is neither creator nor admin
        BillAlreadyPaidError: If bill is PAID
    """
    bill = _lock_bill_for_change(bill_id, user)

    if bill.status == BillStatus.PAID:
        raise BillAlreadyPaidError()
    if bill.status == BillStatus.CANCELLED:
        return bill

    bill.status = BillStatus.CANCELLED
    bill.save(update_fields=['status', 'updated_at'])

    cancelled = (
        Proposal.objects
        .filter(bill=bill, status__in=[ProposalStatus.PENDING, ProposalStatus.APPROVED])
        .update(status=ProposalStatus.CANCELLED, updated_at=timezone.now())
    )

    logger.info(
        "Bill %s cancelled by %s (%d open proposal cancelled)",
        bill.id, user.id, cancelled,
    )
    return bill
