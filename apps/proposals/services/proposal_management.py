"""
Proposal lifecycle service: creation and execution.

Both operations lock the row they transition and check every
precondition before writing, so a failure leaves no partial state.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import User
from apps.bills.models import Bill, BillStatus
from apps.bills.services import BillNotFoundError
from apps.groups.models import GroupRole
from apps.groups.services import require_membership
from apps.proposals.models import Proposal, ProposalStatus

from .exceptions import (
    ProposalNotFoundError,
    BillNotProposableError,
    DuplicateProposalError,
    ProposalNotApprovedError,
    InsufficientPermissionsError,
)


logger = logging.getLogger(__name__)


def default_voting_deadline(now: Optional[datetime] = None) -> datetime:
    now = now or timezone.now()
    return now + timedelta(days=settings.DEFAULT_VOTING_PERIOD_DAYS)


@transaction.atomic
def create_proposal(
    *,
    user: User,
    bill_id: UUID,
    title: str,
    description: str = '',
    voting_deadline: Optional[datetime] = None,
) -> Proposal:
    """
    Put a DRAFT bill up for a vote.

    The bill row is locked, so two concurrent proposals for the same bill
    serialize here; the unique constraint on bill catches anything else.

    Args:
        user: Proposer (must be an active member of the bill's group)
        bill_id: UUID of the bill
        title: Proposal title
        description: Optional description
        voting_deadline: End of voting (defaults to DEFAULT_VOTING_PERIOD_DAYS from now)

    Returns:
        Created Proposal instance (PENDING, counters at zero)

    Raises:
        BillNotFoundError: If bill doesn't exist
        NotMemberError: If user is not an active member
        BillNotProposableError: If bill is not DRAFT
        DuplicateProposalError: If the bill already has a proposal
    """
    try:
        bill = Bill.objects.select_for_update().get(id=bill_id)
    except Bill.DoesNotExist:
        raise BillNotFoundError()

    require_membership(user=user, group_id=bill.group_id)

    if bill.status != BillStatus.DRAFT:
        raise BillNotProposableError()

    if Proposal.objects.filter(bill=bill).exists():
        raise DuplicateProposalError()

    try:
        with transaction.atomic():
            proposal = Proposal.objects.create(
                bill=bill,
                group_id=bill.group_id,
                created_by=user,
                title=title,
                description=description,
                status=ProposalStatus.PENDING,
                voting_deadline=voting_deadline or default_voting_deadline(),
            )
    except IntegrityError:
        raise DuplicateProposalError()

    bill.status = BillStatus.PROPOSED
    bill.save(update_fields=['status', 'updated_at'])

    logger.info("Proposal %s created for bill %s by %s", proposal.id, bill.id, user.id)
    return proposal


@transaction.atomic
def execute_proposal(*, user: User, proposal_id: UUID) -> Proposal:
    """
    Mark an APPROVED proposal as executed.

    No funds move here; payment is a separate transaction flow.

    Args:
        user: Caller (group admin or the proposal's creator)
        proposal_id: UUID of the proposal

    Returns:
        Updated Proposal instance

    Raises:
        ProposalNotFoundError: If proposal doesn't exist
        NotMemberError: If user is not an active member
        InsufficientPermissionsError: If user is neither admin nor creator
        ProposalNotApprovedError: If proposal or its bill is not APPROVED
    """
    try:
        proposal = Proposal.objects.select_for_update().get(id=proposal_id)
    except Proposal.DoesNotExist:
        raise ProposalNotFoundError()

    membership = require_membership(user=user, group_id=proposal.group_id)
    if membership.role != GroupRole.ADMIN and proposal.created_by_id != user.id:
        raise InsufficientPermissionsError(
            "Only a group admin or the proposal creator can execute it"
        )

    if proposal.status != ProposalStatus.APPROVED:
        raise ProposalNotApprovedError()
    if proposal.bill.status != BillStatus.APPROVED:
        raise ProposalNotApprovedError("The bill is no longer approved")

    proposal.status = ProposalStatus.EXECUTED
    proposal.executed_at = timezone.now()
    proposal.save(update_fields=['status', 'executed_at', 'updated_at'])

    logger.info("Proposal %s executed by %s", proposal.id, user.id)
    return proposal
