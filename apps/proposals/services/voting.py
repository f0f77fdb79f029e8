"""
Voting service.

A vote, the recount of the proposal's counters and the threshold check
happen in one transaction while the proposal row is locked. Counters are
recomputed from the Vote rows, never incremented, so they cannot drift.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Count, Q
from django.utils import timezone

from apps.accounts.models import User
from apps.bills.models import Bill, BillStatus
from apps.groups.models import Group
from apps.groups.services import require_membership
from apps.proposals.models import Proposal, ProposalStatus, Vote, VoteType

from .exceptions import (
    ProposalNotFoundError,
    ProposalNotPendingError,
    VotingDeadlinePassedError,
    AlreadyVotedError,
)
from .expiry import is_expired


logger = logging.getLogger(__name__)


def calculate_approval_percentage(proposal: Proposal) -> Decimal:
    """
    Share of FOR votes among all votes cast, in percent.

    Abstentions count towards the total. No votes means 0.
    """
    total = proposal.votes_for + proposal.votes_against + proposal.votes_abstain
    if total == 0:
        return Decimal('0')
    return Decimal(proposal.votes_for) * 100 / Decimal(total)


def is_threshold_met(proposal: Proposal, voting_threshold: int) -> bool:
    return calculate_approval_percentage(proposal) >= voting_threshold


def resolve_vote_type(*, is_approved: Optional[bool] = None, vote_type: Optional[str] = None) -> str:
    """Map the boolean approval flag to FOR/AGAINST; an explicit vote_type wins."""
    if vote_type is not None:
        if vote_type not in VoteType.values:
            raise ValueError(f"Invalid vote type. Must be one of: {VoteType.values}")
        return vote_type
    if is_approved is None:
        raise ValueError("Either is_approved or vote_type is required")
    return VoteType.FOR if is_approved else VoteType.AGAINST


def _recount_votes(proposal: Proposal) -> None:
    counts = Vote.objects.filter(proposal=proposal).aggregate(
        votes_for=Count('id', filter=Q(vote_type=VoteType.FOR)),
        votes_against=Count('id', filter=Q(vote_type=VoteType.AGAINST)),
        votes_abstain=Count('id', filter=Q(vote_type=VoteType.ABSTAIN)),
    )
    proposal.votes_for = counts['votes_for']
    proposal.votes_against = counts['votes_against']
    proposal.votes_abstain = counts['votes_abstain']


@transaction.atomic
def vote_on_proposal(
    *,
    user: User,
    proposal_id: UUID,
    is_approved: Optional[bool] = None,
    vote_type: Optional[str] = None,
    comment: str = '',
    now: Optional[datetime] = None,
) -> Vote:
    """
    Cast a vote and approve the proposal once the threshold is reached.

    Args:
        user: Voter (must be an active member of the proposal's group)
        proposal_id: UUID of the proposal
        is_approved: True for FOR, False for AGAINST
        vote_type: FOR, AGAINST or ABSTAIN; takes precedence over is_approved
        comment: Optional comment
        now: Current time (defaults to timezone.now())

    Returns:
        Created Vote instance; vote.proposal carries the updated counters

    Raises:
        ProposalNotFoundError: If proposal doesn't exist
        NotMemberError: If user is not an active member
        ProposalNotPendingError: If proposal is no longer PENDING
        VotingDeadlinePassedError: If the voting deadline has passed
        AlreadyVotedError: If user has already voted
        ValueError: If neither is_approved nor a valid vote_type is given
    """
    vote_type = resolve_vote_type(is_approved=is_approved, vote_type=vote_type)
    now = now or timezone.now()

    try:
        proposal = Proposal.objects.select_for_update().get(id=proposal_id)
    except Proposal.DoesNotExist:
        raise ProposalNotFoundError()

    require_membership(user=user, group_id=proposal.group_id)

    if proposal.status != ProposalStatus.PENDING:
        raise ProposalNotPendingError()
    if is_expired(proposal, now):
        raise VotingDeadlinePassedError()

    if Vote.objects.filter(proposal=proposal, user=user).exists():
        raise AlreadyVotedError()

    try:
        with transaction.atomic():
            vote = Vote.objects.create(
                proposal=proposal,
                user=user,
                vote_type=vote_type,
                comment=comment,
            )
    except IntegrityError:
        raise AlreadyVotedError()

    _recount_votes(proposal)
    update_fields = ['votes_for', 'votes_against', 'votes_abstain', 'updated_at']

    voting_threshold = Group.objects.values_list('voting_threshold', flat=True).get(id=proposal.group_id)
    if is_threshold_met(proposal, voting_threshold):
        proposal.status = ProposalStatus.APPROVED
        update_fields.append('status')

        bill = Bill.objects.select_for_update().get(id=proposal.bill_id)
        bill.status = BillStatus.APPROVED
        bill.save(update_fields=['status', 'updated_at'])

        logger.info(
            "Proposal %s approved with %s%% FOR (threshold %s%%)",
            proposal.id, calculate_approval_percentage(proposal), voting_threshold,
        )

    proposal.save(update_fields=update_fields)

    logger.info("User %s voted %s on proposal %s", user.id, vote_type, proposal.id)
    return vote
