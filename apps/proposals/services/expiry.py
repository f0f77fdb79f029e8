"""
Deadline handling for proposals.

A PENDING proposal whose voting deadline has passed can no longer
collect votes; the sweep marks it EXPIRED and rejects its bill.
"""

import logging
from datetime import datetime
from typing import Optional

from django.db import transaction
from django.utils import timezone

from apps.bills.models import Bill, BillStatus
from apps.proposals.models import Proposal, ProposalStatus


logger = logging.getLogger(__name__)


def is_expired(proposal: Proposal, now: datetime) -> bool:
    """True when the proposal is still PENDING and its deadline has passed."""
    return proposal.status == ProposalStatus.PENDING and proposal.voting_deadline <= now


def expire_stale_proposals(*, now: Optional[datetime] = None) -> int:
    """
    Expire every PENDING proposal past its deadline.

    Each proposal is handled in its own transaction with the row locked,
    so a vote racing the sweep either lands first or sees EXPIRED.

    Returns:
        Number of proposals expired
    """
    now = now or timezone.now()
    candidate_ids = list(
        Proposal.objects
        .filter(status=ProposalStatus.PENDING, voting_deadline__lte=now)
        .values_list('id', flat=True)
    )

    expired = 0
    for proposal_id in candidate_ids:
        with transaction.atomic():
            proposal = Proposal.objects.select_for_update().get(id=proposal_id)
            if not is_expired(proposal, now):
                continue

            proposal.status = ProposalStatus.EXPIRED
            proposal.save(update_fields=['status', 'updated_at'])

            Bill.objects.filter(
                id=proposal.bill_id, status=BillStatus.PROPOSED
            ).update(status=BillStatus.REJECTED, updated_at=now)
            expired += 1

    if expired:
        logger.info("Expired %d proposals past their voting deadline", expired)
    return expired
