"""Read-only proposal queries (members only)."""

from uuid import UUID

from django.db.models import Prefetch, QuerySet

from apps.accounts.models import User
from apps.groups.services import require_membership
from apps.proposals.models import Proposal, Vote

from .exceptions import ProposalNotFoundError


def get_proposal_by_id(*, proposal_id: UUID, user: User) -> Proposal:
    """
    Get a proposal with its bill and votes.

    Raises:
        ProposalNotFoundError: If proposal doesn't exist
        NotMemberError: If user is not an active member
    """
    try:
        proposal = (
            Proposal.objects
            .select_related('bill', 'created_by')
            .prefetch_related(
                Prefetch('votes', queryset=Vote.objects.select_related('user'))
            )
            .get(id=proposal_id)
        )
    except Proposal.DoesNotExist:
        raise ProposalNotFoundError()

    require_membership(user=user, group_id=proposal.group_id)
    return proposal


def get_group_proposals(*, group_id: UUID, user: User, status: str = None) -> QuerySet[Proposal]:
    require_membership(user=user, group_id=group_id)

    proposals = (
        Proposal.objects
        .filter(group_id=group_id)
        .select_related('bill', 'created_by')
    )
    if status:
        proposals = proposals.filter(status=status)
    return proposals.order_by('-created_at')
