"""
Proposals app services layer.

The voting engine: proposing a bill, voting on it, executing approved
proposals and expiring stale ones.
"""

from .exceptions import (
    ProposalsServiceError,
    ProposalNotFoundError,
    BillNotProposableError,
    DuplicateProposalError,
    ProposalNotPendingError,
    VotingDeadlinePassedError,
    AlreadyVotedError,
    ProposalNotApprovedError,
)

from .proposal_management import (
    create_proposal,
    execute_proposal,
    default_voting_deadline,
)

from .voting import (
    vote_on_proposal,
    calculate_approval_percentage,
    is_threshold_met,
    resolve_vote_type,
)

from .expiry import (
    is_expired,
    expire_stale_proposals,
)

from .proposal_queries import (
    get_proposal_by_id,
    get_group_proposals,
)


__all__ = [
    # Exceptions
    'ProposalsServiceError',
    'ProposalNotFoundError',
    'BillNotProposableError',
    'DuplicateProposalError',
    'ProposalNotPendingError',
    'VotingDeadlinePassedError',
    'AlreadyVotedError',
    'ProposalNotApprovedError',

    # Lifecycle
    'create_proposal',
    'execute_proposal',
    'default_voting_deadline',

    # Voting
    'vote_on_proposal',
    'calculate_approval_percentage',
    'is_threshold_met',
    'resolve_vote_type',

    # Expiry
    'is_expired',
    'expire_stale_proposals',

    # Queries
    'get_proposal_by_id',
    'get_group_proposals',
]
