"""
Domain-specific exceptions for proposals services.

Each one refines one of the shared error kinds so the API handler can
map it to a status code without knowing about proposals.
"""
from apps.common.exceptions import (
    RoomyServiceError,
    NotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
    InvalidStateError,
    ConflictError,
)


class ProposalsServiceError(RoomyServiceError):
    """Base exception for proposals service errors that have no shared kind."""
    pass


class ProposalNotFoundError(NotFoundError):
    """Raised when a proposal does not exist."""
    default_detail = 'Proposal not found.'


class BillNotProposableError(InvalidStateError):
    """Raised when proposing a bill that is not DRAFT."""
    default_detail = 'Only draft bills can be proposed.'
    default_code = 'bill_not_draft'


class DuplicateProposalError(ConflictError):
    """Raised when the bill already has a proposal."""
    default_detail = 'A proposal already exists for this bill.'
    default_code = 'duplicate_proposal'


class ProposalNotPendingError(InvalidStateError):
    """Raised when voting on a proposal that is no longer open."""
    default_detail = 'Voting is closed for this proposal.'
    default_code = 'proposal_not_pending'


class VotingDeadlinePassedError(InvalidStateError):
    """Raised when voting after the voting deadline."""
    default_detail = 'The voting deadline has passed.'
    default_code = 'voting_deadline_passed'


class AlreadyVotedError(ConflictError):
    """Raised when the user has already voted on the proposal."""
    default_detail = 'You have already voted on this proposal.'
    default_code = 'already_voted'


class ProposalNotApprovedError(InvalidStateError):
    """Raised when executing a proposal that is not APPROVED."""
    default_detail = 'Only approved proposals can be executed.'
    default_code = 'proposal_not_approved'


__all__ = [
    'ProposalsServiceError',
    'ProposalNotFoundError',
    'BillNotProposableError',
    'DuplicateProposalError',
    'ProposalNotPendingError',
    'VotingDeadlinePassedError',
    'AlreadyVotedError',
    'ProposalNotApprovedError',
    'NotMemberError',
    'InsufficientPermissionsError',
]
