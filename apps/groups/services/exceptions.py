"""
Domain-specific exceptions for groups app.

These exceptions represent business rule violations. They derive from the
shared error kinds, so views let them propagate and the API exception
handler turns them into HTTP responses.
"""
from rest_framework import status

from apps.common.exceptions import (
    RoomyServiceError,
    NotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
    InvalidStateError,
    ConflictError,
)


class GroupsServiceError(RoomyServiceError):
    """Base exception for groups service errors that have no shared kind."""
    pass


class GroupNotFoundError(NotFoundError):
    """Raised when a group does not exist or is inactive."""
    default_detail = 'Group not found.'


class AlreadyMemberError(ConflictError):
    """Raised when a user tries to join a group they're already in."""
    default_detail = 'You are already a member of this group.'
    default_code = 'already_member'


class SmartAccountInUseError(ConflictError):
    """Raised when a smart account address is already bound to another group."""
    default_detail = 'This smart account address is already used by another group.'
    default_code = 'smart_account_in_use'


class LastAdminError(InvalidStateError):
    """Raised when an action would leave a group without an active admin."""
    default_detail = 'A group must keep at least one active admin.'
    default_code = 'last_admin'


class InvalidInviteTokenError(GroupsServiceError):
    """Raised when an invite token is malformed, tampered with or expired."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invite link is invalid or has expired.'
    default_code = 'invalid_invite'


class InviteEmailMismatchError(InsufficientPermissionsError):
    """Raised when the invite was issued for a different email address."""
    default_detail = 'This invite was issued for a different email address.'
    default_code = 'invite_email_mismatch'


__all__ = [
    'GroupsServiceError',
    'GroupNotFoundError',
    'NotMemberError',
    'InsufficientPermissionsError',
    'AlreadyMemberError',
    'SmartAccountInUseError',
    'LastAdminError',
    'InvalidInviteTokenError',
    'InviteEmailMismatchError',
]
