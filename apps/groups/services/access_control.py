"""
Membership and role oracle.

Every other app asks these functions whether a user may act in a group.
Answers are read straight from the database on each call.
"""

from typing import Optional
from uuid import UUID

from apps.accounts.models import User
from apps.groups.models import GroupMembership

from .exceptions import NotMemberError


def _active_membership(user: User, group_id: UUID) -> Optional[GroupMembership]:
    if user is None or not getattr(user, 'is_authenticated', False):
        return None
    return (
        GroupMembership.objects
        .select_related('group')
        .filter(
            user=user,
            group_id=group_id,
            is_active=True,
            group__is_active=True,
        )
        .first()
    )


def is_active_member(*, user: User, group_id: UUID) -> bool:
    """Return True when user holds an active membership in an active group."""
    return _active_membership(user, group_id) is not None


def role_of(*, user: User, group_id: UUID) -> Optional[str]:
    """Return the user's role in the group, or None if not an active member."""
    membership = _active_membership(user, group_id)
    return membership.role if membership else None


def require_membership(*, user: User, group_id: UUID) -> GroupMembership:
    """
    Return the caller's active membership or fail.

    Args:
        user: Caller
        group_id: UUID of the group

    Returns:
        Active GroupMembership instance

    Raises:
        NotMemberError: If user is not an active member of the group
    """
    membership = _active_membership(user, group_id)
    if membership is None:
        raise NotMemberError()
    return membership
