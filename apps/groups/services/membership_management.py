"""
Membership management service.

Handles group membership operations with concurrency protection.
Removal is soft: the membership row is kept with is_active=False and is
reactivated when the user joins again.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole

from .access_control import require_membership
from .exceptions import (
    GroupNotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
    LastAdminError,
)


logger = logging.getLogger(__name__)


def lock_active_group(group_id: UUID) -> Group:
    try:
        return Group.objects.select_for_update().get(id=group_id, is_active=True)
    except Group.DoesNotExist:
        raise GroupNotFoundError()


def count_active_admins(group: Group) -> int:
    return GroupMembership.objects.filter(
        group=group, role=GroupRole.ADMIN, is_active=True
    ).count()


@transaction.atomic
def leave_group(*, group_id: UUID, user: User) -> None:
    """
    Leave a group.

    The group row is locked so two admins cannot both leave at once and
    strand the group.

    Args:
        group_id: UUID of the group
        user: User leaving the group

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not an active member
        LastAdminError: If user is the last active admin
    """
    group = lock_active_group(group_id)
    membership = require_membership(user=user, group_id=group.id)

    if membership.role == GroupRole.ADMIN and count_active_admins(group) <= 1:
        raise LastAdminError(
            "The last admin cannot leave. Promote another member first."
        )

    membership.is_active = False
    membership.save(update_fields=['is_active'])
    logger.info("User %s left group %s", user.id, group.id)


@transaction.atomic
def remove_member(
    *,
    group_id: UUID,
    user_id: UUID,
    removed_by: User
) -> None:
    """
    Remove a member from a group (admin only).

    Args:
        group_id: UUID of the group
        user_id: UUID of the user to remove
        removed_by: User performing the removal (must be admin)

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If remover or target is not an active member
        InsufficientPermissionsError: If removed_by is not admin
        LastAdminError: If the target is the last active admin
    """
    group = lock_active_group(group_id)

    remover = require_membership(user=removed_by, group_id=group.id)
    if remover.role != GroupRole.ADMIN:
        raise InsufficientPermissionsError("Only group admins can remove members")

    try:
        membership = (
            GroupMembership.objects
            .select_for_update()
            .get(group=group, user_id=user_id, is_active=True)
        )
    except GroupMembership.DoesNotExist:
        raise NotMemberError("User is not a member of this group")

    if membership.role == GroupRole.ADMIN and count_active_admins(group) <= 1:
        raise LastAdminError()

    membership.is_active = False
    membership.save(update_fields=['is_active'])
    logger.info("User %s removed from group %s by %s", user_id, group.id, removed_by.id)


def get_group_members(*, group_id: UUID, user: User) -> QuerySet[GroupMembership]:
    """
    Get all active members of a group (members only).

    Args:
        group_id: UUID of the group
        user: Caller

    Returns:
        QuerySet of GroupMembership instances

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If caller is not an active member
    """
    if not Group.objects.filter(id=group_id, is_active=True).exists():
        raise GroupNotFoundError()
    require_membership(user=user, group_id=group_id)

    return (
        GroupMembership.objects
        .filter(group_id=group_id, is_active=True)
        .select_related('user')
        .order_by('role', 'joined_at')
    )
