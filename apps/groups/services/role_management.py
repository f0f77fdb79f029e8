"""
Role management service.

Handles member role updates with concurrency protection.
"""

from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.groups.models import GroupMembership, GroupRole

from .access_control import require_membership
from .exceptions import (
    NotMemberError,
    InsufficientPermissionsError,
    LastAdminError,
)
from .membership_management import lock_active_group, count_active_admins


@transaction.atomic
def update_member_role(
    *,
    group_id: UUID,
    user_id: UUID,
    new_role: str,
    updated_by: User
) -> GroupMembership:
    """
    Update a member's role (admin only).

    Uses select_for_update to prevent concurrent role changes.
    The last active admin cannot be demoted.

    Args:
        group_id: UUID of the group
        user_id: UUID of the user whose role to update
        new_role: One of GroupRole values
        updated_by: User performing the update (must be admin)

    Returns:
        Updated GroupMembership instance

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If updater or target is not an active member
        InsufficientPermissionsError: If updated_by is not admin
        LastAdminError: If the change would leave no active admin
        ValueError: If new_role is invalid
    """
    if new_role not in GroupRole.values:
        raise ValueError(f"Invalid role. Must be one of: {GroupRole.values}")

    group = lock_active_group(group_id)

    updater = require_membership(user=updated_by, group_id=group.id)
    if updater.role != GroupRole.ADMIN:
        raise InsufficientPermissionsError("Only group admins can update member roles")

    try:
        membership = (
            GroupMembership.objects
            .select_for_update()
            .get(group=group, user_id=user_id, is_active=True)
        )
    except GroupMembership.DoesNotExist:
        raise NotMemberError("User is not a member of this group")

    if (
        membership.role == GroupRole.ADMIN
        and new_role != GroupRole.ADMIN
        and count_active_admins(group) <= 1
    ):
        raise LastAdminError("Cannot demote the last admin of the group")

    membership.role = new_role
    membership.save(update_fields=['role'])

    return membership
