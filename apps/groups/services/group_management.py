"""
Group management service.

Handles group CRUD operations with proper transaction safety.
"""

import logging
from typing import Iterable, Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import Prefetch, QuerySet

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole

from .access_control import require_membership
from .exceptions import (
    GroupNotFoundError,
    InsufficientPermissionsError,
    SmartAccountInUseError,
)


logger = logging.getLogger(__name__)


def create_group(
    *,
    name: str,
    creator: User,
    description: str = '',
    voting_threshold: Optional[int] = None,
    member_emails: Optional[Iterable[str]] = None,
    smart_account_address: Optional[str] = None,
) -> Group:
    """
    Create a new group and add the creator as admin.

    This is a multi-step operation wrapped in a transaction:
    1. Create the group
    2. Create admin membership for the creator
    3. Add every registered user from member_emails as member

    Emails without a matching active account are skipped.

    Args:
        name: Group name
        creator: User who becomes the first admin
        description: Optional group description
        voting_threshold: Approval percentage (defaults to DEFAULT_VOTING_THRESHOLD)
        member_emails: Emails of users to add as members
        smart_account_address: Optional on-chain account of the group

    Returns:
        Created Group instance

    Raises:
        SmartAccountInUseError: If the smart account is bound to another group
    """
    if voting_threshold is None:
        voting_threshold = settings.DEFAULT_VOTING_THRESHOLD

    try:
        with transaction.atomic():
            group = Group.objects.create(
                name=name,
                description=description,
                voting_threshold=voting_threshold,
                smart_account_address=smart_account_address or None,
            )

            GroupMembership.objects.create(
                user=creator,
                group=group,
                role=GroupRole.ADMIN,
            )

            emails = {e.strip().lower() for e in (member_emails or []) if e and e.strip()}
            emails.discard(creator.email.lower())
            invitees = User.objects.filter(email__in=emails, is_active=True)
            GroupMembership.objects.bulk_create([
                GroupMembership(user=invitee, group=group, role=GroupRole.MEMBER)
                for invitee in invitees
            ])
    except IntegrityError:
        raise SmartAccountInUseError()

    logger.info(
        "Group %s created by %s with %d initial members",
        group.id, creator.id, len(invitees) + 1,
    )
    return group


def get_group_by_id(*, group_id: UUID) -> Group:
    """
    Get an active group by ID with its memberships prefetched.

    Args:
        group_id: UUID of the group

    Returns:
        Group instance

    Raises:
        GroupNotFoundError: If group doesn't exist or is inactive
    """
    try:
        return (
            Group.objects
            .prefetch_related(
                Prefetch(
                    'memberships',
                    queryset=GroupMembership.objects.filter(is_active=True).select_related('user')
                )
            )
            .get(id=group_id, is_active=True)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError()


def get_user_groups(*, user: User) -> QuerySet[Group]:
    """Active groups where the user holds an active membership."""
    return (
        Group.objects
        .filter(
            is_active=True,
            memberships__user=user,
            memberships__is_active=True,
        )
        .distinct()
    )


def _lock_group_for_admin(group_id: UUID, user: User) -> Group:
    try:
        group = Group.objects.select_for_update().get(id=group_id, is_active=True)
    except Group.DoesNotExist:
        raise GroupNotFoundError()

    membership = require_membership(user=user, group_id=group.id)
    if membership.role != GroupRole.ADMIN:
        raise InsufficientPermissionsError("Only group admins can manage the group")
    return group


@transaction.atomic
def update_group(
    *,
    group_id: UUID,
    user: User,
    name: Optional[str] = None,
    description: Optional[str] = None,
    voting_threshold: Optional[int] = None,
    smart_account_address: Optional[str] = None,
) -> Group:
    """
    Update group details (admin only).

    Uses select_for_update to prevent concurrent modifications.

    Args:
        group_id: UUID of the group
        user: User performing the update (must be admin)
        name: New name (optional)
        description: New description (optional)
        voting_threshold: New approval percentage (optional)
        smart_account_address: New smart account address (optional)

    Returns:
        Updated Group instance

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not an active member
        InsufficientPermissionsError: If user is not admin
        SmartAccountInUseError: If the smart account is bound to another group
    """
    group = _lock_group_for_admin(group_id, user)

    update_fields = []
    if name is not None:
        group.name = name
        update_fields.append('name')
    if description is not None:
        group.description = description
        update_fields.append('description')
    if voting_threshold is not None:
        group.voting_threshold = voting_threshold
        update_fields.append('voting_threshold')
    if smart_account_address is not None:
        group.smart_account_address = smart_account_address or None
        update_fields.append('smart_account_address')

    if update_fields:
        update_fields.append('updated_at')
        try:
            with transaction.atomic():
                group.save(update_fields=update_fields)
        except IntegrityError:
            raise SmartAccountInUseError()

    return group


@transaction.atomic
def deactivate_group(*, group_id: UUID, user: User) -> None:
    """
    Deactivate a group (admin only).

    The group and its history are kept; it just stops resolving.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If user is not an active member
        InsufficientPermissionsError: If user is not admin
    """
    group = _lock_group_for_admin(group_id, user)
    group.is_active = False
    group.save(update_fields=['is_active', 'updated_at'])
    logger.info("Group %s deactivated by %s", group.id, user.id)
