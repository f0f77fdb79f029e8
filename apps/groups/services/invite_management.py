"""
Invite management service.

Invites are signed, expiring tokens bound to a group and an email address.
Nothing is stored: the signature (keyed on SECRET_KEY) is the proof.
"""

import logging
from typing import Iterable, List
from uuid import UUID

from django.conf import settings
from django.core import signing
from django.db import transaction

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole

from .access_control import require_membership
from .exceptions import (
    AlreadyMemberError,
    GroupNotFoundError,
    InsufficientPermissionsError,
    InvalidInviteTokenError,
    InviteEmailMismatchError,
)
from .membership_management import lock_active_group


logger = logging.getLogger(__name__)

INVITE_SALT = 'apps.groups.invite'


def make_invite_token(*, group_id: UUID, email: str) -> str:
    return signing.dumps(
        {'group': str(group_id), 'email': email.strip().lower()},
        salt=INVITE_SALT,
    )


def read_invite_token(token: str) -> dict:
    """
    Decode and verify an invite token.

    Raises:
        InvalidInviteTokenError: If the signature is bad or the token expired
    """
    try:
        return signing.loads(
            token,
            salt=INVITE_SALT,
            max_age=settings.INVITE_TOKEN_MAX_AGE,
        )
    except signing.SignatureExpired:
        raise InvalidInviteTokenError("Invite link has expired")
    except signing.BadSignature:
        raise InvalidInviteTokenError()


def create_invites(
    *,
    group_id: UUID,
    inviter: User,
    emails: Iterable[str]
) -> List[dict]:
    """
    Issue invite tokens for a list of emails (admin only).

    Args:
        group_id: UUID of the group
        inviter: User sending the invites (must be admin)
        emails: Addresses to invite

    Returns:
        List of {'email', 'token', 'invite_url'} dicts

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If inviter is not an active member
        InsufficientPermissionsError: If inviter is not admin
    """
    try:
        group = Group.objects.get(id=group_id, is_active=True)
    except Group.DoesNotExist:
        raise GroupNotFoundError()

    membership = require_membership(user=inviter, group_id=group.id)
    if membership.role != GroupRole.ADMIN:
        raise InsufficientPermissionsError("Only group admins can invite members")

    base_url = settings.FRONTEND_URL.rstrip('/')
    invites = []
    for email in dict.fromkeys(e.strip().lower() for e in emails if e and e.strip()):
        token = make_invite_token(group_id=group.id, email=email)
        invites.append({
            'email': email,
            'token': token,
            'invite_url': f"{base_url}/invite/{token}",
        })

    logger.info("%d invites issued for group %s by %s", len(invites), group.id, inviter.id)
    return invites


@transaction.atomic
def join_group_with_token(*, user: User, token: str) -> GroupMembership:
    """
    Join a group with an invite token.

    A previously removed member is reactivated on the same membership row
    with the MEMBER role.

    Args:
        user: User accepting the invite
        token: Signed invite token

    Returns:
        Active GroupMembership instance

    Raises:
        InvalidInviteTokenError: If the token is bad or expired
        InviteEmailMismatchError: If the token was issued for another email
        GroupNotFoundError: If the group no longer exists
        AlreadyMemberError: If user is already an active member
    """
    payload = read_invite_token(token)

    if payload.get('email') != user.email.lower():
        raise InviteEmailMismatchError()

    group = lock_active_group(payload.get('group'))

    membership, created = GroupMembership.objects.select_for_update().get_or_create(
        group=group,
        user=user,
        defaults={'role': GroupRole.MEMBER},
    )
    if not created:
        if membership.is_active:
            raise AlreadyMemberError()
        membership.is_active = True
        membership.role = GroupRole.MEMBER
        membership.save(update_fields=['is_active', 'role'])

    logger.info("User %s joined group %s via invite", user.id, group.id)
    return membership
