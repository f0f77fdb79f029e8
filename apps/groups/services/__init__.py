"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    GroupsServiceError,
    GroupNotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
    AlreadyMemberError,
    SmartAccountInUseError,
    LastAdminError,
    InvalidInviteTokenError,
    InviteEmailMismatchError,
)

from .access_control import (
    is_active_member,
    role_of,
    require_membership,
)

from .group_management import (
    create_group,
    update_group,
    deactivate_group,
    get_group_by_id,
    get_user_groups,
)

from .membership_management import (
    leave_group,
    remove_member,
    get_group_members,
)

from .role_management import (
    update_member_role,
)

from .invite_management import (
    create_invites,
    join_group_with_token,
)


__all__ = [
    # Exceptions
    'GroupsServiceError',
    'GroupNotFoundError',
    'NotMemberError',
    'InsufficientPermissionsError',
    'AlreadyMemberError',
    'SmartAccountInUseError',
    'LastAdminError',
    'InvalidInviteTokenError',
    'InviteEmailMismatchError',

    # Membership oracle
    'is_active_member',
    'role_of',
    'require_membership',

    # Group management
    'create_group',
    'update_group',
    'deactivate_group',
    'get_group_by_id',
    'get_user_groups',

    # Membership management
    'leave_group',
    'remove_member',
    'get_group_members',

    # Role management
    'update_member_role',

    # Invites
    'create_invites',
    'join_group_with_token',
]
