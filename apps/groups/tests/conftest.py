import pytest
from apps.accounts.models import User
from apps.groups.models import GroupMembership, GroupRole


@pytest.fixture
def viewer(db, group):
    """Active member with the VIEWER role."""
    user = User.objects.create_user(
        email='victor@example.com',
        username='victor',
        password='TestPass123!',
    )
    GroupMembership.objects.create(user=user, group=group, role=GroupRole.VIEWER)
    return user


@pytest.fixture
def removed_member(db, group):
    """Former member whose membership was deactivated."""
    user = User.objects.create_user(
        email='erin@example.com',
        username='erin',
        password='TestPass123!',
    )
    GroupMembership.objects.create(user=user, group=group, role=GroupRole.MEMBER, is_active=False)
    return user
