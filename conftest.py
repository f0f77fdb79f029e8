"""
Shared fixtures for all apps.

The standard household: Alice (ADMIN), Bob and Carol (MEMBER) share a
group with the default 51% voting threshold; Dave belongs to no group.
"""
from decimal import Decimal

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.bills.models import Bill, BillStatus
from apps.budgets.models import BudgetCategory
from apps.groups.models import Group, GroupMembership, GroupRole


def client_for(user):
    """Return an API client authenticated as user via JWT."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def group_admin(db):
    return User.objects.create_user(
        email='alice@example.com',
        username='alice',
        password='TestPass123!',
        display_name='Alice',
    )


@pytest.fixture
def group_member(db):
    return User.objects.create_user(
        email='bob@example.com',
        username='bob',
        password='TestPass123!',
        display_name='Bob',
    )


@pytest.fixture
def another_member(db):
    return User.objects.create_user(
        email='carol@example.com',
        username='carol',
        password='TestPass123!',
        display_name='Carol',
    )


@pytest.fixture
def outsider(db):
    """A user who is not a member of any group."""
    return User.objects.create_user(
        email='dave@example.com',
        username='dave',
        password='TestPass123!',
        display_name='Dave',
    )


@pytest.fixture
def group(db, group_admin, group_member, another_member):
    """Group with threshold 51: Alice (ADMIN), Bob and Carol (MEMBER)."""
    group = Group.objects.create(
        name='Flat 4B',
        description='Shared flat expenses',
        voting_threshold=51,
        smart_account_address='0x' + 'ab' * 20,
    )
    GroupMembership.objects.create(user=group_admin, group=group, role=GroupRole.ADMIN)
    GroupMembership.objects.create(user=group_member, group=group, role=GroupRole.MEMBER)
    GroupMembership.objects.create(user=another_member, group=group, role=GroupRole.MEMBER)
    return group


@pytest.fixture
def group_admin_client(group_admin):
    return client_for(group_admin)


@pytest.fixture
def member_client(group_member):
    return client_for(group_member)


@pytest.fixture
def another_member_client(another_member):
    return client_for(another_member)


@pytest.fixture
def outsider_client(outsider):
    return client_for(outsider)


@pytest.fixture
def draft_bill(group, group_admin):
    """Rent bill created by Alice, still in DRAFT."""
    return Bill.objects.create(
        group=group,
        created_by=group_admin,
        title='Rent',
        description='October rent',
        total_amount=Decimal('900.00'),
        currency='USDC',
        payee_address='0x' + 'cd' * 20,
        status=BillStatus.DRAFT,
    )


@pytest.fixture
def groceries(group):
    """Active budget category of the household, 300 a month."""
    return BudgetCategory.objects.create(
        group=group,
        name='Groceries',
        color='#4CAF50',
        icon='cart',
        monthly_limit=Decimal('300.00'),
    )
