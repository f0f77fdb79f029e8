import pytest
from uuid import uuid4

from django.urls import reverse
from rest_framework import status

from apps.groups.models import Group, GroupMembership, GroupRole
from apps.groups.services.invite_management import make_invite_token


# =============================================================================
# Group CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestGroupList:
    """Tests for GET /api/groups/"""

    def test_list_groups_returns_user_groups(self, member_client, group):
        """List returns only groups where user is a member."""
        url = reverse('groups:group-list')
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['results']) == 1
        assert response.data['results'][0]['name'] == 'Flat 4B'
        assert response.data['results'][0]['member_count'] == 3

    def test_list_groups_excludes_non_member_groups(self, outsider_client, group):
        url = reverse('groups:group-list')
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['results']) == 0

    def test_list_groups_unauthenticated(self, api_client):
        url = reverse('groups:group-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_my_groups(self, another_member_client, group):
        url = reverse('groups:my-groups')
        response = another_member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [g['id'] for g in response.data] == [str(group.id)]


@pytest.mark.django_db
class TestGroupCreate:
    """Tests for POST /api/groups/"""

    def test_create_group(self, outsider_client, outsider, group_member):
        """Creator becomes admin, known emails become members."""
        url = reverse('groups:group-list')
        data = {
            'name': 'Ski Trip',
            'description': 'Chalet and lift passes',
            'voting_threshold': 60,
            'member_emails': [group_member.email],
        }
        response = outsider_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['voting_threshold'] == 60
        assert response.data['user_role'] == GroupRole.ADMIN

        group = Group.objects.get(name='Ski Trip')
        assert GroupMembership.objects.get(group=group, user=outsider).role == GroupRole.ADMIN
        assert GroupMembership.objects.get(group=group, user=group_member).role == GroupRole.MEMBER

    def test_create_group_invalid_threshold(self, outsider_client):
        url = reverse('groups:group-list')
        response = outsider_client.post(url, {'name': 'Bad', 'voting_threshold': 0}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'voting_threshold' in response.data

    def test_create_group_missing_name(self, outsider_client):
        url = reverse('groups:group-list')
        response = outsider_client.post(url, {'description': 'No name'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_group_smart_account_taken(self, outsider_client, group):
        url = reverse('groups:group-list')
        data = {'name': 'Copy', 'smart_account_address': group.smart_account_address}
        response = outsider_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.django_db
class TestGroupDetail:
    """Tests for GET/PATCH/DELETE /api/groups/{id}/"""

    def test_retrieve_as_member(self, member_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Flat 4B'
        assert response.data['user_role'] == GroupRole.MEMBER

    def test_retrieve_as_outsider(self, outsider_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'not_group_member'

    def test_retrieve_unknown_group(self, member_client):
        url = reverse('groups:group-detail', kwargs={'pk': uuid4()})
        response = member_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_admin_updates_threshold(self, group_admin_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = group_admin_client.patch(url, {'voting_threshold': 75}, format='json')

        assert response.status_code == status.HTTP_200_OK
        group.refresh_from_db()
        assert group.voting_threshold == 75

    def test_member_cannot_update(self, member_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = member_client.patch(url, {'name': 'Mine now'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'insufficient_permissions'

    def test_admin_deactivates_group(self, group_admin_client, group):
        url = reverse('groups:group-detail', kwargs={'pk': group.id})
        response = group_admin_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        group.refresh_from_db()
        assert group.is_active is False


# =============================================================================
# Membership Tests
# =============================================================================

@pytest.mark.django_db
class TestGroupMembers:
    """Tests for membership actions."""

    def test_list_members(self, member_client, group):
        url = reverse('groups:group-members', kwargs={'pk': group.id})
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 3
        assert response.data[0]['role'] == GroupRole.ADMIN

    def test_list_members_outsider(self, outsider_client, group):
        url = reverse('groups:group-members', kwargs={'pk': group.id})
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_member_leaves(self, member_client, group, group_member):
        url = reverse('groups:group-leave', kwargs={'pk': group.id})
        response = member_client.post(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not GroupMembership.objects.get(group=group, user=group_member).is_active

    def test_last_admin_cannot_leave(self, group_admin_client, group):
        url = reverse('groups:group-leave', kwargs={'pk': group.id})
        response = group_admin_client.post(url)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'last_admin'

    def test_admin_removes_member(self, group_admin_client, group, another_member):
        url = reverse('groups:group-remove-member', kwargs={'pk': group.id})
        response = group_admin_client.post(url, {'user_id': str(another_member.id)}, format='json')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not GroupMembership.objects.get(group=group, user=another_member).is_active

    def test_member_cannot_remove(self, member_client, group, another_member):
        url = reverse('groups:group-remove-member', kwargs={'pk': group.id})
        response = member_client.post(url, {'user_id': str(another_member.id)}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_promotes_member(self, group_admin_client, group, group_member):
        url = reverse('groups:group-update-member-role', kwargs={'pk': group.id})
        data = {'user_id': str(group_member.id), 'role': GroupRole.ADMIN}
        response = group_admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['role'] == GroupRole.ADMIN

    def test_invalid_role_rejected(self, group_admin_client, group, group_member):
        url = reverse('groups:group-update-member-role', kwargs={'pk': group.id})
        data = {'user_id': str(group_member.id), 'role': 'SUPERUSER'}
        response = group_admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Invite Tests
# =============================================================================

@pytest.mark.django_db
class TestInvites:
    """Tests for invite issuing and joining."""

    def test_admin_issues_invites(self, group_admin_client, group):
        url = reverse('groups:group-invite', kwargs={'pk': group.id})
        response = group_admin_client.post(url, {'emails': ['new@example.com']}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data[0]['email'] == 'new@example.com'
        assert response.data[0]['token'] in response.data[0]['invite_url']

    def test_member_cannot_invite(self, member_client, group):
        url = reverse('groups:group-invite', kwargs={'pk': group.id})
        response = member_client.post(url, {'emails': ['new@example.com']}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invite_requires_emails(self, group_admin_client, group):
        url = reverse('groups:group-invite', kwargs={'pk': group.id})
        response = group_admin_client.post(url, {'emails': []}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_join_with_token(self, outsider_client, outsider, group):
        token = make_invite_token(group_id=group.id, email=outsider.email)

        url = reverse('groups:join')
        response = outsider_client.post(url, {'token': token}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['role'] == GroupRole.MEMBER
        assert GroupMembership.objects.filter(group=group, user=outsider, is_active=True).exists()

    def test_join_with_bad_token(self, outsider_client):
        url = reverse('groups:join')
        response = outsider_client.post(url, {'token': 'not-a-token'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_invite'

    def test_join_with_token_for_other_email(self, outsider_client, group):
        token = make_invite_token(group_id=group.id, email='someone@example.com')

        url = reverse('groups:join')
        response = outsider_client.post(url, {'token': token}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
