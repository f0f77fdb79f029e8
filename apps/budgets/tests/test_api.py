import pytest
from decimal import Decimal

from django.urls import reverse
from rest_framework import status

from apps.budgets.models import BudgetCategory


@pytest.mark.django_db
class TestBudgetCategoryApi:
    """Tests for /api/budgets/"""

    def test_admin_creates(self, group_admin_client, group):
        url = reverse('budgets:budget-category-list')
        data = {
            'group_id': str(group.id),
            'name': 'Utilities',
            'color': '#2196F3',
            'icon': 'bolt',
            'monthly_limit': '150.00',
        }
        response = group_admin_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Utilities'
        assert BudgetCategory.objects.get(name='Utilities').monthly_limit == Decimal('150.00')

    def test_member_cannot_create(self, member_client, group):
        url = reverse('budgets:budget-category-list')
        response = member_client.post(url, {'group_id': str(group.id), 'name': 'Misc'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'insufficient_permissions'

    def test_invalid_color(self, group_admin_client, group):
        url = reverse('budgets:budget-category-list')
        response = group_admin_client.post(
            url, {'group_id': str(group.id), 'name': 'Misc', 'color': 'green'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'color' in response.data

    def test_list_requires_group(self, member_client):
        response = member_client.get(reverse('budgets:budget-category-list'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_member_lists(self, member_client, group, groceries):
        response = member_client.get(reverse('budgets:budget-category-list'), {'group': str(group.id)})

        assert response.status_code == status.HTTP_200_OK
        assert [c['name'] for c in response.data] == ['Groceries']

    def test_outsider_cannot_list(self, outsider_client, group, groceries):
        response = outsider_client.get(reverse('budgets:budget-category-list'), {'group': str(group.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_updates(self, group_admin_client, groceries):
        url = reverse('budgets:budget-category-detail', args=[groceries.id])
        response = group_admin_client.patch(url, {'monthly_limit': '350.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        groceries.refresh_from_db()
        assert groceries.monthly_limit == Decimal('350.00')

    def test_admin_deletes(self, group_admin_client, groceries):
        url = reverse('budgets:budget-category-detail', args=[groceries.id])
        response = group_admin_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        groceries.refresh_from_db()
        assert groceries.is_active is False

    def test_member_cannot_delete(self, member_client, groceries):
        url = reverse('budgets:budget-category-detail', args=[groceries.id])
        response = member_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
